"""Workout commands."""

import click

from ..models.workout import Difficulty, Sharing, WorkoutType
from ..services.workouts import WorkoutService
from .base import (
    async_command,
    connect,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_session,
    progress_bar,
)
from .prompts import ExercisePrompt, parse_exercise_option


@click.group()
def workout():
    """Generate, log and review workouts."""
    pass


@workout.command("generate")
@click.option(
    "-t", "--type", "workout_type",
    type=click.Choice([t.value for t in WorkoutType]),
    default=WorkoutType.STRENGTH.value,
    help="Workout type",
)
@click.option(
    "-d", "--difficulty",
    type=click.Choice([d.value for d in Difficulty]),
    default=Difficulty.MEDIUM.value,
    help="Difficulty",
)
@click.option(
    "-e", "--exercise", "exercises",
    multiple=True,
    help="NAME:BODY_PART:SETS:REPS[:NOTES] (repeatable; prompts if omitted)",
)
@click.option("--share-with", multiple=True, help="User ID to share the workout with (repeatable)")
@click.pass_context
@async_command
async def generate(ctx, workout_type: str, difficulty: str, exercises: tuple[str, ...], share_with):
    """Create today's workout from a list of exercises.

    Examples:

        liftmates workout generate -e "Squat:Legs:3:8-10" -e "Row:Back:3:10"

        # Interactive entry
        liftmates workout generate --type weight_loss
    """
    ensure_initialized(ctx)
    session = get_session(ctx)

    if exercises:
        specs = [parse_exercise_option(value) for value in exercises]
    else:
        specs = await ExercisePrompt().collect()
    if not specs:
        echo_warning("No exercises given, nothing created.")
        return

    sharing = Sharing(is_shared=bool(share_with), shared_with=list(share_with))
    async with connect() as store:
        created = await WorkoutService(store).generate_workout(
            session,
            WorkoutType(workout_type),
            Difficulty(difficulty),
            specs,
            sharing=sharing,
        )

    echo_success(f"Created workout: {created.title}")
    click.echo(f"  ID: {created.id}")
    for exercise in created.exercises:
        click.echo(f"  - {exercise.name}: {exercise.target_sets} x {exercise.target_reps}")


@workout.command("list")
@click.pass_context
@async_command
async def list_workouts(ctx):
    """List this week's workouts."""
    ensure_initialized(ctx)
    async with connect() as store:
        workouts = await WorkoutService(store).get_current_week_workouts(get_session(ctx))

    if not workouts:
        echo_info("No workouts this week. Create one with 'liftmates workout generate'")
        return

    rows = []
    for w in workouts:
        rows.append([
            w.id,
            w.title[:40],
            w.date.strftime("%a %Y-%m-%d") if w.date else "-",
            f"{w.completed_sets}/{w.total_sets}",
            "yes" if w.completed else "",
            "*" if w.is_favorite else "",
        ])

    click.echo()
    click.echo(format_table(["ID", "Title", "Date", "Sets", "Done", "Fav"], rows))
    click.echo()
    click.echo(f"Total: {len(workouts)} workout(s)")


@workout.command("show")
@click.argument("workout_id")
@click.pass_context
@async_command
async def show(ctx, workout_id: str):
    """Show a workout's exercises and sets."""
    ensure_initialized(ctx)
    async with connect() as store:
        w = await WorkoutService(store).get_workout(get_session(ctx), workout_id)

    click.echo()
    click.echo(click.style(w.title, bold=True))
    click.echo("=" * 50)
    click.echo(f"Type: {w.workout_type.value}  Difficulty: {w.difficulty.value}  Duration: {w.duration} min")
    for exercise in w.exercises or []:
        click.echo()
        click.echo(click.style(f"{exercise.name}", bold=True) + f"  ({exercise.target_sets} x {exercise.target_reps})")
        if exercise.notes:
            click.echo(f"  Notes: {exercise.notes}")
        for s in exercise.sets or []:
            mark = click.style("[x]", fg="green") if s.completed else "[ ]"
            click.echo(f"  {mark} Set {s.set_number}: {s.weight} x {s.reps}  ({s.id})")


@workout.command("stats")
@click.pass_context
@async_command
async def stats(ctx):
    """Show this week's statistics."""
    ensure_initialized(ctx)
    async with connect() as store:
        week = await WorkoutService(store).get_workout_stats(get_session(ctx))

    click.echo()
    click.echo(click.style("This Week", bold=True))
    click.echo("=" * 50)
    click.echo(f"Workouts: {week.completed_workouts}/{week.weekly_workouts} completed ({week.completion_rate}%)")
    click.echo(f"Total weight lifted: {week.total_weight:g}")
    click.echo(f"Streak: {week.streak}")
    for i, pct in enumerate(week.weekly_progress, start=1):
        click.echo(f"  Workout {i}: {progress_bar(pct)}")


@workout.command("delete")
@click.argument("workout_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: str, yes: bool):
    """Delete a workout and everything in it."""
    ensure_initialized(ctx)
    if not yes and not click.confirm(f"Delete workout {workout_id}?"):
        return
    async with connect() as store:
        await WorkoutService(store).delete_workout(get_session(ctx), workout_id)
    echo_success(f"Deleted workout {workout_id}")


@workout.command("delete-exercise")
@click.argument("exercise_id")
@click.pass_context
@async_command
async def delete_exercise(ctx, exercise_id: str):
    """Remove one exercise from a workout."""
    ensure_initialized(ctx)
    async with connect() as store:
        await WorkoutService(store).delete_exercise(get_session(ctx), exercise_id)
    echo_success(f"Deleted exercise {exercise_id}")


@workout.command("favorite")
@click.argument("workout_id")
@click.option("--off", is_flag=True, help="Remove from favorites")
@click.pass_context
@async_command
async def favorite(ctx, workout_id: str, off: bool):
    """Mark a workout as a favorite."""
    ensure_initialized(ctx)
    async with connect() as store:
        await WorkoutService(store).toggle_favorite(get_session(ctx), workout_id, not off)
    echo_success("Removed from favorites" if off else "Added to favorites")


@workout.command("complete")
@click.argument("workout_id")
@click.option("--undo", is_flag=True, help="Mark as not completed")
@click.pass_context
@async_command
async def complete(ctx, workout_id: str, undo: bool):
    """Mark a workout as completed."""
    ensure_initialized(ctx)
    async with connect() as store:
        await WorkoutService(store).complete_workout(get_session(ctx), workout_id, not undo)
    echo_success("Workout reopened" if undo else "Workout completed")


@workout.command("log-set")
@click.argument("set_id")
@click.option("-w", "--weight", type=float, help="Weight lifted")
@click.option("-r", "--reps", type=int, help="Reps performed")
@click.option("--done/--not-done", default=None, help="Completed flag")
@click.pass_context
@async_command
async def log_set(ctx, set_id: str, weight: float | None, reps: int | None, done: bool | None):
    """Record weight, reps and completion for a set."""
    ensure_initialized(ctx)
    async with connect() as store:
        s = await WorkoutService(store).log_set(
            get_session(ctx), set_id, weight=weight, reps=reps, completed=done
        )
    status = "done" if s.completed else "open"
    echo_success(f"Set {s.set_number}: {s.weight} x {s.reps} ({status})")
