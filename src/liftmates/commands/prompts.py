"""Interactive exercise entry for workout generation."""

import questionary
from questionary import Style

from ..models.workout import ExerciseSpec

custom_style = Style(
    [
        ("qmark", "fg:#2196f3 bold"),
        ("question", "bold"),
        ("answer", "fg:#4caf50 bold"),
        ("pointer", "fg:#2196f3 bold"),
        ("highlighted", "fg:#2196f3 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)

BODY_PARTS = ["Chest", "Back", "Legs", "Shoulders", "Arms", "Core", "Full Body"]


def parse_exercise_option(value: str) -> ExerciseSpec:
    """Parse NAME:BODY_PART:SETS:REPS[:NOTES] from the command line."""
    parts = value.split(":", 4)
    if len(parts) < 4:
        raise ValueError(f"Expected NAME:BODY_PART:SETS:REPS, got {value!r}")
    name, body_part, sets, reps = (p.strip() for p in parts[:4])
    try:
        target_sets = int(sets)
    except ValueError:
        raise ValueError(f"Sets must be a whole number in {value!r}") from None
    notes = parts[4].strip() if len(parts) == 5 else ""
    return ExerciseSpec(
        name=name,
        body_part=body_part,
        target_sets=target_sets,
        target_reps=reps,
        notes=notes,
    )


def _valid_sets(text: str) -> bool | str:
    if text.isdigit():
        return True
    return "Enter a whole number"


class ExercisePrompt:
    """Asks for exercises one at a time until the user is done."""

    async def collect(self) -> list[ExerciseSpec]:
        """Run the prompt loop; an empty list means the user cancelled."""
        exercises: list[ExerciseSpec] = []
        while True:
            name = await questionary.text(
                "Exercise name (leave blank to finish):",
                style=custom_style,
            ).ask_async()
            if not name:
                break

            body_part = await questionary.select(
                "Body part:",
                choices=BODY_PARTS,
                style=custom_style,
            ).ask_async()
            if body_part is None:
                break

            sets = await questionary.text(
                "Target sets:",
                default="3",
                validate=_valid_sets,
                style=custom_style,
            ).ask_async()
            reps = await questionary.text(
                "Target reps (e.g. 8-10):",
                default="10",
                style=custom_style,
            ).ask_async()
            notes = await questionary.text("Notes (optional):", style=custom_style).ask_async()

            exercises.append(
                ExerciseSpec(
                    name=name.strip(),
                    body_part=body_part,
                    target_sets=int(sets or 0),
                    target_reps=(reps or "").strip(),
                    notes=(notes or "").strip(),
                )
            )
        return exercises
