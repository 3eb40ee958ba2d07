"""SQLite database setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import get_settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "liftmates.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("PRAGMA foreign_keys = ON")

        # User profiles, one per auth identity
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                auth_id TEXT UNIQUE NOT NULL,
                email TEXT NOT NULL,
                name TEXT NOT NULL,
                username TEXT UNIQUE NOT NULL,
                height REAL,
                weight REAL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS daily_workouts (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                title TEXT NOT NULL,
                workout_type TEXT NOT NULL,
                difficulty TEXT NOT NULL,
                duration INTEGER DEFAULT 1,
                completed INTEGER DEFAULT 0,
                is_favorite INTEGER DEFAULT 0,
                is_shared INTEGER DEFAULT 0,
                shared_with TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_exercises (
                id TEXT PRIMARY KEY,
                daily_workout_id TEXT NOT NULL,
                name TEXT NOT NULL,
                target_sets INTEGER NOT NULL,
                target_reps TEXT NOT NULL,
                notes TEXT DEFAULT '',
                equipment TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (daily_workout_id) REFERENCES daily_workouts(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_sets (
                id TEXT PRIMARY KEY,
                exercise_id TEXT NOT NULL,
                user_id TEXT NOT NULL,
                set_number INTEGER NOT NULL,
                weight REAL DEFAULT 0,
                reps INTEGER DEFAULT 0,
                completed INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (exercise_id) REFERENCES workout_exercises(id) ON DELETE CASCADE,
                UNIQUE (exercise_id, set_number)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_partners (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                partner_id TEXT NOT NULL,
                status TEXT DEFAULT 'pending',
                is_favorite INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (partner_id) REFERENCES users(id) ON DELETE CASCADE,
                UNIQUE (user_id, partner_id)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_daily_workouts_user_date
            ON daily_workouts(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_exercises_workout
            ON workout_exercises(daily_workout_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_sets_exercise
            ON exercise_sets(exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_partners_partner
            ON workout_partners(partner_id)
        """)

        await db.commit()
