"""Exception types raised by liftmates services."""


class LiftmatesError(Exception):
    """Base class for all liftmates errors."""


class AuthenticationError(LiftmatesError):
    """Raised when an operation needs an active session and none exists."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(LiftmatesError):
    """Raised when a referenced record does not exist."""


class PersistenceError(LiftmatesError):
    """Raised when the data store rejects a read or write.

    Carries enough context for the caller to clean up after a partial
    failure: the table and operation that failed, and optionally the
    workout and exercise being created at the time.
    """

    def __init__(
        self,
        message: str,
        table: str | None = None,
        operation: str | None = None,
        workout_id: str | None = None,
        exercise_name: str | None = None,
    ):
        super().__init__(message)
        self.table = table
        self.operation = operation
        self.workout_id = workout_id
        self.exercise_name = exercise_name
