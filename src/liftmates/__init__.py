"""liftmates: workout generation, set logging and partner stats."""

__version__ = "0.1.0"
