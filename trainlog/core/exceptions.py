"""
Application exceptions.

Fatal startup problems are raised; everything on the migration and runtime
store write paths is logged and absorbed by the caller instead.
"""


class TrainLogError(Exception):
    """Base class for TrainLog errors."""


class StoreOpenError(TrainLogError):
    """A single store could not be opened (corrupt file, bad URL, schema mismatch)."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Could not open store at {location}: {reason}")


class FatalStoreError(TrainLogError):
    """No usable store could be opened at all; the application cannot start."""
