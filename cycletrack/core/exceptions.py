"""Exceptions raised by CycleTrack.

Every error the package raises on purpose derives from CycleTrackError,
so the CLI can report them uniformly.
"""


class CycleTrackError(Exception):
    """Base class for all CycleTrack errors."""


class InvalidArgumentError(CycleTrackError, ValueError):
    """Raised for a non-positive cycle number, a malformed date string, etc."""


class EmptyInputError(CycleTrackError):
    """Raised when a computation needs at least one cycle aggregate."""


class DataAccessError(CycleTrackError):
    """Raised by entry repositories on storage or transport failure."""


class EntryNotFoundError(DataAccessError):
    """Raised when an entry id does not exist in the repository."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry not found: {entry_id}")


class ConfigError(CycleTrackError):
    """Raised when the configuration file cannot be read or is invalid."""
