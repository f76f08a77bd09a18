class SrsError(Exception):
    """Base class for errors raised by the scheduling core."""


class InvalidInputError(SrsError, ValueError):
    """Caller supplied a value outside its allowed range."""


class NotFoundError(SrsError, LookupError):
    """Item does not exist or belongs to another learner."""


class StorageError(SrsError):
    """Underlying database read or write failed. Never retried here."""
