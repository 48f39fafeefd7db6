"""Error records carried by failed results."""

from typing import Optional


class BkmError(Exception):
    """Base class for all bkm errors."""

    pass


class ValidationError(BkmError):
    """Input failed a value object rule."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(BkmError):
    """A record required by the operation does not exist."""

    pass


class ConflictError(BkmError):
    """A business rule rejected the operation (duplicate tag, duplicate title)."""

    pass


class StorageError(BkmError):
    """Storage-related error (I/O failure or unreadable data file)."""

    pass
