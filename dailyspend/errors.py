"""
Error taxonomy for Daily Spends.

ValidationError is the only recoverable, caller-facing error the core
produces. Storage failures belong to the persistence backends and are
raised as StorageError subclasses.
"""

from typing import Optional


class TrackerError(Exception):
    """Base exception for all Daily Spends errors."""
    pass


class ValidationError(TrackerError):
    """
    A required field is missing or invalid on create.

    Raising this never alters store state.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class StorageError(TrackerError):
    """Base exception for storage operations."""
    pass


class TransferError(TrackerError):
    """CSV import/export could not be completed."""
    pass
