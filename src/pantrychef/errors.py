"""Exceptions raised by pantrychef services and stores."""

from __future__ import annotations


class PantryChefError(Exception):
    """Base exception for pantrychef errors."""

    pass


class TargetsNotEstablishedError(PantryChefError):
    """Raised when generation is requested before targets exist."""

    def __init__(
        self,
        message: str = (
            "Please save your profile (weight, height, age, goal) first "
            "to calculate calorie targets."
        ),
    ):
        super().__init__(message)


class InvalidEntryError(PantryChefError, ValueError):
    """Raised when user-supplied data fails validation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(PantryChefError):
    """Raised when a requested record does not exist."""

    pass
