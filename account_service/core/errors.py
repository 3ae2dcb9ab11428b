"""Errors raised by the user service."""
from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class UserServiceError(ValueError):
    """Base class for rejected user operations."""


class UserValidationError(UserServiceError):
    """One or more fields are missing or malformed."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(f"{err.field}: {err.message}" for err in self.errors))


class UserConflictError(UserServiceError):
    """A write would duplicate an email or username."""


class UserNotFoundError(UserServiceError):
    """No user exists with the requested identifier."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("User not found")
