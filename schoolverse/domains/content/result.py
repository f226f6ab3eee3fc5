# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result type returned by every content operation.

A Result carries either a value or an ErrorKind with a human-readable
message. Callers that prefer exceptions use ``unwrap()``, which raises the
matching ContentServiceError subclass.

Example:
    >>> result = await repository.get(announcement_id)
    >>> if result.ok:
    ...     print(result.value["title"])
    ... else:
    ...     print(result.error, result.message)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced by the content layer."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    BACKEND_UNAVAILABLE = "backend_unavailable"


class ContentServiceError(Exception):
    """Base exception for content service errors.

    Attributes:
        message: Human-readable error description.
        kind: Failure category.
    """

    kind: ErrorKind = ErrorKind.BACKEND_UNAVAILABLE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ContentServiceError):
    """Raised when a record does not exist."""

    kind = ErrorKind.NOT_FOUND


class ValidationFailedError(ContentServiceError):
    """Raised when input data is rejected before reaching the backend."""

    kind = ErrorKind.VALIDATION_FAILED


class BackendUnavailableError(ContentServiceError):
    """Raised when the database or object store fails."""

    kind = ErrorKind.BACKEND_UNAVAILABLE


_ERRORS: dict[ErrorKind, type[ContentServiceError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.VALIDATION_FAILED: ValidationFailedError,
    ErrorKind.BACKEND_UNAVAILABLE: BackendUnavailableError,
}


def error_for(kind: ErrorKind, message: str) -> ContentServiceError:
    """Build the exception matching an error kind."""
    return _ERRORS[kind](message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value-or-error outcome of a content operation."""

    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=kind, message=message)

    @classmethod
    def from_error(cls, error: ContentServiceError) -> "Result[T]":
        return cls(error=error.kind, message=error.message)

    def unwrap(self) -> T:
        """Return the value or raise the matching ContentServiceError.

        Raises:
            ContentServiceError: Subclass matching ``error``.
        """
        if self.error is not None:
            raise error_for(self.error, self.message or self.error.value)
        return self.value  # type: ignore[return-value]
