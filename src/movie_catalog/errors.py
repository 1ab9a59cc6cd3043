"""Catalog error taxonomy.

Every error carries the HTTP status it is reported with; the application's
exception handlers turn them into ``{"detail": message}`` responses.
"""

from collections.abc import Mapping, Sequence
from typing import Any

_LOC_PREFIXES = ("body", "query", "path", "header")


class CatalogError(Exception):
    """Base exception for movie catalog operations."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(CatalogError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class ValidationFailedError(CatalogError):
    """Raised when a movie payload violates one or more field constraints."""

    status_code = 400


class ForbiddenError(CatalogError):
    """Raised when the caller lacks the role a mutation requires."""

    status_code = 403


class MovieNotFoundError(CatalogError):
    """Raised when a movie does not exist, locally or at the provider."""

    status_code = 404

    def __init__(self, message: str = "Movie not found") -> None:
        super().__init__(message)


class ConflictError(CatalogError):
    """Raised when a movie with the same IMDb id is already stored."""

    status_code = 409


class ServiceUnavailableError(CatalogError):
    """Raised when the metadata provider cannot be reached."""

    status_code = 503


class ConfigurationError(CatalogError):
    """Raised when the operator left required configuration unset."""

    status_code = 500


def format_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Join pydantic error entries into one human-readable message.

    Each entry becomes ``"<field>: <message>"``; request-location prefixes
    such as ``body`` are dropped from the field path.
    """
    messages = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()) if part not in _LOC_PREFIXES)
        msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return ", ".join(messages)
