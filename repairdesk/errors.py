"""Exception hierarchy shared by services and the HTTP layer.

Services raise these; ``repairdesk.main`` turns them into JSON error
envelopes with the matching status code.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404


class ConflictError(AppError):
    """The operation would break a referential rule (e.g. config still in use)."""

    status_code = 409


class DependencyError(AppError):
    """An outbound call (chat push, approval service) failed."""

    status_code = 502
