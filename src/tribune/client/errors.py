"""Exceptions raised by the board client."""

from __future__ import annotations


class BoardError(RuntimeError):
    """Base exception raised for board client failures."""


class ValidationError(BoardError):
    """Raised when user input is rejected locally, before any network call.

    Covers empty titles, bodies and comments, and oversized images.
    """


class OwnershipError(BoardError):
    """Raised when the actor may not edit or delete the targeted entity."""


class RepositoryError(BoardError):
    """Raised when the table store fails or rejects a request.

    The backend message is kept verbatim so it can be shown to the user.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
