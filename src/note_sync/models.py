"""Pydantic data models for note-sync.

This module defines the data models shared by the session manager,
the note store and the transport, including the error type raised
for every failed remote operation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Authentication state of the current process.

    Sessions are immutable; login and logout replace the whole value.

    Attributes:
        token: Opaque bearer credential, None when anonymous
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None

    @property
    def authenticated(self) -> bool:
        """Check if the session carries a usable token.

        Returns:
            True if token is present and non-empty, False otherwise.
        """
        return bool(self.token)


class AuthKind(str, Enum):
    """Authentication request kind.

    The value is the last path segment of the auth endpoint.
    """

    LOGIN = "login"
    REGISTER = "register"


class Note(BaseModel):
    """A note as returned by the server.

    Fields the server sends beyond the ones declared here are kept
    as-is, so a note is always exactly what the server last returned.

    Attributes:
        id: Server-assigned identifier
        title: Note title
        content: Note body (may be empty)
        is_public: Whether the note is published
        share_token: Public share token, only meaningful when is_public is True
    """

    model_config = ConfigDict(extra="allow")

    id: int | str
    title: str
    content: str = ""
    is_public: bool = False
    share_token: str | None = None

    def server_copy(self) -> dict[str, Any]:
        """Return the note exactly as the server sent it.

        Declared fields the server omitted are left out instead of
        showing their defaults.
        """
        return self.model_dump(exclude_unset=True)


class NotePatch(BaseModel):
    """Partial update for a note.

    Only fields explicitly set are sent to the server. Unknown fields
    are rejected.

    Attributes:
        title: New title
        content: New content
        is_public: New visibility
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    content: str | None = None
    is_public: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        """Build the PATCH request body.

        Returns:
            Dictionary containing only the fields that were set
        """
        return self.model_dump(exclude_unset=True)


class TokenResponse(BaseModel):
    """Response body of the login and register endpoints."""

    access_token: str = Field(min_length=1)
    token_type: str = "bearer"


class PublishResult(BaseModel):
    """Result of publishing a note.

    Attributes:
        note: The note as returned by the server (is_public=True)
        share_url: Public URL of the note
        copied: Whether the URL was copied to the clipboard
    """

    note: Note
    share_url: str
    copied: bool = False


class ErrorCode(str, Enum):
    """Error codes for note-sync failures."""

    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"
    NOT_AUTHENTICATED = "not_authenticated"


class NoteSyncError(Exception):
    """Exception for failed remote operations.

    Attributes:
        code: Error code
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            details: Additional context (e.g., status code, response body)
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


# Status messages shared by the store, the session manager and the entry points
NOT_AUTHENTICATED_MESSAGE = "Not authenticated. Log in first."
DELETE_CONFIRM_REQUIRED = "Deletion requires confirmation (confirm=True)."
ALREADY_AUTHENTICATED_MESSAGE = "Already logged in. Log out first."
