"""Authentication endpoints of the notes server."""

from __future__ import annotations

from pydantic import ValidationError

from note_sync.api.client import NoteSyncClient
from note_sync.models import AuthKind, ErrorCode, NoteSyncError, TokenResponse


async def request_token(
    client: NoteSyncClient,
    kind: AuthKind,
    email: str,
    password: str,
) -> str:
    """Submit credentials and return the issued access token.

    Args:
        client: Open API client (no token needed)
        kind: Login or register
        email: Account email
        password: Account password

    Returns:
        Bearer token

    Raises:
        NoteSyncError: If the request fails or no token is returned
    """
    data = await client.post(f"/auth/{kind.value}", json={"email": email, "password": password})
    try:
        return TokenResponse.model_validate(data).access_token
    except ValidationError as e:
        raise NoteSyncError(
            code=ErrorCode.INVALID_RESPONSE,
            message=f"No access token in {kind.value} response",
            details={"errors": e.errors(include_url=False)},
        ) from e
