"""Note operations for the notes server API.

Each function issues one request on an open NoteSyncClient and
validates the response into Note models.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from note_sync.api.client import NoteSyncClient
from note_sync.models import ErrorCode, Note, NotePatch, NoteSyncError

_NOTE_LIST = TypeAdapter(list[Note])


def _note_path(note_id: int | str, action: str = "") -> str:
    """Build the path of one note, encoding the id as a single segment.

    "/" and control characters are percent-encoded, and so are the dots
    of a "." or ".." id, so an id can never address another endpoint.
    """
    segment = quote(str(note_id), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    path = f"/notes/{segment}"
    return f"{path}/{action}" if action else path


def _parse_note(data: Any, operation: str) -> Note:
    """Validate a single note from a response body.

    Args:
        data: Decoded JSON body
        operation: Operation name for the error message

    Returns:
        Note object

    Raises:
        NoteSyncError: If the body is not a valid note
    """
    try:
        return Note.model_validate(data)
    except ValidationError as e:
        raise NoteSyncError(
            code=ErrorCode.INVALID_RESPONSE,
            message=f"Invalid note in {operation} response",
            details={"errors": e.errors(include_url=False)},
        ) from e


async def list_notes(client: NoteSyncClient) -> list[Note]:
    """Fetch the full note collection.

    Args:
        client: Open API client

    Returns:
        Notes in server order

    Raises:
        NoteSyncError: If the request fails or the body is not a list of notes
    """
    data = await client.get("/notes")
    try:
        return _NOTE_LIST.validate_python(data)
    except ValidationError as e:
        raise NoteSyncError(
            code=ErrorCode.INVALID_RESPONSE,
            message="Invalid note list in response",
            details={"errors": e.errors(include_url=False)},
        ) from e


async def create_note(client: NoteSyncClient, title: str, content: str) -> Note:
    """Create a note.

    Args:
        client: Open API client
        title: Note title
        content: Note content

    Returns:
        Created note with its server-assigned id

    Raises:
        NoteSyncError: If the request fails
    """
    data = await client.post("/notes", json={"title": title, "content": content})
    return _parse_note(data, "create")


async def update_note(client: NoteSyncClient, note_id: int | str, patch: NotePatch) -> Note:
    """Apply a partial update to a note.

    Args:
        client: Open API client
        note_id: Note identifier
        patch: Fields to change

    Returns:
        The note as returned by the server

    Raises:
        NoteSyncError: If the request fails
    """
    data = await client.patch(_note_path(note_id), json=patch.to_payload())
    return _parse_note(data, "update")


async def delete_note(client: NoteSyncClient, note_id: int | str) -> None:
    """Delete a note.

    Args:
        client: Open API client
        note_id: Note identifier

    Raises:
        NoteSyncError: If the request fails
    """
    await client.delete(_note_path(note_id))


async def share_note(client: NoteSyncClient, note_id: int | str) -> Note:
    """Ask the server to publish a note and mint its share token.

    Args:
        client: Open API client
        note_id: Note identifier

    Returns:
        The published note

    Raises:
        NoteSyncError: If the request fails or the note was not published
    """
    data = await client.post(_note_path(note_id, "share"))
    note = _parse_note(data, "publish")
    if not note.is_public or not note.share_token:
        raise NoteSyncError(
            code=ErrorCode.INVALID_RESPONSE,
            message=f"Server did not publish note {note_id}",
            details={"response": data},
        )
    return note


def build_share_url(api_base: str, share_token: str) -> str:
    """Build the public URL for a share token.

    Args:
        api_base: Server base URL
        share_token: Share token minted by the server

    Returns:
        URL of the form <api_base>/share/<share_token>
    """
    return f"{api_base.rstrip('/')}/share/{share_token}"
