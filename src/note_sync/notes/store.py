"""Local mirror of the server-side note collection.

The store applies mutations through the notes API and reconciles its
collection with each successful response. The server is the single
source of truth: ids and share tokens always come from responses, and
the collection is only touched after the server call succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from note_sync.api.client import NoteSyncClient
from note_sync.api.notes import build_share_url, create_note, delete_note, list_notes, share_note, update_note
from note_sync.auth.session import SessionManager
from note_sync.config import DEFAULT_TIMEOUT, get_api_base
from note_sync.decorators import report_errors, require_token
from note_sync.models import DELETE_CONFIRM_REQUIRED, Note, NotePatch, PublishResult
from note_sync.status import StatusChannel
from note_sync.utils.clipboard import copy_to_clipboard

logger = logging.getLogger(__name__)

NoteId = int | str


def _same_id(a: NoteId, b: NoteId) -> bool:
    """Compare ids regardless of whether they arrived as int or str."""
    return str(a) == str(b)


def _unique_by_id(notes: list[Note]) -> list[Note]:
    """Drop later entries that repeat an earlier id."""
    seen: set[str] = set()
    result: list[Note] = []
    for note in notes:
        key = str(note.id)
        if key in seen:
            logger.warning("Server returned duplicate note id %s, keeping first", note.id)
            continue
        seen.add(key)
        result.append(note)
    return result


class NoteStore:
    """Ordered, in-memory collection of the current session's notes.

    All operations need a token from the session manager; while
    anonymous they are refused without a network call. Failed
    operations leave the collection exactly as it was and report the
    error on the status channel. Nothing is retried.

    Concurrent mutations of the same note are not serialized: the
    response that completes last wins.

    Attributes:
        session: Session manager providing the bearer token
        status: Status channel
        api_base: Server base URL, also used for share links
    """

    def __init__(
        self,
        session: SessionManager,
        status: StatusChannel,
        api_base: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        clipboard: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize an empty NoteStore.

        Args:
            session: Session manager
            status: Status channel
            api_base: Server base URL (default: NOTE_SYNC_API_BASE)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
            clipboard: Callable copying text, returning True on success
        """
        self.session = session
        self.status = status
        self.api_base = (api_base or get_api_base()).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._clipboard = clipboard or copy_to_clipboard
        self._notes: list[Note] = []

    def _client(self, token: str) -> NoteSyncClient:
        return NoteSyncClient(self.api_base, token, timeout=self._timeout, transport=self._transport)

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the collection in display order."""
        return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def get(self, note_id: NoteId) -> Note | None:
        """Return the local entry with the given id, if any."""
        for note in self._notes:
            if _same_id(note.id, note_id):
                return note
        return None

    def clear(self) -> None:
        """Empty the collection (session-scoped state)."""
        self._notes = []

    def share_url(self, note: Note) -> str | None:
        """Public URL of a published note, None if it is private."""
        if not note.is_public or not note.share_token:
            return None
        return build_share_url(self.api_base, note.share_token)

    def _replace(self, note_id: NoteId, note: Note) -> None:
        self._notes = [note if _same_id(n.id, note_id) else n for n in self._notes]

    @report_errors
    @require_token
    async def refresh(self, token: str) -> list[Note]:
        """Fetch the full collection and replace the local one wholesale.

        Returns:
            The new collection, or None on failure
        """
        async with self._client(token) as client:
            notes = await list_notes(client)

        self._notes = _unique_by_id(notes)
        self.status.set(f"loaded {len(self._notes)} note(s)")
        return list(self._notes)

    @report_errors
    @require_token
    async def create(self, token: str, title: str, content: str = "") -> Note | None:
        """Create a note and prepend the server's copy.

        A blank or whitespace-only title is ignored without a request.

        Args:
            title: Note title
            content: Note content

        Returns:
            Created note, or None if ignored or failed
        """
        if not title.strip():
            return None

        async with self._client(token) as client:
            note = await create_note(client, title, content)

        self._notes = [note] + [n for n in self._notes if not _same_id(n.id, note.id)]
        self.status.set(f"created note {note.id}")
        return note

    @report_errors
    @require_token
    async def update(self, token: str, note_id: NoteId, patch: NotePatch | dict[str, Any]) -> Note | None:
        """Send a partial update and replace the local entry with the result.

        The local entry becomes exactly the note the server returned,
        not a merge of the old entry and the patch.

        Args:
            note_id: Note identifier
            patch: Fields to change

        Returns:
            Updated note, or None if the patch was empty or invalid, or the
            call failed
        """
        if isinstance(patch, dict):
            try:
                patch = NotePatch.model_validate(patch)
            except ValidationError as e:
                logger.warning("Rejected invalid patch for note %s: %s", note_id, e.errors(include_url=False))
                return None
        if not patch.model_fields_set:
            return None

        async with self._client(token) as client:
            note = await update_note(client, note_id, patch)

        self._replace(note_id, note)
        self.status.set(f"updated note {note_id}")
        return note

    @report_errors
    @require_token
    async def delete(self, token: str, note_id: NoteId, confirm: bool = False) -> bool | None:
        """Delete a note after the caller obtained confirmation.

        Args:
            note_id: Note identifier
            confirm: Must be True; the caller is responsible for asking the user

        Returns:
            True if deleted, False if refused for lack of confirmation,
            None if the call failed
        """
        if not confirm:
            self.status.set(DELETE_CONFIRM_REQUIRED, error=True)
            return False

        async with self._client(token) as client:
            await delete_note(client, note_id)

        self._notes = [n for n in self._notes if not _same_id(n.id, note_id)]
        self.status.set(f"deleted note {note_id}")
        return True

    @report_errors
    @require_token
    async def publish(self, token: str, note_id: NoteId) -> PublishResult | None:
        """Publish a note and surface its public URL.

        The URL is copied to the clipboard on a best-effort basis.

        Args:
            note_id: Note identifier

        Returns:
            Published note with its share URL, or None on failure
        """
        async with self._client(token) as client:
            note = await share_note(client, note_id)

        self._replace(note_id, note)
        url = build_share_url(self.api_base, note.share_token or "")

        try:
            copied = bool(self._clipboard(url))
        except Exception as e:
            logger.debug("Clipboard copy failed: %s", e)
            copied = False

        self.status.set(f"Public link copied: {url}" if copied else f"Public link: {url}")
        return PublishResult(note=note, share_url=url, copied=copied)

    async def unpublish(self, note_id: NoteId) -> Note | None:
        """Make a note private again.

        This is a plain field patch, not a separate server endpoint.

        Args:
            note_id: Note identifier

        Returns:
            Updated note, or None on failure
        """
        return await self.update(note_id, NotePatch(is_public=False))
