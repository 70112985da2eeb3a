"""Pytest configuration and shared fixtures for note-sync tests.

This module provides an in-memory notes server served through
httpx.MockTransport, plus fixtures wiring the session manager and
note store to it.
"""

from __future__ import annotations

import json
import re
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from note_sync.auth.file_store import FileTokenStore
from note_sync.auth.session import SessionManager
from note_sync.notes.store import NoteStore
from note_sync.status import StatusChannel

API_BASE = "http://notes.test"
VALID_TOKEN = "valid-token"

_NOTE_PATH = re.compile(r"/notes/(\d+)(/share)?")


# ============================================================================
# Fake Server
# ============================================================================


class FakeNoteServer:
    """In-memory notes server implementing the endpoints the client uses.

    Attributes:
        notes: Server-side notes in server order (newest first)
        users: Registered email -> password
        tokens: Tokens accepted as bearer credentials
        requests: Every request received, in order
    """

    def __init__(self) -> None:
        self.notes: list[dict[str, Any]] = []
        self.users: dict[str, str] = {}
        self.tokens: set[str] = {VALID_TOKEN}
        self.requests: list[httpx.Request] = []
        self._failures: list[tuple[int, str]] = []
        self._next_id = 1
        self._revision = 0

    def add_note(self, title: str, content: str = "", **extra: Any) -> dict[str, Any]:
        """Seed a note directly on the server."""
        note: dict[str, Any] = {
            "id": self._next_id,
            "title": title,
            "content": content,
            "is_public": False,
            "share_token": None,
            "revision": self._revision,
        }
        note.update(extra)
        self._next_id += 1
        self.notes.insert(0, note)
        return note

    def fail_next(self, status_code: int, body: str = "") -> None:
        """Make the next request fail with the given status."""
        self._failures.append((status_code, body))

    def find(self, note_id: int) -> dict[str, Any] | None:
        for note in self.notes:
            if note["id"] == note_id:
                return note
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._failures:
            status_code, body = self._failures.pop(0)
            return httpx.Response(status_code, text=body)

        path = request.url.path
        method = request.method

        if path in ("/auth/login", "/auth/register") and method == "POST":
            return self._auth(path.rsplit("/", 1)[1], json.loads(request.content))

        auth = request.headers.get("Authorization", "")
        if auth.removeprefix("Bearer ") not in self.tokens:
            return httpx.Response(401, json={"detail": "Not authenticated"})

        if path == "/notes":
            if method == "GET":
                return httpx.Response(200, json=self.notes)
            if method == "POST":
                body = json.loads(request.content)
                note = self.add_note(body["title"], body.get("content", ""))
                return httpx.Response(201, json=note)

        match = _NOTE_PATH.fullmatch(path)
        if match:
            note = self.find(int(match.group(1)))
            if note is None:
                return httpx.Response(404, json={"detail": "Note not found"})
            self._revision += 1
            if match.group(2) and method == "POST":
                note["is_public"] = True
                note["share_token"] = f"share-{note['id']}"
                note["revision"] = self._revision
                return httpx.Response(200, json=note)
            if method == "PATCH":
                note.update(json.loads(request.content))
                if not note["is_public"]:
                    note["share_token"] = None
                note["revision"] = self._revision
                return httpx.Response(200, json=note)
            if method == "DELETE":
                self.notes.remove(note)
                return httpx.Response(204)

        return httpx.Response(405, text="Method Not Allowed")

    def _auth(self, kind: str, body: dict[str, str]) -> httpx.Response:
        email, password = body["email"], body["password"]
        if kind == "register":
            if email in self.users:
                return httpx.Response(409, json={"detail": "Email already registered"})
            self.users[email] = password
        elif self.users.get(email) != password:
            return httpx.Response(401, json={"detail": "Invalid credentials"})

        token = f"token-{len(self.tokens)}"
        self.tokens.add(token)
        return httpx.Response(200, json={"access_token": token, "token_type": "bearer"})


# ============================================================================
# Transport Fixtures
# ============================================================================


@pytest.fixture
def fake_server() -> FakeNoteServer:
    """Create an empty fake notes server."""
    return FakeNoteServer()


@pytest.fixture
def transport(fake_server: FakeNoteServer) -> httpx.MockTransport:
    """Create an httpx transport routed to the fake server."""
    return httpx.MockTransport(fake_server.handler)


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def token_store(tmp_path: Path) -> FileTokenStore:
    """Create a file token store in a temporary directory."""
    return FileTokenStore(data_dir=tmp_path)


@pytest.fixture
def status() -> StatusChannel:
    return StatusChannel()


@pytest.fixture
def session_manager(
    token_store: FileTokenStore,
    status: StatusChannel,
    transport: httpx.MockTransport,
) -> SessionManager:
    """Create an anonymous session manager."""
    return SessionManager(token_store, status, API_BASE, transport=transport)


@pytest.fixture
def authed_session_manager(
    token_store: FileTokenStore,
    status: StatusChannel,
    transport: httpx.MockTransport,
) -> SessionManager:
    """Create a session manager that loaded a valid persisted token."""
    token_store.set(VALID_TOKEN)
    return SessionManager(token_store, status, API_BASE, transport=transport)


# ============================================================================
# Note Store Fixtures
# ============================================================================


@pytest.fixture
def clipboard() -> MagicMock:
    """Create a clipboard callable that reports success."""
    return MagicMock(return_value=True)


@pytest.fixture
def note_store(
    authed_session_manager: SessionManager,
    status: StatusChannel,
    transport: httpx.MockTransport,
    clipboard: MagicMock,
) -> NoteStore:
    """Create a note store for an authenticated session."""
    return NoteStore(authed_session_manager, status, API_BASE, transport=transport, clipboard=clipboard)


@pytest.fixture
def anonymous_note_store(
    session_manager: SessionManager,
    status: StatusChannel,
    transport: httpx.MockTransport,
    clipboard: MagicMock,
) -> NoteStore:
    """Create a note store for an anonymous session."""
    return NoteStore(session_manager, status, API_BASE, transport=transport, clipboard=clipboard)


# ============================================================================
# Keyring Fixtures
# ============================================================================


@pytest.fixture
def mock_keyring() -> Generator[MagicMock, None, None]:
    """Create a mock keyring for testing token storage.

    Yields:
        A mocked keyring module.
    """
    with patch("note_sync.auth.token_store.keyring") as mock:
        mock.get_password.return_value = None
        yield mock
