"""Process-level composition of session, note store and status channel.

NoteSyncApp performs the session transitions the components do not
do on their own: the initial refresh after authentication and the
removal of session-scoped notes on logout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from note_sync.auth.file_store import FileTokenStore
from note_sync.auth.session import SessionManager
from note_sync.auth.token_store import KeyringTokenStore, TokenStore
from note_sync.config import Config, load_config
from note_sync.models import ALREADY_AUTHENTICATED_MESSAGE, AuthKind, Note, Session
from note_sync.notes.store import NoteStore
from note_sync.status import StatusChannel

logger = logging.getLogger(__name__)


@dataclass
class NoteDraft:
    """Input fields of the create form."""

    title: str = ""
    content: str = ""

    def clear(self) -> None:
        self.title = ""
        self.content = ""


def build_token_store(config: Config) -> TokenStore:
    """Create the token store selected by the configuration."""
    if config.token_store == "file":
        return FileTokenStore(config.data_dir)
    return KeyringTokenStore()


class NoteSyncApp:
    """One user's client session.

    Attributes:
        status: Status channel shared by all components
        session: Session manager
        notes: Note store
        draft: Create form inputs
    """

    def __init__(
        self,
        store: TokenStore,
        api_base: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clipboard: Callable[[str], bool] | None = None,
    ) -> None:
        kwargs = {} if timeout is None else {"timeout": timeout}
        self.status = StatusChannel()
        self.session = SessionManager(store, self.status, api_base, transport=transport, **kwargs)
        self.notes = NoteStore(
            self.session,
            self.status,
            api_base,
            transport=transport,
            clipboard=clipboard,
            **kwargs,
        )
        self.draft = NoteDraft()

    @classmethod
    def from_config(cls, config: Config | None = None) -> NoteSyncApp:
        """Build the app from environment configuration."""
        config = config or load_config()
        return cls(build_token_store(config), config.api_base, timeout=config.timeout)

    async def start(self) -> None:
        """Load notes if a persisted token was found."""
        if self.session.is_authenticated:
            await self.notes.refresh()

    async def _authenticate(self, kind: AuthKind, email: str, password: str) -> Session:
        if self.session.is_authenticated:
            self.status.set(ALREADY_AUTHENTICATED_MESSAGE, error=True)
            return self.session.session

        session = await self.session.authenticate(kind, email, password)
        if session.authenticated:
            await self.notes.refresh()
        return session

    async def login(self, email: str, password: str) -> Session:
        """Log in and load the note collection."""
        return await self._authenticate(AuthKind.LOGIN, email, password)

    async def register(self, email: str, password: str) -> Session:
        """Register and load the (empty) note collection."""
        return await self._authenticate(AuthKind.REGISTER, email, password)

    def logout(self) -> Session:
        """Log out and drop every session-scoped piece of state."""
        session = self.session.logout()
        self.notes.clear()
        self.draft.clear()
        return session

    async def submit_draft(self) -> Note | None:
        """Create a note from the draft, clearing the draft on success."""
        note = await self.notes.create(self.draft.title, self.draft.content)
        if note is not None:
            self.draft.clear()
        return note
