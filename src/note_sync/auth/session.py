"""Session management.

Owns the bearer token lifecycle: reads the persisted token at startup,
obtains a new one on login or register, and clears it on logout.
"""

from __future__ import annotations

import logging

import httpx

from note_sync.api.auth import request_token
from note_sync.api.client import NoteSyncClient
from note_sync.auth.token_store import KeyringError, TokenStore
from note_sync.config import DEFAULT_TIMEOUT
from note_sync.models import AuthKind, NoteSyncError, Session
from note_sync.status import StatusChannel

logger = logging.getLogger(__name__)


class SessionManager:
    """Holds the current Session and its persisted backing store.

    Two states: anonymous and authenticated. A token rejected by the
    server does not log the user out; the failure is reported like any
    other.

    Attributes:
        status: Status channel receiving success and failure messages
        api_base: Server base URL
    """

    def __init__(
        self,
        store: TokenStore,
        status: StatusChannel,
        api_base: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize SessionManager and load the persisted token.

        Args:
            store: Token store (keyring or file)
            status: Status channel
            api_base: Server base URL (default: NOTE_SYNC_API_BASE)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self._store = store
        self.status = status
        self.api_base = api_base
        self._timeout = timeout
        self._transport = transport
        self._session = Session(token=self._load_token())

    def _load_token(self) -> str | None:
        try:
            return self._store.get()
        except KeyringError as e:
            logger.warning("Could not read stored token, starting anonymous: %s", e.message)
            return None

    @property
    def session(self) -> Session:
        """Current session."""
        return self._session

    @property
    def is_authenticated(self) -> bool:
        """Whether the current session carries a token."""
        return self._session.authenticated

    def current_token(self) -> str | None:
        """Return the bearer token for authenticated requests."""
        return self._session.token

    async def authenticate(self, kind: AuthKind, email: str, password: str) -> Session:
        """Log in or register with the server.

        On success the token replaces the current session and is
        persisted. On failure the session is left unchanged and the
        error is reported on the status channel. No retry is attempted.

        Args:
            kind: Login or register
            email: Account email
            password: Account password

        Returns:
            The resulting session (unchanged on failure)
        """
        try:
            async with NoteSyncClient(self.api_base, timeout=self._timeout, transport=self._transport) as client:
                token = await request_token(client, kind, email, password)
        except NoteSyncError as e:
            logger.error("%s failed: code=%s, message=%s", kind.value, e.code.value, e.message)
            self.status.set(e.message, error=True)
            return self._session

        self._session = Session(token=token)
        logger.info("%s succeeded", kind.value)

        try:
            self._store.set(token)
        except (KeyringError, OSError) as e:
            logger.error("Failed to persist token: %s", e)
            self.status.set(f"{kind.value} success (token not saved: {e})")
            return self._session

        self.status.set(f"{kind.value} success")
        return self._session

    async def login(self, email: str, password: str) -> Session:
        """Log in with existing credentials."""
        return await self.authenticate(AuthKind.LOGIN, email, password)

    async def register(self, email: str, password: str) -> Session:
        """Create an account and log in."""
        return await self.authenticate(AuthKind.REGISTER, email, password)

    def logout(self) -> Session:
        """Clear the persisted token and return an anonymous session.

        Local only; always succeeds.

        Returns:
            Anonymous session
        """
        self._store.remove()
        self._session = Session()
        self.status.set("logged out")
        logger.info("Logged out")
        return self._session
