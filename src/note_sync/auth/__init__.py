"""Authentication module for note-sync.

Provides the session manager and token storage backends.
"""

from note_sync.auth.file_store import FileTokenStore
from note_sync.auth.session import SessionManager
from note_sync.auth.token_store import KeyringError, KeyringTokenStore, TokenStore

__all__ = ["SessionManager", "KeyringError", "KeyringTokenStore", "FileTokenStore", "TokenStore"]
