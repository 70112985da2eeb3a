"""Token storage with keyring.

Provides secure storage of the bearer token using the system keyring.
Failures name the keyring backend and point at the file token store.
"""

from __future__ import annotations

import logging
from typing import Protocol

import keyring
from keyring.errors import PasswordDeleteError

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Persistent blob store for the bearer token."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def remove(self) -> None: ...


FILE_STORE_HINT = "Set NOTE_SYNC_TOKEN_STORE=file to keep the token in a file instead."


class KeyringError(Exception):
    """Exception raised when the system keyring cannot be used.

    Attributes:
        message: What failed
        backend: Active keyring backend class, if it could be determined
        hint: Suggested way out
    """

    def __init__(self, message: str, backend: str | None = None, hint: str = FILE_STORE_HINT) -> None:
        self.message = message
        self.backend = backend
        self.hint = hint
        detail = f" (backend: {backend})" if backend else ""
        super().__init__(f"{message}{detail}. {hint}")


def _backend_name() -> str | None:
    try:
        return type(keyring.get_keyring()).__name__
    except Exception as e:
        logger.debug("Could not determine keyring backend: %s", e)
        return None


def _keyring_error(action: str, error: Exception) -> KeyringError:
    return KeyringError(f"Failed to {action} token in keyring: {error}", backend=_backend_name())


class KeyringTokenStore:
    """Stores the bearer token in the system keyring.

    Attributes:
        service_name: The keyring service name used for storage
    """

    DEFAULT_SERVICE_NAME = "note-sync"
    TOKEN_KEY = "access_token"

    def __init__(self, service_name: str | None = None) -> None:
        """Initialize KeyringTokenStore.

        Args:
            service_name: Keyring service name (default: "note-sync")
        """
        self.service_name = service_name or self.DEFAULT_SERVICE_NAME

    def get(self) -> str | None:
        """Load the token from keyring.

        Returns:
            Stored token, or None if nothing is stored

        Raises:
            KeyringError: If keyring operation fails
        """
        try:
            token = keyring.get_password(self.service_name, self.TOKEN_KEY)
        except Exception as e:
            raise _keyring_error("load", e) from e
        return token or None

    def set(self, token: str) -> None:
        """Save the token to keyring.

        Args:
            token: Bearer token

        Raises:
            KeyringError: If keyring operation fails
        """
        try:
            keyring.set_password(self.service_name, self.TOKEN_KEY, token)
        except Exception as e:
            raise _keyring_error("save", e) from e

    def remove(self) -> None:
        """Remove the token from keyring.

        Does not raise an error if no token is stored.
        """
        try:
            keyring.delete_password(self.service_name, self.TOKEN_KEY)
        except PasswordDeleteError:
            pass
        except Exception as e:
            logger.warning("Failed to remove token from keyring: %s", e)
