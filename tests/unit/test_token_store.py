"""Unit tests for keyring token storage."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from note_sync.auth.token_store import FILE_STORE_HINT, KeyringError, KeyringTokenStore


class TestKeyringTokenStore:
    """Tests for KeyringTokenStore class."""

    def test_init_default_service_name(self) -> None:
        assert KeyringTokenStore().service_name == "note-sync"

    def test_init_custom_service_name(self) -> None:
        assert KeyringTokenStore(service_name="custom-service").service_name == "custom-service"

    def test_set_token(self, mock_keyring: MagicMock) -> None:
        KeyringTokenStore().set("token123")

        mock_keyring.set_password.assert_called_once_with("note-sync", "access_token", "token123")

    def test_get_token_exists(self, mock_keyring: MagicMock) -> None:
        mock_keyring.get_password.return_value = "token123"

        assert KeyringTokenStore().get() == "token123"
        mock_keyring.get_password.assert_called_once_with("note-sync", "access_token")

    def test_get_token_not_exists(self, mock_keyring: MagicMock) -> None:
        assert KeyringTokenStore().get() is None

    def test_get_empty_token_is_none(self, mock_keyring: MagicMock) -> None:
        mock_keyring.get_password.return_value = ""

        assert KeyringTokenStore().get() is None

    def test_remove_token(self, mock_keyring: MagicMock) -> None:
        KeyringTokenStore().remove()

        mock_keyring.delete_password.assert_called_once_with("note-sync", "access_token")

    def test_remove_token_not_exists(self, mock_keyring: MagicMock) -> None:
        """Removing a missing token does not raise."""
        from keyring.errors import PasswordDeleteError

        mock_keyring.delete_password.side_effect = PasswordDeleteError("No password found")

        KeyringTokenStore().remove()

    def test_remove_ignores_backend_errors(self, mock_keyring: MagicMock) -> None:
        mock_keyring.delete_password.side_effect = RuntimeError("backend gone")

        KeyringTokenStore().remove()


class TestKeyringErrors:
    """Tests for keyring failure diagnostics."""

    def test_set_failure_raises_keyring_error(self, mock_keyring: MagicMock) -> None:
        mock_keyring.set_password.side_effect = RuntimeError("No backend")

        with pytest.raises(KeyringError) as exc_info:
            KeyringTokenStore().set("token123")

        assert "Failed to save token in keyring" in exc_info.value.message
        assert exc_info.value.hint == FILE_STORE_HINT

    def test_get_failure_raises_keyring_error(self, mock_keyring: MagicMock) -> None:
        mock_keyring.get_password.side_effect = RuntimeError("locked")

        with pytest.raises(KeyringError) as exc_info:
            KeyringTokenStore().get()

        assert exc_info.value.backend == "MagicMock"

    def test_unknown_backend_is_omitted(self, mock_keyring: MagicMock) -> None:
        mock_keyring.get_password.side_effect = RuntimeError("locked")
        mock_keyring.get_keyring.side_effect = RuntimeError("no backend")

        with pytest.raises(KeyringError) as exc_info:
            KeyringTokenStore().get()

        assert exc_info.value.backend is None
        assert "backend:" not in str(exc_info.value)

    def test_error_message_includes_backend_and_hint(self) -> None:
        error = KeyringError("Failed", backend="FailKeyring")

        assert str(error) == f"Failed (backend: FailKeyring). {FILE_STORE_HINT}"
        assert "NOTE_SYNC_TOKEN_STORE=file" in str(error)
