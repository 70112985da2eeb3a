"""Tests for file-based token storage."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from note_sync.auth.file_store import FileTokenStore


class TestFileTokenStore:
    """Tests for FileTokenStore."""

    def test_set_and_get(self, tmp_path: Path) -> None:
        store = FileTokenStore(data_dir=tmp_path)

        store.set("token123")

        assert store.get() == "token123"

    def test_get_nonexistent(self, tmp_path: Path) -> None:
        assert FileTokenStore(data_dir=tmp_path).get() is None

    def test_remove(self, tmp_path: Path) -> None:
        store = FileTokenStore(data_dir=tmp_path)
        store.set("token123")

        store.remove()

        assert store.get() is None
        assert not store.token_file.exists()

    def test_remove_nonexistent(self, tmp_path: Path) -> None:
        """Remove does not raise when the file does not exist."""
        FileTokenStore(data_dir=tmp_path).remove()

    def test_creates_directory(self, tmp_path: Path) -> None:
        nested_dir = tmp_path / "nested" / "data" / "dir"
        store = FileTokenStore(data_dir=nested_dir)

        store.set("token123")

        assert nested_dir.exists()
        assert store.get() == "token123"

    def test_overwrites_existing_token(self, tmp_path: Path) -> None:
        store = FileTokenStore(data_dir=tmp_path)
        store.set("first")

        store.set("second")

        assert store.get() == "second"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_file_is_owner_only(self, tmp_path: Path) -> None:
        store = FileTokenStore(data_dir=tmp_path)
        store.set("token123")

        mode = stat.S_IMODE(store.token_file.stat().st_mode)

        assert mode & (stat.S_IRWXG | stat.S_IRWXO) == 0

    def test_corrupted_file(self, tmp_path: Path) -> None:
        """Corrupted JSON is treated as no token."""
        store = FileTokenStore(data_dir=tmp_path)
        store.token_file.write_text("{not json", encoding="utf-8")

        assert store.get() is None

    def test_invalid_structure(self, tmp_path: Path) -> None:
        store = FileTokenStore(data_dir=tmp_path)
        store.token_file.write_text('["token"]', encoding="utf-8")

        assert store.get() is None

    def test_default_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTE_SYNC_DATA_DIR", str(tmp_path / "env"))

        store = FileTokenStore()

        assert store.data_dir == tmp_path / "env"
