"""File-based token storage for headless environments.

Stores the bearer token in a JSON file when the system keyring
cannot be accessed (containers, CI, headless servers).
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from note_sync.config import get_data_dir

logger = logging.getLogger(__name__)

TOKEN_FILENAME = "token.json"


class FileTokenStore:
    """Stores the bearer token in a JSON file.

    Attributes:
        data_dir: Directory where the token file is stored
        token_file: Full path to the token JSON file
    """

    def __init__(self, data_dir: Path | None = None) -> None:
        """Initialize FileTokenStore.

        Args:
            data_dir: Token file storage directory (default: NOTE_SYNC_DATA_DIR or ~/.note-sync)
        """
        self.data_dir = data_dir or get_data_dir()
        self.token_file = self.data_dir / TOKEN_FILENAME

    def get(self) -> str | None:
        """Load the token from the JSON file.

        Returns:
            Token if found and valid, None otherwise
        """
        if not self.token_file.exists():
            logger.debug("No token file found")
            return None

        try:
            with open(self.token_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Token file corrupted (invalid JSON): {e}")
            logger.info(f"Consider deleting corrupted file: {self.token_file}")
            return None
        except OSError as e:
            logger.warning(f"Failed to read token file: {e}")
            return None

        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            logger.error("Token file has invalid data structure")
            return None
        return token

    def set(self, token: str) -> None:
        """Save the token to the JSON file.

        The file is created with owner-only permissions.

        Args:
            token: Bearer token

        Raises:
            OSError: If file cannot be written
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd = os.open(self.token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump({"access_token": token}, f)

        logger.debug(f"Token saved to {self.token_file}")

    def remove(self) -> None:
        """Delete the token file.

        Does not raise if no token file exists.
        """
        try:
            self.token_file.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete token file: {e}")
