"""Secure logging configuration for note-sync.

Provides logging setup with credential masking for security.
Bearer tokens, access tokens and passwords are masked in all log output.
"""

import logging
import re


class TokenMaskingFilter(logging.Filter):
    """Logging filter that masks credentials for security.

    Credential values are replaced with [MASKED] to prevent
    leakage in logs.
    """

    # Patterns to match credential values in various formats
    TOKEN_PATTERNS = [
        # Authorization header: Bearer VALUE
        re.compile(r"(Bearer\s+)([^\s\"',;}]+)"),
        # Dict/JSON format {"access_token": "value"}
        re.compile(r'(["\']?(?:access_token|password)["\']?\s*[=:]\s*["\'])([^"\']+)(["\'])'),
        # key=value format
        re.compile(r"((?:access_token|password)=)([^\s&;,]+)"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask credentials in log records.

        Args:
            record: Log record to process

        Returns:
            Always True (record is always passed through, just modified)
        """
        # Mask the formatted text so "Bearer %s" with a token argument is caught
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        record.msg = self._mask_tokens(message)
        record.args = ()
        return True

    def _mask_tokens(self, text: str) -> str:
        """Mask all credential values in text.

        Args:
            text: Text potentially containing credentials

        Returns:
            Text with credential values replaced by [MASKED]
        """

        def mask_match(m: re.Match[str]) -> str:
            suffix = m.group(3) if m.lastindex and m.lastindex > 2 else ""
            return m.group(1) + "[MASKED]" + suffix

        result = text
        for pattern in self.TOKEN_PATTERNS:
            result = pattern.sub(mask_match, result)
        return result


def setup_logging(level: int | str = logging.INFO, name: str | None = None) -> logging.Logger:
    """Set up logging with credential masking.

    Args:
        level: Logging level (default: INFO)
        name: Logger name (default: "note_sync")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or "note_sync")
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    handler.addFilter(TokenMaskingFilter())

    logger.addHandler(handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the note_sync namespace.

    Args:
        name: Logger name suffix (e.g., "api" for "note_sync.api")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"note_sync.{name}")
    return logging.getLogger("note_sync")
