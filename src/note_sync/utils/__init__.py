"""Utility modules for note-sync."""

from note_sync.utils.clipboard import copy_to_clipboard
from note_sync.utils.logging import get_logger, setup_logging

__all__ = ["copy_to_clipboard", "setup_logging", "get_logger"]
