"""API module for note-sync.

Provides HTTP client and API operations for the notes server.
"""

from note_sync.api.auth import request_token
from note_sync.api.client import NoteSyncClient
from note_sync.api.notes import build_share_url, create_note, delete_note, list_notes, share_note, update_note

__all__ = [
    "NoteSyncClient",
    "build_share_url",
    "create_note",
    "delete_note",
    "list_notes",
    "request_token",
    "share_note",
    "update_note",
]
