"""Note collection for note-sync."""

from note_sync.notes.store import NoteStore

__all__ = ["NoteStore"]
