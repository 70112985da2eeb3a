"""FastMCP server for note-sync.

Exposes the session and note store operations as MCP tools. One
NoteSyncApp lives for the whole server process, so the local note
collection persists between tool calls.
"""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP

from note_sync.app import NoteSyncApp
from note_sync.models import Note

# Create MCP server instance
mcp = FastMCP("note-sync")

_app: NoteSyncApp | None = None


def _get_app() -> NoteSyncApp:
    """Return the process-wide app, creating it on first use."""
    global _app
    if _app is None:
        _app = NoteSyncApp.from_config()
    return _app


def format_note(note: Note, share_url: str | None = None) -> str:
    """Format a note as one block of tool output."""
    visibility = f"Public: {share_url}" if share_url else "Private"
    lines = [f"[{note.id}] {note.title}", f"  {visibility}"]
    if note.content:
        lines.append(f"  {note.content}")
    return "\n".join(lines)


def _status_text(app: NoteSyncApp) -> str:
    return app.status.message or ""


@mcp.tool()
async def notes_login(
    email: Annotated[str, "Account email"],
    password: Annotated[str, "Account password"],
) -> str:
    """Log in and load the note collection.

    Returns:
        Status message
    """
    app = _get_app()
    await app.login(email, password)
    return _status_text(app)


@mcp.tool()
async def notes_register(
    email: Annotated[str, "Account email"],
    password: Annotated[str, "Account password"],
) -> str:
    """Create an account, log in and load the note collection.

    Returns:
        Status message
    """
    app = _get_app()
    await app.register(email, password)
    return _status_text(app)


@mcp.tool()
async def notes_logout() -> str:
    """Log out and forget the local note collection.

    Returns:
        Status message
    """
    app = _get_app()
    app.logout()
    return _status_text(app)


@mcp.tool()
async def notes_check_auth() -> str:
    """Report whether a token is stored.

    The token is not validated against the server.

    Returns:
        Authentication state
    """
    app = _get_app()
    if app.session.is_authenticated:
        return "Authenticated."
    return "Not authenticated. Use notes_login to log in."


@mcp.tool()
async def notes_list() -> str:
    """Refresh and list all notes.

    Returns:
        Note listing, or the error message
    """
    app = _get_app()
    notes = await app.notes.refresh()
    if not notes:
        return _status_text(app)

    blocks = [format_note(note, app.notes.share_url(note)) for note in notes]
    return _status_text(app) + "\n\n" + "\n\n".join(blocks)


@mcp.tool()
async def notes_create(
    title: Annotated[str, "Note title (must not be blank)"],
    content: Annotated[str, "Note content"] = "",
) -> str:
    """Create a note.

    Returns:
        The created note, or the error message
    """
    app = _get_app()
    if not title.strip():
        return "Title must not be blank."

    note = await app.notes.create(title, content)
    if note is None:
        return _status_text(app)
    return f"{_status_text(app)}\n\n{format_note(note)}"


@mcp.tool()
async def notes_update(
    note_id: Annotated[str, "ID of the note to update"],
    title: Annotated[str | None, "New title"] = None,
    content: Annotated[str | None, "New content"] = None,
) -> str:
    """Update the title and/or content of a note.

    Returns:
        The updated note, or the error message
    """
    app = _get_app()
    patch: dict[str, str] = {}
    if title is not None:
        patch["title"] = title
    if content is not None:
        patch["content"] = content
    if not patch:
        return "Nothing to update."

    note = await app.notes.update(note_id, patch)
    if note is None:
        return _status_text(app)
    return f"{_status_text(app)}\n\n{format_note(note, app.notes.share_url(note))}"


@mcp.tool()
async def notes_delete(
    note_id: Annotated[str, "ID of the note to delete"],
    confirm: Annotated[bool, "Must be true to actually delete; confirm with the user first"] = False,
) -> str:
    """Delete a note.

    Call first without confirm, ask the user, then call again with confirm=true.

    Returns:
        Status message
    """
    app = _get_app()
    await app.notes.delete(note_id, confirm=confirm)
    return _status_text(app)


@mcp.tool()
async def notes_publish(
    note_id: Annotated[str, "ID of the note to publish"],
) -> str:
    """Publish a note and return its public link.

    Returns:
        Status message including the public URL
    """
    app = _get_app()
    await app.notes.publish(note_id)
    return _status_text(app)


@mcp.tool()
async def notes_unpublish(
    note_id: Annotated[str, "ID of the note to make private"],
) -> str:
    """Make a published note private again.

    Returns:
        Status message
    """
    app = _get_app()
    await app.notes.unpublish(note_id)
    return _status_text(app)
