"""Command line interface for note-sync.

Each command builds a NoteSyncApp from the environment, runs one
operation and prints the resulting status message. The token is
persisted between invocations by the configured token store.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Annotated

import typer
from pydantic import ValidationError

from note_sync.app import NoteSyncApp
from note_sync.config import Config, format_config_error, load_config
from note_sync.models import NotePatch
from note_sync.utils.logging import setup_logging

app = typer.Typer(
    name="note-sync",
    help="Notes client - log in, list, edit and publish notes",
    no_args_is_help=True,
)

EmailOption = Annotated[str, typer.Option("--email", "-e", prompt=True, help="Account email")]
PasswordOption = Annotated[
    str,
    typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password"),
]
NoteIdArgument = Annotated[str, typer.Argument(help="Note ID")]


def _load_config() -> Config:
    """Read the environment configuration and set up logging.

    Exits with code 1 and one error line when a variable is invalid.
    """
    try:
        config = load_config()
    except ValidationError as e:
        typer.echo(format_config_error(e), err=True)
        raise typer.Exit(code=1) from e
    setup_logging(config.log_level)
    return config


def _run(operation: Callable[[NoteSyncApp], Awaitable[object]]) -> NoteSyncApp:
    """Build the app, run one async operation, and report its status."""
    config = _load_config()
    client = NoteSyncApp.from_config(config)
    asyncio.run(operation(client))
    _report(client)
    return client


def _report(client: NoteSyncApp) -> None:
    message = client.status.message
    if message:
        typer.echo(message, err=client.status.is_error)
    if client.status.is_error:
        raise typer.Exit(code=1)


@app.command()
def login(email: EmailOption, password: PasswordOption) -> None:
    """Log in and store the access token."""
    _run(lambda c: c.login(email, password))


@app.command()
def register(email: EmailOption, password: PasswordOption) -> None:
    """Create an account and store the access token."""
    _run(lambda c: c.register(email, password))


@app.command()
def logout() -> None:
    """Forget the stored access token."""
    config = _load_config()
    client = NoteSyncApp.from_config(config)
    client.logout()
    _report(client)


@app.command()
def status() -> None:
    """Show whether an access token is stored."""
    config = _load_config()
    client = NoteSyncApp.from_config(config)
    state = "authenticated" if client.session.is_authenticated else "anonymous"
    typer.echo(f"API: {config.api_base}")
    typer.echo(f"Session: {state}")


@app.command("list")
def list_notes(
    as_json: Annotated[bool, typer.Option("--json", help="Print the notes as the server sent them")] = False,
) -> None:
    """List all notes."""
    client = _run(lambda c: c.notes.refresh())
    if as_json:
        typer.echo(json.dumps([note.server_copy() for note in client.notes.notes], indent=2))
        return
    for note in client.notes.notes:
        url = client.notes.share_url(note)
        typer.echo(f"[{note.id}] {note.title}" + (f"  (public: {url})" if url else ""))


@app.command()
def create(
    title: Annotated[str, typer.Argument(help="Note title")],
    content: Annotated[str, typer.Option("--content", "-c", help="Note content")] = "",
) -> None:
    """Create a note."""
    if not title.strip():
        typer.echo("Title must not be blank.", err=True)
        raise typer.Exit(code=1)

    async def operation(c: NoteSyncApp) -> None:
        c.draft.title = title
        c.draft.content = content
        await c.submit_draft()

    _run(operation)


@app.command()
def update(
    note_id: NoteIdArgument,
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    content: Annotated[str | None, typer.Option("--content", "-c", help="New content")] = None,
) -> None:
    """Change the title and/or content of a note."""
    fields: dict[str, str] = {}
    if title is not None:
        fields["title"] = title
    if content is not None:
        fields["content"] = content
    if not fields:
        typer.echo("Nothing to update. Pass --title and/or --content.", err=True)
        raise typer.Exit(code=1)

    _run(lambda c: c.notes.update(note_id, NotePatch(**fields)))


@app.command()
def delete(
    note_id: NoteIdArgument,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    """Delete a note."""
    confirmed = yes or typer.confirm("Delete this note?")
    if not confirmed:
        typer.echo("Aborted.")
        raise typer.Exit(code=1)
    _run(lambda c: c.notes.delete(note_id, confirm=True))


@app.command()
def publish(note_id: NoteIdArgument) -> None:
    """Publish a note and copy its public link."""
    _run(lambda c: c.notes.publish(note_id))


@app.command()
def unpublish(note_id: NoteIdArgument) -> None:
    """Make a note private again."""
    _run(lambda c: c.notes.unpublish(note_id))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
