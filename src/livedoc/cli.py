"""CLI entry point: add, find, show, edit, delete, list and annotate notes."""

from __future__ import annotations

import functools
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from livedoc import __version__
from livedoc import config as settings
from livedoc.clipboard import copy_to_clipboard
from livedoc.config import CONFIG_PATH, init_config_if_missing, load_config
from livedoc.errors import LivedocError, NotFound, UserCancelled
from livedoc.logging_setup import setup_logging
from livedoc.session import NoteSession

console = Console(highlight=False)

LINE = click.IntRange(min=1)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _ask(prompt: str, default: str) -> str | None:
    """Prompt for note text; Ctrl+C or EOF count as cancel."""
    try:
        return click.prompt(f"  {prompt}", default=default, show_default=False)
    except click.Abort:
        return None


def _confirm(question: str) -> bool:
    try:
        return click.confirm(f"  {question}", default=False)
    except click.Abort:
        return False


def _target(file: str) -> Path:
    return Path(file).expanduser().absolute()


def _session(ctx: click.Context) -> NoteSession:
    session = ctx.obj.get("session")
    if session is None:
        session = NoteSession.open(ctx.obj.get("workspace"))
        ctx.obj["session"] = session
    return session


def _reports_errors(func):
    """Turn livedoc and I/O errors into console messages and exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UserCancelled:
            console.print("  [dim]Cancelled.[/dim]")
        except NotFound as exc:
            console.print(f"  [yellow]{escape(str(exc))}[/yellow]")
        except LivedocError as exc:
            console.print(f"  [red bold]Error:[/red bold] {escape(str(exc))}")
            sys.exit(1)
        except OSError as exc:
            console.print(f"  [red bold]Failed to write note:[/red bold] {escape(str(exc))}")
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# Main command group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "-w", "--workspace",
    type=click.Path(file_okay=False),
    default=None,
    help="Workspace folder that holds NOTES.md (default: config or current directory).",
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(__version__, prog_name="livedoc")
@click.pass_context
def main(ctx: click.Context, workspace: str | None, debug: bool) -> None:
    """livedoc: attach notes to file lines and keep them in NOTES.md."""
    setup_logging(debug=debug)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = workspace
    ctx.obj["debug"] = debug


@main.command()
@click.argument("file", type=click.Path())
@click.argument("line", type=LINE)
@click.argument("text", required=False)
@click.pass_context
@_reports_errors
def add(ctx: click.Context, file: str, line: int, text: str | None) -> None:
    """Attach a note to FILE at LINE (1-based)."""
    session = _session(ctx)
    note = session.create(_target(file), line - 1, _ask, text=text)
    console.print(f"  [green]Saved[/green]   {escape(str(note.key))} [dim]-> {escape(session.notes_file)}[/dim]")


@main.command()
@click.argument("file", type=click.Path())
@click.argument("line", type=LINE)
@click.pass_context
def find(ctx: click.Context, file: str, line: int) -> None:
    """Print the NOTES.md line index of the note at FILE:LINE."""

    @_reports_errors
    def _find() -> bool:
        idx = _session(ctx).find(_target(file), line - 1)
        console.print(str(idx))
        return True

    if not _find():
        sys.exit(1)


@main.command()
@click.argument("file", type=click.Path())
@click.argument("line", type=LINE)
@click.option("--copy", is_flag=True, default=False, help="Copy the note text to the clipboard.")
@click.pass_context
@_reports_errors
def show(ctx: click.Context, file: str, line: int, copy: bool) -> None:
    """Show the note attached to FILE:LINE."""
    note = _session(ctx).read(_target(file), line - 1)
    console.print(f"  [bold]{escape(str(note.key))}[/bold]  [dim]{escape(note.date)}[/dim]")
    console.print(Text(f"  {note.text}"))
    if copy or settings.get("auto_clipboard"):
        if copy_to_clipboard(note.text):
            console.print("  [green]Clipboard[/green]  copied")


@main.command()
@click.argument("file", type=click.Path())
@click.argument("line", type=LINE)
@click.argument("text", required=False)
@click.pass_context
@_reports_errors
def edit(ctx: click.Context, file: str, line: int, text: str | None) -> None:
    """Replace the text of the note at FILE:LINE."""
    session = _session(ctx)
    note = session.edit(_target(file), line - 1, _ask, text=text)
    console.print(f"  [green]Updated[/green] {escape(str(note.key))} [dim]in {escape(session.notes_file)}[/dim]")


@main.command()
@click.argument("file", type=click.Path())
@click.argument("line", type=LINE)
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_context
@_reports_errors
def delete(ctx: click.Context, file: str, line: int, yes: bool) -> None:
    """Delete the note at FILE:LINE."""
    session = _session(ctx)
    target = _target(file)
    session.delete(target, line - 1, confirm=None if yes else _confirm)
    console.print(f"  [green]Deleted[/green] {escape(str(session.key_for(target, line - 1)))} [dim]from {escape(session.notes_file)}[/dim]")


@main.command(name="list")
@click.option("--file", "file", type=click.Path(), default=None, help="Only notes on this file.")
@click.pass_context
@_reports_errors
def list_cmd(ctx: click.Context, file: str | None) -> None:
    """List every note in NOTES.md."""
    session = _session(ctx)
    notes = session.store.notes()
    if file is not None:
        rel = session.key_for(_target(file), 0).path
        notes = [n for n in notes if n.path == rel]
    if not notes:
        console.print("  [dim]No notes yet.[/dim]")
        return

    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Location", style="bold")
    table.add_column("Date", style="dim")
    table.add_column("Note")
    for note in notes:
        table.add_row(Text(str(note.key)), Text(note.date), Text(note.text))
    console.print(table)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
@_reports_errors
def annotate(ctx: click.Context, file: str) -> None:
    """Print FILE with markers and notes under annotated lines."""
    session = _session(ctx)
    target = _target(file)
    marker = settings.get("note_marker") or "●"

    annotated = {pos.line for _, pos in session.annotations(target)}
    texts: dict[int, str] = {}
    if annotated:
        rel = session.key_for(target, 0).path
        for note in session.store.notes():
            if note.path == rel and note.line - 1 not in texts:
                texts[note.line - 1] = note.text

    source = target.read_text(encoding="utf-8", errors="replace").splitlines()
    width = len(str(len(source)))
    for i, src_line in enumerate(source):
        gutter = marker if i in annotated else " "
        row = Text(f"{i + 1:>{width}} ")
        row.append(gutter, style="yellow")
        row.append(f" {src_line}")
        console.print(row)
        if i in texts:
            for note_line in texts[i].split("\n"):
                console.print(Text(f"{'':>{width}}   └ {note_line}", style="dim italic"))


@main.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write to this file instead of stdout.")
@click.pass_context
@_reports_errors
def export(ctx: click.Context, output: str | None) -> None:
    """Export notes as YAML."""
    from livedoc.export import export_notes, notes_to_yaml

    store = _session(ctx).store
    if output is None:
        click.echo(notes_to_yaml(store.notes()), nl=False)
        return
    path = export_notes(store, output)
    console.print(f"  [green]Exported[/green] [dim]{escape(str(path))}[/dim]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
@_reports_errors
def view(ctx: click.Context, file: str) -> None:
    """Open FILE in the terminal viewer with note markers."""
    from livedoc.app import NotesApp

    session = _session(ctx)
    target = _target(file)
    session.key_for(target, 0)
    setup_logging(debug=ctx.obj.get("debug", False), console=False)
    NotesApp(session=session, file_path=target).run()


@main.command()
@click.option("--show", is_flag=True, help="Show current config values.")
@click.option("--init", "init", is_flag=True, help="Create the config file with defaults if missing.")
def config(show: bool, init: bool) -> None:
    """Show or edit configuration."""
    if init:
        if init_config_if_missing():
            console.print(f"  Created default config at [dim]{escape(str(CONFIG_PATH))}[/dim]")
        else:
            console.print(f"  Config already exists at [dim]{escape(str(CONFIG_PATH))}[/dim]")
    if show:
        cfg = load_config()
        for key, val in cfg.items():
            console.print(f"  [bold]{key}:[/bold] {escape(str(val))}")
    elif not init:
        console.print(f"  Config file: [dim]{escape(str(CONFIG_PATH))}[/dim]")
        console.print("  Edit it directly, or use [bold]'livedoc config --show'[/bold] to view current values.")
