"""Textual TUI that shows a source file with its notes.

Layout:
┌─────────────────────────────────────────────┐
│  livedoc  src/parser.py  ·  2 notes         │
├─────────────────────────────────────────────┤
│   11   def parse(tokens):                   │
│   12 ● for i in range(len(tokens) + 1):     │
│   13       ...                              │
├─────────────────────────────────────────────┤
│  ^n Add note  ^e Edit  ^d Delete  ^o View   │
└─────────────────────────────────────────────┘

Markers come from the session's location index; every mutation goes
through the session so the index stays in step with NOTES.md.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Footer, OptionList, Static
from textual.widgets.option_list import Option

from livedoc.clipboard import copy_to_clipboard
from livedoc.config import load_config
from livedoc.errors import LivedocError, NotFound
from livedoc.notes import Note
from livedoc.screens.base import VIEWER_BINDINGS
from livedoc.screens.modals import ConfirmDeleteScreen, NoteInputScreen, NoteViewScreen
from livedoc.session import ADD_PROMPT, EDIT_PROMPT, NoteSession

logger = logging.getLogger(__name__)


def _no_prompt(prompt: str, default: str) -> str | None:
    # Text is always collected by a modal screen before the session is called.
    return None


class NotesApp(App[None]):
    """Source viewer with note markers and note actions."""

    CSS = """
    #status-bar {
        dock: top;
        height: 1;
        background: $accent;
        color: $text;
        padding: 0 1;
    }

    #source {
        height: 1fr;
    }

    #note-input-container, #delete-confirm-container, #note-view-container {
        align: center middle;
        width: 70;
        height: auto;
        max-height: 20;
        background: $surface;
        border: tall $accent;
        padding: 1 2;
    }

    #note-input-title, #delete-confirm-message, #note-view-title {
        margin-bottom: 1;
    }

    #note-view-hint {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = VIEWER_BINDINGS

    def __init__(self, session: NoteSession, file_path: str | Path) -> None:
        super().__init__()
        self.session = session
        self.file_path = Path(file_path)
        self.marker = load_config().get("note_marker") or "●"

    def compose(self) -> ComposeResult:
        yield Static("", id="status-bar")
        yield OptionList(id="source")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh()

    # -- rendering ---------------------------------------------------------

    def _source_lines(self) -> list[str]:
        return self.file_path.read_text(encoding="utf-8", errors="replace").splitlines() or [""]

    def annotated_lines(self) -> set[int]:
        return {pos.line for _, pos in self.session.annotations(self.file_path)}

    def _refresh(self) -> None:
        source = self.query_one("#source", OptionList)
        highlighted = source.highlighted
        annotated = self.annotated_lines()
        lines = self._source_lines()
        width = len(str(len(lines)))

        options = []
        for i, src in enumerate(lines):
            prompt = Text(f"{i + 1:>{width}} ")
            prompt.append(self.marker if i in annotated else " ", style="bold yellow")
            prompt.append(f" {src}")
            options.append(Option(prompt))
        source.clear_options()
        source.add_options(options)
        if highlighted is not None and highlighted < len(options):
            source.highlighted = highlighted

        rel = self.session.key_for(self.file_path, 0).path
        count = len(annotated)
        status = f"  livedoc  {rel}  ·  {count} note{'s' if count != 1 else ''}"
        self.query_one("#status-bar", Static).update(Text(status))
        logger.debug("Rendered %s with %d annotated lines", rel, count)

    @property
    def current_line(self) -> int | None:
        """0-based line under the cursor."""
        return self.query_one("#source", OptionList).highlighted

    def _line_or_warn(self) -> int | None:
        line = self.current_line
        if line is None:
            self.notify("Place the cursor on a line first.", severity="error")
        return line

    def _read_or_warn(self, line: int) -> Note | None:
        try:
            return self.session.read(self.file_path, line)
        except NotFound:
            self.notify("No note on this line.", severity="warning")
        except LivedocError as exc:
            self.notify(str(exc), severity="error")
        except OSError as exc:
            self.notify(f"Failed to read {self.session.notes_file}: {exc}", severity="error")
        return None

    # -- actions -----------------------------------------------------------

    def action_add_note(self) -> None:
        line = self._line_or_warn()
        if line is None:
            return
        screen = NoteInputScreen(ADD_PROMPT, placeholder="E.g. Fixed off-by-one error in parser")
        self.push_screen(screen, functools.partial(self._on_add_text, line))

    def _on_add_text(self, line: int, text: str | None) -> None:
        if text is None:
            return
        try:
            self.session.create(self.file_path, line, _no_prompt, text=text)
        except LivedocError as exc:
            self.notify(str(exc), severity="error")
            return
        except OSError as exc:
            self.notify(f"Failed to write note: {exc}", severity="error")
            return
        self.notify(f"Note saved to {self.session.notes_file}")
        self._refresh()

    def action_edit_note(self) -> None:
        line = self._line_or_warn()
        if line is None:
            return
        note = self._read_or_warn(line)
        if note is None:
            return
        screen = NoteInputScreen(EDIT_PROMPT, value=note.text)
        self.push_screen(screen, functools.partial(self._on_edit_text, line))

    def _on_edit_text(self, line: int, text: str | None) -> None:
        if text is None:
            return
        try:
            self.session.edit(self.file_path, line, _no_prompt, text=text)
        except NotFound:
            self.notify("No note on this line.", severity="warning")
            return
        except LivedocError as exc:
            self.notify(str(exc), severity="error")
            return
        except OSError as exc:
            self.notify(f"Failed to write note: {exc}", severity="error")
            return
        self.notify(f"Note updated in {self.session.notes_file}")

    def action_delete_note(self) -> None:
        line = self._line_or_warn()
        if line is None:
            return
        note = self._read_or_warn(line)
        if note is None:
            return
        if load_config().get("confirm_delete", True):
            self.push_screen(ConfirmDeleteScreen(note.key), functools.partial(self._on_delete_confirmed, line))
        else:
            self._on_delete_confirmed(line, True)

    def _on_delete_confirmed(self, line: int, confirmed: bool | None) -> None:
        if not confirmed:
            return
        try:
            self.session.delete(self.file_path, line)
        except NotFound:
            self.notify("No note on this line.", severity="warning")
            return
        except LivedocError as exc:
            self.notify(str(exc), severity="error")
            return
        except OSError as exc:
            self.notify(f"Failed to write note: {exc}", severity="error")
            return
        self.notify(f"Note deleted from {self.session.notes_file}")
        self._refresh()

    def action_view_note(self) -> None:
        line = self._line_or_warn()
        if line is None:
            return
        note = self._read_or_warn(line)
        if note is None:
            return
        if load_config().get("auto_clipboard", False):
            copy_to_clipboard(note.text)
        self.push_screen(NoteViewScreen(note, self.session.notes_file))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "source":
            return
        if event.option_index in self.annotated_lines():
            self.action_view_note()

    def action_copy_note(self) -> None:
        line = self._line_or_warn()
        if line is None:
            return
        note = self._read_or_warn(line)
        if note is None:
            return
        if copy_to_clipboard(note.text):
            self.notify("Copied to clipboard")
        else:
            self.notify("Could not copy to clipboard", severity="error")

    def action_quit(self) -> None:
        self.exit()
