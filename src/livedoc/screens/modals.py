"""Modal screens used by the viewer (note input, delete confirm, note view)."""

from __future__ import annotations

from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, OptionList, Static
from textual.widgets.option_list import Option

from livedoc.notes import Note, NoteKey
from livedoc.screens.base import CLOSE_BINDINGS, CONFIRM_BINDINGS, INPUT_BINDINGS


class NoteInputScreen(ModalScreen[str | None]):
    """Ask for note text. Dismisses with the text, or None when cancelled."""

    BINDINGS = INPUT_BINDINGS

    def __init__(self, prompt: str, value: str = "", placeholder: str = "") -> None:
        super().__init__()
        self.prompt = prompt
        self.value = value
        self.placeholder = placeholder

    def compose(self):
        yield Vertical(
            Label(self.prompt, id="note-input-title"),
            Input(value=self.value, placeholder=self.placeholder, id="note-input"),
            id="note-input-container",
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Ask user to confirm deleting a note."""

    BINDINGS = CONFIRM_BINDINGS

    def __init__(self, key: NoteKey) -> None:
        super().__init__()
        self.note_key = key

    def compose(self):
        yield Vertical(
            Label(f"Delete note at {self.note_key}?", id="delete-confirm-message", markup=False),
            OptionList(
                Option("Yes, delete note", id="yes"),
                Option("No, keep it", id="no"),
                id="delete-confirm-list",
            ),
            id="delete-confirm-container",
        )

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id == "yes")

    def action_yes(self) -> None:
        self.dismiss(True)

    def action_no(self) -> None:
        self.dismiss(False)


class NoteViewScreen(ModalScreen[None]):
    """Read-only view of one note."""

    BINDINGS = CLOSE_BINDINGS

    def __init__(self, note: Note, notes_file: str) -> None:
        super().__init__()
        self.note = note
        self.notes_file = notes_file

    def compose(self):
        yield Vertical(
            Label(f"{self.note.key}  ·  {self.note.date}", id="note-view-title", markup=False),
            Static(self.note.text or "(empty note)", id="note-view-text", markup=False),
            Static(f"Stored in {self.notes_file}", id="note-view-hint"),
            id="note-view-container",
        )

    def action_close(self) -> None:
        self.dismiss(None)
