"""TUI screens: note input, delete confirmation, note view."""

from livedoc.screens.modals import ConfirmDeleteScreen, NoteInputScreen, NoteViewScreen

__all__ = [
    "ConfirmDeleteScreen",
    "NoteInputScreen",
    "NoteViewScreen",
]
