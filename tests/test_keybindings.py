"""Tests for viewer and modal key binding coverage."""

from __future__ import annotations

import pytest

pytest.importorskip("textual")

from livedoc.app import NotesApp
from livedoc.screens.base import VIEWER_BINDINGS
from livedoc.screens.modals import ConfirmDeleteScreen, NoteInputScreen, NoteViewScreen


def _binding_exists(bindings, key: str, action: str, *, priority: bool | None = None) -> bool:
    for binding in bindings:
        if binding.key == key and binding.action == action:
            if priority is None or bool(binding.priority) == priority:
                return True
    return False


def test_viewer_note_actions() -> None:
    assert _binding_exists(VIEWER_BINDINGS, "ctrl+n", "add_note")
    assert _binding_exists(VIEWER_BINDINGS, "ctrl+e", "edit_note")
    assert _binding_exists(VIEWER_BINDINGS, "ctrl+d", "delete_note")
    assert _binding_exists(VIEWER_BINDINGS, "ctrl+o", "view_note")


def test_viewer_ctrl_c_quits() -> None:
    assert _binding_exists(NotesApp.BINDINGS, "ctrl+c", "quit", priority=True)


def test_modal_ctrl_c_bindings() -> None:
    assert _binding_exists(NoteInputScreen.BINDINGS, "ctrl+c", "cancel", priority=True)
    assert _binding_exists(ConfirmDeleteScreen.BINDINGS, "ctrl+c", "no", priority=True)
    assert _binding_exists(NoteViewScreen.BINDINGS, "ctrl+c", "close", priority=True)


def test_modal_escape_bindings() -> None:
    assert _binding_exists(NoteInputScreen.BINDINGS, "escape", "cancel")
    assert _binding_exists(ConfirmDeleteScreen.BINDINGS, "escape", "no")
    assert _binding_exists(NoteViewScreen.BINDINGS, "escape", "close")
