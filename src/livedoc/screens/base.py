"""Shared bindings for the livedoc TUI."""

from __future__ import annotations

from textual.binding import Binding

VIEWER_BINDINGS = [
    Binding("ctrl+n", "add_note", "Add note", key_display="^n"),
    Binding("ctrl+e", "edit_note", "Edit", key_display="^e"),
    Binding("ctrl+d", "delete_note", "Delete", key_display="^d"),
    Binding("ctrl+o", "view_note", "View", key_display="^o"),
    Binding("ctrl+y", "copy_note", "Copy", key_display="^y"),
    Binding("ctrl+c", "quit", "Quit", key_display="^c", priority=True),
]

INPUT_BINDINGS = [
    Binding("escape", "cancel", "Cancel"),
    Binding("ctrl+c", "cancel", "Cancel", priority=True),
]

CONFIRM_BINDINGS = [
    Binding("escape", "no", "No"),
    Binding("ctrl+c", "no", "No", priority=True),
    Binding("y", "yes", "Yes"),
    Binding("n", "no", "No"),
]

CLOSE_BINDINGS = [
    Binding("escape", "close", "Close"),
    Binding("ctrl+c", "close", "Close", priority=True),
]
