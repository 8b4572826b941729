"""Note operations addressed by editor coordinates.

Callers pass the workspace root, an absolute file path and a 0-based line
(what an editor reports). Paths are stored relative to the workspace root
with the host separator, lines are stored 1-based.
"""

from __future__ import annotations

import os
from pathlib import Path

from livedoc.errors import NoActiveTarget, NotFound, NoWorkspace
from livedoc.notes import Note, NoteKey, today
from livedoc.store import NoteStore

NOTES_FILE = "NOTES.md"


def resolve_key(
    workspace_root: str | Path | None,
    absolute_file_path: str | Path | None,
    zero_based_line: int | None,
) -> NoteKey:
    """Validate editor coordinates and convert them to a note key."""
    if workspace_root is None:
        raise NoWorkspace()
    if not Path(workspace_root).is_dir():
        raise NoWorkspace(workspace_root)
    if absolute_file_path is None or zero_based_line is None:
        raise NoActiveTarget()
    if zero_based_line < 0:
        raise NoActiveTarget(f"Invalid line: {zero_based_line + 1}")

    root = os.path.abspath(workspace_root)
    target = os.path.abspath(absolute_file_path)
    rel = os.path.relpath(target, root)
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        raise NoActiveTarget(f"{absolute_file_path} is not inside the workspace {workspace_root}")
    return NoteKey(rel, zero_based_line + 1)


def store_for(workspace_root: str | Path, notes_file: str = NOTES_FILE) -> NoteStore:
    return NoteStore(Path(workspace_root) / notes_file)


def create_note(
    workspace_root: str | Path,
    absolute_file_path: str | Path,
    zero_based_line: int,
    text: str,
    date: str | None = None,
    notes_file: str = NOTES_FILE,
) -> Note:
    key = resolve_key(workspace_root, absolute_file_path, zero_based_line)
    return store_for(workspace_root, notes_file).append(key.path, key.line, text, date or today())


def find_note(
    workspace_root: str | Path,
    absolute_file_path: str | Path,
    zero_based_line: int,
    notes_file: str = NOTES_FILE,
) -> int:
    """Return the 0-based line index of the note's header in the note file."""
    key = resolve_key(workspace_root, absolute_file_path, zero_based_line)
    idx = store_for(workspace_root, notes_file).find(key.path, key.line)
    if idx is None:
        raise NotFound(key.path, key.line)
    return idx


def read_note(
    workspace_root: str | Path,
    absolute_file_path: str | Path,
    zero_based_line: int,
    notes_file: str = NOTES_FILE,
) -> Note:
    key = resolve_key(workspace_root, absolute_file_path, zero_based_line)
    note = store_for(workspace_root, notes_file).read(key.path, key.line)
    if note is None:
        raise NotFound(key.path, key.line)
    return note


def edit_note(
    workspace_root: str | Path,
    absolute_file_path: str | Path,
    zero_based_line: int,
    new_text: str,
    notes_file: str = NOTES_FILE,
) -> None:
    key = resolve_key(workspace_root, absolute_file_path, zero_based_line)
    if not store_for(workspace_root, notes_file).update(key.path, key.line, new_text):
        raise NotFound(key.path, key.line)


def delete_note(
    workspace_root: str | Path,
    absolute_file_path: str | Path,
    zero_based_line: int,
    notes_file: str = NOTES_FILE,
) -> None:
    key = resolve_key(workspace_root, absolute_file_path, zero_based_line)
    if not store_for(workspace_root, notes_file).delete(key.path, key.line):
        raise NotFound(key.path, key.line)
