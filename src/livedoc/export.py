"""Export the note log as YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from livedoc.notes import Note
from livedoc.store import NoteStore

logger = logging.getLogger(__name__)


def notes_to_yaml(notes: list[Note]) -> str:
    data = [
        {"path": n.path, "line": n.line, "date": n.date, "text": n.text}
        for n in notes
    ]
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def export_notes(store: NoteStore, output: str | Path) -> Path:
    """Write every note in *store* to *output* and return its path."""
    output = Path(output)
    notes = store.notes()
    output.write_text(notes_to_yaml(notes), encoding="utf-8")
    logger.info("Exported %d notes to %s", len(notes), output)
    return output
