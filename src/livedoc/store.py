"""Note Store: CRUD over the Markdown note file.

The file is the only durable state. Lookups are a linear scan for the
first ``### {path}:{line}`` header; there is no index file and no locking.
Update and delete are read-modify-write, append never touches existing
content. ``OSError`` from the filesystem is propagated unchanged.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from livedoc.notes import (
    DATE_PREFIX,
    NOTE_PREFIX,
    RECORD_LINES,
    Note,
    header_line,
    note_line,
    parse_date,
    parse_header,
    parse_note_text,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


class NoteStore:
    """File-backed log of notes keyed by ``(path, line)``."""

    def __init__(self, notes_path: str | Path) -> None:
        self.notes_path = Path(notes_path)

    def _read_lines(self) -> list[str]:
        with self.notes_path.open("r", encoding="utf-8", newline="") as fh:
            text = fh.read()
        return _LINE_SPLIT.split(text)

    def _write_lines(self, lines: list[str]) -> None:
        with self.notes_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write("\n".join(lines))

    def _scan(self, lines: list[str], path: str, line: int) -> int | None:
        header = header_line(path, line)
        for idx, current in enumerate(lines):
            if current.strip() == header:
                return idx
        return None

    def append(self, path: str, line: int, text: str, date: str) -> Note:
        """Append a record to the end of the file, creating the file if needed."""
        note = Note(path=path, line=line, text=text, date=date)
        with self.notes_path.open("a", encoding="utf-8", newline="") as fh:
            fh.write(note.as_record())
        logger.info("Note appended: %s:%s", path, line)
        return note

    def find(self, path: str, line: int) -> int | None:
        """Return the 0-based index of the first matching header line, or None."""
        if not self.notes_path.exists():
            return None
        idx = self._scan(self._read_lines(), path, line)
        logger.debug("find %s:%s -> %s", path, line, idx)
        return idx

    def read(self, path: str, line: int) -> Note | None:
        """Parse the record at the first matching header."""
        if not self.notes_path.exists():
            return None
        lines = self._read_lines()
        idx = self._scan(lines, path, line)
        if idx is None:
            return None
        text_line = lines[idx + 1] if idx + 1 < len(lines) else ""
        date_line = lines[idx + 2] if idx + 2 < len(lines) else ""
        return Note(
            path=path,
            line=line,
            text=parse_note_text(text_line),
            date=parse_date(date_line),
        )

    def update(self, path: str, line: int, new_text: str) -> bool:
        """Replace the note-text line of a record. Returns False when absent."""
        if not self.notes_path.exists():
            return False
        lines = self._read_lines()
        idx = self._scan(lines, path, line)
        if idx is None:
            return False
        text_idx = idx + 1
        if text_idx < len(lines):
            lines[text_idx] = note_line(new_text)
        else:
            lines.append(note_line(new_text))
        self._write_lines(lines)
        logger.info("Note updated: %s:%s", path, line)
        return True

    def delete(self, path: str, line: int) -> bool:
        """Remove the 4 lines of a record. Returns False when absent."""
        if not self.notes_path.exists():
            return False
        lines = self._read_lines()
        idx = self._scan(lines, path, line)
        if idx is None:
            return False
        del lines[idx:idx + RECORD_LINES]
        self._write_lines(lines)
        logger.info("Note deleted: %s:%s", path, line)
        return True

    def notes(self) -> list[Note]:
        """All well-formed records, in file order."""
        if not self.notes_path.exists():
            return []
        lines = self._read_lines()
        found: list[Note] = []
        for idx, current in enumerate(lines):
            key = parse_header(current)
            if key is None:
                continue
            rest = lines[idx + 1:idx + 3]
            if len(rest) < 2 or not rest[0].startswith(NOTE_PREFIX.rstrip()):
                logger.warning("Skipping malformed record at line %d of %s", idx + 1, self.notes_path)
                continue
            if not rest[1].startswith(DATE_PREFIX.rstrip()):
                logger.warning("Skipping malformed record at line %d of %s", idx + 1, self.notes_path)
                continue
            found.append(Note(
                path=key.path,
                line=key.line,
                text=parse_note_text(rest[0]),
                date=parse_date(rest[1]),
            ))
        return found
