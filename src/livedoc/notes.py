"""Note records and their Markdown rendering.

Every note is stored in the note file as a 4-line record:

    ### src/a.py:12
    **Note:** check bounds
    **Date:** 2024-05-01
    <blank>

Line breaks inside note text (``\n``, ``\r\n`` or a lone ``\r``) are kept as
``<br>`` so a record never spans more lines than that. A literal ``<br>``
typed by the user is written as ``\<br>``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as Date

HEADER_PREFIX = "### "
NOTE_PREFIX = "**Note:** "
DATE_PREFIX = "**Date:** "
RECORD_LINES = 4

_BREAK = "<br>"
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ESCAPED_BREAK_RE = re.compile(r"(\\*)<br>")
_NOTE_RE = re.compile(r"^\*\*Note:\*\*\s?")
_DATE_RE = re.compile(r"^\*\*Date:\*\*\s*")
_HEADER_RE = re.compile(r"^###\s+(?P<path>.+):(?P<line>\d+)$")


@dataclass(frozen=True)
class NoteKey:
    path: str
    line: int  # 1-based

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"


@dataclass
class Note:
    path: str
    line: int  # 1-based
    text: str
    date: str  # YYYY-MM-DD

    @property
    def key(self) -> NoteKey:
        return NoteKey(self.path, self.line)

    def as_record(self) -> str:
        """Render the note as a 4-line Markdown record (trailing newline included)."""
        return "\n".join([
            header_line(self.path, self.line),
            note_line(self.text),
            f"{DATE_PREFIX}{self.date}",
            "",
        ]) + "\n"


def today() -> str:
    return Date.today().isoformat()


def header_line(path: str, line: int) -> str:
    return f"{HEADER_PREFIX}{path}:{line}"


def _escape_part(part: str, before_break: bool) -> str:
    # A run of n backslashes before a literal <br> becomes 2n+1; before an
    # encoded line break it becomes 2n.
    part = _ESCAPED_BREAK_RE.sub(lambda m: m.group(1) * 2 + "\\" + _BREAK, part)
    if before_break:
        stripped = part.rstrip("\\")
        part = stripped + (part[len(stripped):] * 2)
    return part


def _unescape(m: re.Match) -> str:
    slashes = len(m.group(1))
    if slashes % 2:
        return "\\" * (slashes // 2) + _BREAK
    return "\\" * (slashes // 2) + "\n"


def note_line(text: str) -> str:
    parts = _LINE_BREAK_RE.split(text)
    last = len(parts) - 1
    flat = _BREAK.join(_escape_part(p, i < last) for i, p in enumerate(parts))
    return f"{NOTE_PREFIX}{flat}"


def parse_header(line: str) -> NoteKey | None:
    m = _HEADER_RE.match(line.strip())
    if not m:
        return None
    return NoteKey(m.group("path"), int(m.group("line")))


def parse_note_text(line: str) -> str:
    """Strip the ``**Note:**`` prefix and restore line breaks."""
    return _ESCAPED_BREAK_RE.sub(_unescape, _NOTE_RE.sub("", line, count=1))


def parse_date(line: str) -> str:
    return _DATE_RE.sub("", line, count=1).strip()
