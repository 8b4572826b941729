"""Tests for the Markdown note store."""

from pathlib import Path

import pytest

from livedoc.store import NoteStore

DATE = "2024-05-01"


@pytest.fixture
def store(tmp_path: Path) -> NoteStore:
    return NoteStore(tmp_path / "NOTES.md")


class TestAppend:
    def test_creates_file(self, store: NoteStore):
        store.append("src/a.ts", 5, "check bounds", DATE)
        assert store.notes_path.read_text() == (
            "### src/a.ts:5\n**Note:** check bounds\n**Date:** 2024-05-01\n\n"
        )

    def test_appends_below_existing_records(self, store: NoteStore):
        store.append("src/a.ts", 5, "first", DATE)
        before = store.notes_path.read_text()
        store.append("src/b.ts", 1, "second", DATE)
        after = store.notes_path.read_text()
        assert after.startswith(before)
        assert after[len(before):].startswith("### src/b.ts:1\n")

    def test_keeps_call_order(self, store: NoteStore):
        store.append("z.py", 9, "one", DATE)
        store.append("a.py", 1, "two", DATE)
        store.append("m.py", 4, "three", DATE)
        assert [n.text for n in store.notes()] == ["one", "two", "three"]

    def test_missing_parent_directory_raises(self, tmp_path: Path):
        store = NoteStore(tmp_path / "missing" / "NOTES.md")
        with pytest.raises(OSError):
            store.append("a.py", 1, "x", DATE)


class TestFind:
    def test_missing_file(self, store: NoteStore):
        assert store.find("a.py", 1) is None

    def test_returns_header_index(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        store.append("b.py", 2, "y", DATE)
        assert store.find("a.py", 1) == 0
        assert store.find("b.py", 2) == 4

    def test_idempotent(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        assert store.find("a.py", 1) == store.find("a.py", 1)

    def test_exact_line_match(self, store: NoteStore):
        store.append("a.py", 12, "x", DATE)
        assert store.find("a.py", 1) is None

    def test_duplicate_keys_resolve_to_first(self, store: NoteStore):
        store.append("a.py", 1, "old", DATE)
        store.append("a.py", 1, "new", DATE)
        assert store.find("a.py", 1) == 0
        assert store.read("a.py", 1).text == "old"

    def test_tolerates_crlf_and_whitespace(self, store: NoteStore):
        store.notes_path.write_text("###  a.py:1 \r\n**Note:** x\r\n**Date:** 2024-05-01\r\n\r\n")
        assert store.find("a.py", 1) is None
        store.notes_path.write_text("### a.py:1  \r\n**Note:** x\r\n**Date:** 2024-05-01\r\n\r\n")
        assert store.find("a.py", 1) == 0


class TestUpdate:
    def test_replaces_only_note_line(self, store: NoteStore):
        store.append("a.py", 1, "before", DATE)
        store.append("b.py", 2, "other", DATE)
        lines_before = store.notes_path.read_text().split("\n")
        assert store.update("a.py", 1, "after") is True
        lines_after = store.notes_path.read_text().split("\n")
        assert lines_after[1] == "**Note:** after"
        assert lines_after[0] == lines_before[0]
        assert lines_after[2] == lines_before[2]
        assert lines_after[3:] == lines_before[3:]

    def test_missing_key_leaves_file_untouched(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        before = store.notes_path.read_bytes()
        assert store.update("b.py", 1, "y") is False
        assert store.notes_path.read_bytes() == before

    def test_missing_file(self, store: NoteStore):
        assert store.update("a.py", 1, "y") is False
        assert not store.notes_path.exists()


class TestDelete:
    def test_removes_one_record(self, store: NoteStore):
        for i in range(3):
            store.append(f"f{i}.py", 1, f"note {i}", DATE)
        assert len(store.notes_path.read_text().splitlines()) == 12
        assert store.delete("f1.py", 1) is True
        assert len(store.notes_path.read_text().splitlines()) == 8
        assert store.find("f1.py", 1) is None
        assert [n.path for n in store.notes()] == ["f0.py", "f2.py"]

    def test_delete_first_record(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        store.append("b.py", 1, "y", DATE)
        store.delete("a.py", 1)
        assert store.notes_path.read_text() == "### b.py:1\n**Note:** y\n**Date:** 2024-05-01\n\n"

    def test_missing_key_leaves_file_untouched(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        before = store.notes_path.read_bytes()
        assert store.delete("a.py", 2) is False
        assert store.notes_path.read_bytes() == before


class TestRead:
    def test_read_note(self, store: NoteStore):
        store.append("a.py", 1, "multi\nline", DATE)
        note = store.read("a.py", 1)
        assert note.text == "multi\nline"
        assert note.date == DATE

    def test_read_missing(self, store: NoteStore):
        assert store.read("a.py", 1) is None

    def test_notes_skip_malformed_records(self, store: NoteStore):
        store.notes_path.write_text(
            "# My notes\n\n### a.py:1\nhand edited\n\n"
            "### b.py:2\n**Note:** ok\n**Date:** 2024-05-01\n\n"
        )
        notes = store.notes()
        assert len(notes) == 1
        assert notes[0].path == "b.py"
        assert notes[0].line == 2


class TestLineBreaks:
    def test_lone_carriage_return_round_trip(self, store: NoteStore):
        store.append("a.py", 1, "old\rmac", DATE)
        store.append("b.py", 2, "next", DATE)
        assert len(store.notes_path.read_bytes().split(b"\n")) == 9
        note = store.read("a.py", 1)
        assert note.text == "old\nmac"
        assert note.date == DATE
        assert store.delete("a.py", 1) is True
        assert store.notes_path.read_text() == "### b.py:2\n**Note:** next\n**Date:** 2024-05-01\n\n"

    def test_crlf_in_text_round_trip(self, store: NoteStore):
        store.append("a.py", 1, "one\r\ntwo", DATE)
        assert store.read("a.py", 1).text == "one\ntwo"

    def test_update_with_carriage_return_keeps_record_shape(self, store: NoteStore):
        store.append("a.py", 1, "x", DATE)
        store.append("b.py", 2, "y", DATE)
        store.update("a.py", 1, "first\rsecond")
        assert store.read("a.py", 1).date == DATE
        assert [n.path for n in store.notes()] == ["a.py", "b.py"]

    def test_literal_br_survives_edit_cycle(self, store: NoteStore):
        store.append("a.html", 1, "use <br> here", DATE)
        text = store.read("a.html", 1).text
        assert text == "use <br> here"
        store.update("a.html", 1, text + "\nand more")
        assert store.read("a.html", 1).text == "use <br> here\nand more"
