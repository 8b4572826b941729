"""Tests for the in-memory location index."""

from pathlib import Path

from livedoc.index import EditorPosition, LocationIndex
from livedoc.notes import Note, NoteKey


def _pos(name: str, line: int) -> EditorPosition:
    return EditorPosition(Path("/ws") / name, line)


class TestLocationIndex:
    def test_record_and_query(self):
        index = LocationIndex()
        index.record("a.py", 5, _pos("a.py", 4))
        index.record("b.py", 1, _pos("b.py", 0))
        index.record("a.py", 2, _pos("a.py", 1))
        assert list(index.query("a.py")) == [
            (NoteKey("a.py", 5), _pos("a.py", 4)),
            (NoteKey("a.py", 2), _pos("a.py", 1)),
        ]

    def test_query_is_restartable(self):
        index = LocationIndex()
        index.record("a.py", 1, _pos("a.py", 0))
        first = index.query("a.py")
        assert len(list(first)) == 1
        assert list(first) == []
        assert len(list(index.query("a.py"))) == 1

    def test_record_overwrites(self):
        index = LocationIndex()
        index.record("a.py", 1, _pos("a.py", 0))
        index.record("a.py", 1, _pos("moved.py", 0))
        assert len(index) == 1
        assert list(index.query("a.py"))[0][1] == _pos("moved.py", 0)

    def test_forget(self):
        index = LocationIndex()
        index.record("a.py", 1, _pos("a.py", 0))
        index.forget("a.py", 1)
        index.forget("a.py", 1)
        assert NoteKey("a.py", 1) not in index
        assert list(index.query("a.py")) == []

    def test_query_unknown_path(self):
        assert list(LocationIndex().query("nope.py")) == []

    def test_rebuild(self, tmp_path: Path):
        index = LocationIndex()
        index.record("stale.py", 1, _pos("stale.py", 0))
        index.rebuild(
            [
                Note(path="a.py", line=3, text="x", date="2024-05-01"),
                Note(path="b.py", line=1, text="y", date="2024-05-01"),
            ],
            tmp_path,
        )
        assert len(index) == 2
        assert NoteKey("stale.py", 1) not in index
        assert list(index.query("a.py")) == [
            (NoteKey("a.py", 3), EditorPosition(tmp_path / "a.py", 2)),
        ]
