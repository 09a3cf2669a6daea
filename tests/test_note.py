from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID, uuid4

from zelkova.notes.note import Frontmatter, Note


def _note(tags):
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return Note(
        frontmatter=Frontmatter(
            id=UUID("00000000-0000-0000-0000-000000000001"),
            title="Test",
            tags=tags,
            created=now,
            updated=now,
        ),
        content="body",
        path=Path("/tmp/test.md"),
    )


def test_note_accessors():
    note_id = uuid4()
    now = datetime.now(timezone.utc)
    tags = {"rust", "note"}
    note = Note(
        frontmatter=Frontmatter(id=note_id, title="Test", tags=set(tags), created=now, updated=now),
        content="body",
        path=Path("/tmp/test.md"),
    )
    assert note.id == note_id
    assert note.title == "Test"
    assert note.tags == tags
    assert note.created == now
    assert note.updated == now


def test_tags_default_to_empty_set():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fm = Frontmatter(id=uuid4(), title="", created=now, updated=now)
    assert fm.tags == set()


def test_tags_iterable_becomes_set():
    note = _note(["a", "b", "a"])
    assert note.tags == {"a", "b"}


def test_path_string_becomes_path():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fm = Frontmatter(id=uuid4(), title="x", created=now, updated=now)
    note = Note(frontmatter=fm, content="", path="notes/x.md")
    assert note.path == Path("notes/x.md")


def test_equality():
    assert _note({"x"}) == _note({"x"})
    assert _note({"x"}) != _note({"y"})