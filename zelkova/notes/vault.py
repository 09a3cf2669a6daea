"""A vault: a directory of Markdown notes with YAML frontmatter."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timezone
from pathlib import Path
from uuid import UUID, uuid4

import yaml

from zelkova.notes.note import Frontmatter, Note

_log = logging.getLogger(__name__)

_DELIMITER = "---"


class NoteFormatError(ValueError):
    """Raised when a note file cannot be read as frontmatter plus body."""


class NoteNotFoundError(LookupError):
    """Raised when no note in the vault has the requested id."""


def _split(content: str) -> tuple[str, str] | None:
    trimmed = content.lstrip()
    if not trimmed.startswith(_DELIMITER):
        return None
    rest = trimmed[len(_DELIMITER) :]
    end = rest.find(_DELIMITER)
    if end == -1:
        return None
    return rest[:end], rest[end + len(_DELIMITER) :].lstrip()


def _timestamp(value: object, name: str) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value)
        except ValueError as exc:
            raise NoteFormatError(f"invalid timestamp for {name}: {value!r}") from exc
    else:
        raise NoteFormatError(f"invalid timestamp for {name}: {value!r}")
    if isinstance(moment, date) and not isinstance(moment, datetime):
        raise NoteFormatError(f"invalid timestamp for {name}: {value!r}")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _frontmatter_from_yaml(text: str) -> Frontmatter:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise NoteFormatError("failed to parse YAML frontmatter") from exc
    if not isinstance(data, dict):
        raise NoteFormatError("YAML frontmatter is not a mapping")

    missing = [key for key in ("id", "title", "created", "updated") if key not in data]
    if missing:
        raise NoteFormatError(f"YAML frontmatter lacks {', '.join(missing)}")

    raw_id = data["id"]
    if not isinstance(raw_id, str):
        raise NoteFormatError(f"invalid note id: {raw_id!r}")
    try:
        note_id = UUID(raw_id)
    except ValueError as exc:
        raise NoteFormatError(f"invalid note id: {raw_id!r}") from exc

    title = data["title"]
    if not isinstance(title, str):
        raise NoteFormatError(f"invalid note title: {title!r}")

    tags = data.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise NoteFormatError(f"invalid note tags: {tags!r}")

    return Frontmatter(
        id=note_id,
        title=title,
        tags=set(tags),
        created=_timestamp(data["created"], "created"),
        updated=_timestamp(data["updated"], "updated"),
    )


def parse_frontmatter(content: str) -> tuple[Frontmatter, str]:
    """Split a note into its frontmatter and body; raise NoteFormatError if malformed."""
    if not content.lstrip().startswith(_DELIMITER):
        raise NoteFormatError("note does not start with YAML frontmatter")
    parts = _split(content)
    if parts is None:
        raise NoteFormatError("unclosed YAML frontmatter")
    yaml_text, body = parts
    return _frontmatter_from_yaml(yaml_text), body


def parse_note_content(raw: str) -> tuple[Frontmatter | None, str]:
    """Like parse_frontmatter, but a missing or broken header gives (None, raw)."""
    parts = _split(raw)
    if parts is None:
        return None, raw
    yaml_text, body = parts
    try:
        return _frontmatter_from_yaml(yaml_text), body
    except NoteFormatError:
        return None, raw


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_note_file(frontmatter: Frontmatter, body: str) -> str:
    """Render a note file: YAML frontmatter between '---' lines, then the body."""
    data = {
        "id": str(frontmatter.id),
        "title": frontmatter.title,
        "tags": sorted(frontmatter.tags),
        "created": _format_time(frontmatter.created),
        "updated": _format_time(frontmatter.updated),
    }
    header = yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return f"---\n{header}---\n{body}"


class Vault:
    """A directory tree of note files."""

    def __init__(self, vault_path: Path | str) -> None:
        self.vault_path = Path(vault_path)
        self.vault_path.mkdir(parents=True, exist_ok=True)

    def list_notes(self) -> list[Note]:
        """Return every readable note, skipping hidden directories and broken files."""
        return list(self._collect(self.vault_path))

    def get_note(self, relative_path: Path | str) -> Note | None:
        """Return the note at a path inside the vault, or None if there is no file."""
        full_path = self.vault_path / relative_path
        if not full_path.exists():
            return None
        return self._parse_note_file(full_path)

    def create_note(self, title: str | None = None, tags: Iterable[str] = ()) -> Note:
        """Create an empty note named after a fresh id and return it."""
        now = datetime.now(timezone.utc)
        frontmatter = Frontmatter(
            id=uuid4(),
            title=title or "",
            tags=set(tags),
            created=now,
            updated=now,
        )
        path = self.vault_path / f"{frontmatter.id}.md"
        path.write_text(format_note_file(frontmatter, ""), encoding="utf-8")
        return Note(frontmatter=frontmatter, content="", path=path)

    def delete_note(self, relative_path: Path | str) -> None:
        """Remove a note file; a missing file is not an error."""
        full_path = self.vault_path / relative_path
        if full_path.exists():
            full_path.unlink()

    def rename_note(self, note_id: UUID, new_title: str) -> None:
        """Change a note's title and update time, rewriting its file."""
        note = next((n for n in self.list_notes() if n.frontmatter.id == note_id), None)
        if note is None:
            raise NoteNotFoundError("note not found")
        note.frontmatter.title = new_title
        note.frontmatter.updated = datetime.now(timezone.utc)
        note.path.write_text(format_note_file(note.frontmatter, note.content), encoding="utf-8")

    def all_tags(self) -> set[str]:
        """Return the union of the tags of all notes."""
        return {tag for note in self.list_notes() for tag in note.frontmatter.tags}

    def _collect(self, directory: Path) -> Iterator[Note]:
        if not directory.exists():
            return
        for path in sorted(directory.iterdir()):
            if path.is_dir():
                if path.name.startswith("."):
                    continue
                yield from self._collect(path)
            elif path.suffix == ".md":
                try:
                    yield self._parse_note_file(path)
                except (NoteFormatError, OSError) as exc:
                    _log.warning("failed to parse %s: %s", path, exc)

    def _parse_note_file(self, path: Path) -> Note:
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise NoteFormatError(f"failed to read {path}") from exc
        frontmatter, body = parse_frontmatter(content)
        return Note(frontmatter=frontmatter, content=body, path=path)