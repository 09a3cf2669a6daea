"""Folder hierarchy of a vault and the placement of notes in it."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from uuid import UUID, uuid4

import tomli_w

_META_DIR = ".zelkova"
_STRUCTURE_FILE = "structure.toml"


class FolderNotFoundError(LookupError):
    """Raised when an operation names a folder that does not exist."""


@dataclass
class Folder:
    """A named folder, optionally nested under a parent folder."""

    id: UUID
    name: str
    parent: UUID | None = None


@dataclass
class NoteMapping:
    """Places one note in one folder."""

    note: UUID
    folder: UUID


@dataclass
class FolderTree:
    """A folder with its sub-folders and the notes it holds."""

    folder: Folder
    children: list[FolderTree] = field(default_factory=list)
    notes: list[UUID] = field(default_factory=list)


def _structure_path(vault_path: Path | str) -> Path:
    return Path(vault_path) / _META_DIR / _STRUCTURE_FILE


def _folder_from_table(table: dict) -> Folder:
    parent = table.get("parent")
    return Folder(
        id=UUID(table["id"]),
        name=str(table["name"]),
        parent=UUID(parent) if parent is not None else None,
    )


def _folder_to_table(folder: Folder) -> dict:
    table = {"id": str(folder.id), "name": folder.name}
    if folder.parent is not None:
        table["parent"] = str(folder.parent)
    return table


@dataclass
class DirectoryStructure:
    """All folders of a vault and the folder each note belongs to."""

    folders: list[Folder] = field(default_factory=list)
    mappings: list[NoteMapping] = field(default_factory=list)

    @classmethod
    def load(cls, vault_path: Path | str) -> DirectoryStructure:
        """Read the structure file of a vault; an absent file gives an empty structure."""
        path = _structure_path(vault_path)
        if not path.exists():
            return cls()
        content = path.read_text(encoding="utf-8")
        try:
            data = tomllib.loads(content)
            folders = [_folder_from_table(t) for t in data.get("folders", [])]
            mappings = [
                NoteMapping(note=UUID(t["note"]), folder=UUID(t["folder"]))
                for t in data.get("mappings", [])
            ]
        except (tomllib.TOMLDecodeError, KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"failed to parse {path}: {exc}") from exc
        return cls(folders=folders, mappings=mappings)

    def save(self, vault_path: Path | str) -> None:
        """Write the structure file of a vault, creating its directory if needed."""
        path = _structure_path(vault_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "folders": [_folder_to_table(f) for f in self.folders],
            "mappings": [{"note": str(m.note), "folder": str(m.folder)} for m in self.mappings],
        }
        path.write_text(tomli_w.dumps(data), encoding="utf-8")

    def create_folder(self, name: str, parent: UUID | None = None) -> Folder:
        """Add a new folder with a fresh id and return it."""
        folder = Folder(id=uuid4(), name=name, parent=parent)
        self.folders.append(folder)
        return Folder(folder.id, folder.name, folder.parent)

    def move_note_to_folder(self, note_id: UUID, folder_id: UUID | None) -> None:
        """Place a note in a folder; None puts it back at the root."""
        self.mappings = [m for m in self.mappings if m.note != note_id]
        if folder_id is not None:
            self.mappings.append(NoteMapping(note=note_id, folder=folder_id))

    def move_folder_to(self, folder_id: UUID, new_parent: UUID | None) -> bool:
        """Re-parent a folder; refuses unknown folders and moves into itself or below."""
        folder = self.get_folder(folder_id)
        if folder is None:
            return False
        if new_parent is not None:
            if new_parent == folder_id or self._is_descendant(folder_id, new_parent):
                return False
        folder.parent = new_parent
        return True

    def _is_descendant(self, ancestor: UUID, candidate: UUID) -> bool:
        current = candidate
        seen: set[UUID] = set()
        while current not in seen:
            seen.add(current)
            folder = self.get_folder(current)
            if folder is None or folder.parent is None:
                return False
            if folder.parent == ancestor:
                return True
            current = folder.parent
        return False

    def get_folder_for_note(self, note_id: UUID) -> UUID | None:
        """Return the folder holding a note, or None when it is at the root."""
        return next((m.folder for m in self.mappings if m.note == note_id), None)

    def get_folder(self, folder_id: UUID) -> Folder | None:
        return next((f for f in self.folders if f.id == folder_id), None)

    def rename_folder(self, folder_id: UUID, new_name: str) -> bool:
        """Rename a folder; False when it does not exist."""
        folder = self.get_folder(folder_id)
        if folder is None:
            return False
        folder.name = new_name
        return True

    def delete_folder(self, folder_id: UUID) -> list[UUID]:
        """Remove a folder, returning the notes it held.

        Its notes go back to the root and its sub-folders move up to its parent.
        """
        folder = self.get_folder(folder_id)
        if folder is None:
            raise FolderNotFoundError("folder not found")

        note_ids = [m.note for m in self.mappings if m.folder == folder_id]
        self.mappings = [m for m in self.mappings if m.folder != folder_id]

        for child in self.folders:
            if child.parent == folder_id:
                child.parent = folder.parent

        self.folders = [f for f in self.folders if f.id != folder_id]
        return note_ids

    def build_tree(self) -> list[FolderTree]:
        """Return the folder hierarchy, one tree per root folder."""
        return [self._build_subtree(f) for f in self.folders if f.parent is None]

    def _build_subtree(self, folder: Folder) -> FolderTree:
        return FolderTree(
            folder=Folder(folder.id, folder.name, folder.parent),
            children=[self._build_subtree(c) for c in self.folders if c.parent == folder.id],
            notes=[m.note for m in self.mappings if m.folder == folder.id],
        )