"""JSON-RPC 2.0 messages and the parameters and results of the vault methods."""

import types
from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from pathlib import Path, PurePath
from typing import Any, Union, get_args, get_origin
from uuid import UUID

JSONRPC_VERSION = "2.0"

METHOD_SEARCH = "search"
METHOD_LIST_NOTES = "list_notes"
METHOD_GET_NOTE = "get_note"
METHOD_CREATE_NOTE = "create_note"
METHOD_CREATE_FOLDER = "create_folder"
METHOD_MOVE_NOTE = "move_note"
METHOD_LIST_TREE = "list_tree"
METHOD_DELETE_FOLDER = "delete_folder"
METHOD_RENAME_FOLDER = "rename_folder"
METHOD_TAGS = "tags"
METHOD_REBUILD_INDEX = "rebuild_index"
METHOD_NOTE_UPDATED = "note_updated"
METHOD_DELETE_NOTE = "delete_note"
METHOD_RENAME_NOTE = "rename_note"
METHOD_MOVE_FOLDER = "move_folder"

_SKIP_NONE = {"skip_none": True}


def _optional() -> Any:
    """A field that defaults to None and is left out of the wire form when None."""
    return field(default=None, metadata=_SKIP_NONE)


# JSON-RPC envelope


@dataclass(kw_only=True)
class JsonRpcError:
    code: int
    message: str
    data: Any = _optional()

    @classmethod
    def not_found(cls, message: str) -> "JsonRpcError":
        return cls(code=-32001, message=message)

    @classmethod
    def internal(cls, message: str) -> "JsonRpcError":
        return cls(code=-32603, message=message)

    @classmethod
    def invalid_params(cls, message: str) -> "JsonRpcError":
        return cls(code=-32602, message=message)


@dataclass(kw_only=True)
class JsonRpcRequest:
    jsonrpc: str
    id: Any = None
    method: str
    params: Any = _optional()

    @classmethod
    def create(cls, id: int, method: str, params: Any = None) -> "JsonRpcRequest":
        """A request expecting a reply, identified by a numeric id."""
        return cls(jsonrpc=JSONRPC_VERSION, id=id, method=method, params=params)

    @classmethod
    def notification(cls, method: str, params: Any = None) -> "JsonRpcRequest":
        """A request without an id."""
        return cls(jsonrpc=JSONRPC_VERSION, id=None, method=method, params=params)


@dataclass(kw_only=True)
class JsonRpcResponse:
    jsonrpc: str
    id: Any = _optional()
    result: Any = _optional()
    error: JsonRpcError | None = _optional()

    @classmethod
    def success(cls, id: Any, result: Any) -> "JsonRpcResponse":
        return cls(jsonrpc=JSONRPC_VERSION, id=id, result=result)

    @classmethod
    def failure(cls, id: Any, error: JsonRpcError) -> "JsonRpcResponse":
        return cls(jsonrpc=JSONRPC_VERSION, id=id, error=error)


# Method parameters and results


@dataclass(kw_only=True)
class SearchParams:
    query: str
    tags: list[str] = field(default_factory=list)
    limit: int | None = _optional()


@dataclass(kw_only=True)
class SearchHit:
    id: UUID
    title: str
    path: Path
    score: float
    snippet: str


@dataclass(kw_only=True)
class SearchResults:
    results: list[SearchHit]


@dataclass(kw_only=True)
class ListNotesParams:
    tag: str | None = _optional()


@dataclass(kw_only=True)
class NoteSummary:
    id: UUID
    title: str
    path: Path
    tags: list[str]


@dataclass(kw_only=True)
class ListNotesResult:
    notes: list[NoteSummary]


@dataclass(kw_only=True)
class GetNoteParams:
    id: UUID


@dataclass(kw_only=True)
class GetNoteResult:
    id: UUID
    title: str
    path: Path
    tags: list[str]
    content: str
    created: str
    updated: str


@dataclass(kw_only=True)
class CreateNoteParams:
    title: str | None = _optional()
    tags: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class CreateNoteResult:
    id: UUID
    title: str
    path: Path


@dataclass(kw_only=True)
class CreateFolderParams:
    name: str
    parent: UUID | None = _optional()


@dataclass(kw_only=True)
class CreateFolderResult:
    id: UUID
    name: str
    parent: UUID | None = None


@dataclass(kw_only=True)
class MoveNoteParams:
    note_id: UUID
    folder_id: UUID | None = _optional()


@dataclass(kw_only=True)
class FolderInfo:
    id: UUID
    name: str
    parent: UUID | None = None


@dataclass(kw_only=True)
class NoteMappingInfo:
    note_id: UUID
    folder_id: UUID


@dataclass(kw_only=True)
class ListTreeResult:
    folders: list[FolderInfo]
    mappings: list[NoteMappingInfo]


@dataclass(kw_only=True)
class TagsResult:
    tags: list[str]


@dataclass(kw_only=True)
class RebuildIndexResult:
    indexed_count: int


@dataclass(kw_only=True)
class NoteUpdatedParams:
    path: Path


@dataclass(kw_only=True)
class DeleteFolderParams:
    folder_id: UUID
    cascade: bool = False


@dataclass(kw_only=True)
class RenameFolderParams:
    folder_id: UUID
    new_name: str


@dataclass(kw_only=True)
class DeleteNoteParams:
    note_id: UUID


@dataclass(kw_only=True)
class RenameNoteParams:
    note_id: UUID
    new_title: str


@dataclass(kw_only=True)
class MoveFolderParams:
    folder_id: UUID
    new_parent: UUID | None = _optional()


# Conversion to and from JSON-compatible values


def to_wire(value: Any) -> Any:
    """Convert a message, or any value inside one, to plain JSON-compatible data."""
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None and f.metadata.get("skip_none"):
                continue
            out[f.name] = to_wire(item)
        return out
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_wire(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_wire(item) for key, item in value.items()}
    if isinstance(value, (UUID, PurePath)):
        return str(value)
    return value


def from_wire(cls: Any, data: Any) -> Any:
    """Build a value of the given type from JSON data; raise ValueError if it does not fit."""
    return _convert(cls, data, getattr(cls, "__name__", str(cls)))


def _decode_dataclass(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{where}: expected an object, got {type(data).__name__}")
    values: dict[str, Any] = {}
    for f in fields(cls):
        if f.name in data:
            values[f.name] = _convert(f.type, data[f.name], f"{where}.{f.name}")
        elif f.default is MISSING and f.default_factory is MISSING:
            raise ValueError(f"{where}: missing field {f.name!r}")
    return cls(**values)


def _convert(tp: Any, value: Any, where: str) -> Any:
    if tp is Any:
        return value

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        args = get_args(tp)
        concrete = [arg for arg in args if arg is not type(None)]
        if value is None:
            if len(concrete) < len(args):
                return None
            raise ValueError(f"{where}: value must not be null")
        if len(concrete) != 1:
            raise ValueError(f"{where}: unsupported union type {tp!r}")
        return _convert(concrete[0], value, where)

    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"{where}: expected a list, got {type(value).__name__}")
        (item_type,) = get_args(tp)
        return [_convert(item_type, item, f"{where}[{n}]") for n, item in enumerate(value)]

    if is_dataclass(tp):
        return _decode_dataclass(tp, value, where)

    if tp is UUID:
        if not isinstance(value, str):
            raise ValueError(f"{where}: expected a UUID string")
        try:
            return UUID(value)
        except ValueError as exc:
            raise ValueError(f"{where}: invalid UUID {value!r}") from exc

    if tp is Path:
        if not isinstance(value, str):
            raise ValueError(f"{where}: expected a path string")
        return Path(value)

    if tp is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{where}: expected a boolean")
        return value

    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{where}: expected an integer")
        return value

    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{where}: expected a number")
        return float(value)

    if tp is str:
        if not isinstance(value, str):
            raise ValueError(f"{where}: expected a string")
        return value

    raise ValueError(f"{where}: unsupported type {tp!r}")