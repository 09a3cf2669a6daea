"""A client for the vault JSON-RPC service on a Unix domain socket."""

from __future__ import annotations

import itertools
import json
import socket
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TypeVar
from uuid import UUID

from zelkova.rpc.types import (
    METHOD_CREATE_FOLDER,
    METHOD_CREATE_NOTE,
    METHOD_DELETE_FOLDER,
    METHOD_DELETE_NOTE,
    METHOD_GET_NOTE,
    METHOD_LIST_NOTES,
    METHOD_LIST_TREE,
    METHOD_MOVE_FOLDER,
    METHOD_MOVE_NOTE,
    METHOD_NOTE_UPDATED,
    METHOD_RENAME_FOLDER,
    METHOD_RENAME_NOTE,
    METHOD_SEARCH,
    METHOD_TAGS,
    CreateFolderParams,
    CreateFolderResult,
    CreateNoteParams,
    CreateNoteResult,
    DeleteFolderParams,
    DeleteNoteParams,
    GetNoteParams,
    GetNoteResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ListNotesParams,
    ListNotesResult,
    ListTreeResult,
    MoveFolderParams,
    MoveNoteParams,
    NoteUpdatedParams,
    RenameFolderParams,
    RenameNoteParams,
    SearchParams,
    SearchResults,
    TagsResult,
    from_wire,
    to_wire,
)

T = TypeVar("T")

_ids = itertools.count(1)
_ids_lock = threading.Lock()


def next_id() -> int:
    """Return the next request id, unique within this process."""
    with _ids_lock:
        return next(_ids)


class RpcClientError(Exception):
    """Raised when a call cannot be made or the service answers with an error."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class RpcClient:
    """Sends one request per connection to the service at a socket path."""

    def __init__(self, socket_path: Path | str) -> None:
        self.socket_path = Path(socket_path)

    def send_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Send a request and return the decoded response."""
        payload = json.dumps(to_wire(request), separators=(",", ":"), ensure_ascii=False)
        conn = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            conn.connect(str(self.socket_path))
        except OSError as exc:
            conn.close()
            raise RpcClientError(f"failed to connect to socket at {self.socket_path}") from exc
        with conn:
            conn.sendall(payload.encode("utf-8") + b"\n")
            with conn.makefile("rb") as reader:
                line = reader.readline()
        try:
            return from_wire(JsonRpcResponse, json.loads(line.decode("utf-8")))
        except ValueError as exc:
            raise RpcClientError("failed to parse response") from exc

    def _call(self, name: str, method: str, params: Any = None) -> JsonRpcResponse:
        wire_params = to_wire(params) if params is not None else None
        response = self.send_request(JsonRpcRequest.create(next_id(), method, wire_params))
        if response.error is not None:
            error = response.error
            raise RpcClientError(f"{name} error: {error.message} ({error.code})", error.code)
        return response

    def _query(self, name: str, method: str, params: Any, result_type: type[T]) -> T:
        response = self._call(name, method, params)
        if response.result is None:
            raise RpcClientError("no result in response")
        try:
            return from_wire(result_type, response.result)
        except ValueError as exc:
            raise RpcClientError(f"failed to parse {name} result") from exc

    def search(
        self, query: str, tags: Iterable[str] = (), limit: int | None = None
    ) -> SearchResults:
        params = SearchParams(query=query, tags=list(tags), limit=limit)
        return self._query("search", METHOD_SEARCH, params, SearchResults)

    def list_notes(self, tag: str | None = None) -> ListNotesResult:
        return self._query("list_notes", METHOD_LIST_NOTES, ListNotesParams(tag=tag), ListNotesResult)

    def get_note(self, id: UUID) -> GetNoteResult:
        return self._query("get_note", METHOD_GET_NOTE, GetNoteParams(id=id), GetNoteResult)

    def create_note(self, title: str | None = None, tags: Iterable[str] = ()) -> CreateNoteResult:
        params = CreateNoteParams(title=title, tags=list(tags))
        return self._query("create_note", METHOD_CREATE_NOTE, params, CreateNoteResult)

    def tags(self) -> TagsResult:
        return self._query("tags", METHOD_TAGS, None, TagsResult)

    def note_updated(self, path: Path | str) -> None:
        self._call("note_updated", METHOD_NOTE_UPDATED, NoteUpdatedParams(path=Path(path)))

    def create_folder(self, name: str, parent: UUID | None = None) -> CreateFolderResult:
        params = CreateFolderParams(name=name, parent=parent)
        return self._query("create_folder", METHOD_CREATE_FOLDER, params, CreateFolderResult)

    def move_note(self, note_id: UUID, folder_id: UUID | None = None) -> None:
        self._call("move_note", METHOD_MOVE_NOTE, MoveNoteParams(note_id=note_id, folder_id=folder_id))

    def list_tree(self) -> ListTreeResult:
        return self._query("list_tree", METHOD_LIST_TREE, None, ListTreeResult)

    def delete_folder(self, folder_id: UUID, cascade: bool = False) -> None:
        params = DeleteFolderParams(folder_id=folder_id, cascade=cascade)
        self._call("delete_folder", METHOD_DELETE_FOLDER, params)

    def rename_folder(self, folder_id: UUID, new_name: str) -> None:
        params = RenameFolderParams(folder_id=folder_id, new_name=new_name)
        self._call("rename_folder", METHOD_RENAME_FOLDER, params)

    def move_folder(self, folder_id: UUID, new_parent: UUID | None = None) -> None:
        params = MoveFolderParams(folder_id=folder_id, new_parent=new_parent)
        self._call("move_folder", METHOD_MOVE_FOLDER, params)

    def delete_note(self, note_id: UUID) -> None:
        self._call("delete_note", METHOD_DELETE_NOTE, DeleteNoteParams(note_id=note_id))

    def rename_note(self, note_id: UUID, new_title: str) -> None:
        params = RenameNoteParams(note_id=note_id, new_title=new_title)
        self._call("rename_note", METHOD_RENAME_NOTE, params)