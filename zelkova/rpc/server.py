"""A line-delimited JSON-RPC server on a Unix domain socket."""

from __future__ import annotations

import json
import socket
from collections.abc import Callable
from pathlib import Path

from zelkova.rpc.types import JsonRpcRequest, JsonRpcResponse, from_wire, to_wire

Handler = Callable[[JsonRpcRequest], JsonRpcResponse]


def _encode(response: JsonRpcResponse) -> bytes:
    text = json.dumps(to_wire(response), separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8") + b"\n"


def handle_connection(conn: socket.socket, handler: Handler) -> None:
    """Read one request line from a connection, answer it, and leave the socket open.

    A blank line is ignored without a reply; a malformed request raises ValueError.
    """
    with conn.makefile("rb") as reader:
        line = reader.readline()
    if not line.strip():
        return
    try:
        request = from_wire(JsonRpcRequest, json.loads(line.decode("utf-8")))
    except ValueError as exc:
        raise ValueError("failed to parse JSON-RPC request") from exc
    conn.sendall(_encode(handler(request)))


class RpcServer:
    """Listens on a Unix socket and answers one connection per accept_one call."""

    def __init__(self, listener: socket.socket, socket_path: Path) -> None:
        self._listener = listener
        self._socket_path = socket_path
        self._closed = False

    @classmethod
    def bind(cls, socket_path: Path | str) -> RpcServer:
        """Listen at socket_path, replacing any file already there."""
        path = Path(socket_path)
        if path.exists() or path.is_symlink():
            path.unlink()
        listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            listener.bind(str(path))
            listener.listen()
        except OSError:
            listener.close()
            raise
        return cls(listener, path)

    @property
    def socket_path(self) -> Path:
        return self._socket_path

    def accept_one(self, handler: Handler) -> None:
        """Accept a single connection and answer its request with handler."""
        conn, _ = self._listener.accept()
        with conn:
            handle_connection(conn, handler)

    def close(self) -> None:
        """Stop listening and remove the socket file."""
        if self._closed:
            return
        self._closed = True
        self._listener.close()
        self._socket_path.unlink(missing_ok=True)

    def __enter__(self) -> RpcServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()