# zelkova

Building blocks for a Markdown note-taking application:

- `zelkova.markdown`: a small Markdown parser producing a typed document tree.
  `zelkova.markdown.nodes` holds the node classes (`Heading`, `Paragraph`,
  `CodeBlock`, `ListBlock`, `BlockQuote`, `Table`, `MathBlock`,
  `FootnoteDefinition`, and inline `Bold`, `Italic`, `Code`, `Link`, `Image`,
  `Math` and others), `zelkova.markdown.block` finds block boundaries,
  `zelkova.markdown.inline` parses inline elements, and
  `zelkova.markdown.parser.parse` ties them together.
- `zelkova.notes`: `Note` and `Frontmatter` (`zelkova.notes.note`), a `Vault`
  of Markdown notes with YAML frontmatter (`zelkova.notes.vault`), and a
  `DirectoryStructure` of folders stored in `.zelkova/structure.toml` inside
  the vault (`zelkova.notes.directory`).
- `zelkova.rope`: a rope-backed `Rope` and an editing `Buffer` with undo/redo.
- `zelkova.rpc`: JSON-RPC 2.0 message types and the parameter/result types of
  the vault methods (`zelkova.rpc.types`), a Unix-socket `RpcServer`
  (`zelkova.rpc.server`) and an `RpcClient` (`zelkova.rpc.client`).

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Parsing Markdown

```python
from zelkova.markdown.parser import parse
from zelkova.markdown.nodes import Heading, Paragraph

doc = parse("---\ntitle: Test\n---\n\n# Hello\n\nSome **bold** text.")
print(doc.frontmatter)          # "title: Test"
assert isinstance(doc.blocks[0], Heading)
assert isinstance(doc.blocks[1], Paragraph)
```

The frontmatter is returned as raw text; `split_frontmatter` in the same module
separates it from the body without parsing the rest.

## Working with a vault

```python
from pathlib import Path
from zelkova.notes.vault import Vault
from zelkova.notes.directory import DirectoryStructure

vault = Vault(Path("~/notes").expanduser())
note = vault.create_note("Groceries", {"home"})
print(vault.all_tags())

structure = DirectoryStructure.load(vault.vault_path)
folder = structure.create_folder("Personal")
structure.move_note_to_folder(note.id, folder.id)
structure.save(vault.vault_path)
```

Notes are stored as `<id>.md` files. `Vault.list_notes` skips hidden
directories and logs files it cannot parse; `Vault.rename_note` raises
`NoteNotFoundError` for an unknown id, and `parse_frontmatter` raises
`NoteFormatError` for a malformed header. `DirectoryStructure.delete_folder`
raises `FolderNotFoundError` for an unknown folder; otherwise it returns the
ids of the notes it held, which go back to the root, and moves its sub-folders
up to its parent.

## Editing text

```python
from zelkova.rope import Buffer

buf = Buffer("hello")
buf.insert(5, " world")
buf.undo()
assert buf.text() == "hello"
buf.redo()
assert buf.text() == "hello world"
```

## JSON-RPC over a Unix socket

`RpcServer.bind` listens at a socket path (replacing any file there);
`accept_one` answers one connection with a handler that turns a
`JsonRpcRequest` into a `JsonRpcResponse`. Used as a context manager, the
server closes and removes its socket file on exit.

```python
from zelkova.rpc.server import RpcServer
from zelkova.rpc.types import JsonRpcError, JsonRpcResponse

def handler(request):
    if request.method == "echo":
        return JsonRpcResponse.success(request.id, {"echo": request.params})
    return JsonRpcResponse.failure(
        request.id, JsonRpcError.not_found(f"unknown method: {request.method}")
    )

with RpcServer.bind("/tmp/zelkova.sock") as server:
    server.accept_one(handler)
```

`RpcClient` sends one request per connection and raises `RpcClientError`
when it cannot connect or the service replies with an error:

```python
from zelkova.rpc.client import RpcClient

client = RpcClient("/tmp/zelkova.sock")
for summary in client.list_notes().notes:
    print(summary.title)
```

`to_wire` and `from_wire` in `zelkova.rpc.types` convert the message
dataclasses to and from plain JSON data.

## What the package does not do

- There is no full-text search: `zelkova.search` is an empty namespace, and
  nothing answers the `search` or `rebuild_index` methods.
- There is no note service: `RpcServer` only carries requests to a handler you
  write, and no handler implementing the vault methods that `RpcClient` calls
  is included.
- There is no command-line program and no editor or viewer; the package is a
  library only.