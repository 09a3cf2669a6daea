"""A tree-based rope for text editing and an undoable text buffer."""

from __future__ import annotations

from dataclasses import dataclass, field

CHUNK_SIZE = 512


def _lines(text: str) -> list[str]:
    """Split into lines on '\\n', ignoring a final terminator and trailing '\\r'."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _find_split_point(text: str) -> int:
    """Pick a split index near the middle, preferring just after a newline."""
    size = len(text)
    mid = size // 2
    for offset in range(size // 4):
        if mid + offset < size and text[mid + offset] == "\n":
            return mid + offset + 1
        if mid >= offset and text[mid - offset] == "\n":
            return mid - offset + 1
    return mid


@dataclass(frozen=True)
class _Leaf:
    text: str
    line_count: int

    @classmethod
    def of(cls, text: str) -> _Leaf:
        return cls(text, max(len(_lines(text)), 1))

    @property
    def char_count(self) -> int:
        return len(self.text)

    def insert(self, pos: int, text: str) -> _Node:
        if not text:
            return self
        if pos > len(self.text):
            new_text = self.text + text
        else:
            new_text = self.text[:pos] + text + self.text[pos:]
        if len(new_text) <= CHUNK_SIZE:
            return _Leaf.of(new_text)
        return _build(new_text)

    def delete(self, start: int, end: int) -> _Node:
        if start >= end:
            return self
        size = len(self.text)
        s, e = min(start, size), min(end, size)
        return _Leaf.of(self.text[:s] + self.text[e:])

    def collect_line(self, target: int, current: int) -> tuple[str | None, int]:
        lines = _lines(self.text)
        if current <= target < current + len(lines):
            return lines[target - current], current
        return None, current + len(lines)

    def text_parts(self) -> list[str]:
        return [self.text]

    def char_at(self, pos: int) -> str | None:
        return self.text[pos] if 0 <= pos < len(self.text) else None


@dataclass(frozen=True)
class _Internal:
    left: _Node
    right: _Node
    char_count: int
    line_count: int

    @classmethod
    def merge(cls, left: _Node, right: _Node) -> _Internal:
        return cls(
            left,
            right,
            left.char_count + right.char_count,
            left.line_count + right.line_count,
        )

    def insert(self, pos: int, text: str) -> _Node:
        if not text:
            return self
        left_len = self.left.char_count
        if pos <= left_len:
            return _Internal.merge(self.left.insert(pos, text), self.right)
        return _Internal.merge(self.left, self.right.insert(pos - left_len, text))

    def delete(self, start: int, end: int) -> _Node:
        if start >= end:
            return self
        left_len = self.left.char_count
        if end <= left_len:
            return _rebalance(self.left.delete(start, end), self.right)
        if start >= left_len:
            return _rebalance(self.left, self.right.delete(start - left_len, end - left_len))
        return _rebalance(self.left.delete(start, left_len), self.right.delete(0, end - left_len))

    def collect_line(self, target: int, current: int) -> tuple[str | None, int]:
        found, current = self.left.collect_line(target, current)
        if found is not None:
            return found, current
        return self.right.collect_line(target, current)

    def text_parts(self) -> list[str]:
        return self.left.text_parts() + self.right.text_parts()

    def char_at(self, pos: int) -> str | None:
        left_len = self.left.char_count
        if pos < left_len:
            return self.left.char_at(pos)
        return self.right.char_at(pos - left_len)


_Node = _Leaf | _Internal


def _build(text: str) -> _Node:
    if len(text) <= CHUNK_SIZE:
        return _Leaf.of(text)
    mid = _find_split_point(text)
    return _Internal.merge(_build(text[:mid]), _build(text[mid:]))


def _rebalance(left: _Node, right: _Node) -> _Node:
    if left.char_count == 0:
        return right
    if right.char_count == 0:
        return left
    return _Internal.merge(left, right)


def _check_position(pos: int) -> None:
    if pos < 0:
        raise ValueError(f"position must not be negative: {pos}")


class Rope:
    """A text held as a binary tree of chunks of at most CHUNK_SIZE characters."""

    def __init__(self, text: str = "") -> None:
        self._root: _Node = _build(text) if text else _Leaf("", 1)

    def char_count(self) -> int:
        return self._root.char_count

    def line_count(self) -> int:
        return self._root.line_count

    def insert(self, pos: int, text: str) -> None:
        """Insert text at pos; positions past the end append."""
        _check_position(pos)
        self._root = self._root.insert(pos, text)

    def delete(self, start: int, end: int) -> None:
        """Remove the characters in [start, end); out-of-range ends are clamped."""
        _check_position(start)
        _check_position(end)
        self._root = self._root.delete(start, end)

    def line(self, idx: int) -> str:
        """Return line idx (0-based) without its newline, or '' if there is none."""
        if idx < 0:
            return ""
        found, _ = self._root.collect_line(idx, 0)
        return found or ""

    def text(self) -> str:
        return "".join(self._root.text_parts())

    def char_at(self, pos: int) -> str | None:
        if pos < 0:
            return None
        return self._root.char_at(pos)

    def __len__(self) -> int:
        return self.char_count()

    def __str__(self) -> str:
        return self.text()


@dataclass(frozen=True)
class _Edit:
    pos: int
    inserted: str
    deleted: str


@dataclass
class Buffer:
    """A rope with undo and redo of its edits."""

    _rope: Rope = field(init=False)
    _undo: list[_Edit] = field(init=False, default_factory=list)
    _redo: list[_Edit] = field(init=False, default_factory=list)

    def __init__(self, text: str = "") -> None:
        self._rope = Rope(text)
        self._undo = []
        self._redo = []

    def edit(self, start: int, end: int, new_text: str) -> None:
        """Replace [start, end) with new_text, recording the edit for undo."""
        current = self._rope.text()
        if not 0 <= start <= end <= len(current):
            raise IndexError(f"edit range {start}..{end} out of bounds for length {len(current)}")
        deleted = current[start:end]
        self._rope.delete(start, end)
        if new_text:
            self._rope.insert(start, new_text)
        self._undo.append(_Edit(start, new_text, deleted))
        self._redo.clear()

    def insert(self, pos: int, text: str) -> None:
        self.edit(pos, pos, text)

    def delete(self, start: int, end: int) -> None:
        self.edit(start, end, "")

    def undo(self) -> bool:
        """Revert the latest edit; False when there is nothing to undo."""
        if not self._undo:
            return False
        step = self._undo.pop()
        if step.inserted:
            self._rope.delete(step.pos, step.pos + len(step.inserted))
        if step.deleted:
            self._rope.insert(step.pos, step.deleted)
        self._redo.append(step)
        return True

    def redo(self) -> bool:
        """Reapply the latest undone edit; False when there is nothing to redo."""
        if not self._redo:
            return False
        step = self._redo.pop()
        if step.deleted:
            self._rope.delete(step.pos, step.pos + len(step.deleted))
        if step.inserted:
            self._rope.insert(step.pos, step.inserted)
        self._undo.append(step)
        return True

    def text(self) -> str:
        return self._rope.text()

    def line(self, idx: int) -> str:
        return self._rope.line(idx)

    def line_count(self) -> int:
        return self._rope.line_count()

    def char_count(self) -> int:
        return self._rope.char_count()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)