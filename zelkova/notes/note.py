"""Notes and their frontmatter metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from uuid import UUID


@dataclass(kw_only=True)
class Frontmatter:
    """Metadata stored at the top of a note file."""

    id: UUID
    title: str
    tags: set[str] = field(default_factory=set)
    created: datetime
    updated: datetime

    def __post_init__(self) -> None:
        self.tags = set(self.tags)


@dataclass
class Note:
    """A note: its frontmatter, body text and file path."""

    frontmatter: Frontmatter
    content: str
    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    @property
    def id(self) -> UUID:
        return self.frontmatter.id

    @property
    def title(self) -> str:
        return self.frontmatter.title

    @property
    def tags(self) -> set[str]:
        return self.frontmatter.tags

    @property
    def created(self) -> datetime:
        return self.frontmatter.created

    @property
    def updated(self) -> datetime:
        return self.frontmatter.updated