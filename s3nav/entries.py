from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

NO_TIMESTAMP = "-"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


def label_for(path: str) -> str:
    """Last segment of ``path``; directories keep their trailing slash."""
    if path.endswith("/"):
        trimmed = path.rstrip("/")
        if not trimmed:
            return path
        return trimmed.rsplit("/", 1)[-1] + "/"
    return path.rsplit("/", 1)[-1]


def format_timestamp(value: Optional[datetime]) -> str:
    if not value:
        return NO_TIMESTAMP
    return value.strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class Entry:
    path: str
    label: str
    kind: EntryKind
    size: Optional[int] = None
    last_modified: str = NO_TIMESTAMP
    is_matched: bool = field(default=True, compare=False)

    def __post_init__(self) -> None:
        if self.kind is EntryKind.DIRECTORY and self.size is not None:
            raise ValueError(f"directory entry {self.path!r} cannot carry a size")
        if self.kind is EntryKind.FILE and (self.size is None or self.size < 0):
            raise ValueError(f"file entry {self.path!r} needs a non-negative size")

    @classmethod
    def directory(cls, path: str) -> Entry:
        return cls(path=path, label=label_for(path), kind=EntryKind.DIRECTORY)

    @classmethod
    def file(
        cls, path: str, size: int, last_modified: Optional[datetime] = None
    ) -> Entry:
        return cls(
            path=path,
            label=label_for(path),
            kind=EntryKind.FILE,
            size=size,
            last_modified=format_timestamp(last_modified),
        )

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY
