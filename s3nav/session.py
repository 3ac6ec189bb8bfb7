from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Protocol, Sequence

from .entries import NO_TIMESTAMP, Entry

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    REGULAR = "regular"
    FILTER = "filter"
    SORT = "sort"


class SortKey(str, Enum):
    PATH = "path"
    LAST_MODIFIED = "last_modified"


@dataclass(frozen=True)
class SortConfig:
    key: Optional[SortKey] = None
    ascending: bool = True


class ListingProvider(Protocol):
    def list(self, bucket: str, prefix: str) -> Sequence[Entry]:
        ...


def parent_path(path: str) -> str:
    """Syntactic parent of a "/"-delimited prefix.

    ``"a/b/"`` and ``"a/b"`` both give ``"a/"``; a single segment gives the
    root, which is the empty string.
    """
    trimmed = path.rstrip("/")
    if "/" not in trimmed:
        return ""
    head = trimmed.rsplit("/", 1)[0].rstrip("/")
    if not head:
        return ""
    return f"{head}/"


def _path_key(entry: Entry) -> str:
    return entry.path


def _last_modified_key(entry: Entry) -> tuple[bool, str, str]:
    # Entries without a timestamp sort first; path breaks ties.
    return (entry.last_modified != NO_TIMESTAMP, entry.last_modified, entry.path)


SORT_KEYS = {
    SortKey.PATH: _path_key,
    SortKey.LAST_MODIFIED: _last_modified_key,
}


class Session:
    """Navigation state for one bucket.

    ``prev_path`` is always recomputed from ``current_path`` rather than kept
    on a stack, so going back only ever climbs one level of the key
    hierarchy, even when the current prefix was not reached by descending
    from its parent.

    ``selection`` indexes :meth:`matched`, never ``entries`` directly.
    """

    def __init__(
        self,
        provider: ListingProvider,
        bucket: str,
        root_path: str,
        entries: Sequence[Entry],
    ) -> None:
        self._provider = provider
        self.bucket = bucket
        self.root_path = root_path
        self.current_path = root_path
        self.prev_path = parent_path(root_path)
        self.entries: list[Entry] = list(entries)
        self.selection: Optional[int] = None
        self.sort = SortConfig()
        self.filter_text = ""
        self.mode = Mode.REGULAR

    @classmethod
    def open(
        cls, provider: ListingProvider, bucket: str, start_path: str = ""
    ) -> Session:
        start_path = start_path or ""
        entries = provider.list(bucket, start_path)
        logger.info(
            "Opened s3://%s/%s with %d entries", bucket, start_path, len(entries)
        )
        return cls(provider, bucket, start_path, entries)

    # Listing

    def _load(self, path: str, prev_path: str) -> None:
        entries = list(self._provider.list(self.bucket, path))
        logger.debug("Loaded %d entries for s3://%s/%s", len(entries), self.bucket, path)
        self.current_path = path
        self.prev_path = prev_path
        self.entries = entries
        self.clear_selection()

    def descend_into(self, entry: Entry) -> None:
        if not entry.is_directory:
            raise ValueError(f"cannot descend into file {entry.path!r}")
        self._load(entry.path, self.current_path)

    def go_back(self) -> None:
        target = self.prev_path
        self._load(target, parent_path(target))

    def reset(self) -> None:
        self._load(self.root_path, parent_path(self.root_path))

    def refresh(self) -> None:
        entry = self.selected_entry()
        if entry is None or not entry.is_directory:
            return
        self.descend_into(entry)

    # Selection

    def matched(self) -> list[Entry]:
        return [entry for entry in self.entries if entry.is_matched]

    def select_next(self) -> None:
        count = len(self.matched())
        if not count:
            return
        if self.selection is None:
            self.selection = 0
        else:
            self.selection = (self.selection + 1) % count

    def select_previous(self) -> None:
        count = len(self.matched())
        if not count or self.selection is None:
            return
        self.selection = (self.selection - 1) % count

    def clear_selection(self) -> None:
        self.selection = None

    def selected_entry(self) -> Optional[Entry]:
        if self.selection is None:
            return None
        matched = self.matched()
        if self.selection >= len(matched):
            return None
        return matched[self.selection]

    # Sort

    def apply_sort(self, key: SortKey) -> None:
        if self.sort.key == key:
            ascending = not self.sort.ascending
        else:
            ascending = True
        self.sort = SortConfig(key=key, ascending=ascending)
        ordered = sorted(self.entries, key=SORT_KEYS[key])
        if not ascending:
            ordered.reverse()
        self.entries = ordered

    # Filter

    def set_filter_text(self, text: str) -> None:
        self.filter_text = text

    def append_filter_char(self, character: str) -> None:
        self.filter_text += character

    def pop_filter_char(self) -> None:
        self.filter_text = self.filter_text[:-1]

    def apply_filter(self) -> None:
        # Leaves ``selection`` alone, so a previous index may now resolve to
        # a different matched entry.
        needle = self.filter_text.lower()
        self.entries = [
            replace(entry, is_matched=needle in entry.label.lower())
            for entry in self.entries
        ]

    # Mode

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode

    # URIs

    def uri_for(self, entry: Entry) -> str:
        return f"s3://{self.bucket}/{entry.path}"

    def selected_uri(self) -> Optional[str]:
        entry = self.selected_entry()
        if entry is None:
            return None
        return self.uri_for(entry)
