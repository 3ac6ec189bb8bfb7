from __future__ import annotations

from typing import Iterable, Optional

from s3nav.entries import Entry
from s3nav.errors import ListingError


class StubProvider:
    def __init__(
        self,
        listings: Optional[dict[str, list[Entry]]] = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.listings = listings or {}
        self.failing = set(failing)
        self.calls: list[tuple[str, str]] = []

    def list(self, bucket: str, prefix: str) -> list[Entry]:
        self.calls.append((bucket, prefix))
        if prefix in self.failing:
            raise ListingError(bucket, prefix, "Access Denied")
        return list(self.listings.get(prefix, []))
