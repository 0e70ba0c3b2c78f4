"""Undo log for candidate removals made during one attach step."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from graphequiv.search.candidates import CandidateStore


Removal = Tuple["CandidateStore", int, int]


class ChangeLog:
    """
    Append-only record of (store, vertex, candidate) removals.

    One log is created per attach and registered on both candidate stores.
    It is either abandoned (the attach is part of a solution) or undone as
    a whole. undo() replays removals in reverse order and leaves the stores
    exactly as they were before the first recorded removal.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: List[Removal] = []

    def record(self, store: "CandidateStore", vertex: int, candidate: int) -> None:
        self._entries.append((store, vertex, candidate))

    def undo(self) -> int:
        """Restore every logged removal, newest first. Returns the count."""
        entries = self._entries
        count = len(entries)
        for store, vertex, candidate in reversed(entries):
            store.restore(vertex, candidate)
        entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)
