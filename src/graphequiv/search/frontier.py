"""Indexed binary min-heap over vertex ids."""
from __future__ import annotations

from typing import List

from graphequiv.errors import SearchInvariantError

_ABSENT = -1


class PriorityFrontier:
    """
    Min-heap of vertex ids 0..capacity-1 keyed by an integer priority.

    A position table maps each vertex to its heap slot (or -1), so
    change_priority() and remove() run in O(log n) without a scan.
    Ties between equal priorities are broken arbitrarily.
    """

    __slots__ = ("_heap", "_priority", "_position")

    def __init__(self, capacity: int) -> None:
        self._heap: List[int] = []
        self._priority: List[int] = [0] * capacity
        self._position: List[int] = [_ABSENT] * capacity

    # ------------------------------------------------------------------
    # Heap maintenance
    # ------------------------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        vi, vj = heap[i], heap[j]
        heap[i], heap[j] = vj, vi
        self._position[vi] = j
        self._position[vj] = i

    def _sift_up(self, i: int) -> None:
        heap, prio = self._heap, self._priority
        while i > 0:
            parent = (i - 1) // 2
            if prio[heap[i]] >= prio[heap[parent]]:
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        heap, prio = self._heap, self._priority
        size = len(heap)
        while True:
            child = 2 * i + 1
            if child >= size:
                break
            right = child + 1
            if right < size and prio[heap[right]] < prio[heap[child]]:
                child = right
            if prio[heap[i]] <= prio[heap[child]]:
                break
            self._swap(i, child)
            i = child

    def _slot(self, vertex: int) -> int:
        pos = self._position[vertex]
        if pos == _ABSENT:
            raise SearchInvariantError(f"vertex {vertex} is not in the frontier")
        return pos

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def insert(self, vertex: int, priority: int) -> None:
        if self._position[vertex] != _ABSENT:
            raise SearchInvariantError(f"vertex {vertex} is already in the frontier")
        self._priority[vertex] = priority
        self._position[vertex] = len(self._heap)
        self._heap.append(vertex)
        self._sift_up(len(self._heap) - 1)

    def peek_min(self) -> int:
        if not self._heap:
            raise IndexError("peek_min from an empty frontier")
        return self._heap[0]

    def extract_min(self) -> int:
        heap = self._heap
        if not heap:
            raise IndexError("extract_min from an empty frontier")
        top = heap[0]
        last = heap.pop()
        self._position[top] = _ABSENT
        if heap:
            heap[0] = last
            self._position[last] = 0
            self._sift_down(0)
        return top

    def change_priority(self, vertex: int, priority: int) -> int:
        """Set a new priority for *vertex* and return the old one."""
        pos = self._slot(vertex)
        old = self._priority[vertex]
        self._priority[vertex] = priority
        if priority < old:
            self._sift_up(pos)
        elif priority > old:
            self._sift_down(pos)
        return old

    def remove(self, vertex: int) -> None:
        pos = self._slot(vertex)
        heap = self._heap
        self._position[vertex] = _ABSENT
        last = heap.pop()
        if pos == len(heap):
            return
        heap[pos] = last
        self._position[last] = pos
        if self._priority[last] < self._priority[vertex]:
            self._sift_up(pos)
        else:
            self._sift_down(pos)

    def priority(self, vertex: int) -> int:
        self._slot(vertex)
        return self._priority[vertex]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, vertex: int) -> bool:
        return self._position[vertex] != _ABSENT

    def __repr__(self) -> str:
        entries = ", ".join(f"{v}:{self._priority[v]}" for v in self._heap)
        return f"PriorityFrontier([{entries}])"
