"""Per-vertex candidate sets with logged removal."""
from __future__ import annotations

from typing import Hashable, List, Optional, Set, Tuple

from graphequiv.errors import SearchInvariantError
from graphequiv.graph.attributed import AttributedGraph
from graphequiv.search.changelog import ChangeLog
from graphequiv.search.partition import Partition

AttributedVertex = Tuple[Hashable, int]


def attribute_partition(graph: AttributedGraph) -> Partition[AttributedVertex]:
    """
    Partition the vertices of *graph* by attribute.

    Items are (attribute, vertex) pairs so that vertices of another graph
    can be looked up against the same partition.
    """
    return Partition(
        ((graph.attribute(v), v) for v in graph.vertices()),
        equivalent=lambda x, y: x[0] == y[0],
        fingerprint=lambda x: hash(x[0]),
    )


class CandidateStore:
    """
    For each vertex of *source*, the set of *target* vertices it may still map to.

    Initial candidates are the attribute-equal class of the target's vertex
    partition (empty if there is none). Sets only shrink through remove()
    and clear(), both of which require a registered ChangeLog. The log
    restores them through restore().
    """

    def __init__(
        self,
        source: AttributedGraph,
        target: AttributedGraph,
        target_partition: Optional[Partition[AttributedVertex]] = None,
    ) -> None:
        self.source = source
        self.target = target
        if target_partition is None:
            target_partition = attribute_partition(target)

        self._candidates: List[Set[int]] = []
        for v in source.vertices():
            eqclass = target_partition.lookup((source.attribute(v), v))
            self._candidates.append({w for _attr, w in eqclass})

        self._log: Optional[ChangeLog] = None

    def register(self, log: ChangeLog) -> None:
        """Route subsequent removals into *log*."""
        self._log = log

    def _require_log(self) -> ChangeLog:
        if self._log is None:
            raise SearchInvariantError("candidate store mutated without a registered change log")
        return self._log

    def get(self, vertex: int) -> Set[int]:
        """Current candidate set of *vertex*. Do not hold on to it across removals."""
        return self._candidates[vertex]

    def size(self, vertex: int) -> int:
        return len(self._candidates[vertex])

    def remove(self, vertex: int, candidate: int) -> None:
        log = self._require_log()
        cands = self._candidates[vertex]
        if candidate not in cands:
            raise SearchInvariantError(
                f"candidate {candidate} is not in the candidate set of vertex {vertex}"
            )
        cands.remove(candidate)
        log.record(self, vertex, candidate)

    def clear(self, vertex: int) -> None:
        """Remove every remaining candidate of *vertex*, logging each one."""
        log = self._require_log()
        cands = self._candidates[vertex]
        for candidate in sorted(cands):
            log.record(self, vertex, candidate)
        cands.clear()

    def restore(self, vertex: int, candidate: int) -> None:
        """Re-insert a previously removed candidate (undo path)."""
        cands = self._candidates[vertex]
        if candidate in cands:
            raise SearchInvariantError(
                f"candidate {candidate} restored twice for vertex {vertex}"
            )
        cands.add(candidate)

    def snapshot(self) -> Tuple[frozenset, ...]:
        """Frozen copy of all candidate sets."""
        return tuple(frozenset(c) for c in self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __repr__(self) -> str:
        lines = []
        for v, cands in enumerate(self._candidates):
            if cands:
                lines.append(f"{v}: " + " ".join(str(w) for w in sorted(cands)))
        return "\n".join(lines)
