"""Immutable attributed graph on dense vertex ids 0..n-1."""
from __future__ import annotations

from bisect import bisect_left
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class GraphSummary:
    """
    Whole-graph aggregate used to reject non-equivalent pairs in O(1).

    Equal summaries are necessary, not sufficient, for equivalence.

    n:                   number of vertices
    m:                   number of edges
    degree_sequence:     non-decreasing vertex degrees
    attribute_histogram: multiset of vertex attributes as (value, count) pairs
    """

    n: int
    m: int
    degree_sequence: Tuple[int, ...]
    attribute_histogram: frozenset


def graph_summary(
    adjacency: Sequence[Sequence[int]],
    attributes: Sequence[Hashable],
) -> GraphSummary:
    """Default summary: counts, degree sequence and attribute histogram."""
    degrees = [len(neigh) for neigh in adjacency]
    return GraphSummary(
        n=len(adjacency),
        m=sum(degrees) // 2,
        degree_sequence=tuple(sorted(degrees)),
        attribute_histogram=frozenset(Counter(attributes).items()),
    )


@dataclass(frozen=True)
class AttributedGraph:
    """
    Simple undirected graph with one hashable attribute per vertex.

    adjacency[v]  sorted tuple of neighbors of v
    attributes[v] opaque attribute of v (equality + hash)
    summary       hashable whole-graph aggregate, GraphSummary by default
    """

    adjacency: Tuple[Tuple[int, ...], ...]
    attributes: Tuple[Hashable, ...]
    summary: Hashable

    def __post_init__(self) -> None:
        if len(self.adjacency) != len(self.attributes):
            raise ValueError(
                f"adjacency has {len(self.adjacency)} vertices but "
                f"{len(self.attributes)} attributes were given"
            )

    @classmethod
    def from_edges(
        cls,
        n: int,
        edges: Iterable[Tuple[int, int]],
        attributes: Optional[Iterable[Hashable]] = None,
        *,
        summary: Optional[Hashable] = None,
    ) -> "AttributedGraph":
        """
        Build a graph on {0..n-1} from an edge list.

        Duplicate edges are merged. Self-loops and out-of-range endpoints
        raise ValueError. Missing attributes default to 0 for every vertex.
        If *summary* is not given, graph_summary() is used.
        """
        if n < 0:
            raise ValueError(f"vertex count must be non-negative, got n={n}")

        attrs: Tuple[Hashable, ...] = (0,) * n if attributes is None else tuple(attributes)
        if len(attrs) != n:
            raise ValueError(f"expected {n} attributes, got {len(attrs)}")

        neigh = [set() for _ in range(n)]
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"edge ({u}, {v}) out of range for n={n}")
            if u == v:
                raise ValueError(f"self-loop at vertex {u} is not supported")
            neigh[u].add(v)
            neigh[v].add(u)

        adjacency = tuple(tuple(sorted(s)) for s in neigh)
        if summary is None:
            summary = graph_summary(adjacency, attrs)
        return cls(adjacency=adjacency, attributes=attrs, summary=summary)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        return len(self.adjacency)

    def number_of_edges(self) -> int:
        return sum(len(neigh) for neigh in self.adjacency) // 2

    def vertices(self) -> range:
        return range(len(self.adjacency))

    def neighbors(self, v: int) -> Tuple[int, ...]:
        return self.adjacency[v]

    def degree(self, v: int) -> int:
        return len(self.adjacency[v])

    def attribute(self, v: int) -> Hashable:
        return self.attributes[v]

    def has_edge(self, u: int, v: int) -> bool:
        """Binary search in the shorter of the two neighbor lists."""
        if len(self.adjacency[u]) > len(self.adjacency[v]):
            u, v = v, u
        neigh = self.adjacency[u]
        i = bisect_left(neigh, v)
        return i < len(neigh) and neigh[i] == v

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield each edge once as (u, v) with u < v."""
        for u, neigh in enumerate(self.adjacency):
            for v in neigh:
                if u < v:
                    yield (u, v)

    # ------------------------------------------------------------------
    # Derived graphs
    # ------------------------------------------------------------------

    def with_attributes(
        self,
        attributes: Iterable[Hashable],
        *,
        summary: Optional[Hashable] = None,
    ) -> "AttributedGraph":
        """Same structure, new attributes. The summary is recomputed unless given."""
        attrs = tuple(attributes)
        if len(attrs) != self.n:
            raise ValueError(f"expected {self.n} attributes, got {len(attrs)}")
        if summary is None:
            summary = graph_summary(self.adjacency, attrs)
        return AttributedGraph(adjacency=self.adjacency, attributes=attrs, summary=summary)

    def relabeled(self, perm: Sequence[int]) -> "AttributedGraph":
        """
        Return the isomorphic copy in which vertex v becomes perm[v].

        The summary is carried over unchanged.
        """
        n = self.n
        if sorted(perm) != list(range(n)):
            raise ValueError("perm must be a permutation of 0..n-1")

        attrs: list = [None] * n
        for v in range(n):
            attrs[perm[v]] = self.attributes[v]
        edges = [(perm[u], perm[v]) for u, v in self.edges()]
        return AttributedGraph.from_edges(n, edges, attrs, summary=self.summary)
