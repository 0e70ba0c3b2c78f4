"""
Backtracking search for an attribute-preserving isomorphism between two graphs.

The search keeps two candidate stores (A->B and B->A), a priority frontier
of unmapped A-vertices keyed by candidate count, and a partial mapping.
Each trial assignment v->w is propagated into both stores ("attach") under
a fresh ChangeLog; a failed trial is reverted by undoing that log.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from graphequiv.errors import SearchCancelled
from graphequiv.graph.attributed import AttributedGraph
from graphequiv.search.candidates import CandidateStore, attribute_partition
from graphequiv.search.changelog import ChangeLog
from graphequiv.search.frontier import PriorityFrontier
from graphequiv.wl.refinement import refine_graph


GRAPHEQUIV_REFINE_DEPTH = int(os.environ.get("GRAPHEQUIV_REFINE_DEPTH", "0"))


@dataclass
class SearchStats:
    """Counters collected during one comparison."""

    steps: int = 0
    attaches: int = 0
    backtracks: int = 0
    removals: int = 0


@dataclass(frozen=True)
class ComparisonResult:
    """
    Outcome of compare().

    equivalent: whether an attribute-preserving isomorphism exists
    mapping:    mapping[v] is the image in B of vertex v of A, or None
    reason:     "equivalent" | "summary" | "candidates" | "search"
    stats:      search counters (not part of equality)
    """

    equivalent: bool
    mapping: Optional[Tuple[int, ...]]
    reason: str
    stats: SearchStats = field(default_factory=SearchStats, compare=False)

    def __bool__(self) -> bool:
        return self.equivalent

    def as_dict(self) -> Dict[int, int]:
        if self.mapping is None:
            return {}
        return dict(enumerate(self.mapping))

    def inverse(self) -> Optional[Tuple[int, ...]]:
        """The mapping from B back to A, or None."""
        if self.mapping is None:
            return None
        inv = [0] * len(self.mapping)
        for v, w in enumerate(self.mapping):
            inv[w] = v
        return tuple(inv)


@dataclass
class _Frame:
    vertex: int
    candidates: List[int]
    index: int = 0
    log: Optional[ChangeLog] = None
    touched: Set[int] = field(default_factory=set)


class IsomorphismSearch:
    """
    One comparison of graph_a against graph_b.

    Instances own all mutable search state and are not shared between
    comparisons. Call run() once; repeated calls return the cached result.
    """

    def __init__(
        self,
        graph_a: AttributedGraph,
        graph_b: AttributedGraph,
        *,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.graph_a = graph_a
        self.graph_b = graph_b
        self.should_cancel = should_cancel
        self.stats = SearchStats()
        self.mapping: Dict[int, int] = {}

        self.forward: Optional[CandidateStore] = None
        self.backward: Optional[CandidateStore] = None
        self.frontier: Optional[PriorityFrontier] = None
        self._result: Optional[ComparisonResult] = None

    def run(self) -> ComparisonResult:
        if self._result is None:
            self._result = self._run()
        return self._result

    def _fail(self, reason: str) -> ComparisonResult:
        return ComparisonResult(equivalent=False, mapping=None, reason=reason, stats=self.stats)

    def prepare(self) -> bool:
        """
        Build both candidate stores and seed the frontier.

        Returns False, without allocating any search state, if the graphs
        are rejected by their summaries.
        """
        a, b = self.graph_a, self.graph_b

        # Summaries include vertex counts by default; the size test covers
        # caller-supplied summaries that do not.
        if a.n != b.n or a.summary != b.summary:
            return False

        self.forward = CandidateStore(a, b, attribute_partition(b))
        self.backward = CandidateStore(b, a, attribute_partition(a))

        self.frontier = PriorityFrontier(a.n)
        for v in a.vertices():
            self.frontier.insert(v, self.forward.size(v))
        return True

    def _run(self) -> ComparisonResult:
        if not self.prepare():
            return self._fail("summary")

        if not self._forward_check():
            return self._fail("candidates")

        if not self._search():
            return self._fail("search")

        mapping = tuple(self.mapping[v] for v in self.graph_a.vertices())
        return ComparisonResult(equivalent=True, mapping=mapping, reason="equivalent", stats=self.stats)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _check_cancel(self) -> None:
        if self.should_cancel is not None and self.should_cancel():
            raise SearchCancelled(f"search cancelled after {self.stats.steps} steps")

    def _forward_check(self) -> bool:
        """
        The most constrained unmapped vertex must still have a candidate.

        Priorities always equal candidate-set sizes, so checking the
        frontier minimum detects any empty candidate set.
        """
        frontier = self.frontier
        if frontier.is_empty():
            return True
        return self.forward.size(frontier.peek_min()) > 0

    def _search(self) -> bool:
        """Depth-first search on an explicit stack of frames, one per mapped vertex."""
        frontier = self.frontier
        stack: List[_Frame] = []
        descend = True

        while True:
            if descend:
                self._check_cancel()
                self.stats.steps += 1
                if frontier.is_empty():
                    return True
                v = frontier.extract_min()
                stack.append(_Frame(vertex=v, candidates=sorted(self.forward.get(v))))

            frame = stack[-1]
            if self._advance(frame):
                descend = True
                continue

            # all candidates of this frame failed
            stack.pop()
            frontier.insert(frame.vertex, len(frame.candidates))
            if not stack:
                return False
            self._retract(stack[-1])
            descend = False

    def _advance(self, frame: _Frame) -> bool:
        """Try the remaining candidates of *frame* until one passes the forward check."""
        v = frame.vertex
        while frame.index < len(frame.candidates):
            w = frame.candidates[frame.index]
            frame.index += 1

            self.mapping[v] = w
            frame.log, frame.touched = self.attach(v, w)
            if self._forward_check():
                return True
            self._retract(frame)
        return False

    def _retract(self, frame: _Frame) -> None:
        """Drop the current assignment of *frame* and undo its propagation."""
        del self.mapping[frame.vertex]
        frame.log.undo()
        frame.log = None
        self.stats.backtracks += 1
        for a in frame.touched:
            self.frontier.change_priority(a, self.forward.size(a))
        frame.touched = set()

    def attach(self, v: int, w: int) -> Tuple[ChangeLog, Set[int]]:
        """
        Assign v (in A) to w (in B) and propagate into both candidate stores.

        Returns the change log of this assignment and the set of A-vertices
        whose candidate sets shrank (their priorities are already updated).
        Requires prepare(); every unmapped vertex other than v must be in
        the frontier.
        """
        ga, gb = self.graph_a, self.graph_b
        fwd, bwd = self.forward, self.backward

        log = ChangeLog()
        fwd.register(log)
        bwd.register(log)
        changed: Set[int] = set()

        # v is taken: no other B-vertex may map back to it
        for cand_b in fwd.get(v):
            bwd.remove(cand_b, v)

        # w is taken: no other A-vertex may map to it
        for cand_a in bwd.get(w):
            fwd.remove(cand_a, w)
            changed.add(cand_a)

        fwd.clear(v)
        bwd.clear(w)

        # neighbors of v must map to neighbors of w
        for u in ga.neighbors(v):
            drop = [x for x in fwd.get(u) if not gb.has_edge(x, w)]
            if drop:
                changed.add(u)
            for x in drop:
                fwd.remove(u, x)
                bwd.remove(x, u)

        # neighbors of w must be images of neighbors of v
        for x in gb.neighbors(w):
            drop = [a for a in bwd.get(x) if not ga.has_edge(a, v)]
            for a in drop:
                fwd.remove(a, x)
                bwd.remove(x, a)
                changed.add(a)

        for a in changed:
            self.frontier.change_priority(a, fwd.size(a))

        self.stats.attaches += 1
        self.stats.removals += len(log)
        return log, changed


def compare(
    graph_a: AttributedGraph,
    graph_b: AttributedGraph,
    *,
    refine_depth: Optional[int] = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> ComparisonResult:
    """
    Test whether graph_a and graph_b are equivalent.

    Parameters
    ----------
    refine_depth : int, optional
        Rounds of neighborhood refinement applied to both graphs after the
        summary check. Defaults to $GRAPHEQUIV_REFINE_DEPTH (0).
    should_cancel : callable, optional
        Polled before every search step; returning True raises
        SearchCancelled.
    """
    if refine_depth is None:
        refine_depth = GRAPHEQUIV_REFINE_DEPTH

    if refine_depth > 0 and graph_a.n == graph_b.n and graph_a.summary == graph_b.summary:
        graph_a = refine_graph(graph_a, refine_depth)
        graph_b = refine_graph(graph_b, refine_depth)

    return IsomorphismSearch(graph_a, graph_b, should_cancel=should_cancel).run()


def verify_mapping(
    graph_a: AttributedGraph,
    graph_b: AttributedGraph,
    mapping: Union[Sequence[int], Mapping[int, int]],
) -> bool:
    """
    Check that *mapping* is an attribute- and edge-preserving bijection A -> B.
    """
    n = graph_a.n
    if graph_b.n != n or len(mapping) != n:
        return False
    if graph_a.number_of_edges() != graph_b.number_of_edges():
        return False

    if isinstance(mapping, Mapping):
        image = [mapping.get(v, -1) for v in range(n)]
    else:
        image = list(mapping)
    if sorted(image) != list(range(n)):
        return False

    for v in range(n):
        if graph_a.attribute(v) != graph_b.attribute(image[v]):
            return False
    for u, v in graph_a.edges():
        if not graph_b.has_edge(image[u], image[v]):
            return False
    return True
