"""Neighborhood descriptors: hash-based WL-1 style refinement of vertex attributes."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from graphequiv.graph.attributed import AttributedGraph

# Mersenne prime keeping descriptors bounded
_MODULUS = (1 << 61) - 1
_MULTIPLIER = 31


def _refine_descriptors(graph: AttributedGraph, descriptors: List[int]) -> List[int]:
    """One round: d'(v) = 31 * d(v) + sum of d(u) over neighbors u."""
    out = []
    for v in graph.vertices():
        total = 0
        for u in graph.neighbors(v):
            total += descriptors[u]
        out.append((_MULTIPLIER * descriptors[v] + total) % _MODULUS)
    return out


def neighborhood_descriptors(
    graph: AttributedGraph,
    depth: int = 3,
    *,
    initial: Optional[List[int]] = None,
) -> Tuple[int, ...]:
    """
    Iterate descriptor refinement *depth* times.

    Parameters
    ----------
    graph : AttributedGraph
    depth : int
        Number of refinement rounds. 0 returns the initial descriptors.
    initial : list[int], optional
        Starting descriptors. Defaults to hash(attribute) + 1 of each vertex.

    Returns
    -------
    tuple[int, ...]
        One descriptor per vertex. Isomorphisms that preserve attributes
        preserve descriptors, so equal descriptors are necessary for two
        vertices to be mapped onto each other.
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if initial is None:
        # offset by one: hash(0) == 0 would otherwise stay 0 in every round
        descriptors = [(hash(graph.attribute(v)) + 1) % _MODULUS for v in graph.vertices()]
    else:
        if len(initial) != graph.n:
            raise ValueError(f"expected {graph.n} initial descriptors, got {len(initial)}")
        descriptors = [d % _MODULUS for d in initial]

    for _ in range(depth):
        descriptors = _refine_descriptors(graph, descriptors)
    return tuple(descriptors)


def refine_graph(graph: AttributedGraph, depth: int = 3) -> AttributedGraph:
    """
    Return the same graph with attributes replaced by (attribute, descriptor).

    The refined graph partitions vertices at least as finely as the
    original, and its recomputed summary includes the descriptor histogram.
    """
    descriptors = neighborhood_descriptors(graph, depth)
    return graph.with_attributes(
        (graph.attribute(v), descriptors[v]) for v in graph.vertices()
    )


def color_classes(descriptors: Tuple[int, ...]) -> List[List[int]]:
    """Group vertices by descriptor, sorted deterministically."""
    groups: Dict[int, List[int]] = {}
    for v, d in enumerate(descriptors):
        groups.setdefault(d, []).append(v)
    cls = list(groups.values())
    cls.sort(key=lambda L: (len(L), L))
    return cls
