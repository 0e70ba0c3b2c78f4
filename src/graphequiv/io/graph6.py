from __future__ import annotations

from typing import Hashable, Iterable, Iterator, List, Optional

import networkx as nx

from graphequiv.graph.attributed import AttributedGraph


def strip_graph6_header(g6: str) -> str:
    """
    Remove optional '>>graph6<<' header and whitespace.
    """
    s = g6.strip()
    if s.startswith(">>graph6<<"):
        s = s[len(">>graph6<<") :].strip()
    return s


def g6_to_nx(g6: str) -> nx.Graph:
    """
    Parse a graph6 string into a simple undirected NetworkX Graph.
    """
    s = strip_graph6_header(g6)
    G = nx.from_graph6_bytes(s.encode("ascii"))
    # graph6 is simple by design, but guard anyway
    if isinstance(G, (nx.MultiGraph, nx.MultiDiGraph)):
        G = nx.Graph(G)
    return G


def g6_to_adjlist(g6: str) -> List[List[int]]:
    """
    Parse a graph6 string into a 0..n-1 adjacency list.

    Returns:
      adj[u] = sorted list of neighbors of u
    """
    G = g6_to_nx(g6)
    return [sorted(G.neighbors(u)) for u in range(G.number_of_nodes())]


def g6_to_graph(g6: str, attributes: Optional[Iterable[Hashable]] = None) -> AttributedGraph:
    """
    Parse a graph6 string into an AttributedGraph.

    graph6 carries no vertex labels; *attributes* (one per vertex) may be
    supplied, otherwise every vertex gets attribute 0.
    """
    adj = g6_to_adjlist(g6)
    edges = [(u, v) for u, neigh in enumerate(adj) for v in neigh if u < v]
    return AttributedGraph.from_edges(len(adj), edges, attributes)


def graph_to_g6(graph: AttributedGraph) -> str:
    """Encode the structure of *graph* (attributes are dropped) as graph6."""
    G = nx.Graph()
    G.add_nodes_from(graph.vertices())
    G.add_edges_from(graph.edges())
    return nx.to_graph6_bytes(G, header=False).decode("ascii").strip()


def read_graph6_lines(lines: Iterable[str]) -> Iterator[AttributedGraph]:
    """Yield one graph per non-empty, non-comment line of graph6 text."""
    for line in lines:
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        yield g6_to_graph(s)
