from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import networkx as nx

from graphequiv.graph.attributed import AttributedGraph


def from_networkx(
    G: nx.Graph,
    attribute: Optional[str] = None,
    *,
    default: Hashable = 0,
    nodelist: Optional[Sequence[Hashable]] = None,
) -> Tuple[AttributedGraph, List[Hashable]]:
    """
    Convert a simple undirected NetworkX graph to an AttributedGraph.

    Nodes are numbered 0..n-1 in *nodelist* order (default: G's node order).
    The attribute of each vertex is G.nodes[node][attribute], or *default*
    when the key is missing or *attribute* is None.

    Returns:
      (graph, nodes) where nodes[v] is the NetworkX node of vertex v
    """
    if G.is_directed():
        raise ValueError("directed graphs are not supported")
    if isinstance(G, (nx.MultiGraph, nx.MultiDiGraph)):
        G = nx.Graph(G)

    nodes = list(G.nodes()) if nodelist is None else list(nodelist)
    if len(nodes) != G.number_of_nodes() or set(nodes) != set(G.nodes()):
        raise ValueError("nodelist must contain every node of G exactly once")
    index: Dict[Hashable, int] = {node: i for i, node in enumerate(nodes)}

    if attribute is None:
        attrs = [default] * len(nodes)
    else:
        attrs = [G.nodes[node].get(attribute, default) for node in nodes]

    edges = [(index[u], index[v]) for u, v in G.edges()]
    return AttributedGraph.from_edges(len(nodes), edges, attrs), nodes


def to_networkx(graph: AttributedGraph, attribute: str = "attr") -> nx.Graph:
    """Convert to a NetworkX graph on nodes 0..n-1 with attributes under *attribute*."""
    G = nx.Graph()
    for v in graph.vertices():
        G.add_node(v, **{attribute: graph.attribute(v)})
    G.add_edges_from(graph.edges())
    return G
