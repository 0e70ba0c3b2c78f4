from .graph6 import g6_to_nx, g6_to_adjlist, g6_to_graph, graph_to_g6, read_graph6_lines
from .nxconvert import from_networkx, to_networkx

__all__ = [
    "g6_to_nx",
    "g6_to_adjlist",
    "g6_to_graph",
    "graph_to_g6",
    "read_graph6_lines",
    "from_networkx",
    "to_networkx",
]
