"""
graphequiv: equivalence testing of attributed graphs under attribute- and
edge-preserving bijections, and grouping of graph collections into
isomorphism classes.
"""

from .errors import SearchInvariantError, SearchCancelled
from .graph.attributed import AttributedGraph, GraphSummary, graph_summary
from .io.graph6 import g6_to_nx, g6_to_graph, graph_to_g6, read_graph6_lines
from .io.nxconvert import from_networkx, to_networkx
from .wl.refinement import neighborhood_descriptors, refine_graph

# Search engine
from .search.partition import EquivalenceClass, Partition
from .search.changelog import ChangeLog
from .search.candidates import CandidateStore, attribute_partition
from .search.frontier import PriorityFrontier
from .search.isomorphism import (
    ComparisonResult,
    IsomorphismSearch,
    SearchStats,
    compare,
    verify_mapping,
)
from .search.grouping import GraphPartition, group_by_equivalence
from .viz.draw import draw_mapping

__all__ = [
    # Errors
    "SearchInvariantError",
    "SearchCancelled",
    # Graph
    "AttributedGraph",
    "GraphSummary",
    "graph_summary",
    # IO
    "g6_to_nx",
    "g6_to_graph",
    "graph_to_g6",
    "read_graph6_lines",
    "from_networkx",
    "to_networkx",
    # Refinement
    "neighborhood_descriptors",
    "refine_graph",
    # Search
    "EquivalenceClass",
    "Partition",
    "ChangeLog",
    "CandidateStore",
    "attribute_partition",
    "PriorityFrontier",
    "ComparisonResult",
    "IsomorphismSearch",
    "SearchStats",
    "compare",
    "verify_mapping",
    "GraphPartition",
    "group_by_equivalence",
    # Viz
    "draw_mapping",
]
