from .attributed import AttributedGraph, GraphSummary, graph_summary

__all__ = [
    "AttributedGraph",
    "GraphSummary",
    "graph_summary",
]
