"""Tests for AttributedGraph and the graph6 / NetworkX adapters."""
import networkx as nx
import pytest

from graphequiv.graph.attributed import AttributedGraph, GraphSummary, graph_summary
from graphequiv.io.graph6 import g6_to_graph, graph_to_g6, read_graph6_lines
from graphequiv.io.nxconvert import from_networkx, to_networkx
from graphequiv.search.isomorphism import compare


# --- construction ---

def test_from_edges_sorted_neighbors_and_dedup():
    g = AttributedGraph.from_edges(4, [(2, 0), (0, 1), (1, 0), (3, 0)])
    assert g.neighbors(0) == (1, 2, 3)
    assert g.number_of_edges() == 3
    assert list(g.edges()) == [(0, 1), (0, 2), (0, 3)]
    assert g.attributes == (0, 0, 0, 0)


def test_has_edge():
    g = AttributedGraph.from_edges(5, [(0, 1), (0, 2), (0, 3), (3, 4)])
    assert g.has_edge(0, 3)
    assert g.has_edge(3, 0)
    assert g.has_edge(4, 3)
    assert not g.has_edge(1, 2)
    assert not g.has_edge(4, 0)


def test_invalid_input_raises():
    with pytest.raises(ValueError):
        AttributedGraph.from_edges(2, [(0, 2)])
    with pytest.raises(ValueError):
        AttributedGraph.from_edges(2, [(1, 1)])
    with pytest.raises(ValueError):
        AttributedGraph.from_edges(2, [], ["C"])
    with pytest.raises(ValueError):
        AttributedGraph.from_edges(-1, [])


def test_graph_is_immutable():
    g = AttributedGraph.from_edges(2, [(0, 1)])
    with pytest.raises(AttributeError):
        g.attributes = ("x", "y")


# --- summary ---

def test_default_summary():
    g = AttributedGraph.from_edges(3, [(0, 1), (1, 2)], ["C", "O", "C"])
    s = g.summary
    assert isinstance(s, GraphSummary)
    assert s.n == 3
    assert s.m == 2
    assert s.degree_sequence == (1, 1, 2)
    assert s.attribute_histogram == frozenset({("C", 2), ("O", 1)})
    assert hash(s) == hash(graph_summary(g.adjacency, g.attributes))


def test_summary_is_relabeling_invariant():
    g = AttributedGraph.from_edges(4, [(0, 1), (1, 2), (1, 3)], ["N", "C", "O", "O"])
    h = g.relabeled([3, 0, 2, 1])
    assert h.summary == g.summary
    assert h.attribute(0) == "C"
    assert h.has_edge(0, 3) and h.has_edge(0, 2) and h.has_edge(0, 1)


def test_relabeled_rejects_non_permutation():
    g = AttributedGraph.from_edges(3, [])
    with pytest.raises(ValueError):
        g.relabeled([0, 0, 1])


def test_with_attributes_recomputes_summary():
    g = AttributedGraph.from_edges(2, [(0, 1)])
    h = g.with_attributes(["C", "O"])
    assert h.adjacency == g.adjacency
    assert h.summary != g.summary
    kept = g.with_attributes(["C", "O"], summary="custom")
    assert kept.summary == "custom"


# --- networkx ---

def test_networkx_round_trip():
    G = nx.Graph()
    G.add_node("a", element="C")
    G.add_node("b", element="O")
    G.add_node("c")
    G.add_edges_from([("a", "b"), ("b", "c")])
    g, nodes = from_networkx(G, "element", default="H")
    assert nodes == ["a", "b", "c"]
    assert g.attributes == ("C", "O", "H")
    assert g.has_edge(0, 1) and g.has_edge(1, 2)

    H = to_networkx(g, attribute="element")
    assert H.nodes[1]["element"] == "O"
    assert sorted(H.edges()) == [(0, 1), (1, 2)]


def test_from_networkx_nodelist_and_errors():
    G = nx.path_graph(3)
    g, nodes = from_networkx(G, nodelist=[2, 1, 0])
    assert nodes == [2, 1, 0]
    assert g.neighbors(1) == (0, 2)
    with pytest.raises(ValueError):
        from_networkx(G, nodelist=[0, 1])
    with pytest.raises(ValueError):
        from_networkx(nx.DiGraph([(0, 1)]))


# --- graph6 ---

def test_graph6_round_trip():
    g = AttributedGraph.from_edges(5, [(0, 1), (1, 2), (2, 3), (3, 4)])
    s = graph_to_g6(g)
    h = g6_to_graph(s)
    assert h.adjacency == g.adjacency
    assert compare(g, g6_to_graph(">>graph6<<" + s)).equivalent


def test_g6_to_graph_with_attributes():
    s = graph_to_g6(AttributedGraph.from_edges(3, [(0, 1)]))
    g = g6_to_graph(s, ["C", "C", "O"])
    assert g.attributes == ("C", "C", "O")


def test_read_graph6_lines_skips_blank_and_comments():
    s1 = graph_to_g6(AttributedGraph.from_edges(3, [(0, 1), (1, 2)]))
    s2 = graph_to_g6(AttributedGraph.from_edges(3, [(0, 1), (1, 2), (0, 2)]))
    graphs = list(read_graph6_lines(["# header", s1, "", s2 + "\n"]))
    assert [g.number_of_edges() for g in graphs] == [2, 3]
