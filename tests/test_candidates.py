"""Tests for candidate stores, change logs and attach/undo."""
import random

import pytest

from graphequiv.errors import SearchInvariantError
from graphequiv.graph.attributed import AttributedGraph
from graphequiv.search.candidates import CandidateStore, attribute_partition
from graphequiv.search.changelog import ChangeLog
from graphequiv.search.isomorphism import IsomorphismSearch


def _random_graph(rng, n, p, n_attrs):
    edges = [(u, v) for u in range(n) for v in range(u + 1, n) if rng.random() < p]
    attrs = [rng.randrange(n_attrs) for _ in range(n)]
    return AttributedGraph.from_edges(n, edges, attrs)


def _shuffled(rng, g):
    perm = list(range(g.n))
    rng.shuffle(perm)
    return g.relabeled(perm)


# --- initial candidates ---

def test_initial_candidates_are_attribute_buckets():
    a = AttributedGraph.from_edges(3, [(0, 1)], ["C", "O", "C"])
    b = AttributedGraph.from_edges(4, [(2, 3)], ["O", "C", "N", "C"])
    store = CandidateStore(a, b, attribute_partition(b))
    assert store.get(0) == {1, 3}
    assert store.get(1) == {0}
    assert store.get(2) == {1, 3}
    assert len(store) == 3


def test_missing_attribute_gives_empty_set():
    a = AttributedGraph.from_edges(2, [], ["S", "C"])
    b = AttributedGraph.from_edges(2, [], ["C", "C"])
    store = CandidateStore(a, b)
    assert store.get(0) == set()
    assert store.size(1) == 2


# --- logged removal ---

def test_remove_and_undo():
    g = AttributedGraph.from_edges(3, [], [0, 0, 0])
    store = CandidateStore(g, g)
    before = store.snapshot()

    log = ChangeLog()
    store.register(log)
    store.remove(0, 1)
    store.clear(2)
    assert store.get(0) == {0, 2}
    assert store.get(2) == set()
    assert len(log) == 4

    assert log.undo() == 4
    assert len(log) == 0
    assert store.snapshot() == before


def test_remove_absent_candidate_raises():
    g = AttributedGraph.from_edges(2, [], [0, 1])
    store = CandidateStore(g, g)
    store.register(ChangeLog())
    with pytest.raises(SearchInvariantError):
        store.remove(0, 1)


def test_mutation_without_log_raises():
    g = AttributedGraph.from_edges(2, [], [0, 0])
    store = CandidateStore(g, g)
    with pytest.raises(SearchInvariantError):
        store.remove(0, 1)
    with pytest.raises(SearchInvariantError):
        store.clear(0)


def test_restore_present_candidate_raises():
    g = AttributedGraph.from_edges(2, [], [0, 0])
    store = CandidateStore(g, g)
    with pytest.raises(SearchInvariantError):
        store.restore(0, 1)


def test_log_spans_two_stores():
    g = AttributedGraph.from_edges(2, [(0, 1)], [0, 0])
    fwd = CandidateStore(g, g)
    bwd = CandidateStore(g, g)
    before = (fwd.snapshot(), bwd.snapshot())

    log = ChangeLog()
    fwd.register(log)
    bwd.register(log)
    fwd.remove(0, 0)
    bwd.remove(0, 0)
    bwd.clear(1)
    log.undo()
    assert (fwd.snapshot(), bwd.snapshot()) == before


# --- attach / undo ---

def test_attach_prunes_non_neighbors():
    # path 0-1-2 against itself
    g = AttributedGraph.from_edges(3, [(0, 1), (1, 2)], [0, 0, 0])
    search = IsomorphismSearch(g, g)
    assert search.prepare()
    search.frontier.remove(1)
    log, touched = search.attach(1, 1)

    # the middle vertex is fixed; endpoints may only map to endpoints
    assert search.forward.get(1) == set()
    assert search.forward.get(0) == {0, 2}
    assert search.forward.get(2) == {0, 2}
    assert search.backward.get(1) == set()
    assert touched == {0, 2}
    assert search.frontier.priority(0) == 2
    assert len(log) > 0


def test_attach_then_undo_restores_stores_random():
    rng = random.Random(2024)
    for _trial in range(60):
        n = rng.randint(1, 9)
        a = _random_graph(rng, n, rng.choice([0.2, 0.4, 0.7]), rng.randint(1, 3))
        b = _shuffled(rng, a)
        search = IsomorphismSearch(a, b)
        assert search.prepare()

        history = []
        unmapped = set(a.vertices())
        for _step in range(rng.randint(1, n)):
            choices = [v for v in sorted(unmapped) if search.forward.size(v) > 0]
            if not choices:
                break
            v = rng.choice(choices)
            w = rng.choice(sorted(search.forward.get(v)))
            before = (search.forward.snapshot(), search.backward.snapshot())
            search.frontier.remove(v)
            unmapped.discard(v)
            log, _touched = search.attach(v, w)
            history.append((before, log))

        for before, log in reversed(history):
            log.undo()
            assert (search.forward.snapshot(), search.backward.snapshot()) == before


def test_attach_keeps_stores_symmetric():
    rng = random.Random(99)
    for _trial in range(30):
        n = rng.randint(2, 8)
        a = _random_graph(rng, n, 0.5, 2)
        b = _shuffled(rng, a)
        search = IsomorphismSearch(a, b)
        assert search.prepare()
        v = search.frontier.extract_min()
        if search.forward.size(v) == 0:
            continue
        w = min(search.forward.get(v))
        search.attach(v, w)
        for x in a.vertices():
            for y in search.forward.get(x):
                assert x in search.backward.get(y)
        for y in b.vertices():
            for x in search.backward.get(y):
                assert y in search.forward.get(x)
