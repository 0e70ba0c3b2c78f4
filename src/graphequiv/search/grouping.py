from __future__ import annotations

import os
import sys
from multiprocessing import Pool
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from graphequiv.graph.attributed import AttributedGraph
from graphequiv.search.isomorphism import compare
from graphequiv.search.partition import EquivalenceClass, Partition


GRAPHEQUIV_PROCESSES = int(os.environ.get("GRAPHEQUIV_PROCESSES", "1"))


def _summary_fingerprint(graph: AttributedGraph) -> int:
    return hash(graph.summary)


class GraphPartition(Partition[AttributedGraph]):
    """
    Incremental partition of graphs into isomorphism classes.

    Graphs are bucketed by hash(summary); within a bucket, membership is
    decided by compare() against each class representative.
    """

    def __init__(
        self,
        graphs: Iterable[AttributedGraph] = (),
        *,
        refine_depth: Optional[int] = None,
    ) -> None:
        self.refine_depth = refine_depth
        super().__init__(graphs, equivalent=self._equivalent, fingerprint=_summary_fingerprint)

    def _equivalent(self, x: AttributedGraph, y: AttributedGraph) -> bool:
        return compare(x, y, refine_depth=self.refine_depth).equivalent


def _partition_bucket(job: Tuple[List[int], List[AttributedGraph], Optional[int]]) -> List[List[int]]:
    """
    Partition one summary bucket. Returns classes as lists of input indices.
    """
    indices, graphs, refine_depth = job

    def equivalent(i: int, j: int) -> bool:
        return compare(graphs[i], graphs[j], refine_depth=refine_depth).equivalent

    part: Partition[int] = Partition(range(len(graphs)), equivalent=equivalent)
    return [[indices[i] for i in eqclass] for eqclass in part]


def _bucket_by_summary(graphs: Sequence[AttributedGraph]) -> List[List[int]]:
    buckets: Dict[Hashable, List[int]] = {}
    for i, g in enumerate(graphs):
        buckets.setdefault(g.summary, []).append(i)
    return list(buckets.values())


def group_by_equivalence(
    graphs: Iterable[AttributedGraph],
    *,
    processes: Optional[int] = None,
    refine_depth: Optional[int] = None,
    verbose: bool = False,
) -> List[EquivalenceClass[AttributedGraph]]:
    """
    Group graphs into classes of pairwise equivalent graphs.

    Classes are returned in order of their representative's position in
    the input, members in input order. compare() is only called between
    graphs with equal summaries.

    processes > 1 partitions whole summary buckets in a worker pool and
    merges the classes by representative index; the result is identical
    to the sequential one. Defaults to $GRAPHEQUIV_PROCESSES (1).
    """
    graphs = list(graphs)
    if processes is None:
        processes = GRAPHEQUIV_PROCESSES

    if processes <= 1:
        part = GraphPartition(refine_depth=refine_depth)
        for i, g in enumerate(graphs, start=1):
            part.add(g)
            if verbose and i % 1000 == 0:
                print(f"[group] {i}/{len(graphs)} graphs, {len(part)} classes", file=sys.stderr)
        if verbose:
            print(f"[group] {len(graphs)} graphs -> {len(part)} classes", file=sys.stderr)
        return part.classes

    buckets = _bucket_by_summary(graphs)
    if verbose:
        print(f"[group] {len(graphs)} graphs in {len(buckets)} summary buckets", file=sys.stderr)

    index_classes: List[List[int]] = []
    jobs = []
    for idx in buckets:
        if len(idx) == 1:
            index_classes.append(idx)
        else:
            jobs.append((idx, [graphs[i] for i in idx], refine_depth))

    if jobs:
        with Pool(processes=processes) as pool:
            for classes in pool.imap_unordered(_partition_bucket, jobs, chunksize=1):
                index_classes.extend(classes)

    index_classes.sort(key=lambda members: members[0])

    out: List[EquivalenceClass[AttributedGraph]] = []
    for members in index_classes:
        eqclass = EquivalenceClass(graphs[members[0]])
        for i in members[1:]:
            eqclass.add(graphs[i])
        out.append(eqclass)

    if verbose:
        print(f"[group] {len(graphs)} graphs -> {len(out)} classes", file=sys.stderr)
    return out
