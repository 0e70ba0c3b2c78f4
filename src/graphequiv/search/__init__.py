from .partition import EquivalenceClass, Partition
from .changelog import ChangeLog
from .candidates import CandidateStore, attribute_partition
from .frontier import PriorityFrontier
from .isomorphism import (
    ComparisonResult,
    IsomorphismSearch,
    SearchStats,
    compare,
    verify_mapping,
)
from .grouping import GraphPartition, group_by_equivalence

__all__ = [
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
]
