"""Fingerprint-bucketed partition of items into equivalence classes."""
from __future__ import annotations

from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")

Relation = Callable[[T, T], bool]
Fingerprint = Callable[[T], int]


def _zero_fingerprint(_item: object) -> int:
    return 0


class EquivalenceClass(Generic[T]):
    """
    Ordered list of pairwise equivalent items.

    The first member is the representative. An empty class is returned by
    Partition.lookup() when no class matches.
    """

    __slots__ = ("_members",)

    def __init__(self, representative: Optional[T] = None, *, _empty: bool = False) -> None:
        self._members: List[T] = [] if _empty else [representative]

    @classmethod
    def empty(cls) -> "EquivalenceClass[T]":
        return cls(_empty=True)

    @property
    def representative(self) -> Optional[T]:
        return self._members[0] if self._members else None

    @property
    def members(self) -> List[T]:
        return self._members

    def add(self, item: T) -> None:
        self._members.append(item)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[T]:
        return iter(self._members)

    def __repr__(self) -> str:
        return f"EquivalenceClass(representative={self.representative!r}, size={len(self)})"


class Partition(Generic[T]):
    """
    Partition items into classes of pairwise equivalent items.

    Two-step approach: every item is first hashed by *fingerprint*. Items
    with different fingerprints are never compared. Within one fingerprint
    bucket, the item is tested against each class representative in
    creation order and joins the first match; otherwise it opens a new
    class in that bucket.

    Requirements on the callables:
      equivalent(x, y)  ==>  fingerprint(x) == fingerprint(y)

    The fingerprint only narrows the scan. With the default fingerprint
    (everything maps to 0) the result is the same, just slower.
    Classes are never merged or split once created.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        equivalent: Optional[Relation] = None,
        fingerprint: Optional[Fingerprint] = None,
    ) -> None:
        self.equivalent: Relation = equivalent if equivalent is not None else _equal
        self.fingerprint: Fingerprint = fingerprint if fingerprint is not None else _zero_fingerprint
        self._classes: List[EquivalenceClass[T]] = []
        self._buckets: Dict[int, List[EquivalenceClass[T]]] = {}

        for item in items:
            self.add(item)

    @property
    def classes(self) -> List[EquivalenceClass[T]]:
        """All classes in creation order."""
        return self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[EquivalenceClass[T]]:
        return iter(self._classes)

    def _scan(self, family: List[EquivalenceClass[T]], item: T) -> Optional[EquivalenceClass[T]]:
        for eqclass in family:
            if self.equivalent(eqclass.representative, item):
                return eqclass
        return None

    def add(self, item: T) -> EquivalenceClass[T]:
        """Insert *item* into its class and return that class."""
        f = self.fingerprint(item)
        family = self._buckets.get(f)

        if family is None:
            new_class = EquivalenceClass(item)
            self._buckets[f] = [new_class]
            self._classes.append(new_class)
            return new_class

        match = self._scan(family, item)
        if match is not None:
            match.add(item)
            return match

        new_class = EquivalenceClass(item)
        family.append(new_class)
        self._classes.append(new_class)
        return new_class

    def lookup(self, item: T) -> EquivalenceClass[T]:
        """
        Return the class equivalent to *item*, or an empty class.

        Does not modify the partition.
        """
        family = self._buckets.get(self.fingerprint(item))
        if family is None:
            return EquivalenceClass.empty()
        match = self._scan(family, item)
        return match if match is not None else EquivalenceClass.empty()

    def buckets(self) -> Dict[int, List[EquivalenceClass[T]]]:
        """Fingerprint -> classes sharing that fingerprint."""
        return self._buckets


def _equal(x: object, y: object) -> bool:
    return x == y
