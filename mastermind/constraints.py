"""
constraints.py

Keeps track of the codes that are still possible and filters them as
feedback comes in.
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np

from mastermind.pattern import CARDINALITY, Pattern


class CandidateSet:
    """
    A shrinking subset of the 1296-pattern universe.

    Membership is a boolean mask indexed by pattern index. Patterns are only
    ever removed; there is no way to put one back.
    """

    def __init__(self, mask: np.ndarray) -> None:
        if mask.shape != (CARDINALITY,):
            raise ValueError(f"mask must have shape ({CARDINALITY},), got {mask.shape}")
        self._mask = mask.astype(bool, copy=True)

    @classmethod
    def all(cls) -> "CandidateSet":
        """1. Create the set S of 1296 possible codes, 1111, 1112, .., 6666."""
        return cls(np.ones(CARDINALITY, dtype=bool))

    def contains(self, p: Pattern) -> bool:
        return bool(self._mask[p.index])

    def __contains__(self, p: object) -> bool:
        return isinstance(p, Pattern) and self.contains(p)

    def size(self) -> int:
        return int(np.count_nonzero(self._mask))

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Pattern]:
        return (Pattern(int(i)) for i in np.flatnonzero(self._mask))

    def indices(self) -> np.ndarray:
        """Indices of the live patterns in increasing order."""
        return np.flatnonzero(self._mask)

    def mask(self) -> np.ndarray:
        """Return a copy of the membership mask (to avoid external mutation)."""
        return self._mask.copy()

    def filter_keep(self, predicate: Callable[[Pattern], bool]) -> int:
        """
        Remove every member for which `predicate` is false.

        Returns the number of patterns removed.
        """
        removed = 0
        for p in list(self):
            if not predicate(p):
                self._mask[p.index] = False
                removed += 1
        return removed

    def __repr__(self) -> str:
        return f"CandidateSet(size={self.size()})"
