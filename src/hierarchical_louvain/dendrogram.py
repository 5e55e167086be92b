"""
Dendrogram
==========

This module provides ``Dendrogram``, the ordered hierarchy of partitions
produced by the Louvain heuristic.

Level 0 maps the original nodes to their communities. Every level above
partitions the community ids of the level below, so the partition of the
original nodes at level k is obtained by composing levels 0..k.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)


class Dendrogram:
    """
    Ordered sequence of partitions, finest first.

    Parameters
    ----------
    levels : sequence of Dict[int, int]
        Partitions from finest (level 0) to coarsest
    modularities : sequence of float, optional
        Modularity reached at each level

    Raises
    ------
    ValueError
        If ``levels`` is empty or ``modularities`` does not match it

    Examples
    --------
    >>> dendrogram = Dendrogram([{0: 0, 1: 0, 2: 1, 3: 2}, {0: 0, 1: 1, 2: 1}])
    >>> dendrogram.partition_at_level(1)
    {0: 0, 1: 0, 2: 1, 3: 1}
    """

    def __init__(
        self,
        levels: Sequence[Dict[int, int]],
        modularities: Optional[Sequence[float]] = None,
    ):
        if len(levels) == 0:
            raise ValueError("A dendrogram needs at least one level")
        if modularities is not None and len(modularities) != len(levels):
            raise ValueError(
                f"Got {len(modularities)} modularities for {len(levels)} levels"
            )
        self._levels: List[Dict[int, int]] = [dict(level) for level in levels]
        self._modularities: Optional[List[float]] = (
            list(modularities) if modularities is not None else None
        )

    @property
    def levels(self) -> List[Dict[int, int]]:
        """Copies of the raw levels, each keyed by the ids of the level below."""
        return [dict(level) for level in self._levels]

    @property
    def modularities(self) -> Optional[List[float]]:
        if self._modularities is None:
            return None
        return list(self._modularities)

    def partition_at_level(self, level: int) -> Dict[int, int]:
        """
        Partition of the original nodes at the given level.

        Parameters
        ----------
        level : int
            Level between 0 and len(self) - 1, higher is coarser

        Returns
        -------
        Dict[int, int]
            Mapping original node -> community id at ``level``

        Raises
        ------
        IndexError
            If ``level`` is out of range
        """
        if not 0 <= level < len(self._levels):
            raise IndexError(
                f"Level {level} out of range for a dendrogram of {len(self._levels)} levels"
            )

        partition = dict(self._levels[0])
        for index in range(1, level + 1):
            upper = self._levels[index]
            for node, community in partition.items():
                partition[node] = upper[community]
        return partition

    def best_partition(self) -> Dict[int, int]:
        """Partition at the coarsest level."""
        return self.partition_at_level(len(self._levels) - 1)

    def number_of_communities(self, level: int) -> int:
        return len(set(self.partition_at_level(level).values()))

    def iter_partitions(self) -> Iterator[Dict[int, int]]:
        """Yield the partition of the original nodes at every level, finest first."""
        for level in range(len(self._levels)):
            yield self.partition_at_level(level)

    def __len__(self) -> int:
        return len(self._levels)

    def __repr__(self) -> str:
        sizes = [len(set(level.values())) for level in self._levels]
        return f"Dendrogram(levels={len(self._levels)}, communities={sizes})"
