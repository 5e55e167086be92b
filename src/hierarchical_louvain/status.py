"""
Community Status
================

This module provides ``CommunityStatus``, the incremental bookkeeping
that lets the local optimizer evaluate and apply single-node moves
without recomputing the modularity from scratch.

Aggregates
----------
- node_degree[n]: weighted degree of n (self-loops counted twice)
- total_weight: 2m, twice the total edge weight
- community_degree[c]: sum of node_degree over the members of c
- community_internal_weight[c]: sum of A_uv over ordered pairs u, v in c,
  where a self-loop of weight w contributes A_uu = 2w

With these, the modularity is

    Q = sum_c internal[c] / 2m - resolution * (degree[c] / 2m) ** 2

and moving a node in or out of a community costs O(1).

A status belongs to exactly one coarsening level and is discarded once
that level has converged.
"""

import logging
import math
from typing import Dict, Optional

from .graph import GraphView

logger = logging.getLogger(__name__)

# Marker for a node that has been removed and not yet re-inserted,
# distinct from every integer community id
DETACHED = None


class CommunityStatus:
    """
    Incremental community aggregates for one graph.

    Parameters
    ----------
    graph : GraphView
        Graph being partitioned
    partition : Dict[int, int], optional
        Initial partition. If None, every node starts in its own community.
    resolution : float, optional
        Resolution of the modularity (default: 1.0)

    Raises
    ------
    ValueError
        If the graph has no edge weight, or ``partition`` misses a node
    """

    def __init__(
        self,
        graph: GraphView,
        partition: Optional[Dict[int, int]] = None,
        resolution: float = 1.0,
    ):
        self.graph = graph
        self.resolution = resolution
        self.total_weight = 2.0 * graph.size()
        if self.total_weight <= 0:
            raise ValueError("CommunityStatus requires a graph with positive total weight")

        self.partition: Dict[int, Optional[int]] = {}
        self.node_degree: Dict[int, float] = {}
        self.loops: Dict[int, float] = {}
        self.community_degree: Dict[int, float] = {}
        self.community_internal_weight: Dict[int, float] = {}

        for count, node in enumerate(graph.nodes()):
            if partition is None:
                community = count
            elif partition.get(node) is not None:
                community = partition[node]
            else:
                raise ValueError(f"Initial partition has no community for node {node}")

            degree = graph.degree(node)
            if degree < 0:
                raise ValueError(f"Node {node} has negative degree {degree}")

            self.partition[node] = community
            self.node_degree[node] = degree
            self.loops[node] = 0.0
            internal = 0.0
            for neighbor, weight in graph.neighbors(node):
                if neighbor == node:
                    self.loops[node] = weight
                    internal += 2.0 * weight
                elif partition is not None and partition.get(neighbor) == community:
                    internal += weight

            self.community_degree[community] = (
                self.community_degree.get(community, 0.0) + degree
            )
            self.community_internal_weight[community] = (
                self.community_internal_weight.get(community, 0.0) + internal
            )

        logger.debug(
            f"Initialized status: {len(self.partition)} nodes, "
            f"{len(self.community_degree)} communities, 2m={self.total_weight:g}"
        )

    def neighbor_communities(self, node: int) -> Dict[int, float]:
        """
        Weight from ``node`` to each neighboring community.

        Self-loops are left out, they are accounted for through ``loops``.
        Communities appear in the order their first member is enumerated
        among the neighbors of ``node``.

        Parameters
        ----------
        node : int
            Node whose neighborhood is scanned

        Returns
        -------
        Dict[int, float]
            Mapping community -> total edge weight between node and community
        """
        weights: Dict[int, float] = {}
        for neighbor, weight in self.graph.neighbors(node):
            if neighbor == node:
                continue
            community = self.partition[neighbor]
            weights[community] = weights.get(community, 0.0) + weight
        return weights

    def community_degree_of(self, community: int) -> float:
        """Sum of the degrees of the members of ``community``."""
        return self.community_degree.get(community, 0.0)

    def remove(self, node: int, community: int, weight_to_community: float) -> None:
        """
        Detach ``node`` from ``community``.

        Parameters
        ----------
        node : int
            Node being moved
        community : int
            Current community of the node
        weight_to_community : float
            Edge weight between the node and the other members of ``community``
        """
        self.community_degree[community] = (
            self.community_degree.get(community, 0.0) - self.node_degree[node]
        )
        self.community_internal_weight[community] = (
            self.community_internal_weight.get(community, 0.0)
            - 2.0 * weight_to_community
            - 2.0 * self.loops[node]
        )
        self.partition[node] = DETACHED

    def insert(self, node: int, community: int, weight_to_community: float) -> None:
        """
        Attach ``node`` to ``community``.

        Parameters
        ----------
        node : int
            Node being moved, currently detached
        community : int
            Community receiving the node
        weight_to_community : float
            Edge weight between the node and the members of ``community``
        """
        self.partition[node] = community
        self.community_degree[community] = (
            self.community_degree.get(community, 0.0) + self.node_degree[node]
        )
        self.community_internal_weight[community] = (
            self.community_internal_weight.get(community, 0.0)
            + 2.0 * weight_to_community
            + 2.0 * self.loops[node]
        )

    def modularity(self) -> float:
        """
        Modularity of the current partition.

        Returns
        -------
        float
            Q in [-1/2, 1] for resolution 1
        """
        result = 0.0
        for community, degree in self.community_degree.items():
            internal = self.community_internal_weight.get(community, 0.0)
            result += internal / self.total_weight - self.resolution * (
                degree / self.total_weight
            ) ** 2
        return result

    def current_partition(self) -> Dict[int, int]:
        """Return a copy of the node -> community mapping."""
        return dict(self.partition)

    def check_consistency(self) -> None:
        """
        Verify that the community degrees add up to 2m.

        Detached nodes are excluded from the expected total.

        Raises
        ------
        RuntimeError
            If the aggregates no longer match the graph
        """
        expected = self.total_weight - sum(
            self.node_degree[node]
            for node, community in self.partition.items()
            if community is DETACHED
        )
        observed = sum(self.community_degree.values())
        if not math.isclose(observed, expected, rel_tol=1e-9, abs_tol=1e-9):
            raise RuntimeError(
                f"Community degrees sum to {observed}, expected {expected}"
            )

    def __repr__(self) -> str:
        return (
            f"CommunityStatus(nodes={len(self.partition)}, "
            f"communities={len(self.community_degree)}, "
            f"modularity={self.modularity():.6f})"
        )
