"""
Partition Utilities
===================

This module provides helpers operating on partitions, i.e. mappings
from node id to community id:

- renumber: canonical dense community ids
- modularity: modularity of an arbitrary partition of a graph
- conversions between the dict format and the list-of-sets format
  used by NetworkX
"""

import logging
from typing import Dict, Iterable, List, Set, Union

import networkx as nx

from .graph import GraphView, as_graph_view

logger = logging.getLogger(__name__)

# Type alias for partitions
Partition = Dict[int, int]


def renumber(partition: Partition) -> Partition:
    """
    Renumber the communities of ``partition`` to ``0..k-1``.

    Nodes are scanned in ascending id order and each community receives
    the next free id the first time one of its members is seen. Two nodes
    share a new id exactly when they shared an old one.

    Parameters
    ----------
    partition : Dict[int, int]
        Mapping node -> community with arbitrary community ids

    Returns
    -------
    Dict[int, int]
        Mapping node -> community with dense ids, keyed in ascending node order

    Examples
    --------
    >>> renumber({3: 7, 1: 7, 2: 4})
    {1: 0, 2: 1, 3: 0}
    """
    new_ids: Dict[int, int] = {}
    renumbered: Partition = {}
    for node in sorted(partition):
        old_id = partition[node]
        if old_id not in new_ids:
            new_ids[old_id] = len(new_ids)
        renumbered[node] = new_ids[old_id]
    return renumbered


def modularity(
    partition: Partition,
    graph: Union[nx.Graph, GraphView],
    resolution: float = 1.0,
) -> float:
    """
    Compute the modularity of a partition of a graph.

    Parameters
    ----------
    partition : Dict[int, int]
        Mapping node -> community covering every node of ``graph``
    graph : nx.Graph or GraphView
        Weighted undirected graph (weights read from the 'weight' attribute)
    resolution : float, optional
        Resolution of the modularity (default: 1.0)

    Returns
    -------
    float
        Modularity of the partition

    Raises
    ------
    ValueError
        If the graph has no edge weight or a node has no community

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (2, 3)])
    >>> modularity({0: 0, 1: 0, 2: 1, 3: 1}, G)
    0.5
    """
    view = as_graph_view(graph)
    links = view.size()
    if links == 0:
        raise ValueError("Modularity is undefined for a graph without edge weight")

    internal: Dict[int, float] = {}
    degree: Dict[int, float] = {}
    for node in view.nodes():
        if node not in partition:
            raise ValueError(f"Partition has no community for node {node}")
        community = partition[node]
        degree[community] = degree.get(community, 0.0) + view.degree(node)
        for neighbor, weight in view.neighbors(node):
            if partition.get(neighbor) == community:
                # a self-loop is seen once but counts for both endpoints
                internal[community] = internal.get(community, 0.0) + (
                    2.0 * weight if neighbor == node else weight
                )

    total = 2.0 * links
    return sum(
        internal.get(community, 0.0) / total - resolution * (deg / total) ** 2
        for community, deg in degree.items()
    )


def partition_to_communities(partition: Partition) -> List[Set[int]]:
    """
    Convert ``{node: community}`` into a list of node sets.

    Communities are listed in ascending community id order.

    Examples
    --------
    >>> partition_to_communities({0: 1, 1: 0, 2: 1})
    [{1}, {0, 2}]
    """
    groups: Dict[int, Set[int]] = {}
    for node, community in partition.items():
        groups.setdefault(community, set()).add(node)
    return [groups[community] for community in sorted(groups)]


def communities_to_partition(communities: Iterable[Iterable[int]]) -> Partition:
    """
    Convert a list of node collections into ``{node: community}``.

    Raises
    ------
    ValueError
        If a node appears in more than one community

    Examples
    --------
    >>> communities_to_partition([{0, 1}, {2}])
    {0: 0, 1: 0, 2: 1}
    """
    partition: Partition = {}
    for comm_id, members in enumerate(communities):
        for node in members:
            if node in partition:
                raise ValueError(f"Node {node} belongs to more than one community")
            partition[node] = comm_id
    logger.debug(f"Converted {len(set(partition.values()))} communities to a partition")
    return partition
