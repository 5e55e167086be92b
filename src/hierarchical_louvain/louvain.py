"""
Louvain Community Detection
===========================

This module drives the multilevel Louvain heuristic:

1. Run the local optimizer on the current graph
2. Record the resulting partition (renumbered) as a dendrogram level
3. Collapse every community into a node of a quotient graph
4. Repeat on the quotient graph while the modularity keeps improving

``best_partition`` returns the coarsest level reached, which is the
partition of highest modularity found by the heuristic (not a global
optimum).

References
----------
.. [1] Blondel, V.D. et al. Fast unfolding of communities in large
       networks. J. Stat. Mech 10008, 1-12 (2008).
"""

import logging
from typing import Dict, List, Optional, Union

import networkx as nx
import numpy as np

from .config import LouvainConfig
from .dendrogram import Dendrogram
from .graph import GraphView, as_graph_view
from .optimizer import one_level
from .partition import renumber
from .status import CommunityStatus

logger = logging.getLogger(__name__)


def generate_dendrogram(
    graph: Union[nx.Graph, GraphView],
    partition: Optional[Dict[int, int]] = None,
    config: Optional[LouvainConfig] = None,
) -> Dendrogram:
    """
    Find communities at every level of the Louvain hierarchy.

    Parameters
    ----------
    graph : nx.Graph or GraphView
        Weighted undirected graph with integer node ids
    partition : Dict[int, int], optional
        Starting partition of the first level. If None, every node
        starts in its own community.
    config : LouvainConfig, optional
        Run parameters (default: LouvainConfig())

    Returns
    -------
    Dendrogram
        Levels from finest to coarsest, at least one

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5), (2, 3)])
    >>> dendrogram = generate_dendrogram(G)
    >>> dendrogram.best_partition()
    {0: 0, 1: 0, 2: 0, 3: 1, 4: 1, 5: 1}
    """
    if config is None:
        config = LouvainConfig()
    current_graph = as_graph_view(graph)

    # Without edge weight, the best partition is everyone in its own community
    if current_graph.number_of_edges() == 0 or current_graph.size() == 0:
        identity = {node: i for i, node in enumerate(current_graph.nodes())}
        logger.info(
            f"Graph has no edge weight, returning {len(identity)} singleton communities"
        )
        return Dendrogram([identity], [0.0])

    rng = np.random.default_rng(config.seed) if config.seed is not None else None

    status = CommunityStatus(current_graph, partition, resolution=config.resolution)
    history = one_level(current_graph, status, config, rng)
    new_mod = history[-1]

    graphs: List[GraphView] = [current_graph]
    levels: List[Dict[int, int]] = []
    modularities: List[float] = []

    while True:
        level_partition = renumber(status.current_partition())
        levels.append(level_partition)
        modularities.append(new_mod)
        mod = new_mod
        logger.debug(
            f"Level {len(levels) - 1}: {len(set(level_partition.values()))} communities, "
            f"modularity {mod:.6f}"
        )

        graphs.append(graphs[-1].quotient(level_partition))
        status = CommunityStatus(graphs[-1], resolution=config.resolution)
        history = one_level(graphs[-1], status, config, rng)
        new_mod = history[-1]
        if new_mod - mod < config.min_improvement:
            break

    logger.info(
        f"Louvain finished: {len(levels)} level(s), "
        f"{len(set(levels[-1].values()))} communities, modularity {modularities[-1]:.6f}"
    )
    return Dendrogram(levels, modularities)


def best_partition(
    graph: Union[nx.Graph, GraphView],
    partition: Optional[Dict[int, int]] = None,
    config: Optional[LouvainConfig] = None,
) -> Dict[int, int]:
    """
    Partition the graph nodes using the Louvain heuristic.

    This is the coarsest level of the dendrogram built by
    ``generate_dendrogram``, the partition of highest modularity found.

    Parameters
    ----------
    graph : nx.Graph or GraphView
        Weighted undirected graph with integer node ids
    partition : Dict[int, int], optional
        Starting partition of the first level
    config : LouvainConfig, optional
        Run parameters (default: LouvainConfig())

    Returns
    -------
    Dict[int, int]
        Mapping node -> community, with community ids 0..k-1

    Examples
    --------
    >>> G = nx.Graph([(0, 1)])
    >>> best_partition(G)
    {0: 0, 1: 0}
    """
    return generate_dendrogram(graph, partition, config).best_partition()
