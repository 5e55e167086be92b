"""
Local Optimizer
===============

This module implements one level of the Louvain heuristic: repeated
sweeps over the nodes of a graph, moving each node to the neighboring
community that increases the modularity the most.

Node moves are applied one at a time, so the visiting order shapes the
result. Scoring the candidate communities of a single node has no side
effects and is done as one vectorised numpy evaluation, followed by a
first-maximal reduction: among equal gains, the candidate generated
first wins. Neighboring communities are generated in enumeration order,
followed by the node's own community as a zero-gain fallback.

References
----------
.. [1] Blondel, V.D. et al. Fast unfolding of communities in large
       networks. J. Stat. Mech 10008, 1-12 (2008).
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import LouvainConfig
from .graph import GraphView
from .status import CommunityStatus

logger = logging.getLogger(__name__)


def score_candidates(
    status: CommunityStatus,
    communities: Sequence[int],
    weights: Sequence[float],
    degc_totw: float,
) -> NDArray[np.float64]:
    """
    Modularity gain of inserting the current node into each candidate.

    Parameters
    ----------
    status : CommunityStatus
        Status with the node already removed
    communities : sequence of int
        Candidate communities
    weights : sequence of float
        Edge weight from the node to each candidate
    degc_totw : float
        Degree of the node divided by 2m

    Returns
    -------
    NDArray[np.float64]
        gain[i] = weights[i] - resolution * degree(communities[i]) * degc_totw
    """
    community_degrees = np.fromiter(
        (status.community_degree_of(c) for c in communities),
        dtype=np.float64,
        count=len(communities),
    )
    return np.asarray(weights, dtype=np.float64) - (
        status.resolution * community_degrees * degc_totw
    )


def select_best(candidates: Sequence[int], gains: NDArray[np.float64]) -> int:
    """
    Return the candidate with the highest gain.

    Ties go to the candidate that comes first in ``candidates``.
    """
    return candidates[int(np.argmax(gains))]


def _move_node(status: CommunityStatus, node: int, degc_totw: float) -> bool:
    """Move ``node`` to its best community, return True if it changed."""
    com_node = status.partition[node]
    neigh_communities = status.neighbor_communities(node)
    status.remove(node, com_node, neigh_communities.get(com_node, 0.0))

    neighbor_ids = list(neigh_communities)
    gains = np.empty(len(neighbor_ids) + 1, dtype=np.float64)
    gains[-1] = 0.0
    if neighbor_ids:
        gains[:-1] = score_candidates(
            status,
            neighbor_ids,
            [neigh_communities[c] for c in neighbor_ids],
            degc_totw,
        )

    best_com = select_best(neighbor_ids + [com_node], gains)
    status.insert(node, best_com, neigh_communities.get(best_com, 0.0))
    return best_com != com_node


def one_level(
    graph: GraphView,
    status: CommunityStatus,
    config: Optional[LouvainConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[float]:
    """
    Compute one level of communities.

    Sweeps over the nodes until no node moves, a sweep improves the
    modularity by less than ``config.min_improvement``, or
    ``config.pass_max`` sweeps have been done.

    Parameters
    ----------
    graph : GraphView
        Graph of this level
    status : CommunityStatus
        Status built on ``graph``, updated in place
    config : LouvainConfig, optional
        Run parameters (default: LouvainConfig())
    rng : np.random.Generator, optional
        If given, every sweep visits the nodes in a random permutation
        drawn from it. If None, the graph's node order is used.

    Returns
    -------
    List[float]
        Modularity before the first sweep followed by the modularity
        after each sweep
    """
    if config is None:
        config = LouvainConfig()

    nodes = graph.nodes()
    degc_totw: Dict[int, float] = {
        node: status.node_degree[node] / status.total_weight for node in nodes
    }

    new_mod = status.modularity()
    history = [new_mod]
    modified = True
    nb_pass_done = 0

    while modified and nb_pass_done != config.pass_max:
        cur_mod = new_mod
        modified = False
        nb_pass_done += 1

        order = nodes if rng is None else [nodes[i] for i in rng.permutation(len(nodes))]
        n_moves = 0
        for node in order:
            if _move_node(status, node, degc_totw[node]):
                modified = True
                n_moves += 1
            if config.check_invariants:
                status.check_consistency()

        if config.check_invariants:
            status.check_consistency()

        new_mod = status.modularity()
        history.append(new_mod)
        logger.debug(
            f"Sweep {nb_pass_done}: {n_moves} moves, modularity {cur_mod:.6f} -> {new_mod:.6f}"
        )
        if new_mod - cur_mod < config.min_improvement:
            break

    return history
