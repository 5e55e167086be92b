"""
Partition Evaluation
====================

This module provides metrics for comparing detected communities to a
reference partition:

- Normalized Mutual Information (NMI)
- Adjusted Rand Index (ARI)
- Modularity of both partitions
"""

import logging
from typing import Dict, List, Optional, Union

import networkx as nx
from sklearn.metrics import adjusted_rand_score, normalized_mutual_info_score

from .graph import GraphView, as_graph_view
from .partition import modularity

logger = logging.getLogger(__name__)


def _aligned_labels(
    true_communities: Dict[int, int],
    detected_communities: Dict[int, int],
    nodes: Optional[List[int]],
):
    if nodes is None:
        nodes = sorted(set(true_communities) & set(detected_communities))
    true_labels = [true_communities.get(n, -1) for n in nodes]
    detected_labels = [detected_communities.get(n, -1) for n in nodes]
    return true_labels, detected_labels


def compute_nmi(
    true_communities: Dict[int, int],
    detected_communities: Dict[int, int],
    nodes: Optional[List[int]] = None,
) -> float:
    """
    Compute Normalized Mutual Information between two partitions.

    Parameters
    ----------
    true_communities : Dict[int, int]
        Reference community assignments
    detected_communities : Dict[int, int]
        Detected community assignments
    nodes : List[int], optional
        Nodes to consider. If None, uses intersection of both dicts.

    Returns
    -------
    float
        NMI score (0 = no mutual information, 1 = perfect match)

    Examples
    --------
    >>> compute_nmi({0: 0, 1: 0, 2: 1, 3: 1}, {0: 5, 1: 5, 2: 7, 3: 7})
    1.0
    """
    true_labels, detected_labels = _aligned_labels(
        true_communities, detected_communities, nodes
    )
    if len(true_labels) == 0:
        return 0.0
    return float(normalized_mutual_info_score(true_labels, detected_labels))


def compute_ari(
    true_communities: Dict[int, int],
    detected_communities: Dict[int, int],
    nodes: Optional[List[int]] = None,
) -> float:
    """
    Compute Adjusted Rand Index between two partitions.

    Returns
    -------
    float
        ARI score (-1 to 1, with 1 = perfect match, 0 = random)
    """
    true_labels, detected_labels = _aligned_labels(
        true_communities, detected_communities, nodes
    )
    if len(true_labels) == 0:
        return 0.0
    return float(adjusted_rand_score(true_labels, detected_labels))


def evaluate_partition(
    graph: Union[nx.Graph, GraphView],
    true_communities: Dict[int, int],
    detected_communities: Dict[int, int],
) -> Dict[str, float]:
    """
    Compare a detected partition to a reference partition.

    Parameters
    ----------
    graph : nx.Graph or GraphView
        Graph both partitions cover
    true_communities : Dict[int, int]
        Reference partition
    detected_communities : Dict[int, int]
        Detected partition

    Returns
    -------
    Dict[str, float]
        NMI, ARI, modularity of both partitions and community counts
    """
    view = as_graph_view(graph)
    nodes = view.nodes()

    result = {
        "nmi": compute_nmi(true_communities, detected_communities, nodes),
        "ari": compute_ari(true_communities, detected_communities, nodes),
        "n_communities_detected": len(set(detected_communities.values())),
        "n_communities_true": len(set(true_communities.values())),
    }

    if view.size() > 0:
        result["modularity_detected"] = modularity(detected_communities, view)
        result["modularity_true"] = modularity(true_communities, view)
    else:
        logger.warning("Graph has no edge weight, modularity not computed")
        result["modularity_detected"] = float("nan")
        result["modularity_true"] = float("nan")

    return result
