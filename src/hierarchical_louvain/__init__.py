"""
Hierarchical Louvain
====================

Multilevel community detection on weighted undirected graphs using the
Louvain heuristic: greedy local node moves followed by recursive graph
coarsening, recorded as a dendrogram of partitions.

Modules
-------
graph
    Read-only weighted graph views and quotient graphs
status
    Incremental community bookkeeping for O(degree) moves
optimizer
    One level of greedy local moves
louvain
    Multilevel driver (generate_dendrogram, best_partition)
dendrogram
    Partition hierarchy queryable at any level
partition
    Renumbering, modularity and format conversions
evaluation
    NMI / ARI comparison against reference partitions
"""

__version__ = "0.1.0"

from .config import LouvainConfig, load_config
from .dendrogram import Dendrogram
from .graph import GraphView, WeightedGraph, as_graph_view, induced_graph
from .louvain import best_partition, generate_dendrogram
from .optimizer import one_level
from .partition import (
    communities_to_partition,
    modularity,
    partition_to_communities,
    renumber,
)
from .status import CommunityStatus
from .evaluation import compute_ari, compute_nmi, evaluate_partition

__all__ = [
    # Facade
    "best_partition",
    "generate_dendrogram",
    "Dendrogram",
    # Engine
    "CommunityStatus",
    "one_level",
    # Graphs
    "GraphView",
    "WeightedGraph",
    "as_graph_view",
    "induced_graph",
    # Partitions
    "renumber",
    "modularity",
    "partition_to_communities",
    "communities_to_partition",
    # Evaluation
    "compute_nmi",
    "compute_ari",
    "evaluate_partition",
    # Configuration
    "LouvainConfig",
    "load_config",
    "__version__",
]
