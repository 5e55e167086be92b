"""
Graph Views
===========

This module provides the read-only weighted graph consumed by the
community detection engine.

``GraphView`` describes the contract the engine relies on; ``WeightedGraph``
implements it on top of a frozen NetworkX graph. The only operation that
creates new graphs is ``quotient``, which collapses every community of a
partition into a single node.

Conventions
-----------
- Edges are undirected, weights are non-negative (missing weights count as 1).
- A self-loop appears once in ``neighbors`` and counts twice in ``degree``.
- ``size`` is the total edge weight m (not 2m).
"""

import logging
import math
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple, Union

import networkx as nx

logger = logging.getLogger(__name__)

# Attribute under which edge weights are stored in the canonical graph
WEIGHT_KEY = "weight"


class GraphView(Protocol):
    """Read-only weighted undirected graph used by the optimizer."""

    def nodes(self) -> List[int]:
        ...

    def number_of_nodes(self) -> int:
        ...

    def number_of_edges(self) -> int:
        ...

    def neighbors(self, node: int) -> Iterator[Tuple[int, float]]:
        ...

    def degree(self, node: int) -> float:
        ...

    def size(self) -> float:
        ...

    def quotient(self, partition: Dict[int, int]) -> "GraphView":
        ...


class WeightedGraph:
    """
    Immutable weighted undirected graph backed by NetworkX.

    The input graph is copied into a canonical ``networkx.Graph`` whose
    edges all carry a float ``weight`` attribute, and the copy is frozen.
    Node iteration order is the insertion order of the input graph, which
    makes every traversal of the optimizer reproducible.

    Parameters
    ----------
    graph : nx.Graph
        Undirected simple graph with integer node ids
    weight : str, optional
        Edge attribute holding the weight (default: 'weight')

    Raises
    ------
    ValueError
        If the graph is directed, a multigraph, or has a negative or
        non-finite weight

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (1, 2)])
    >>> view = WeightedGraph(G)
    >>> view.size()
    2.0
    >>> sorted(view.neighbors(1))
    [(0, 1.0), (2, 1.0)]
    """

    def __init__(self, graph: nx.Graph, weight: str = WEIGHT_KEY):
        if graph.is_directed():
            raise ValueError("Louvain community detection requires an undirected graph")
        if graph.is_multigraph():
            raise ValueError("Multigraphs are not supported, aggregate parallel edges first")

        canonical = nx.Graph()
        canonical.add_nodes_from(graph.nodes())
        for u, v, data in graph.edges(data=True):
            w = float(data.get(weight, 1.0))
            if not math.isfinite(w):
                raise ValueError(f"Non-finite weight {w} on edge ({u}, {v})")
            if w < 0:
                raise ValueError(f"Negative weight {w} on edge ({u}, {v})")
            canonical.add_edge(u, v, **{WEIGHT_KEY: w})

        self._graph = nx.freeze(canonical)
        self._nodes = list(self._graph.nodes())
        self._size = float(self._graph.size(weight=WEIGHT_KEY))

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple],
        nodes: Optional[Iterable[int]] = None,
    ) -> "WeightedGraph":
        """
        Build a graph from ``(u, v)`` or ``(u, v, weight)`` tuples.

        Parameters
        ----------
        edges : iterable of tuples
            Edge list, unweighted edges get weight 1
        nodes : iterable of int, optional
            Nodes to add first (e.g. isolated nodes), fixing the node order

        Returns
        -------
        WeightedGraph
            The new graph
        """
        G = nx.Graph()
        if nodes is not None:
            G.add_nodes_from(nodes)
        for edge in edges:
            if len(edge) == 2:
                G.add_edge(edge[0], edge[1], **{WEIGHT_KEY: 1.0})
            elif len(edge) == 3:
                G.add_edge(edge[0], edge[1], **{WEIGHT_KEY: edge[2]})
            else:
                raise ValueError(f"Edges must be (u, v) or (u, v, weight), got {edge}")
        return cls(G)

    def nodes(self) -> List[int]:
        """Return the nodes in their stable iteration order."""
        return list(self._nodes)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def neighbors(self, node: int) -> Iterator[Tuple[int, float]]:
        """Yield ``(neighbor, weight)`` pairs, a self-loop included once."""
        for neighbor, data in self._graph.adj[node].items():
            yield neighbor, data[WEIGHT_KEY]

    def degree(self, node: int) -> float:
        """Weighted degree of ``node``, self-loops counted twice."""
        return float(self._graph.degree(node, weight=WEIGHT_KEY))

    def self_loop_weight(self, node: int) -> float:
        data = self._graph.get_edge_data(node, node)
        if data is None:
            return 0.0
        return data[WEIGHT_KEY]

    def size(self) -> float:
        """Total edge weight m."""
        return self._size

    def to_networkx(self) -> nx.Graph:
        """Return the frozen NetworkX graph backing this view."""
        return self._graph

    def quotient(self, partition: Dict[int, int]) -> "WeightedGraph":
        """
        Collapse every community of ``partition`` into a single node.

        The coarse nodes are the community ids in ascending order. The
        weight between two coarse nodes is the sum of the weights of the
        edges crossing the two communities, and the self-loop of a coarse
        node is the total weight inside its community. The total edge
        weight is therefore unchanged.

        Parameters
        ----------
        partition : Dict[int, int]
            Mapping node -> community covering every node of the graph

        Returns
        -------
        WeightedGraph
            The quotient graph

        Raises
        ------
        ValueError
            If a node of the graph has no community
        """
        missing = [node for node in self._nodes if node not in partition]
        if missing:
            raise ValueError(
                f"Partition does not cover {len(missing)} node(s), e.g. {missing[:5]}"
            )

        coarse = nx.Graph()
        coarse.add_nodes_from(sorted(set(partition[node] for node in self._nodes)))
        for u, v, w in self._graph.edges(data=WEIGHT_KEY):
            com_u = partition[u]
            com_v = partition[v]
            previous = coarse.get_edge_data(com_u, com_v, {WEIGHT_KEY: 0.0})[WEIGHT_KEY]
            coarse.add_edge(com_u, com_v, **{WEIGHT_KEY: previous + w})

        logger.debug(
            f"Quotient graph: {self.number_of_nodes()} -> {coarse.number_of_nodes()} nodes, "
            f"{self.number_of_edges()} -> {coarse.number_of_edges()} edges"
        )
        return WeightedGraph(coarse)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node) -> bool:
        return node in self._graph

    def __repr__(self) -> str:
        return (
            f"WeightedGraph(nodes={self.number_of_nodes()}, "
            f"edges={self.number_of_edges()}, size={self._size:g})"
        )


def as_graph_view(graph: Union[nx.Graph, GraphView], weight: str = WEIGHT_KEY) -> GraphView:
    """
    Wrap a NetworkX graph into a ``WeightedGraph``.

    Objects that already provide the graph view interface are returned
    unchanged.
    """
    if isinstance(graph, nx.Graph):
        return WeightedGraph(graph, weight=weight)
    return graph


def induced_graph(
    partition: Dict[int, int],
    graph: Union[nx.Graph, GraphView],
    weight: str = WEIGHT_KEY,
) -> GraphView:
    """
    Produce the graph whose nodes are the communities of ``partition``.

    Parameters
    ----------
    partition : Dict[int, int]
        Mapping node -> community covering every node of ``graph``
    graph : nx.Graph or GraphView
        Source graph
    weight : str, optional
        Edge attribute holding the weight when ``graph`` is a NetworkX graph

    Returns
    -------
    GraphView
        Quotient graph with the same total edge weight as ``graph``

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (1, 2), (2, 3)])
    >>> coarse = induced_graph({0: 0, 1: 0, 2: 1, 3: 1}, G)
    >>> coarse.nodes()
    [0, 1]
    >>> coarse.size()
    3.0
    """
    return as_graph_view(graph, weight=weight).quotient(partition)
