"""
Tests for graph module.

Covers construction checks, neighbor enumeration conventions and the
weight preservation of quotient graphs.
"""

import pytest
import networkx as nx
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hierarchical_louvain.graph import WeightedGraph, as_graph_view, induced_graph


def _random_weighted_graph(n=40, p=0.15, seed=7):
    G = nx.gnp_random_graph(n, p, seed=seed)
    rng = np.random.default_rng(seed)
    for u, v in G.edges():
        G[u][v]["weight"] = float(rng.uniform(0.1, 3.0))
    return G


class TestWeightedGraphConstruction:
    """Tests for building graph views."""

    def test_missing_weights_default_to_one(self):
        """Test that unweighted edges get weight 1."""
        view = WeightedGraph(nx.Graph([(0, 1), (1, 2)]))
        assert view.size() == 2.0
        assert view.number_of_edges() == 2
        assert view.number_of_nodes() == 3

    def test_custom_weight_attribute(self):
        """Test reading weights from another attribute."""
        G = nx.Graph()
        G.add_edge(0, 1, strength=2.5)
        view = WeightedGraph(G, weight="strength")
        assert view.size() == 2.5

    def test_rejects_negative_weight(self):
        """Test that negative weights are rejected."""
        G = nx.Graph()
        G.add_edge(0, 1, weight=-1.0)
        with pytest.raises(ValueError, match="Negative weight"):
            WeightedGraph(G)

    @pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_weight(self, weight):
        """Test that NaN and infinite weights are rejected."""
        G = nx.Graph()
        G.add_edge(0, 1, weight=weight)
        with pytest.raises(ValueError, match="Non-finite"):
            WeightedGraph(G)

    def test_rejects_directed_graph(self):
        """Test that directed graphs are rejected."""
        with pytest.raises(ValueError, match="undirected"):
            WeightedGraph(nx.DiGraph([(0, 1)]))

    def test_rejects_multigraph(self):
        """Test that multigraphs are rejected."""
        with pytest.raises(ValueError, match="Multigraphs"):
            WeightedGraph(nx.MultiGraph([(0, 1), (0, 1)]))

    def test_node_order_is_insertion_order(self):
        """Test that node order follows the input graph."""
        G = nx.Graph()
        G.add_nodes_from([5, 2, 9])
        G.add_edge(2, 7)
        assert WeightedGraph(G).nodes() == [5, 2, 9, 7]

    def test_from_edges(self):
        """Test building from an edge list with isolated nodes."""
        view = WeightedGraph.from_edges([(0, 1), (1, 2, 0.5)], nodes=[3])
        assert view.nodes() == [3, 0, 1, 2]
        assert view.size() == 1.5

    def test_from_edges_rejects_bad_tuple(self):
        """Test that malformed edges are rejected."""
        with pytest.raises(ValueError):
            WeightedGraph.from_edges([(0, 1, 1.0, "extra")])

    def test_view_is_frozen(self):
        """Test that the backing graph cannot be modified."""
        view = WeightedGraph(nx.Graph([(0, 1)]))
        with pytest.raises(nx.NetworkXError):
            view.to_networkx().add_edge(1, 2)

    def test_input_graph_not_shared(self):
        """Test that later changes to the input do not leak into the view."""
        G = nx.Graph([(0, 1)])
        view = WeightedGraph(G)
        G.add_edge(1, 2)
        assert view.number_of_edges() == 1


class TestNeighborsAndDegree:
    """Tests for neighbor enumeration conventions."""

    def test_self_loop_listed_once_counted_twice(self):
        """Test self-loop handling in neighbors and degree."""
        view = WeightedGraph.from_edges([(0, 0, 2.0), (0, 1, 1.0)])
        neighbors = dict(view.neighbors(0))
        assert neighbors == {0: 2.0, 1: 1.0}
        assert view.degree(0) == 5.0
        assert view.self_loop_weight(0) == 2.0
        assert view.self_loop_weight(1) == 0.0

    def test_degree_sum_is_twice_size(self):
        """Test the handshake identity on a random weighted graph."""
        view = WeightedGraph(_random_weighted_graph())
        total = sum(view.degree(node) for node in view.nodes())
        assert total == pytest.approx(2 * view.size())


class TestQuotient:
    """Tests for quotient graph construction."""

    def test_quotient_nodes_are_sorted_communities(self):
        """Test that coarse nodes are the community ids in order."""
        view = WeightedGraph.from_edges([(0, 1), (1, 2), (2, 3)])
        coarse = view.quotient({0: 4, 1: 4, 2: 1, 3: 1})
        assert coarse.nodes() == [1, 4]

    def test_quotient_weights(self):
        """Test crossing and internal weights of the quotient."""
        view = WeightedGraph.from_edges(
            [(0, 1, 1.0), (1, 2, 0.5), (2, 3, 2.0), (3, 3, 1.5)]
        )
        coarse = view.quotient({0: 0, 1: 0, 2: 1, 3: 1})
        neighbors_0 = dict(coarse.neighbors(0))
        neighbors_1 = dict(coarse.neighbors(1))
        assert neighbors_0 == {0: 1.0, 1: 0.5}
        assert neighbors_1 == {1: 3.5, 0: 0.5}

    @pytest.mark.parametrize("n_communities", [1, 3, 10, 40])
    def test_quotient_preserves_total_weight(self, n_communities):
        """Test that coarsening never changes the total edge weight."""
        G = _random_weighted_graph()
        rng = np.random.default_rng(n_communities)
        partition = {node: int(rng.integers(n_communities)) for node in G.nodes()}
        view = WeightedGraph(G)
        coarse = view.quotient(partition)
        assert coarse.size() == pytest.approx(view.size())

    def test_repeated_quotient_preserves_total_weight(self):
        """Test weight preservation across several coarsening rounds."""
        view = WeightedGraph(_random_weighted_graph(n=50, seed=11))
        size = view.size()
        partition = {node: node // 2 for node in view.nodes()}
        for _ in range(4):
            view = view.quotient(partition)
            assert view.size() == pytest.approx(size)
            partition = {node: node // 2 for node in view.nodes()}

    def test_quotient_requires_full_cover(self):
        """Test that a partition missing nodes is rejected."""
        view = WeightedGraph.from_edges([(0, 1), (1, 2)])
        with pytest.raises(ValueError, match="does not cover"):
            view.quotient({0: 0, 1: 0})

    def test_induced_graph_accepts_networkx(self):
        """Test the module-level quotient on a NetworkX graph."""
        G = nx.Graph([(0, 1), (1, 2), (2, 3)])
        coarse = induced_graph({0: 0, 1: 0, 2: 1, 3: 1}, G)
        assert coarse.nodes() == [0, 1]
        assert coarse.size() == 3.0


class TestAsGraphView:
    """Tests for graph view coercion."""

    def test_wraps_networkx(self):
        assert isinstance(as_graph_view(nx.Graph([(0, 1)])), WeightedGraph)

    def test_passes_through_views(self):
        view = WeightedGraph(nx.Graph([(0, 1)]))
        assert as_graph_view(view) is view


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
