"""
Tests for evaluation and benchmark modules.
"""

import json
import math

import pytest
import networkx as nx

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hierarchical_louvain.benchmark import main, run_benchmark
from hierarchical_louvain.evaluation import compute_ari, compute_nmi, evaluate_partition


class TestScores:
    """Tests for NMI and ARI."""

    def test_identical_up_to_labels(self):
        true = {0: 0, 1: 0, 2: 1, 3: 1}
        detected = {0: 5, 1: 5, 2: 7, 3: 7}
        assert compute_nmi(true, detected) == pytest.approx(1.0)
        assert compute_ari(true, detected) == pytest.approx(1.0)

    def test_disjoint_nodes(self):
        """Test that partitions without shared nodes score zero."""
        assert compute_nmi({0: 0}, {1: 0}) == 0.0
        assert compute_ari({0: 0}, {1: 0}) == 0.0

    def test_imperfect_match(self):
        true = {0: 0, 1: 0, 2: 0, 3: 1, 4: 1, 5: 1}
        detected = {0: 0, 1: 0, 2: 1, 3: 1, 4: 1, 5: 1}
        assert 0.0 < compute_nmi(true, detected) < 1.0
        assert compute_ari(true, detected) < 1.0


class TestEvaluatePartition:
    """Tests for full partition evaluation."""

    def test_keys_and_values(self):
        G = nx.Graph([(0, 1), (2, 3)])
        partition = {0: 0, 1: 0, 2: 1, 3: 1}
        result = evaluate_partition(G, partition, partition)
        assert result["nmi"] == pytest.approx(1.0)
        assert result["modularity_detected"] == pytest.approx(0.5)
        assert result["n_communities_true"] == 2

    def test_edgeless_graph(self):
        """Test that modularity is NaN without edges."""
        result = evaluate_partition(nx.empty_graph(3), {0: 0, 1: 1, 2: 2}, {0: 0, 1: 1, 2: 2})
        assert math.isnan(result["modularity_detected"])


class TestBenchmark:
    """Tests for the planted partition benchmark."""

    def test_run_benchmark_recovers_planted(self):
        """Test that well-separated groups are recovered."""
        results = run_benchmark(n_groups=4, group_size=20, p_in=0.6, p_out=0.01, seed=42)
        assert results["n_nodes"] == 80
        assert results["n_levels"] >= 1
        assert results["nmi"] > 0.9

    def test_main_writes_json(self, tmp_path):
        """Test the CLI entry point."""
        exit_code = main(
            ["--groups", "3", "--group-size", "10", "--p-in", "0.5",
             "--p-out", "0.02", "--output", str(tmp_path)]
        )
        assert exit_code == 0
        files = list(tmp_path.glob("benchmark_*.json"))
        assert len(files) == 1
        results = json.loads(files[0].read_text(encoding="utf-8"))
        assert results["config"]["min_improvement"] == 1e-7
        assert "modularity_networkx" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
