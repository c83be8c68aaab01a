"""
Tests for configuration, the workload benchmark and plotting.
"""

import pytest
import config
from consistency.guarantees import Guarantee, GuaranteeViolation
from evaluation.benchmark import (
    BenchmarkResults, GuaranteeBenchmark, run_benchmarks, results_to_frame, BENCHMARK_CONFIGS
)
from evaluation.visualize import plot_all_results


class TestConfig:
    """Test workload validation."""

    def test_defaults_valid(self):
        """The default workload passes validation."""
        workload = config.validate_workload()
        assert workload["total_ops"] == config.NUM_SESSIONS * config.OPS_PER_SESSION
        assert workload["mix"] == "BALANCED"

    def test_mix(self):
        """The read ratio determines the workload mix label."""
        assert config.validate_workload(read_ratio=0.9)["mix"] == "READ-HEAVY"
        assert config.validate_workload(read_ratio=0.1)["mix"] == "WRITE-HEAVY"

    def test_invalid(self):
        """Out-of-range values raise ValueError."""
        with pytest.raises(ValueError):
            config.validate_workload(num_sessions=0)
        with pytest.raises(ValueError):
            config.validate_workload(ops_per_session=0)
        with pytest.raises(ValueError):
            config.validate_workload(read_ratio=1.5)
        with pytest.raises(ValueError):
            config.validate_workload(num_replicas=0)


class TestBenchmarkResults:
    """Test the results container."""

    def test_empty_stats(self):
        """An empty result summarizes to zeros."""
        stats = BenchmarkResults().get_stats()
        assert stats['operations']['attempted'] == 0
        assert stats['success_rate']['overall'] == 0
        assert stats['violations'] == {"MR": 0, "RYW": 0, "WFR": 0, "MW": 0}

    def test_counts(self):
        """Operations and violations are tallied by kind."""
        results = BenchmarkResults()
        results.add_operation(True)
        results.add_operation(True, GuaranteeViolation(Guarantee.READ_YOUR_WRITES))
        results.add_operation(False, GuaranteeViolation(Guarantee.MONOTONIC_WRITES))
        results.add_operation(False)
        results.add_session_rate(0.5)

        stats = results.get_stats()
        assert stats['operations'] == {'attempted': 4, 'succeeded': 2, 'reads': 2, 'writes': 2}
        assert stats['violations']['RYW'] == 1
        assert stats['violations']['MW'] == 1
        assert stats['violation_rate']['MW'] == 0.25
        assert stats['success_rate']['overall'] == 0.5
        assert stats['success_rate']['mean'] == 0.5


class TestGuaranteeBenchmark:
    """Test the randomized workload."""

    def test_labels(self):
        """Guarantee sets get short labels."""
        assert GuaranteeBenchmark([]).label == "NONE"
        assert GuaranteeBenchmark(list(Guarantee)).label == "ALL"
        assert GuaranteeBenchmark([Guarantee.MONOTONIC_WRITES,
                                   Guarantee.MONOTONIC_READS]).label == "MR+MW"
        assert GuaranteeBenchmark([], sticky=True).routing == "sticky"

    def test_operation_count(self):
        """Every scheduled operation is attempted."""
        results = GuaranteeBenchmark(list(Guarantee), seed=1).run(num_sessions=10, ops_per_session=5)
        assert results.attempted == 50
        assert results.reads + results.writes == 50
        assert len(results.session_success_rates) == 10

    def test_no_guarantees_never_refuse(self):
        """Without guarantees every operation succeeds."""
        results = GuaranteeBenchmark([], seed=3).run(num_sessions=20, ops_per_session=10)
        assert results.succeeded == results.attempted

    def test_sticky_sessions_never_refuse(self):
        """A session pinned to one replica satisfies all guarantees."""
        results = GuaranteeBenchmark(list(Guarantee), sticky=True, seed=3).run(
            num_sessions=20, ops_per_session=10)
        assert results.succeeded == results.attempted

    def test_random_routing_refuses(self):
        """Random routing with all guarantees produces violations."""
        results = GuaranteeBenchmark(list(Guarantee), seed=3).run(num_sessions=20, ops_per_session=10)
        assert results.succeeded < results.attempted
        assert sum(results.violations.values()) == results.attempted - results.succeeded

    def test_read_only_never_refuses(self):
        """Read-only workloads never change replica state, so nothing fails."""
        results = GuaranteeBenchmark(list(Guarantee), read_ratio=1.0, seed=3).run(
            num_sessions=10, ops_per_session=10)
        assert results.writes == 0
        assert results.succeeded == results.attempted

    def test_deterministic_with_seed(self):
        """The same seed reproduces the same outcome."""
        first = GuaranteeBenchmark(list(Guarantee), seed=7).run(num_sessions=15, ops_per_session=8)
        second = GuaranteeBenchmark(list(Guarantee), seed=7).run(num_sessions=15, ops_per_session=8)
        assert first.get_stats() == second.get_stats()

    def test_invalid_read_ratio(self):
        """Invalid workload settings are rejected."""
        with pytest.raises(ValueError):
            GuaranteeBenchmark([], read_ratio=-0.1)
        with pytest.raises(ValueError):
            GuaranteeBenchmark([]).run(num_sessions=0)


class TestRunBenchmarks:
    """Test the configuration matrix and tabular output."""

    def test_matrix(self):
        """Every guarantee set runs under both routing policies."""
        results = run_benchmarks(num_sessions=5, ops_per_session=4)
        assert len(results) == 2 * len(BENCHMARK_CONFIGS)
        assert "ALL/random" in results
        assert "NONE/sticky" in results

    def test_frame(self):
        """Results flatten into one DataFrame row per configuration."""
        results = run_benchmarks(num_sessions=5, ops_per_session=4)
        df = results_to_frame(results)

        assert len(df) == len(results)
        assert list(df.columns[-4:]) == ["MR", "RYW", "WFR", "MW"]
        assert (df["attempted"] == 20).all()
        assert (df["success_rate"] <= 1.0).all()


class TestVisualize:
    """Test plot generation."""

    def test_plot_all_results(self, tmp_path):
        """All plots are written to the output directory."""
        results = run_benchmarks(num_sessions=5, ops_per_session=4)
        plot_all_results(results, output_dir=str(tmp_path))

        for name in ["violation_breakdown.png", "success_rates.png", "violation_heatmap.png"]:
            assert (tmp_path / name).exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
