"""
Workload simulation measuring how often session guarantees refuse operations.
"""

import random
import statistics
import logging
from typing import Dict, Iterable, List, Optional
import pandas as pd
import config
from consistency.guarantees import Guarantee, GuaranteeViolation, ALL_GUARANTEES
from consistency.session import SessionTracker
from client.session_client import SessionClient
from replica.server import Replica


class BenchmarkResults:
    """Container for benchmark results."""

    def __init__(self):
        self.attempted: int = 0
        self.succeeded: int = 0
        self.reads: int = 0
        self.writes: int = 0
        self.violations: Dict[Guarantee, int] = {g: 0 for g in Guarantee}
        self.session_success_rates: List[float] = []
        self.guarantees: str = ""
        self.routing: str = ""
        self.config: Dict = {}

    def add_operation(self, is_read: bool, violation: Optional[GuaranteeViolation] = None):
        """Record the outcome of one read or write."""
        self.attempted += 1
        if is_read:
            self.reads += 1
        else:
            self.writes += 1

        if violation is None:
            self.succeeded += 1
        else:
            self.violations[violation.guarantee] += 1

    def add_session_rate(self, rate: float):
        """Add a per-session success rate (0-1)."""
        self.session_success_rates.append(rate)

    @property
    def success_rate(self) -> float:
        """Fraction of attempted operations that succeeded."""
        return self.succeeded / self.attempted if self.attempted else 0.0

    def get_stats(self) -> Dict:
        """Get statistical summary."""
        rates = self.session_success_rates
        return {
            'operations': {
                'attempted': self.attempted,
                'succeeded': self.succeeded,
                'reads': self.reads,
                'writes': self.writes,
            },
            'violations': {g.abbreviation: count for g, count in self.violations.items()},
            'violation_rate': {
                g.abbreviation: (count / self.attempted if self.attempted else 0)
                for g, count in self.violations.items()
            },
            'success_rate': {
                'overall': self.success_rate,
                'mean': statistics.mean(rates) if rates else 0,
                'median': statistics.median(rates) if rates else 0,
                'stdev': statistics.stdev(rates) if len(rates) > 1 else 0,
            },
            'config': self.config,
            'guarantees': self.guarantees,
            'routing': self.routing,
        }


class GuaranteeBenchmark:
    """Randomized multi-session workload against a set of replicas."""

    def __init__(self,
                 guarantees: Iterable[Guarantee],
                 num_replicas: int = config.NUM_REPLICAS,
                 read_ratio: float = config.READ_RATIO,
                 sticky: bool = False,
                 seed: Optional[int] = config.RANDOM_SEED):
        """
        Initialize benchmark.

        Args:
            guarantees: Guarantees every session enforces
            num_replicas: Number of replicas sessions can reach
            read_ratio: Probability that an operation is a read
            sticky: Route every operation of a session to the same replica
            seed: Seed for replica choice and read/write mix
        """
        config.validate_workload(read_ratio=read_ratio, num_replicas=num_replicas)

        self.guarantees = frozenset(guarantees)
        self.num_replicas = num_replicas
        self.read_ratio = read_ratio
        self.sticky = sticky
        self.rng = random.Random(seed)

        self.logger = logging.getLogger("Benchmark")

    @property
    def label(self) -> str:
        """Short name of the guarantee set, e.g. MR+RYW."""
        if not self.guarantees:
            return "NONE"
        if self.guarantees == ALL_GUARANTEES:
            return "ALL"
        return "+".join(g.abbreviation for g in Guarantee if g in self.guarantees)

    @property
    def routing(self) -> str:
        return "sticky" if self.sticky else "random"

    def run(self,
            num_sessions: int = config.NUM_SESSIONS,
            ops_per_session: int = config.OPS_PER_SESSION) -> BenchmarkResults:
        """
        Run sessions one after another against fresh replicas.

        Replicas are shared by all sessions of the run, so writes from one
        session advance replica state that later sessions observe.

        Args:
            num_sessions: Number of sessions to run
            ops_per_session: Operations issued by each session

        Returns:
            BenchmarkResults for the run
        """
        config.validate_workload(num_sessions, ops_per_session, self.read_ratio, self.num_replicas)
        self.logger.info(f"Benchmarking {self.label}/{self.routing} "
                         f"({num_sessions} sessions x {ops_per_session} ops)")

        results = BenchmarkResults()
        results.guarantees = self.label
        results.routing = self.routing
        results.config = {
            'sessions': num_sessions,
            'ops_per_session': ops_per_session,
            'read_ratio': self.read_ratio,
            'replicas': self.num_replicas,
        }

        replicas = [Replica(f"R{i}") for i in range(self.num_replicas)]

        for i in range(num_sessions):
            client = SessionClient(self.guarantees, SessionTracker(f"bench-{i}"))
            home = self.rng.choice(replicas)
            succeeded = 0

            for _ in range(ops_per_session):
                replica = home if self.sticky else self.rng.choice(replicas)
                is_read = self.rng.random() < self.read_ratio

                if is_read:
                    _, violation = client.try_read(replica)
                else:
                    _, violation = client.try_write(replica)

                results.add_operation(is_read, violation)
                if violation is None:
                    succeeded += 1

            results.add_session_rate(succeeded / ops_per_session)

        self.logger.info(f"{self.label}/{self.routing}: "
                         f"{results.succeeded}/{results.attempted} operations succeeded")
        return results


# Guarantee sets compared by run_benchmarks
BENCHMARK_CONFIGS = [
    [],
    [Guarantee.MONOTONIC_READS],
    [Guarantee.READ_YOUR_WRITES],
    [Guarantee.WRITES_FOLLOW_READS],
    [Guarantee.MONOTONIC_WRITES],
    list(Guarantee),
]


def run_benchmarks(num_sessions: int = config.NUM_SESSIONS,
                   ops_per_session: int = config.OPS_PER_SESSION,
                   read_ratio: float = config.READ_RATIO,
                   num_replicas: int = config.NUM_REPLICAS,
                   seed: Optional[int] = config.RANDOM_SEED) -> Dict[str, BenchmarkResults]:
    """
    Run the workload with every guarantee set under both routing policies.

    Returns:
        Dictionary of configuration -> BenchmarkResults
    """
    results = {}

    for guarantees in BENCHMARK_CONFIGS:
        for sticky in (False, True):
            benchmark = GuaranteeBenchmark(guarantees,
                                           num_replicas=num_replicas,
                                           read_ratio=read_ratio,
                                           sticky=sticky,
                                           seed=seed)
            config_name = f"{benchmark.label}/{benchmark.routing}"
            results[config_name] = benchmark.run(num_sessions, ops_per_session)

    return results


def results_to_frame(results: Dict[str, BenchmarkResults]) -> pd.DataFrame:
    """
    Flatten benchmark results into one row per configuration.

    Args:
        results: Dictionary of config -> BenchmarkResults

    Returns:
        DataFrame with operation counts, success rate and violation counts
    """
    rows = []
    for config_name, result in results.items():
        stats = result.get_stats()
        row = {
            'config': config_name,
            'guarantees': stats['guarantees'],
            'routing': stats['routing'],
            'attempted': stats['operations']['attempted'],
            'succeeded': stats['operations']['succeeded'],
            'success_rate': stats['success_rate']['overall'],
        }
        row.update(stats['violations'])
        rows.append(row)

    columns = ['config', 'guarantees', 'routing', 'attempted', 'succeeded', 'success_rate']
    columns += [g.abbreviation for g in Guarantee]
    return pd.DataFrame(rows, columns=columns)


def print_summary(results: Dict[str, BenchmarkResults]):
    """Print one line per configuration."""
    print("\n" + "="*60)
    print("Benchmark Summary")
    print("="*60)

    for config_name, result in results.items():
        stats = result.get_stats()
        violations = ", ".join(f"{k}={v}" for k, v in stats['violations'].items() if v)
        print(f"\n{config_name}:")
        print(f"  Success: {stats['success_rate']['overall']:.1%} "
              f"({stats['operations']['succeeded']}/{stats['operations']['attempted']})")
        print(f"  Per-session: {stats['success_rate']['mean']:.1%} "
              f"± {stats['success_rate']['stdev']:.1%}")
        print(f"  Violations: {violations or 'none'}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=config.LOG_FORMAT)
    print_summary(run_benchmarks())
