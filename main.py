"""
Main entry point for the session guarantees simulation.
"""

import argparse
import logging
import sys
from consistency.guarantees import GuaranteeViolation
from consistency.session import SessionTracker
from replica.server import Replica
import config


def run_demo(args) -> int:
    """
    Run the reference scenario on two replicas.

    Writes to the first replica with MW, reads it back with MR and RYW,
    records the read, then writes to the second replica with WFR and MW.
    The second replica has never seen the first write, so the last step
    is refused with a Writes Follow Reads violation.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code (1 if a guarantee was violated)
    """
    logger = logging.getLogger("Demo")

    first_id, second_id = args.replicas
    first = Replica(first_id)
    second = Replica(second_id)
    session = SessionTracker()
    logger.info(f"Session {session.session_id} using replicas {first_id}, {second_id}")

    try:
        print(f"Writing on Server {first_id}...")
        first.write(session, wfr=False, mw=True)
        print(first)

        print(f"Reading from Server {first_id}...")
        result = first.read(session, mr=True, ryw=True)
        session.record_read(result)
        print(f"Read vector: {session.read_vector()}")

        print(f"Writing on Server {second_id}...")
        second.write(session, wfr=True, mw=True)
        print(second)

    except GuaranteeViolation as e:
        print(f"Session Guarantee Violated: {e}")
        logger.debug(e.describe())
        return 1

    return 0


def run_benchmark(args) -> int:
    """
    Run the workload matrix and print a summary.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    from evaluation.benchmark import run_benchmarks, print_summary

    workload = config.validate_workload(args.sessions, args.ops, args.read_ratio, args.num_replicas)
    print("="*60)
    print("Session Guarantees Workload")
    print("="*60)
    print(f"Sessions: {workload['sessions']} x {workload['ops_per_session']} ops")
    print(f"Read Ratio: {workload['read_ratio']} ({workload['mix']})")
    print(f"Replicas: {workload['replicas']}")

    results = run_benchmarks(num_sessions=args.sessions,
                             ops_per_session=args.ops,
                             read_ratio=args.read_ratio,
                             num_replicas=args.num_replicas,
                             seed=args.seed)
    print_summary(results)

    if args.plot_dir:
        from evaluation.visualize import plot_all_results
        plot_all_results(results, output_dir=args.plot_dir)

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description='Client Session Guarantees over Version Vectors'
    )

    parser.add_argument('--log-level', type=str, default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Logging level (default: {config.LOG_LEVEL})')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Demo scenario
    demo = subparsers.add_parser('demo', help='Run the two-replica scenario')
    demo.add_argument('--replicas', nargs=2, metavar=('FIRST', 'SECOND'),
                      default=config.DEFAULT_REPLICAS,
                      help=f'Replica identifiers (default: {" ".join(config.DEFAULT_REPLICAS)})')
    demo.set_defaults(func=run_demo)

    # Workload benchmark
    bench = subparsers.add_parser('benchmark', help='Run the randomized session workload')
    bench.add_argument('--sessions', type=int, default=config.NUM_SESSIONS,
                       help=f'Sessions per configuration (default: {config.NUM_SESSIONS})')
    bench.add_argument('--ops', type=int, default=config.OPS_PER_SESSION,
                       help=f'Operations per session (default: {config.OPS_PER_SESSION})')
    bench.add_argument('--read-ratio', type=float, default=config.READ_RATIO,
                       help=f'Fraction of reads (default: {config.READ_RATIO})')
    bench.add_argument('--num-replicas', type=int, default=config.NUM_REPLICAS,
                       help=f'Replicas per run (default: {config.NUM_REPLICAS})')
    bench.add_argument('--seed', type=int, default=config.RANDOM_SEED,
                       help=f'Random seed (default: {config.RANDOM_SEED})')
    bench.add_argument('--plot-dir', type=str, default=None,
                       help='Write plots to this directory')
    bench.set_defaults(func=run_benchmark)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format=config.LOG_FORMAT
    )

    try:
        return args.func(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
