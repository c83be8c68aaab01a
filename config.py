"""
Configuration parameters for the session guarantees simulation.
"""

# Replica Parameters
DEFAULT_REPLICAS = ["A", "B"]  # Replica identifiers used by the demo

# Workload Parameters
NUM_SESSIONS = 200  # Sessions per benchmark configuration
OPS_PER_SESSION = 20  # Operations issued by each session
READ_RATIO = 0.5  # Fraction of operations that are reads
NUM_REPLICAS = 3  # Replicas per benchmark run
RANDOM_SEED = 42

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Plots
PLOT_DIR = "plots"
PLOT_DPI = 150


def validate_workload(num_sessions=NUM_SESSIONS,
                      ops_per_session=OPS_PER_SESSION,
                      read_ratio=READ_RATIO,
                      num_replicas=NUM_REPLICAS):
    """Validate a benchmark workload description."""
    if num_sessions < 1:
        raise ValueError(f"Invalid session count: {num_sessions} (must be >= 1)")
    if ops_per_session < 1:
        raise ValueError(f"Invalid operation count: {ops_per_session} (must be >= 1)")
    if not 0.0 <= read_ratio <= 1.0:
        raise ValueError(f"Invalid read ratio: {read_ratio} (must be 0 <= ratio <= 1)")
    if num_replicas < 1:
        raise ValueError(f"Invalid replica count: {num_replicas} (must be >= 1)")

    if read_ratio > 0.5:
        mix = "READ-HEAVY"
    elif read_ratio == 0.5:
        mix = "BALANCED"
    else:
        mix = "WRITE-HEAVY"

    return {
        "sessions": num_sessions,
        "ops_per_session": ops_per_session,
        "read_ratio": read_ratio,
        "replicas": num_replicas,
        "mix": mix,
        "total_ops": num_sessions * ops_per_session,
    }


if __name__ == "__main__":
    workload = validate_workload()
    print("Session Guarantees Configuration:")
    print(f"  Demo Replicas: {', '.join(DEFAULT_REPLICAS)}")
    print(f"  Sessions: {workload['sessions']}")
    print(f"  Operations per Session: {workload['ops_per_session']}")
    print(f"  Read Ratio: {workload['read_ratio']} ({workload['mix']})")
    print(f"  Replicas per Run: {workload['replicas']}")
