"""
Evaluation and benchmarking package
"""

from .benchmark import run_benchmarks, results_to_frame
from .visualize import plot_all_results

__all__ = ['run_benchmarks', 'results_to_frame', 'plot_all_results']
