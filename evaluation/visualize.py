"""
Visualization tools for benchmark results.
"""

import os
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from typing import Dict
import config
from consistency.guarantees import Guarantee
from evaluation.benchmark import BenchmarkResults, results_to_frame

ROUTING_COLORS = {'random': 'tab:orange', 'sticky': 'tab:green'}


def plot_violation_breakdown(results: Dict[str, BenchmarkResults],
                             output_file: str = "violation_breakdown.png"):
    """
    Plot stacked violation counts per configuration, split by guarantee.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_file: Output filename
    """
    df = results_to_frame(results)
    kinds = [g.abbreviation for g in Guarantee]

    fig, ax = plt.subplots(figsize=(12, 6))

    x = np.arange(len(df))
    bottom = np.zeros(len(df))
    for kind in kinds:
        counts = df[kind].to_numpy(dtype=float)
        ax.bar(x, counts, bottom=bottom, label=kind, alpha=0.85)
        bottom += counts

    ax.set_xlabel('Configuration', fontsize=12, fontweight='bold')
    ax.set_ylabel('Refused Operations', fontsize=12, fontweight='bold')
    ax.set_title('Guarantee Violations by Configuration', fontsize=14, fontweight='bold')
    ax.set_xticks(x)
    ax.set_xticklabels(df['config'], rotation=45, ha='right')
    ax.legend(title='Violated')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=config.PLOT_DPI)
    print(f"Saved violation breakdown to {output_file}")
    plt.close(fig)


def plot_success_rates(results: Dict[str, BenchmarkResults],
                       output_file: str = "success_rates.png"):
    """
    Plot overall success rate per guarantee set, grouped by routing policy.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_file: Output filename
    """
    df = results_to_frame(results)

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(data=df, x='guarantees', y='success_rate', hue='routing',
                palette=ROUTING_COLORS, ax=ax)

    ax.set_xlabel('Guarantees', fontsize=12, fontweight='bold')
    ax.set_ylabel('Success Rate', fontsize=12, fontweight='bold')
    ax.set_title('Success Rate vs. Enforced Guarantees', fontsize=14, fontweight='bold')
    ax.set_ylim(0, 1.05)
    ax.legend(title='Routing')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=config.PLOT_DPI)
    print(f"Saved success rates to {output_file}")
    plt.close(fig)


def plot_violation_heatmap(results: Dict[str, BenchmarkResults],
                           output_file: str = "violation_heatmap.png"):
    """
    Plot a heatmap of violation rate per configuration and guarantee kind.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_file: Output filename
    """
    rates = pd.DataFrame(
        {name: result.get_stats()['violation_rate'] for name, result in results.items()}
    ).T

    fig, ax = plt.subplots(figsize=(8, max(4, 0.5 * len(rates))))
    sns.heatmap(rates, annot=True, fmt='.2f', cmap='Reds', vmin=0, vmax=1,
                cbar_kws={'label': 'Violation Rate'}, ax=ax)

    ax.set_xlabel('Violated Guarantee', fontsize=12, fontweight='bold')
    ax.set_ylabel('Configuration', fontsize=12, fontweight='bold')
    ax.set_title('Violation Rate Heatmap', fontsize=14, fontweight='bold')

    plt.tight_layout()
    plt.savefig(output_file, dpi=config.PLOT_DPI)
    print(f"Saved violation heatmap to {output_file}")
    plt.close(fig)


def plot_all_results(results: Dict[str, BenchmarkResults], output_dir: str = config.PLOT_DIR):
    """
    Generate all plots for benchmark results.

    Args:
        results: Dictionary of config -> BenchmarkResults
        output_dir: Output directory for plots
    """
    print("\nGenerating visualizations...")
    print("="*60)

    os.makedirs(output_dir, exist_ok=True)

    plot_violation_breakdown(results, os.path.join(output_dir, "violation_breakdown.png"))
    plot_success_rates(results, os.path.join(output_dir, "success_rates.png"))
    plot_violation_heatmap(results, os.path.join(output_dir, "violation_heatmap.png"))

    print("\nAll visualizations saved!")


if __name__ == "__main__":
    from evaluation.benchmark import run_benchmarks

    plot_all_results(run_benchmarks(num_sessions=50), output_dir=config.PLOT_DIR)
