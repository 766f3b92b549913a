"""
Plotting functions for visualizing flock statistics over time.
"""

from typing import Dict, List

try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False


TRIAL_COLORS = ['#FF6B6B', '#4ECDC4', '#FFB347', '#95E1D3', '#A28BD4']


def plot_flock_timeseries(trial_results: List[Dict],
                          output_file: str = "flock_cohesion.png") -> str:
    """
    Plot cohesion and average speed over time, one line per trial.

    Args:
        trial_results: Result dictionaries from HeadlessSimulation.get_results()
        output_file: Output filename for the plot

    Returns:
        Path to saved plot file ("" when nothing was plotted)
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping plot.")
        return ""

    if not trial_results:
        print("Warning: no results to plot.")
        return ""

    fig, (ax_cohesion, ax_speed) = plt.subplots(2, 1, figsize=(12, 9), sharex=True)

    for idx, result in enumerate(trial_results):
        color = TRIAL_COLORS[idx % len(TRIAL_COLORS)]
        label = f"Trial {result.get('trial', idx + 1)}"

        frames = [d["frame"] for d in result["timeseries"]]
        cohesion = [d["cohesion"] for d in result["timeseries"]]
        speed = [d["avg_speed"] for d in result["timeseries"]]

        ax_cohesion.plot(frames, cohesion, label=label, linewidth=2, color=color, alpha=0.8)
        ax_speed.plot(frames, speed, label=label, linewidth=2, color=color, alpha=0.8)

        if cohesion:
            ax_cohesion.annotate(f'{cohesion[-1]:.0f}', xy=(frames[-1], cohesion[-1]),
                                 xytext=(5, 0), textcoords='offset points',
                                 fontsize=8, color=color)

    ax_cohesion.set_ylabel('Cohesion (avg dist to centroid)', fontsize=10)
    ax_cohesion.set_title('Flock Cohesion Over Time', fontsize=12, fontweight='bold')
    ax_cohesion.legend(fontsize=8, loc='upper right')
    ax_cohesion.grid(True, alpha=0.3, linestyle='--')

    ax_speed.set_xlabel('Frame Number', fontsize=10)
    ax_speed.set_ylabel('Average Speed (px/frame)', fontsize=10)
    ax_speed.grid(True, alpha=0.3, linestyle='--')

    plt.suptitle('Boids Flock Statistics\n(Lower cohesion = tighter grouping)',
                 fontsize=14, fontweight='bold')
    plt.tight_layout()

    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"\nPlot saved to: {output_file}")

    return output_file
