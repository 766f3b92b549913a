"""
Export functions for saving run results to CSV and JSON.
"""

import csv
import json
import math
from typing import Dict, List, Any


def export_timeseries_to_csv(trial_results: List[Dict],
                             filename: str = "flock_timeseries.csv") -> str:
    """
    Export the sampled time series of every trial to CSV.

    Args:
        trial_results: Result dictionaries from HeadlessSimulation.get_results()
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['trial', 'frame', 'cohesion', 'avg_speed', 'avg_neighbors', 'offscreen']
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)

        writer.writeheader()

        for index, result in enumerate(trial_results):
            trial = result.get('trial', index + 1)
            for entry in result['timeseries']:
                writer.writerow({
                    'trial': trial,
                    'frame': entry['frame'],
                    'cohesion': f"{entry['cohesion']:.2f}",
                    'avg_speed': f"{entry['avg_speed']:.3f}",
                    'avg_neighbors': f"{entry['avg_neighbors']:.2f}",
                    'offscreen': entry['offscreen'],
                })

    print(f"\nCSV time series saved to: {filename}")
    return filename


def export_run_report(report: Dict[str, Any], filename: str = "flock_run_results.json") -> str:
    """
    Export full run report to JSON.

    Args:
        report: Complete report dictionary
        filename: Output filename

    Returns:
        Path to saved JSON file
    """
    with open(filename, 'w') as f:
        json.dump(report, f, indent=2)

    print(f"\nRun report saved to: {filename}")
    return filename


def calculate_aggregate_stats(trial_results: List[Dict]) -> Dict[str, float]:
    """
    Calculate mean and standard deviation across trials.

    Args:
        trial_results: List of result dictionaries from multiple trials

    Returns:
        Dictionary with mean and std for each metric
    """
    if not trial_results:
        return {}

    metrics = [
        "avg_cohesion", "avg_speed", "avg_neighbors", "final_cohesion",
        "final_offscreen", "max_offscreen", "elapsed_time_seconds",
    ]

    aggregates = {}

    for metric in metrics:
        values = [r[metric] for r in trial_results if metric in r and r[metric] is not None]
        if values:
            mean = sum(values) / len(values)
            aggregates[f"{metric}_mean"] = mean
            if len(values) > 1:
                variance = sum((x - mean) ** 2 for x in values) / (len(values) - 1)
                aggregates[f"{metric}_std"] = math.sqrt(variance)
            else:
                aggregates[f"{metric}_std"] = 0

    return aggregates
