"""
Analysis module for plotting and exporting simulation results.
"""

from .plotting import plot_flock_timeseries
from .export import export_timeseries_to_csv, export_run_report, calculate_aggregate_stats

__all__ = [
    'plot_flock_timeseries',
    'export_timeseries_to_csv',
    'export_run_report',
    'calculate_aggregate_stats',
]
