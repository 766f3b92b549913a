"""
Core module containing configuration, the viewport, agents and the flock driver.
"""

from .config import SimulationConfig, DEFAULT_CONFIG
from .flock import Flock, NeighborAggregate, aggregate_neighbors
from .viewport import PygameViewport

__all__ = [
    'SimulationConfig', 'DEFAULT_CONFIG',
    'Flock', 'NeighborAggregate', 'aggregate_neighbors', 'PygameViewport',
]
