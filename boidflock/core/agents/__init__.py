"""
Agent classes for the boids simulation.
"""

from .base import Agent, AgentState
from .boid import Boid, double_draw_policy, single_draw_policy, resolve_steering_policy

__all__ = [
    'Agent', 'AgentState', 'Boid',
    'double_draw_policy', 'single_draw_policy', 'resolve_steering_policy',
]
