"""
Base Agent class for all simulation entities.
"""

import math
from typing import NamedTuple

import pygame

from ..config import MAX_VELOCITY


class AgentState(NamedTuple):
    """Read-only snapshot of an agent's position and velocity."""

    xpos: int
    ypos: int
    xvel: float
    yvel: float


class Agent:
    """
    Base class for all agents in the simulation.

    Holds an integer pixel position and a floating point velocity in
    pixels per frame. Setters accept any value; out-of-range velocities
    are only reconciled by the next clamp.
    """

    def __init__(self, x: int, y: int, xvel: float, yvel: float):
        """
        Initialize an agent.

        Args:
            x: Initial x position
            y: Initial y position
            xvel: Initial x velocity
            yvel: Initial y velocity
        """
        self._xpos = x
        self._ypos = y
        self._xvel = xvel
        self._yvel = yvel

    @property
    def xpos(self) -> int:
        return self._xpos

    @xpos.setter
    def xpos(self, value: int) -> None:
        self._xpos = value

    @property
    def ypos(self) -> int:
        return self._ypos

    @ypos.setter
    def ypos(self, value: int) -> None:
        self._ypos = value

    @property
    def xvel(self) -> float:
        return self._xvel

    @xvel.setter
    def xvel(self, value: float) -> None:
        self._xvel = value

    @property
    def yvel(self) -> float:
        return self._yvel

    @yvel.setter
    def yvel(self, value: float) -> None:
        self._yvel = value

    @property
    def state(self) -> AgentState:
        return AgentState(self._xpos, self._ypos, self._xvel, self._yvel)

    @property
    def position(self) -> pygame.Vector2:
        """Position as a Vector2 (copy), for distance and centroid maths."""
        return pygame.Vector2(self._xpos, self._ypos)

    @property
    def velocity(self) -> pygame.Vector2:
        """Velocity as a Vector2 (copy)."""
        return pygame.Vector2(self._xvel, self._yvel)

    def clamp_velocity(self, limit: float = MAX_VELOCITY) -> None:
        """
        Clamp each velocity component to [-limit, limit].

        A NaN component (e.g. inf - inf after overflowing steering) is reset
        to 0.0; infinities clamp to the nearest bound.
        """
        xvel = 0.0 if math.isnan(self._xvel) else self._xvel
        yvel = 0.0 if math.isnan(self._yvel) else self._yvel
        self._xvel = pygame.math.clamp(xvel, -limit, limit)
        self._yvel = pygame.math.clamp(yvel, -limit, limit)

    def integrate(self) -> None:
        """Move by the integer part of the velocity (truncated toward zero)."""
        self._xpos += int(self._xvel)
        self._ypos += int(self._yvel)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(x={self._xpos}, y={self._ypos}, "
                f"xvel={self._xvel:.3f}, yvel={self._yvel:.3f})")
