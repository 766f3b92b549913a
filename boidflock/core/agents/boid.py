"""
Boid agent class implementing the steering and per-frame update rules.
"""

from typing import Callable, Tuple

from .base import Agent
from ..config import (
    BOID_SIZE, BOID_COLOR, SCREEN_MARGIN, MAX_VELOCITY,
    BOUNDARY_TURN_FACTOR, RANDOM_TURN_FACTOR,
    RANDOM_TURN_LOW, RANDOM_TURN_HIGH, RANDOM_DRAW_MIN, RANDOM_DRAW_MAX,
)


RandomDraw = Callable[[int, int], int]
SteeringPolicy = Callable[[RandomDraw, bool, bool], Tuple[float, float]]


def _double_draw_axis(draw: RandomDraw, suppressed: bool) -> float:
    # The draw is taken before the suppression check on both branches.
    if draw(RANDOM_DRAW_MIN, RANDOM_DRAW_MAX) < RANDOM_TURN_LOW and not suppressed:
        return -RANDOM_TURN_FACTOR
    elif draw(RANDOM_DRAW_MIN, RANDOM_DRAW_MAX) >= RANDOM_TURN_HIGH and not suppressed:
        return RANDOM_TURN_FACTOR
    return 0.0


def double_draw_policy(draw: RandomDraw, suppress_x: bool, suppress_y: bool) -> Tuple[float, float]:
    """
    Random steering with two independent draws per axis.

    The low threshold is checked against one draw and, if that fails, the
    high threshold against a fresh draw. Makes 2 to 4 draws per call.

    Args:
        draw: Inclusive random integer generator
        suppress_x: Skip x steering this frame
        suppress_y: Skip y steering this frame

    Returns:
        Velocity change as (dx, dy)
    """
    dx = _double_draw_axis(draw, suppress_x)
    dy = _double_draw_axis(draw, suppress_y)
    return dx, dy


def _single_draw_axis(draw: RandomDraw, suppressed: bool) -> float:
    value = draw(RANDOM_DRAW_MIN, RANDOM_DRAW_MAX)
    if suppressed:
        return 0.0
    if value < RANDOM_TURN_LOW:
        return -RANDOM_TURN_FACTOR
    if value >= RANDOM_TURN_HIGH:
        return RANDOM_TURN_FACTOR
    return 0.0


def single_draw_policy(draw: RandomDraw, suppress_x: bool, suppress_y: bool) -> Tuple[float, float]:
    """Random steering with one draw per axis compared against both thresholds."""
    dx = _single_draw_axis(draw, suppress_x)
    dy = _single_draw_axis(draw, suppress_y)
    return dx, dy


STEERING_POLICIES = {
    "double_draw": double_draw_policy,
    "single_draw": single_draw_policy,
}


def resolve_steering_policy(name: str) -> SteeringPolicy:
    """
    Look up a steering policy by its config name.

    Raises:
        ValueError: If the name is not a known policy
    """
    try:
        return STEERING_POLICIES[name]
    except KeyError:
        known = ", ".join(sorted(STEERING_POLICIES))
        raise ValueError(f"Unknown steering policy '{name}' (expected one of: {known})") from None


class Boid(Agent):
    """
    A boid that steers by separation, alignment and cohesion.

    The three apply_* methods only accumulate into velocity; neighbor
    search is the flock's job. update() then adds boundary and random
    steering, clamps the velocity and moves the boid.
    """

    def __init__(self, x: int, y: int, xvel: float, yvel: float,
                 steering_policy: SteeringPolicy = double_draw_policy,
                 independent_axes: bool = False):
        """
        Initialize a boid.

        Args:
            x: Initial x position
            y: Initial y position
            xvel: Initial x velocity
            yvel: Initial y velocity
            steering_policy: Random steering rule used by update()
            independent_axes: Suppress random steering per axis instead of
                on both axes for any boundary contact
        """
        super().__init__(x, y, xvel, yvel)
        self.steering_policy = steering_policy
        self.independent_axes = independent_axes

    def apply_separation(self, avoid_factor: float, move_x: int, move_y: int) -> None:
        """
        Push away from crowding neighbors.

        Args:
            avoid_factor: Separation strength
            move_x: Summed x displacement away from too-close neighbors
            move_y: Summed y displacement away from too-close neighbors
        """
        self._xvel += move_x * avoid_factor
        self._yvel += move_y * avoid_factor

    def apply_alignment(self, align_factor: float, avg_xvel: float, avg_yvel: float) -> None:
        """
        Nudge velocity toward the neighborhood average velocity.

        Args:
            align_factor: Interpolation strength, normally in [0, 1]
            avg_xvel: Average x velocity of neighbors
            avg_yvel: Average y velocity of neighbors
        """
        self._xvel += (avg_xvel - self._xvel) * align_factor
        self._yvel += (avg_yvel - self._yvel) * align_factor

    def apply_cohesion(self, cohesion_factor: float, avg_xpos: float, avg_ypos: float) -> None:
        """
        Nudge velocity toward the neighborhood average position.

        Args:
            cohesion_factor: Attraction strength
            avg_xpos: Average x position of neighbors
            avg_ypos: Average y position of neighbors
        """
        self._xvel += (avg_xpos - self._xpos) * cohesion_factor
        self._yvel += (avg_ypos - self._ypos) * cohesion_factor

    def update(self, viewport) -> None:
        """
        Advance the boid by one frame.

        Args:
            viewport: Supplies live screen size and random draws
        """
        width = viewport.width
        height = viewport.height

        touch_x = False
        touch_y = False

        # Steer back in when inside the margin
        if self._xpos < SCREEN_MARGIN:
            self._xvel += BOUNDARY_TURN_FACTOR
            touch_x = True
        elif self._xpos > width - SCREEN_MARGIN:
            self._xvel -= BOUNDARY_TURN_FACTOR
            touch_x = True
        if self._ypos < SCREEN_MARGIN:
            self._yvel += BOUNDARY_TURN_FACTOR
            touch_y = True
        elif self._ypos > height - SCREEN_MARGIN:
            self._yvel -= BOUNDARY_TURN_FACTOR
            touch_y = True

        if self.independent_axes:
            suppress_x, suppress_y = touch_x, touch_y
        else:
            suppress_x = suppress_y = touch_x or touch_y

        dx, dy = self.steering_policy(viewport.random_value, suppress_x, suppress_y)
        self._xvel += dx
        self._yvel += dy

        self.clamp_velocity(MAX_VELOCITY)
        self.integrate()

    def draw(self, viewport, debug_mode: int = 0) -> None:
        """
        Draw the boid.

        Args:
            viewport: Viewport to draw on
            debug_mode: 0=normal, 1=velocity line
        """
        viewport.draw_circle(self._xpos, self._ypos, BOID_SIZE, BOID_COLOR)

        if debug_mode >= 1 and (self._xvel or self._yvel):
            end_pos = self.position + self.velocity.normalize() * 10
            viewport.draw_line((self._xpos, self._ypos), (end_pos.x, end_pos.y), BOID_COLOR)
