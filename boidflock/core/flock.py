"""
Flock driver: neighbor aggregation and per-frame stepping.
"""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

import pygame

from .agents.boid import Boid, resolve_steering_policy
from .config import SCREEN_MARGIN, MAX_VELOCITY, PERIMETER_COLOR


@dataclass
class NeighborAggregate:
    """Sums and averages gathered from one boid's neighborhood."""

    close_dx: int = 0
    close_dy: int = 0
    avg_xvel: float = 0.0
    avg_yvel: float = 0.0
    avg_xpos: float = 0.0
    avg_ypos: float = 0.0
    neighbors: int = 0


def aggregate_neighbors(boid: Boid, others: Iterable[Boid],
                        visual_range: float, protected_range: float) -> NeighborAggregate:
    """
    Gather separation sums and neighborhood averages for a boid.

    Boids closer than protected_range contribute to the separation sums;
    boids within visual_range (but outside protected_range) contribute to
    the velocity and position averages.

    Args:
        boid: The boid being steered
        others: All boids in the flock (boid itself is skipped)
        visual_range: Radius for alignment and cohesion
        protected_range: Radius for separation

    Returns:
        NeighborAggregate for this boid
    """
    close_dx = 0
    close_dy = 0
    xvel_sum = 0.0
    yvel_sum = 0.0
    xpos_sum = 0.0
    ypos_sum = 0.0
    neighbors = 0

    protected_sq = protected_range * protected_range
    visual_sq = visual_range * visual_range

    for other in others:
        if other is boid:
            continue

        dx = boid.xpos - other.xpos
        dy = boid.ypos - other.ypos

        if abs(dx) < visual_range and abs(dy) < visual_range:
            squared_distance = dx * dx + dy * dy

            if squared_distance < protected_sq:
                close_dx += dx
                close_dy += dy
            elif squared_distance < visual_sq:
                xvel_sum += other.xvel
                yvel_sum += other.yvel
                xpos_sum += other.xpos
                ypos_sum += other.ypos
                neighbors += 1

    if neighbors > 0:
        return NeighborAggregate(
            close_dx, close_dy,
            xvel_sum / neighbors, yvel_sum / neighbors,
            xpos_sum / neighbors, ypos_sum / neighbors,
            neighbors,
        )
    return NeighborAggregate(close_dx, close_dy)


class Flock:
    """
    Flat list of boids stepped once per frame.

    Neighbor search is a full O(n^2) scan with no spatial index.
    """

    def __init__(self, boids: Optional[List[Boid]] = None, config: Optional[dict] = None):
        """
        Initialize the flock.

        Args:
            boids: Initial boids (empty if None)
            config: Configuration dictionary (SimulationConfig.to_dict())
        """
        self.boids = boids if boids is not None else []
        self.config = config if config is not None else {}
        self.last_neighbor_counts: List[int] = []
        self._last_size = None

    @classmethod
    def spawn(cls, count: int, width: int, height: int, config: dict,
              rng: Optional[random.Random] = None) -> "Flock":
        """
        Create a flock with random positions inside the screen margins.

        Args:
            count: Number of boids
            width: Screen width
            height: Screen height
            config: Configuration dictionary
            rng: Random generator (defaults to a fresh one)

        Returns:
            New Flock
        """
        rng = rng if rng is not None else random.Random()
        policy = resolve_steering_policy(config.get("steeringPolicy", "double_draw"))
        independent = config.get("independentAxisSuppression", False)

        margin = int(SCREEN_MARGIN)
        boids = []
        for _ in range(count):
            x = rng.randint(margin, max(margin, width - margin))
            y = rng.randint(margin, max(margin, height - margin))
            xvel = rng.uniform(-MAX_VELOCITY, MAX_VELOCITY)
            yvel = rng.uniform(-MAX_VELOCITY, MAX_VELOCITY)
            boids.append(Boid(x, y, xvel, yvel, steering_policy=policy,
                              independent_axes=independent))
        return cls(boids, config)

    def __len__(self) -> int:
        return len(self.boids)

    def __iter__(self):
        return iter(self.boids)

    def _steer(self, boid: Boid, aggregate: NeighborAggregate) -> None:
        boid.apply_separation(self.config.get("avoidFactor", 0.05),
                              aggregate.close_dx, aggregate.close_dy)
        if aggregate.neighbors > 0:
            boid.apply_alignment(self.config.get("matchingFactor", 0.05),
                                 aggregate.avg_xvel, aggregate.avg_yvel)
            boid.apply_cohesion(self.config.get("centeringFactor", 0.0005),
                                aggregate.avg_xpos, aggregate.avg_ypos)

    def step(self, viewport) -> None:
        """
        Advance every boid by one frame.

        Sequential by default: each boid is steered and moved before the
        next one looks at its neighbors. With simultaneousUpdate all
        aggregates come from the state at the start of the frame.

        Args:
            viewport: Supplies screen size and random draws
        """
        visual_range = self.config.get("visualRange", 40)
        protected_range = self.config.get("protectedRange", 8)
        counts = []

        if self.config.get("simultaneousUpdate", False):
            aggregates = [aggregate_neighbors(b, self.boids, visual_range, protected_range)
                          for b in self.boids]
            for boid, aggregate in zip(self.boids, aggregates):
                self._steer(boid, aggregate)
                boid.update(viewport)
                counts.append(aggregate.neighbors)
        else:
            for boid in self.boids:
                aggregate = aggregate_neighbors(boid, self.boids, visual_range, protected_range)
                self._steer(boid, aggregate)
                boid.update(viewport)
                counts.append(aggregate.neighbors)

        self.last_neighbor_counts = counts
        self._last_size = (viewport.width, viewport.height)

    def draw(self, viewport, debug_mode: int = 0) -> None:
        """
        Draw all boids, plus the margin perimeter when enabled.

        Args:
            viewport: Viewport to draw on
            debug_mode: 0=normal, 1=velocity lines
        """
        if self.config.get("showPerimeter", False):
            viewport.draw_rect_lines(
                SCREEN_MARGIN, SCREEN_MARGIN,
                viewport.width - 2 * SCREEN_MARGIN, viewport.height - 2 * SCREEN_MARGIN,
                PERIMETER_COLOR,
            )
        for boid in self.boids:
            boid.draw(viewport, debug_mode)

    def statistics(self) -> dict:
        """
        Summarize the current flock state.

        Returns:
            Dictionary with boid count, average speed, average neighbor
            count, cohesion (mean distance to centroid) and off-screen count
        """
        stats = {
            "boid_count": len(self.boids),
            "avg_speed": 0.0,
            "avg_neighbors": 0.0,
            "cohesion": 0.0,
            "offscreen": 0,
        }
        if not self.boids:
            return stats

        total_speed = sum(b.velocity.length() for b in self.boids)
        stats["avg_speed"] = total_speed / len(self.boids)

        if self.last_neighbor_counts:
            stats["avg_neighbors"] = sum(self.last_neighbor_counts) / len(self.last_neighbor_counts)

        centroid = pygame.Vector2(0, 0)
        for b in self.boids:
            centroid += b.position
        centroid /= len(self.boids)

        total_dist = sum(b.position.distance_to(centroid) for b in self.boids)
        stats["cohesion"] = total_dist / len(self.boids)

        if self._last_size is not None:
            width, height = self._last_size
            stats["offscreen"] = sum(
                1 for b in self.boids
                if not (0 <= b.xpos < width and 0 <= b.ypos < height)
            )

        return stats
