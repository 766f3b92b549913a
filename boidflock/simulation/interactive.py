"""
Interactive simulation with pygame GUI.
"""

import pygame
import random
import json
import sys
from typing import Optional

from ..core.config import SimulationConfig
from ..core.flock import Flock
from ..core.viewport import PygameViewport


class Simulation:
    """
    Interactive boids simulation with pygame visualization.

    Supports keyboard controls for toggling overlays and respawning the
    flock while it runs.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        """
        Initialize the simulation.

        Args:
            config: Simulation configuration (uses defaults if None)
        """
        pygame.init()

        self.config = config if config else SimulationConfig()
        self.config_dict = self.config.to_dict()

        flags = pygame.RESIZABLE if self.config.resizable else 0
        self.screen = pygame.display.set_mode(
            (self.config.screenWidth, self.config.screenHeight), flags
        )
        pygame.display.set_caption("Boids")
        self.clock = pygame.time.Clock()

        self.rng = random.Random(self.config.seed)
        # No fixed surface: the viewport follows the display across resizes
        self.viewport = PygameViewport(rng=self.rng)

        self.flock = None
        self._spawn_flock()

        self.frame_count = 0
        self.running = True

        self.stats = {
            "avg_speed": 0,
            "avg_neighbors": 0,
            "flock_cohesion": 0,
            "offscreen": 0,
        }

    def _spawn_flock(self) -> None:
        """Spawn a fresh flock at random positions."""
        self.flock = Flock.spawn(
            self.config.boidCount,
            self.viewport.width,
            self.viewport.height,
            self.config_dict,
            rng=self.rng,
        )

    def update(self) -> None:
        """Update simulation state for one frame."""
        self.flock.step(self.viewport)
        self.frame_count += 1
        self._update_statistics()

    def _update_statistics(self) -> None:
        """Update simulation statistics."""
        flock_stats = self.flock.statistics()
        self.stats["avg_speed"] = flock_stats["avg_speed"]
        self.stats["avg_neighbors"] = flock_stats["avg_neighbors"]
        self.stats["flock_cohesion"] = flock_stats["cohesion"]
        self.stats["offscreen"] = flock_stats["offscreen"]

    def draw(self) -> None:
        """Render the current frame."""
        self.viewport.surface.fill(self.config.backgroundColor)
        self.flock.draw(self.viewport, self.config.visualizationMode)
        self._draw_stats()
        pygame.display.flip()

    def _draw_stats(self) -> None:
        """Draw statistics overlay."""
        font = pygame.font.Font(None, 24)
        y_offset = 10

        stats_text = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Boids: {len(self.flock)}",
            f"Avg Speed: {self.stats['avg_speed']:.2f}",
            f"Neighbors: {self.stats['avg_neighbors']:.1f}",
            f"Cohesion: {self.stats['flock_cohesion']:.1f}",
            f"Off-screen: {self.stats['offscreen']}",
            f"Policy: {self.config.steeringPolicy}",
        ]

        for text in stats_text:
            surface = font.render(text, True, (200, 200, 200))
            self.viewport.surface.blit(surface, (10, y_offset))
            y_offset += 25

    def save_stats(self) -> None:
        """Save simulation statistics to JSON file."""
        stats_data = {
            "frame_count": self.frame_count,
            "boid_count": len(self.flock),
            "statistics": self.stats,
            "config": self.config_dict,
        }

        try:
            with open(self.config.statsOutputFile, 'w') as f:
                json.dump(stats_data, f, indent=4)
            print(f"Stats saved to {self.config.statsOutputFile}")
        except OSError as e:
            print(f"Error saving stats: {e}")

    def run(self) -> None:
        """Run the simulation main loop."""
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event.key)

            self.update()
            self.draw()
            self.clock.tick(self.config.fpsTarget)

        self.save_stats()
        pygame.quit()
        sys.exit()

    def _handle_keydown(self, key: int) -> None:
        """Handle keyboard input."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_p:
            self.config.showPerimeter = not self.config.showPerimeter
            self.config_dict["showPerimeter"] = self.config.showPerimeter
        elif key == pygame.K_v:
            self.config.visualizationMode = (self.config.visualizationMode + 1) % 2
        elif key == pygame.K_r:
            self._spawn_flock()
            print(f"Respawned {self.config.boidCount} boids")
        elif key == pygame.K_SPACE:
            self.save_stats()
