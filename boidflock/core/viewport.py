"""
Viewport wrapping the pygame display surface.

Agents never touch pygame directly for screen size, randomness or drawing;
they go through a viewport so the same update rule runs in the interactive
window, in headless runs and under test.
"""

import random
from typing import Optional, Sequence, Tuple

import pygame


class PygameViewport:
    """
    Rendering and windowing collaborator backed by pygame.

    Screen dimensions are read from the surface on every access, so a
    resized window is picked up on the next update.
    """

    def __init__(self, surface: Optional[pygame.Surface] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the viewport.

        Args:
            surface: Surface to draw on (defaults to the current display surface)
            rng: Random generator for steering draws (defaults to a fresh one)
        """
        self._surface = surface
        self.rng = rng if rng is not None else random.Random()

    @property
    def surface(self) -> pygame.Surface:
        if self._surface is not None:
            return self._surface
        return pygame.display.get_surface()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def random_value(self, lo: int, hi: int) -> int:
        """Uniform random integer in [lo, hi], both ends inclusive."""
        return self.rng.randint(lo, hi)

    def draw_circle(self, x: int, y: int, radius: float, color: Sequence[int]) -> None:
        pygame.draw.circle(self.surface, color, (x, y), radius)

    def draw_line(self, start: Tuple[float, float], end: Tuple[float, float],
                  color: Sequence[int]) -> None:
        pygame.draw.line(self.surface, color, start, end, 1)

    def draw_rect_lines(self, x: float, y: float, w: float, h: float,
                        color: Sequence[int]) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(int(x), int(y), int(w), int(h)), 1)
