"""Pytest configuration - headless pygame and a scriptable viewport."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


class FakeViewport:
    """Viewport stand-in with fixed size and scripted random draws."""

    def __init__(self, width=800, height=600, draws=None, default_draw=50):
        self.width = width
        self.height = height
        self._draws = list(draws) if draws else []
        self.default_draw = default_draw
        self.draw_calls = []
        self.circles = []
        self.lines = []
        self.rects = []

    def random_value(self, lo, hi):
        self.draw_calls.append((lo, hi))
        if self._draws:
            return self._draws.pop(0)
        return self.default_draw

    def draw_circle(self, x, y, radius, color):
        self.circles.append((x, y, radius, color))

    def draw_line(self, start, end, color):
        self.lines.append((start, end, color))

    def draw_rect_lines(self, x, y, w, h, color):
        self.rects.append((x, y, w, h, color))


@pytest.fixture
def viewport():
    """800x600 viewport whose random draws never trigger steering."""
    return FakeViewport()


@pytest.fixture
def make_viewport():
    """Factory for viewports with custom size or scripted draws."""
    return FakeViewport
