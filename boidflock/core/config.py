"""
Configuration classes and defaults for the boids simulation.
"""

from dataclasses import dataclass, field, fields
from typing import List, Literal, Optional


@dataclass
class SimulationConfig:
    """Configuration for the boids simulation."""

    # Screen settings
    screenWidth: int = 800
    screenHeight: int = 600
    resizable: bool = True

    # Agent counts
    boidCount: int = 60

    # Neighbor detection
    visualRange: int = 40
    protectedRange: int = 8

    # Rule factors
    avoidFactor: float = 0.05
    matchingFactor: float = 0.05
    centeringFactor: float = 0.0005

    # Random steering
    steeringPolicy: Literal["double_draw", "single_draw"] = "double_draw"
    independentAxisSuppression: bool = False

    # Driver behaviour
    simultaneousUpdate: bool = False
    seed: Optional[int] = None

    # Visualization
    fpsTarget: int = 60
    showPerimeter: bool = False
    visualizationMode: int = 0  # 0=normal, 1=velocity
    backgroundColor: List[int] = field(default_factory=lambda: [0, 0, 0])

    # Output
    statsOutputFile: str = "flock_stats.json"

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "screenWidth": self.screenWidth,
            "screenHeight": self.screenHeight,
            "resizable": self.resizable,
            "boidCount": self.boidCount,
            "visualRange": self.visualRange,
            "protectedRange": self.protectedRange,
            "avoidFactor": self.avoidFactor,
            "matchingFactor": self.matchingFactor,
            "centeringFactor": self.centeringFactor,
            "steeringPolicy": self.steeringPolicy,
            "independentAxisSuppression": self.independentAxisSuppression,
            "simultaneousUpdate": self.simultaneousUpdate,
            "seed": self.seed,
            "fpsTarget": self.fpsTarget,
            "showPerimeter": self.showPerimeter,
            "visualizationMode": self.visualizationMode,
            "backgroundColor": self.backgroundColor,
            "statsOutputFile": self.statsOutputFile,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create config from dictionary."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


# Default configuration for interactive simulation
DEFAULT_CONFIG = SimulationConfig()


# Boid geometry and limits (used across modules)
BOID_SIZE = 3.5
SCREEN_MARGIN = BOID_SIZE * 15.0
MAX_VELOCITY = 5.0

# Turning behaviour near boundaries and random steering
BOUNDARY_TURN_FACTOR = 1.9
RANDOM_TURN_FACTOR = 0.5
RANDOM_TURN_LOW = 20
RANDOM_TURN_HIGH = 80
RANDOM_DRAW_MIN = 0
RANDOM_DRAW_MAX = 100

# Colors
BOID_COLOR = (245, 245, 245)
PERIMETER_COLOR = (0, 228, 48)
