"""
Headless simulation for data collection and batch runs.
"""

import pygame
import random
import time
from typing import Dict, Optional, Any

try:
    import numpy as np
    import cv2
    VIDEO_SUPPORT = True
except ImportError:
    VIDEO_SUPPORT = False

from ..core.flock import Flock
from ..core.viewport import PygameViewport


# Frames between time-series samples
TRACKING_INTERVAL = 10
PROGRESS_INTERVAL = 1000


class HeadlessSimulation:
    """
    Flock simulation without a visible window.

    Renders to an off-screen surface (only when recording video) and
    collects flock statistics as it runs.
    """

    def __init__(self, config: Dict, enable_video: bool = False,
                 video_filename: Optional[str] = None, video_fps: int = 30):
        """
        Initialize headless simulation.

        Args:
            config: Configuration dictionary
            enable_video: Whether to record video
            video_filename: Output video filename
            video_fps: Video frame rate
        """
        pygame.init()

        self.config = config
        width = config["screenWidth"]
        height = config["screenHeight"]

        self.screen = pygame.Surface((width, height))
        self.rng = random.Random(config.get("seed"))
        self.viewport = PygameViewport(self.screen, rng=self.rng)

        # Video recording
        self.enable_video = enable_video and VIDEO_SUPPORT
        if enable_video and not VIDEO_SUPPORT:
            print("Warning: opencv-python/numpy not available. Skipping video.")
        self.video_writer = None
        self.video_filename = video_filename
        self.frame_skip = max(1, config.get("fpsTarget", 60) // video_fps)

        if self.enable_video and self.video_filename:
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.video_writer = cv2.VideoWriter(
                self.video_filename, fourcc, video_fps, (width, height)
            )
            print(f"  Recording video to: {self.video_filename}")

        self.flock = Flock.spawn(config["boidCount"], width, height, config, rng=self.rng)

        self.frame_count = 0
        self.start_time = time.time()

        self.stats = {
            "cohesion_sum": 0.0,
            "speed_sum": 0.0,
            "neighbors_sum": 0.0,
            "samples": 0,
            "max_offscreen": 0,
            "timeseries": [],
        }

    def update(self) -> None:
        """Update simulation state."""
        self.flock.step(self.viewport)
        self.frame_count += 1
        self._update_statistics()

    def _update_statistics(self) -> None:
        """Update tracking statistics."""
        flock_stats = self.flock.statistics()

        self.stats["cohesion_sum"] += flock_stats["cohesion"]
        self.stats["speed_sum"] += flock_stats["avg_speed"]
        self.stats["neighbors_sum"] += flock_stats["avg_neighbors"]
        self.stats["samples"] += 1
        self.stats["max_offscreen"] = max(self.stats["max_offscreen"], flock_stats["offscreen"])

        if self.frame_count % TRACKING_INTERVAL == 0:
            self.stats["timeseries"].append({
                "frame": self.frame_count,
                "cohesion": flock_stats["cohesion"],
                "avg_speed": flock_stats["avg_speed"],
                "avg_neighbors": flock_stats["avg_neighbors"],
                "offscreen": flock_stats["offscreen"],
            })

    def run(self, max_frames: int) -> Dict[str, Any]:
        """
        Run for the given number of frames.

        Args:
            max_frames: Frames to simulate

        Returns:
            Results dictionary with all statistics
        """
        print(f"Running headless simulation for {max_frames} frames...")

        while self.frame_count < max_frames:
            self.update()

            if self.enable_video and self.video_writer:
                if self.frame_count % self.frame_skip == 0:
                    self._render_frame()
                    self._capture_frame()

            if self.frame_count % PROGRESS_INTERVAL == 0:
                elapsed = time.time() - self.start_time
                progress = (self.frame_count / max_frames) * 100
                print(f"  Progress: {progress:.1f}% ({self.frame_count}/{max_frames} frames, "
                      f"{elapsed:.1f}s elapsed)")

        if self.video_writer:
            self.video_writer.release()
            print("  Video saved successfully!")

        pygame.quit()
        return self.get_results()

    def _render_frame(self) -> None:
        """Render frame for video capture."""
        self.screen.fill(self.config.get("backgroundColor", [0, 0, 0]))
        self.flock.draw(self.viewport, self.config.get("visualizationMode", 0))

        font = pygame.font.Font(None, 24)
        text = font.render(f"Frame: {self.frame_count}", True, (200, 200, 200))
        self.screen.blit(text, (10, 10))

    def _capture_frame(self) -> None:
        """Capture frame to video."""
        if not self.video_writer or not VIDEO_SUPPORT:
            return

        frame = pygame.surfarray.array3d(self.screen)
        frame = np.transpose(frame, (1, 0, 2))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
        self.video_writer.write(frame)

    def get_results(self) -> Dict[str, Any]:
        """
        Get run results.

        Returns:
            Dictionary containing averaged statistics and the time series
        """
        elapsed = time.time() - self.start_time
        samples = self.stats["samples"]

        avg_cohesion = 0
        avg_speed = 0
        avg_neighbors = 0
        if samples > 0:
            avg_cohesion = self.stats["cohesion_sum"] / samples
            avg_speed = self.stats["speed_sum"] / samples
            avg_neighbors = self.stats["neighbors_sum"] / samples

        final = self.flock.statistics()

        return {
            "frames": self.frame_count,
            "elapsed_time_seconds": elapsed,
            "boid_count": len(self.flock),
            "avg_cohesion": avg_cohesion,
            "avg_speed": avg_speed,
            "avg_neighbors": avg_neighbors,
            "final_cohesion": final["cohesion"],
            "final_offscreen": final["offscreen"],
            "max_offscreen": self.stats["max_offscreen"],
            "timeseries": self.stats["timeseries"],
        }
