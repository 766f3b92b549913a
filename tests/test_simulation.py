"""
Tests for boidflock/simulation and the boidflock/main.py CLI.
Runs pygame with the dummy video driver (see conftest.py).
"""

import json
from unittest.mock import patch

import pygame
import pytest

from boidflock.core.config import SimulationConfig, MAX_VELOCITY
from boidflock.core.viewport import PygameViewport
from boidflock.core.config import DEFAULT_CONFIG
from boidflock.simulation.headless import HeadlessSimulation, TRACKING_INTERVAL
from boidflock.simulation.interactive import Simulation
from boidflock import main as cli


class TestPygameViewport:
    """Production viewport over a pygame surface."""

    def test_size_follows_surface(self):
        surface = pygame.Surface((320, 200))
        vp = PygameViewport(surface)
        assert (vp.width, vp.height) == (320, 200)

    def test_random_value_inclusive(self):
        import random
        vp = PygameViewport(pygame.Surface((10, 10)), rng=random.Random(0))
        values = {vp.random_value(0, 2) for _ in range(200)}
        assert values == {0, 1, 2}

    def test_draw_circle_paints_surface(self):
        surface = pygame.Surface((20, 20))
        vp = PygameViewport(surface)
        vp.draw_circle(10, 10, 3.5, (245, 245, 245))
        assert tuple(surface.get_at((10, 10)))[:3] == (245, 245, 245)
        assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)

    def test_draw_rect_lines(self):
        surface = pygame.Surface((20, 20))
        vp = PygameViewport(surface)
        vp.draw_rect_lines(2, 2, 10, 10, (0, 228, 48))
        assert tuple(surface.get_at((2, 2)))[:3] == (0, 228, 48)
        assert tuple(surface.get_at((6, 6)))[:3] == (0, 0, 0)


class TestHeadlessSimulation:
    """Frame stepping and statistics collection without a window."""

    def make_config(self, **overrides):
        config = SimulationConfig(boidCount=15, screenWidth=320, screenHeight=240, seed=3).to_dict()
        config.update(overrides)
        return config

    def test_run_returns_results(self):
        results = HeadlessSimulation(self.make_config()).run(50)
        assert results["frames"] == 50
        assert results["boid_count"] == 15
        assert len(results["timeseries"]) == 50 // TRACKING_INTERVAL
        assert results["timeseries"][0]["frame"] == TRACKING_INTERVAL
        assert results["avg_speed"] <= MAX_VELOCITY * 2 ** 0.5

    def test_seeded_runs_match(self):
        a = HeadlessSimulation(self.make_config()).run(30)
        b = HeadlessSimulation(self.make_config()).run(30)
        assert a["timeseries"] == b["timeseries"]

    def test_velocity_bounded_every_frame(self):
        sim = HeadlessSimulation(self.make_config(simultaneousUpdate=True))
        for _ in range(40):
            sim.update()
            for b in sim.flock:
                assert abs(b.xvel) <= MAX_VELOCITY
                assert abs(b.yvel) <= MAX_VELOCITY
        pygame.quit()

    def test_render_frame(self):
        sim = HeadlessSimulation(self.make_config(showPerimeter=True))
        sim.update()
        sim._render_frame()
        pygame.quit()


class TestInteractiveSimulation:
    """Key handling and stats saving, without entering the main loop."""

    @pytest.fixture
    def sim(self, tmp_path):
        config = SimulationConfig(boidCount=5, screenWidth=320, screenHeight=240, seed=1,
                                  statsOutputFile=str(tmp_path / "stats.json"))
        sim = Simulation(config)
        yield sim
        pygame.quit()

    def test_escape_stops(self, sim):
        sim._handle_keydown(pygame.K_ESCAPE)
        assert sim.running is False

    def test_perimeter_toggle(self, sim):
        sim._handle_keydown(pygame.K_p)
        assert sim.config.showPerimeter is True
        assert sim.config_dict["showPerimeter"] is True
        sim._handle_keydown(pygame.K_p)
        assert sim.config_dict["showPerimeter"] is False

    def test_velocity_lines_toggle(self, sim):
        sim._handle_keydown(pygame.K_v)
        assert sim.config.visualizationMode == 1
        sim._handle_keydown(pygame.K_v)
        assert sim.config.visualizationMode == 0

    def test_respawn(self, sim):
        before = sim.flock
        sim._handle_keydown(pygame.K_r)
        assert sim.flock is not before
        assert len(sim.flock) == 5

    def test_space_saves_stats(self, sim):
        with patch.object(sim, "save_stats") as save:
            sim._handle_keydown(pygame.K_SPACE)
        save.assert_called_once()

    def test_save_stats_writes_json(self, sim):
        sim.update()
        sim.save_stats()
        with open(sim.config.statsOutputFile) as f:
            data = json.load(f)
        assert data["frame_count"] == 1
        assert data["boid_count"] == 5
        assert set(data["statistics"]) == {"avg_speed", "avg_neighbors", "flock_cohesion", "offscreen"}

    def test_save_stats_reports_unwritable_path(self, sim, tmp_path, capsys):
        sim.config.statsOutputFile = str(tmp_path / "missing" / "stats.json")
        sim.save_stats()
        assert "Error saving stats" in capsys.readouterr().out

    def test_default_config_not_shared(self):
        """Toggles on a default-configured simulation stay local to it."""
        sim = Simulation()
        try:
            sim._handle_keydown(pygame.K_p)
            sim._handle_keydown(pygame.K_v)
            assert sim.config is not DEFAULT_CONFIG
            assert DEFAULT_CONFIG.showPerimeter is False
            assert DEFAULT_CONFIG.visualizationMode == 0
        finally:
            pygame.quit()


class TestCli:
    """Argument parsing and the headless entry point."""

    def test_defaults(self):
        args = cli.parse_args([])
        config = cli.build_config(args)
        assert args.headless is False
        assert config.steeringPolicy == "double_draw"
        assert config.boidCount == 60

    def test_overrides(self):
        args = cli.parse_args([
            "--boids", "7", "--policy", "single_draw", "--independent-axes",
            "--simultaneous", "--perimeter", "--seed", "11", "--width", "640", "--height", "480",
        ])
        config = cli.build_config(args)
        assert config.boidCount == 7
        assert config.steeringPolicy == "single_draw"
        assert config.independentAxisSuppression is True
        assert config.simultaneousUpdate is True
        assert config.showPerimeter is True
        assert config.seed == 11
        assert (config.screenWidth, config.screenHeight) == (640, 480)

    def test_bad_policy_rejected(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["--policy", "nope"])

    def test_headless_run_writes_outputs(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cli.main(["--headless", "--frames", "20", "--trials", "2", "--boids", "8",
                  "--width", "320", "--height", "240", "--no-plot"])
        with open(tmp_path / "flock_run_results.json") as f:
            report = json.load(f)
        assert len(report["trial_results"]) == 2
        assert [r["seed"] for r in report["trial_results"]] == [42, 43]
        assert "avg_cohesion_mean" in report["aggregates"]
        assert (tmp_path / "flock_timeseries.csv").exists()

    def test_interactive_dispatch(self):
        with patch.object(cli, "run_interactive") as run:
            cli.main(["--boids", "3"])
        run.assert_called_once()
        assert run.call_args[0][0].boidCount == 3
