"""
Main entry point for the boids simulation.

Run with:
    python -m boidflock.main                          # Interactive simulation
    python -m boidflock.main --headless --frames 3000  # Headless run with stats export
"""

import os
from typing import List, Optional


# Set dummy video driver for headless runs
def set_headless():
    """Enable headless mode (no window)."""
    os.environ["SDL_VIDEODRIVER"] = "dummy"


def build_config(args):
    """
    Build a SimulationConfig from parsed command line arguments.

    Args:
        args: argparse namespace

    Returns:
        SimulationConfig with CLI overrides applied
    """
    from .core.config import SimulationConfig

    return SimulationConfig(
        screenWidth=args.width,
        screenHeight=args.height,
        resizable=not args.headless,
        boidCount=args.boids,
        steeringPolicy=args.policy,
        independentAxisSuppression=args.independent_axes,
        simultaneousUpdate=args.simultaneous,
        showPerimeter=args.perimeter,
        seed=args.seed,
    )


def run_interactive(config):
    """Run the interactive simulation with GUI."""
    from .simulation.interactive import Simulation

    print("=" * 60)
    print("Boids Flocking Simulation")
    print("=" * 60)
    print("\nControls:")
    print("  ESC   - Quit")
    print("  P     - Toggle margin perimeter")
    print("  V     - Toggle velocity lines")
    print("  R     - Respawn flock")
    print("  SPACE - Save stats to JSON")
    print(f"\nBoids: {config.boidCount}, steering policy: {config.steeringPolicy}")
    print("\nStarting simulation...")

    sim = Simulation(config)
    sim.run()


def run_headless(config, num_trials: int = 1, duration: int = 3000,
                 record_video: bool = False, plot: bool = True) -> dict:
    """
    Run the flock without a window and export statistics.

    Args:
        config: SimulationConfig to run
        num_trials: Number of trials (seed is offset per trial)
        duration: Duration in frames per trial
        record_video: Whether to record the first trial to video
        plot: Whether to write the time-series plot

    Returns:
        The report dictionary written to JSON
    """
    set_headless()

    from .simulation.headless import HeadlessSimulation
    from .analysis.export import export_timeseries_to_csv, export_run_report, calculate_aggregate_stats
    from .analysis.plotting import plot_flock_timeseries

    print("=" * 60)
    print("HEADLESS FLOCK RUN")
    print("=" * 60)
    print(f"Duration per trial: {duration} frames")
    print(f"Trials: {num_trials}")
    print(f"Boids: {config.boidCount}")
    if record_video:
        print("Video recording: ENABLED (trial 1)")
    print()

    base_config = config.to_dict()
    base_seed = config.seed if config.seed is not None else 42

    results = []
    for trial in range(num_trials):
        print(f"\nTrial {trial + 1}/{num_trials}")

        trial_config = base_config.copy()
        trial_config["seed"] = base_seed + trial

        enable_video = record_video and trial == 0
        video_file = f"flock_trial{trial + 1}.mp4" if enable_video else None

        sim = HeadlessSimulation(trial_config, enable_video=enable_video, video_filename=video_file)
        result = sim.run(duration)
        result["trial"] = trial + 1
        result["seed"] = trial_config["seed"]
        if enable_video:
            result["video_file"] = video_file
        results.append(result)

    aggregates = calculate_aggregate_stats(results)

    report = {
        "run_config": {"duration_frames": duration, "trials": num_trials},
        "config": base_config,
        "trial_results": results,
        "aggregates": aggregates,
    }

    export_run_report(report)
    export_timeseries_to_csv(results)

    print("\n" + "=" * 60)
    print("RUN SUMMARY")
    print("=" * 60)
    print(f"   Cohesion: {aggregates.get('avg_cohesion_mean', 0):.2f} "
          f"+/- {aggregates.get('avg_cohesion_std', 0):.2f}")
    print(f"   Avg Speed: {aggregates.get('avg_speed_mean', 0):.3f}")
    print(f"   Avg Neighbors: {aggregates.get('avg_neighbors_mean', 0):.2f}")
    print(f"   Max Off-screen: {aggregates.get('max_offscreen_mean', 0):.1f}")

    if plot:
        print("\nGenerating time-series plot...")
        plot_flock_timeseries(results)

    return report


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    import argparse

    parser = argparse.ArgumentParser(description="Boids Flocking Simulation")
    parser.add_argument("--headless", action="store_true", help="Run without a window and export stats")
    parser.add_argument("--frames", type=int, default=3000, help="Frames per headless trial")
    parser.add_argument("--trials", type=int, default=1, help="Number of headless trials")
    parser.add_argument("--record-video", action="store_true", help="Record video of the first headless trial")
    parser.add_argument("--no-plot", action="store_true", help="Skip the headless time-series plot")
    parser.add_argument("--boids", type=int, default=60, help="Number of boids")
    parser.add_argument("--width", type=int, default=800, help="Screen width")
    parser.add_argument("--height", type=int, default=600, help="Screen height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--policy", choices=["double_draw", "single_draw"], default="double_draw",
                        help="Random steering policy")
    parser.add_argument("--independent-axes", action="store_true",
                        help="Suppress random steering per axis at the boundary")
    parser.add_argument("--simultaneous", action="store_true",
                        help="Compute all neighbor aggregates before moving any boid")
    parser.add_argument("--perimeter", action="store_true", help="Draw the margin perimeter")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    if args.headless:
        run_headless(
            config,
            num_trials=args.trials,
            duration=args.frames,
            record_video=args.record_video,
            plot=not args.no_plot,
        )
    else:
        run_interactive(config)


if __name__ == "__main__":
    main()
