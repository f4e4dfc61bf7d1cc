import argparse
import logging

import arcade
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from raycast.config_models import SimulationConfig, load_config
from raycast.live_renderer import SimulationWindow
from raycast.simulation import Simulation

DEFAULT_CONFIG = "configs/basic_scene.yaml"

console = Console()


def parse_args():
    parser = argparse.ArgumentParser(description="2D Ray Casting")
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Path to the scene YAML config"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the wall layout")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Cast once from --x/--y and print the hits instead of opening a window",
    )
    parser.add_argument("--x", type=float, default=None)
    parser.add_argument("--y", type=float, default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def display_hits(simulation: Simulation):
    """Print one row per ray using rich formatting"""
    emitter = simulation.emitter
    table = Table(
        title=f"Hits from ({emitter.position.x:.1f}, {emitter.position.y:.1f})",
        show_header=True,
        header_style="bold blue",
    )
    table.add_column("Ray", style="cyan", justify="right")
    table.add_column("Angle", justify="right")
    table.add_column("Wall", justify="right")
    table.add_column("Distance", style="magenta", justify="right")
    table.add_column("Point")

    angle_step = simulation.config.emitter.angle_step_degrees
    start_angle = simulation.config.emitter.start_angle_degrees
    for i, result in enumerate(simulation.last_results):
        angle = f"{start_angle + i * angle_step:.0f}°"
        if result.intersects:
            point = f"({result.intersection.x:.2f}, {result.intersection.y:.2f})"
            table.add_row(
                str(i), angle, str(result.segment_index), f"{result.distance:.3f}", point
            )
        else:
            table.add_row(str(i), angle, "-", "-", "[red]no hit[/red]")

    console.print()
    console.print(table)
    console.print()


def run_headless(simulation: Simulation, x: float, y: float):
    simulation.step(x, y)
    display_hits(simulation)


def run_window(simulation: Simulation, config: SimulationConfig):
    window = SimulationWindow(
        window_width=int(config.world.width),
        window_height=int(config.world.height),
        target_fps=config.window.target_fps,
        title=config.window.title,
    )

    def update(dt):
        cursor_x, cursor_y = window.cursor_pos
        simulation.step(cursor_x, cursor_y)
        window.render(simulation.get_render_state())

    arcade.schedule(update, 1.0 / window.target_fps)

    console.print(
        Panel(
            "Mouse - Move the emitter\nClose window - Quit",
            title=f"Ray Casting @ {config.window.target_fps} FPS",
            border_style="blue",
            width=40,
        )
    )
    arcade.run()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1. Load Configuration
    config = load_config(args.config)
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    # 2. Build the scene
    simulation = Simulation(config)
    segments = simulation.reset()
    console.print(
        f"[bold green]Scene ready[/bold green]: {len(segments)} walls, "
        f"{simulation.emitter.num_rays} rays, seed={config.seed}"
    )

    # 3. Run
    if args.headless:
        x = args.x if args.x is not None else config.world.width / 2
        y = args.y if args.y is not None else config.world.height / 2
        run_headless(simulation, x, y)
    else:
        run_window(simulation, config)


if __name__ == "__main__":
    main()
