"""Entry point for ``python -m meadow``.

Loads the default YAML config, builds the world and its colonies, and
runs the tick loop until one colony is left or the tick bound is hit.
With ``--render`` the run is shown in a Pygame window instead.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from meadow.simulation.config import SimulationConfig
from meadow.simulation.engine import SimulationEngine

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger("meadow")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, build the engine, run it, and report the outcome."""
    parser = argparse.ArgumentParser(
        prog="meadow",
        description="Meadow - tick-based colony survival simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the config's RNG seed",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Override the config's tick bound",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Watch the run in a Pygame window",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=5.0,
        help="Simulation ticks per second when rendering (default: 5)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    overrides: dict[str, int] = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.max_ticks is not None:
        overrides["max_ticks"] = args.max_ticks
    if overrides:
        config = dataclasses.replace(config, **overrides)

    engine = SimulationEngine(config=config)

    if args.render:
        from meadow.ui.pygame_client import PygameRenderer

        PygameRenderer(engine=engine, ticks_per_second=args.speed).run()
        engine.log_outcome()
    else:
        engine.run()

    for row in engine.summary():
        logger.info(
            "%s: %s, food=%d, survived %d ticks, %d members",
            row.name,
            "alive" if row.alive else "dead",
            row.food_supply,
            row.ticks_survived,
            row.members,
        )


if __name__ == "__main__":
    main()
