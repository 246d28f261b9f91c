"""Entry point for ``python -m farmstead``.

Loads the default YAML config, builds a rules engine and either opens a
Pygame window to play in or lets the greedy autoplayer run headless.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from farmstead.simulation.autoplay import play
from farmstead.simulation.config import GameConfig
from farmstead.simulation.engine import RulesEngine
from farmstead.simulation.ports import LoggingPresentation
from farmstead.simulation.scheduler import DeferredScheduler, ImmediateScheduler

_DEFAULT_CONFIG = pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"

logger = logging.getLogger(__name__)


def main() -> None:
    """Parse CLI args, create engine, launch client or autoplayer."""
    parser = argparse.ArgumentParser(
        prog="farmstead",
        description="Farmstead - grid farming with a daily action budget",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=48,
        help="Pixel size per grid cell (default: 48)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the autoplayer without a window",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=10,
        help="Days to autoplay in headless mode (default: 10)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig.from_yaml(args.config)

    if args.headless:
        presentation = LoggingPresentation()
        engine = RulesEngine(
            config=config,
            renderer=presentation,
            ui=presentation,
            scheduler=ImmediateScheduler(),
        )
        engine.start()
        play(engine, args.days)
        logger.info(
            "Finished on day %d with %s",
            engine.state.session.day,
            engine.state.inventory.snapshot(),
        )
        return

    from farmstead.ui.pygame_client import PygameClient

    scheduler = DeferredScheduler()
    client = PygameClient(grid_size=config.grid_size, cell_size=args.cell_size)
    engine = RulesEngine(config=config, renderer=client, ui=client, scheduler=scheduler)
    client.run(engine, scheduler, fps=args.fps)


if __name__ == "__main__":
    main()
