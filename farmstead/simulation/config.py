"""Config — load game tunables from YAML files.

Grid size, the daily action budget and the spawn probabilities live in
YAML and are parsed into a typed dataclass here.  Seed and upgrade
definitions stay in the catalog modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_size: Rows and columns of the square farm.
        actions_per_day: Clicks available each day.
        initial_trash_density: Probability a cell starts as debris.
        trash_spawn_chance: Base nightly probability an empty cell fills
            with debris.
        coin_spawn_chance: Nightly probability an empty cell sprouts a
            coin once the luck upgrade is owned.
        starting_coins: Coins in the inventory on day 1.
        night_delay: Seconds between day end and the nightly pass.
    """

    seed: int = 42
    grid_size: int = 10
    actions_per_day: int = 10
    initial_trash_density: float = 0.4
    trash_spawn_chance: float = 0.25
    coin_spawn_chance: float = 0.05
    starting_coins: int = 10
    night_delay: float = 1.0

    def __post_init__(self) -> None:
        """Reject values the rules engine cannot work with.

        Raises:
            ValueError: If any tunable is out of range.
        """
        if self.grid_size < 1:
            msg = f"grid_size must be at least 1, got {self.grid_size}"
            raise ValueError(msg)
        if self.actions_per_day < 1:
            msg = f"actions_per_day must be at least 1, got {self.actions_per_day}"
            raise ValueError(msg)
        for name in ("initial_trash_density", "trash_spawn_chance", "coin_spawn_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be within [0, 1], got {value}"
                raise ValueError(msg)
        if self.starting_coins < 0:
            msg = f"starting_coins must be non-negative, got {self.starting_coins}"
            raise ValueError(msg)
        if self.night_delay < 0:
            msg = f"night_delay must be non-negative, got {self.night_delay}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_size=data.get("grid_size", cls.grid_size),
            actions_per_day=data.get("actions_per_day", cls.actions_per_day),
            initial_trash_density=data.get(
                "initial_trash_density",
                cls.initial_trash_density,
            ),
            trash_spawn_chance=data.get(
                "trash_spawn_chance",
                cls.trash_spawn_chance,
            ),
            coin_spawn_chance=data.get(
                "coin_spawn_chance",
                cls.coin_spawn_chance,
            ),
            starting_coins=data.get("starting_coins", cls.starting_coins),
            night_delay=data.get("night_delay", cls.night_delay),
        )
