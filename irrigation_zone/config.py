"""
Configuration schema for the irrigation zone planner.

Defines the grid cell size, snap threshold, default ruler unit, the plan
store location and the log level. Loaded from YAML and validated at startup.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import yaml

from irrigation_zone.geometry.shapes import LengthUnit


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class PlannerConfig:
    """
    Main configuration for the planner.

    Immutable after construction (frozen dataclass).
    """

    # Grid sampling (shared by classification and segmentation)
    grid_cell_size: int = 10

    # Pixel radius within which a commit snaps onto the start point
    snap_threshold: float = 10.0

    # Unit stamped on a newly placed ruler
    default_unit: LengthUnit = LengthUnit.FEET

    # JSON file backing the plan key/value store
    store_path: Path = Path("./irrigation_plan.json")

    log_level: str = "INFO"

    def __post_init__(self):
        """Validate planner configuration."""
        if isinstance(self.grid_cell_size, bool) or not isinstance(self.grid_cell_size, int):
            raise ValueError(
                f"grid_cell_size must be an integer, got {self.grid_cell_size!r}"
            )
        if not 1 <= self.grid_cell_size <= 1000:
            raise ValueError(
                f"grid_cell_size must be in [1, 1000], got {self.grid_cell_size}"
            )

        if not self.snap_threshold > 0:
            raise ValueError(
                f"snap_threshold must be > 0, got {self.snap_threshold}"
            )

        try:
            object.__setattr__(self, "default_unit", LengthUnit(self.default_unit))
        except ValueError:
            raise ValueError(
                f"Invalid default_unit: {self.default_unit}. "
                f"Must be one of {[u.value for u in LengthUnit]}"
            )

        object.__setattr__(self, "store_path", Path(self.store_path))

        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "PlannerConfig":
        """
        Load configuration from YAML file.

        Missing keys keep their defaults.

        Example YAML:
            grid_cell_size: 10
            snap_threshold: 10
            default_unit: "m"
            store_path: "./plans/backyard.json"
            log_level: "INFO"
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        defaults = cls()
        return cls(
            grid_cell_size=data.get("grid_cell_size", defaults.grid_cell_size),
            snap_threshold=data.get("snap_threshold", defaults.snap_threshold),
            default_unit=data.get("default_unit", defaults.default_unit),
            store_path=Path(data.get("store_path", defaults.store_path)),
            log_level=data.get("log_level", defaults.log_level),
        )
