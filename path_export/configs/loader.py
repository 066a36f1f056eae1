"""Configuration loader for path export.

Loads and validates ``defaults.yaml`` (or a user file with the same
layout) into a frozen :class:`GeneralConfig`.  Unit of length, point
density, robot size and default speed limits all come from the config;
the export formats never hardcode them.

Usage::

    from path_export.configs.loader import load_config
    cfg = load_config()                          # packaged defaults
    cfg = load_config("/custom/editor.yaml")     # explicit path
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from path_export.paths.model import PathConfig
from path_export.units import Quantity, UnitOfLength, UnitOfSpeed
from path_export.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("defaults.yaml")

SPEED_LIMIT_RANGE = (0.0, 600.0)
"""Bounds accepted for ``path_defaults.speed_min`` / ``speed_max``."""


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RobotConfig:
    """Robot footprint in the unit of length."""

    width: float = 30.0
    height: float = 30.0
    holonomic: bool = False


@dataclass(frozen=True)
class GeneralConfig:
    """Editor-wide settings read by the sampler and the export formats.

    Parameters
    ----------
    uol : UnitOfLength
        Unit every path coordinate is stored in.
    speed_unit : UnitOfSpeed
        Unit of all speed limits and sampled speeds.
    point_density : float
        Waypoint spacing in ``uol``.
    robot : RobotConfig
        Robot footprint (metadata only).
    path_defaults : PathConfig
        Speed limits given to newly created paths.
    """

    uol: UnitOfLength = UnitOfLength.CENTIMETER
    speed_unit: UnitOfSpeed = UnitOfSpeed.RPM
    point_density: float = 2.0
    robot: RobotConfig = field(default_factory=RobotConfig)
    path_defaults: PathConfig = field(default_factory=PathConfig)

    def __post_init__(self) -> None:
        if not math.isfinite(self.point_density) or self.point_density <= 0:
            raise ConfigError(
                f"point_density must be > 0, got {self.point_density}"
            )
        if self.path_defaults.speed_unit is not self.speed_unit:
            raise ConfigError(
                f"path_defaults speed unit {self.path_defaults.speed_unit.symbol} "
                f"does not match {self.speed_unit.symbol}"
            )

    @property
    def density(self) -> Quantity:
        """Point density as a quantity in ``uol``."""
        return Quantity(self.point_density, self.uol)


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    raw = data.get(name) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(raw).__name__}")
    return raw


def _parse_units(data: dict[str, Any]) -> tuple[UnitOfLength, UnitOfSpeed]:
    """Parse the ``units`` section."""
    try:
        uol = UnitOfLength.from_symbol(str(data.get("length", "cm")))
        speed = UnitOfSpeed.from_symbol(str(data.get("speed", "rpm")))
    except ValueError as e:
        raise ConfigError(str(e)) from e
    return uol, speed


def _parse_robot(data: dict[str, Any]) -> RobotConfig:
    """Parse the ``robot`` section."""
    width = float(data.get("width", 30.0))
    height = float(data.get("height", 30.0))
    if width <= 0 or height <= 0:
        raise ConfigError(
            f"robot width/height must be > 0, got {width} x {height}"
        )
    return RobotConfig(
        width=width,
        height=height,
        holonomic=bool(data.get("holonomic", False)),
    )


def _parse_path_defaults(
    data: dict[str, Any], speed_unit: UnitOfSpeed,
) -> PathConfig:
    """Parse ``path_defaults`` and check the speed limit range."""
    lo, hi = SPEED_LIMIT_RANGE
    speed_min = float(data.get("speed_min", 20.0))
    speed_max = float(data.get("speed_max", 100.0))
    if not lo <= speed_min < speed_max <= hi:
        raise ConfigError(
            f"path_defaults speed limits must satisfy "
            f"{lo} <= speed_min < speed_max <= {hi}, "
            f"got {speed_min} / {speed_max}"
        )
    return PathConfig(
        speed_min=speed_min,
        speed_max=speed_max,
        speed_unit=speed_unit,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_config(data: dict[str, Any]) -> GeneralConfig:
    """Build a :class:`GeneralConfig` from a raw mapping.

    Raises
    ------
    ConfigError
        If any section is malformed or out of range.
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config root must be a mapping, got {type(data).__name__}"
        )
    uol, speed_unit = _parse_units(_section(data, "units"))
    sampling = _section(data, "sampling")
    try:
        density = float(sampling.get("point_density", 2.0))
        return GeneralConfig(
            uol=uol,
            speed_unit=speed_unit,
            point_density=density,
            robot=_parse_robot(_section(data, "robot")),
            path_defaults=_parse_path_defaults(
                _section(data, "path_defaults"), speed_unit,
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e


def load_config(path: str | Path | None = None) -> GeneralConfig:
    """Load and validate an editor config file.

    Parameters
    ----------
    path : str | Path | None
        YAML file; ``None`` loads the packaged ``defaults.yaml``.

    Returns
    -------
    GeneralConfig
        Validated configuration.

    Raises
    ------
    ConfigError
        If the file is missing, unparsable or invalid.
    """
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        data = load_yaml(cfg_path)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e
    except Exception as e:
        raise ConfigError(f"Failed to read config {cfg_path}: {e}") from e

    cfg = parse_config(data or {})
    logger.debug(
        "Loaded config %s: uol=%s density=%s",
        cfg_path, cfg.uol.symbol, cfg.point_density,
    )
    return cfg
