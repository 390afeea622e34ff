"""
Configuration Module

Engine tunables, loaded from config/settings.yaml and overridable per run.
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_ANGLE_TOLERANCE_DEG,
    DEFAULT_MERGE_DISTANCE_PX,
    DEFAULT_SNAP_TOLERANCE_DEG,
    DEFAULT_MAX_SNAP_DISTANCE_PX,
    DEFAULT_INCLUDE_ORIGINAL,
    COORDINATE_DECIMALS,
    MAX_SNAP_TOLERANCE_DEG,
    MIN_MERGE_DISTANCE_PX,
    MergeStrategy,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class ConfigError(ValueError):
    """Raised when settings are present but invalid."""
    pass


@dataclass
class EngineConfig:
    """Configuration for one vectorization run."""
    angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE_DEG
    merge_distance: float = DEFAULT_MERGE_DISTANCE_PX
    snap_tolerance: float = DEFAULT_SNAP_TOLERANCE_DEG
    merge_strategy: str = MergeStrategy.GREEDY
    max_snap_distance: Optional[float] = DEFAULT_MAX_SNAP_DISTANCE_PX
    include_original: bool = DEFAULT_INCLUDE_ORIGINAL
    coordinate_decimals: int = COORDINATE_DECIMALS
    verbose: bool = False

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ConfigError: On the first invalid value
        """
        if self.angle_tolerance < 0 or self.angle_tolerance >= 180:
            raise ConfigError(f"angle_tolerance must be in [0, 180): {self.angle_tolerance}")
        if self.merge_distance < MIN_MERGE_DISTANCE_PX:
            raise ConfigError(f"merge_distance must be >= {MIN_MERGE_DISTANCE_PX}: {self.merge_distance}")
        if self.snap_tolerance < 0 or self.snap_tolerance >= MAX_SNAP_TOLERANCE_DEG:
            raise ConfigError(
                f"snap_tolerance must be in [0, {MAX_SNAP_TOLERANCE_DEG}): {self.snap_tolerance}"
            )
        if self.merge_strategy not in MergeStrategy.ALL:
            raise ConfigError(f"merge_strategy must be one of {MergeStrategy.ALL}: {self.merge_strategy}")
        if self.max_snap_distance is not None and self.max_snap_distance < 0:
            raise ConfigError(f"max_snap_distance must be >= 0: {self.max_snap_distance}")
        if self.coordinate_decimals < 0:
            raise ConfigError(f"coordinate_decimals must be >= 0: {self.coordinate_decimals}")

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with the non-None overrides applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **applied)


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the engine section of a settings YAML file.

    Args:
        path: Settings file (default: config/settings.yaml)

    Returns:
        Dictionary of settings, empty if the file does not exist

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        logger.debug(f"Settings file not found, using defaults: {settings_path}")
        return {}

    try:
        with open(settings_path, encoding="utf-8") as f:
            settings = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid settings file {settings_path}: {e}")

    if not isinstance(settings, dict):
        raise ConfigError(f"Settings must be a mapping: {settings_path}")

    return settings.get("engine", settings) or {}


def config_from_settings(settings: Dict[str, Any]) -> EngineConfig:
    """
    Build an EngineConfig from a settings dictionary.

    Unknown keys are ignored with a warning.
    """
    known = {f.name for f in fields(EngineConfig)}
    values = {}
    for key, value in settings.items():
        if key in known:
            values[key] = value
        else:
            logger.warning(f"Ignoring unknown setting: {key}")

    config = EngineConfig(**values)
    config.validate()
    return config


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Load and validate the engine configuration."""
    return config_from_settings(load_settings(path))
