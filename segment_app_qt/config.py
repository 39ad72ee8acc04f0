"""
Segment Overlay - Configuration

Session configuration with validation, loadable from a YAML file and
overridable from the command line.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from segment_app_qt.constants import (
    DEFAULT_MASK_AREA_THRESHOLD,
    DEFAULT_MODE,
    DEFAULT_SHOW_OVERLAY,
    INTERACTION_MODES,
)
from segment_app_qt.state import InteractionMode, OverlaySettings
from segment_app_qt.utils.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SegmentAppConfig:
    """
    Configuration for one annotation session.

    Attributes:
        mode: Interaction mode ("click", "box" or "everything")
        mask_area_threshold: Initial mask area threshold in [0, 1]
        show_overlay: Whether masks are shown initially
        log_level: Logging level name
    """

    mode: str = DEFAULT_MODE
    mask_area_threshold: float = DEFAULT_MASK_AREA_THRESHOLD
    show_overlay: bool = DEFAULT_SHOW_OVERLAY
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration."""
        if self.mode not in INTERACTION_MODES:
            raise ConfigurationError(
                f"Invalid mode: {self.mode}", key="mode", value=self.mode
            )
        try:
            self.mask_area_threshold = float(self.mask_area_threshold)
        except (TypeError, ValueError):
            raise ConfigurationError(
                "mask_area_threshold must be a number",
                key="mask_area_threshold",
                value=self.mask_area_threshold,
            )
        if not 0.0 <= self.mask_area_threshold <= 1.0:
            raise ConfigurationError(
                "mask_area_threshold must be within [0, 1]",
                key="mask_area_threshold",
                value=self.mask_area_threshold,
            )
        if not isinstance(self.show_overlay, bool):
            raise ConfigurationError(
                "show_overlay must be true or false",
                key="show_overlay",
                value=self.show_overlay,
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level}",
                key="log_level",
                value=self.log_level,
            )

    @property
    def interaction_mode(self) -> InteractionMode:
        return InteractionMode(self.mode)

    def overlay_settings(self) -> OverlaySettings:
        """Initial overlay settings for the session."""
        return OverlaySettings(
            show_overlay=self.show_overlay,
            mask_area_threshold=self.mask_area_threshold,
        )

    def with_overrides(self, **overrides: Any) -> "SegmentAppConfig":
        """
        Return a copy with the given values replaced.

        None values are ignored so unset command line options keep the
        configured value.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SegmentAppConfig":
        """Create config from a dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys: {', '.join(unknown)}",
                details={"unknown": unknown},
            )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SegmentAppConfig":
        """
        Load config from a YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or holds invalid values
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to read config file: {e}", details={"path": str(path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping", details={"path": str(path)}
            )
        return cls.from_dict(data)
