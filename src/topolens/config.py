"""
Global Configuration and Visual Defaults.

This module centralizes the constants that define how a topology view looks
when idle, focused and dimmed, plus the optional per-project overrides read
from ``.topolens/config.yaml``.
"""

from pathlib import Path
from typing import FrozenSet, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import ConfigError
from .core.types import NodeKind

# --- Node opacity ---
RELATED_OPACITY = 1.0
DIMMED_OPACITY = 0.2

# --- Edge strokes ---
IDLE_EDGE_OPACITY = 0.6
IDLE_EDGE_WIDTH = 2.0
IDLE_DASHED_EDGE_WIDTH = 1.0
HIGHLIGHT_EDGE_OPACITY = 1.0
HIGHLIGHT_EDGE_WIDTH = 3.0
DIMMED_EDGE_OPACITY = 0.1
DIMMED_EDGE_WIDTH = 1.0

# --- Palette ---
HIGHLIGHT_COLOR = "#00a6fb"
NEUTRAL_COLOR = "#333"
IDLE_COLOR = "#555"

# --- Camera ---
FOCUS_ZOOM = 1.2
FOCUS_DURATION_MS = 1000
LAYER_ZOOM = 1.0
LAYER_DURATION_MS = 1000
FIT_PADDING = 0.2
FIT_DURATION_MS = 800

# Backbone kinds that stay visible regardless of active app: filters
APP_FILTER_EXEMPT_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.NODE,
    NodeKind.NAMESPACE,
    NodeKind.EXTERNAL,
})

DEFAULT_CONFIG_PATH = Path(".topolens/config.yaml")


class StyleConfig(BaseModel):
    """Visual constants used by the dependency highlighter."""
    dimmed_opacity: float = Field(default=DIMMED_OPACITY, ge=0.0, le=1.0)
    idle_edge_opacity: float = Field(default=IDLE_EDGE_OPACITY, ge=0.0, le=1.0)
    dimmed_edge_opacity: float = Field(default=DIMMED_EDGE_OPACITY, ge=0.0, le=1.0)
    highlight_edge_width: float = Field(default=HIGHLIGHT_EDGE_WIDTH, gt=0.0)
    highlight_color: str = HIGHLIGHT_COLOR
    neutral_color: str = NEUTRAL_COLOR
    idle_color: str = IDLE_COLOR


class CameraConfig(BaseModel):
    focus_zoom: float = Field(default=FOCUS_ZOOM, gt=0.0)
    layer_zoom: float = Field(default=LAYER_ZOOM, gt=0.0)
    fit_padding: float = Field(default=FIT_PADDING, ge=0.0)


class FilterConfig(BaseModel):
    default: List[str] = Field(default_factory=list)


class TopologyConfig(BaseModel):
    """Contents of ``.topolens/config.yaml``."""
    version: str = "1.0"
    style: StyleConfig = Field(default_factory=StyleConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)


def load_config(path: Optional[Path] = None) -> TopologyConfig:
    """
    Load the project config, falling back to defaults when no file exists.

    Raises:
        ConfigError: If the file exists but is not valid YAML or does not
            match the expected schema.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return TopologyConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    try:
        return TopologyConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def dump_config(config: TopologyConfig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
