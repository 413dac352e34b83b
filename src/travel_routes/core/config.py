"""Configuration loader and dataclasses for travel route settings."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import yaml


CONFIG_ENV_VAR = "TRAVEL_ROUTES_CONFIG"


@dataclass
class PinConfig:
    """Rendered pin sizes. Route anchors are trimmed to these circles."""
    primary_diameter_px: float = 30.0
    secondary_diameter_px: float = 18.0


@dataclass
class CurveConfig:
    """Default curve parameters for routes that do not override them."""
    curvature_factor: float = 0.18
    min_px: float = 18.0
    max_px: float = 55.0
    segments: int = 90
    bend: int = 1


@dataclass
class MapConfig:
    """Backing source and initial camera."""
    source_id: str = "routes"
    center_lon: float = -85.0
    center_lat: float = 12.0
    zoom: float = 5.0
    width: int = 1280
    height: int = 800
    tile_size: int = 512


@dataclass
class LineStyle:
    color: str = "#2f9e6f"
    width: float = 3.0
    opacity: float = 0.85
    dasharray: Optional[List[float]] = None


@dataclass
class MarkerStyle:
    icon_id: str = "car-icon"
    icon_path: str = "icons/car.svg"
    size: float = 3.5
    rotation_offset_deg: float = 0.0
    min_zoom: Optional[float] = None
    pixel_ratio: float = 2.0


def _default_lines() -> Dict[str, LineStyle]:
    return {
        "drive": LineStyle(),
        "flight": LineStyle(width=2.5, opacity=0.75, dasharray=[2.0, 2.0]),
    }


def _default_markers() -> Dict[str, MarkerStyle]:
    return {
        "car": MarkerStyle(rotation_offset_deg=180.0, min_zoom=8.0),
        "plane": MarkerStyle(icon_id="plane-icon", icon_path="icons/plane.svg", size=2.2),
    }


@dataclass
class TravelConfig:
    """Complete travel route configuration."""
    pins: PinConfig = field(default_factory=PinConfig)
    curve: CurveConfig = field(default_factory=CurveConfig)
    map: MapConfig = field(default_factory=MapConfig)
    lines: Dict[str, LineStyle] = field(default_factory=_default_lines)
    markers: Dict[str, MarkerStyle] = field(default_factory=_default_markers)

    @classmethod
    def from_yaml(cls, path: Path) -> "TravelConfig":
        """Load configuration from a YAML file."""
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        lines = _default_lines()
        for mode, style in (data.get('lines') or {}).items():
            lines[mode] = LineStyle(**style)
        markers = _default_markers()
        for kind, style in (data.get('markers') or {}).items():
            markers[kind] = MarkerStyle(**style)

        return cls(
            pins=PinConfig(**(data.get('pins') or {})),
            curve=CurveConfig(**(data.get('curve') or {})),
            map=MapConfig(**(data.get('map') or {})),
            lines=lines,
            markers=markers,
        )


# Global config instance - lazily loaded
_config: Optional[TravelConfig] = None


def project_root() -> Path:
    """Repository root (three levels above this package's ``core`` dir)."""
    return Path(__file__).resolve().parents[3]


def get_config(config_path: Optional[Path] = None) -> TravelConfig:
    """Get the global configuration, loading from file if not already loaded.

    Args:
        config_path: Path to the config file. If None, uses ``$TRAVEL_ROUTES_CONFIG``
            or ``configs/travel_defaults.yaml`` under the project root.

    Returns:
        The TravelConfig instance.
    """
    global _config

    if _config is None or config_path is not None:
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                config_path = Path(env_path)
            else:
                config_path = project_root() / "configs" / "travel_defaults.yaml"

        if config_path.exists():
            _config = TravelConfig.from_yaml(config_path)
        else:
            # Use defaults if config file not found
            _config = TravelConfig()

    return _config


def reload_config(config_path: Optional[Path] = None) -> TravelConfig:
    """Force reload of configuration from file."""
    global _config
    _config = None
    return get_config(config_path)


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("travel_routes")
