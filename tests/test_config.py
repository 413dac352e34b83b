from __future__ import annotations

from travel_routes.core import config as config_mod
from travel_routes.core.config import TravelConfig, get_config, reload_config


def test_defaults() -> None:
    cfg = TravelConfig()
    assert cfg.pins.primary_diameter_px == 30.0
    assert cfg.map.source_id == "routes"
    assert cfg.lines["flight"].dasharray == [2.0, 2.0]
    assert cfg.markers["car"].rotation_offset_deg == 180.0


def test_from_yaml_merges_with_defaults(tmp_path) -> None:
    path = tmp_path / "travel.yaml"
    path.write_text(
        """
pins: {primary_diameter_px: 36}
lines:
  ferry: {color: "#1f77b4", dasharray: [1, 3]}
markers:
  boat: {icon_id: boat-icon, icon_path: icons/boat.svg}
""",
        encoding="utf-8",
    )
    cfg = TravelConfig.from_yaml(path)
    assert cfg.pins.primary_diameter_px == 36
    assert cfg.pins.secondary_diameter_px == 18.0
    assert set(cfg.lines) == {"drive", "flight", "ferry"}
    assert cfg.markers["boat"].icon_id == "boat-icon"
    assert "car" in cfg.markers


def test_env_var_selects_config(tmp_path, monkeypatch) -> None:
    path = tmp_path / "travel.yaml"
    path.write_text("map: {source_id: trip}\n", encoding="utf-8")
    monkeypatch.setenv(config_mod.CONFIG_ENV_VAR, str(path))
    monkeypatch.setattr(config_mod, "_config", None)
    try:
        assert get_config().map.source_id == "trip"
    finally:
        monkeypatch.delenv(config_mod.CONFIG_ENV_VAR)
        reload_config()


def test_missing_file_falls_back_to_defaults(tmp_path) -> None:
    try:
        cfg = reload_config(tmp_path / "nope.yaml")
        assert cfg == TravelConfig()
    finally:
        reload_config()


def test_null_sections_use_defaults(tmp_path) -> None:
    path = tmp_path / "travel.yaml"
    path.write_text("pins:\ncurve:\nmap:\nlines:\nmarkers:\n", encoding="utf-8")
    assert TravelConfig.from_yaml(path) == TravelConfig()
