"""Render layer declarations for route lines and markers."""
from __future__ import annotations

from typing import Any, Dict

from travel_routes.core.config import LineStyle, MarkerStyle
from travel_routes.routing.features import KIND_LINE, KIND_MARKER


def line_layer_id(mode: str) -> str:
    return f"{mode}-route-line"


def marker_layer_id(marker_kind: str) -> str:
    return f"{marker_kind}-route-marker"


def line_layer_spec(mode: str, style: LineStyle, source_id: str) -> Dict[str, Any]:
    """Line layer showing every route of one travel mode."""
    paint: Dict[str, Any] = {
        "line-color": style.color,
        "line-width": style.width,
        "line-opacity": style.opacity,
    }
    if style.dasharray:
        paint["line-dasharray"] = list(style.dasharray)
    return {
        "id": line_layer_id(mode),
        "type": "line",
        "source": source_id,
        "filter": ["all", ["==", ["get", "kind"], KIND_LINE], ["==", ["get", "mode"], mode]],
        "layout": {"line-join": "round", "line-cap": "round"},
        "paint": paint,
    }


def marker_layer_spec(marker_kind: str, style: MarkerStyle, source_id: str) -> Dict[str, Any]:
    """Symbol layer drawing the rotated icon of one marker kind.

    ``rotation_offset_deg`` is added to the feature angle for icons drawn
    facing the other way.
    """
    rotate: Any = ["get", "angle"]
    if style.rotation_offset_deg:
        rotate = ["+", rotate, style.rotation_offset_deg]
    spec: Dict[str, Any] = {
        "id": marker_layer_id(marker_kind),
        "type": "symbol",
        "source": source_id,
        "filter": ["all", ["==", ["get", "kind"], KIND_MARKER], ["==", ["get", "markerKind"], marker_kind]],
        "layout": {
            "icon-image": style.icon_id,
            "icon-size": style.size,
            "icon-rotation-alignment": "map",
            "icon-keep-upright": False,
            "icon-allow-overlap": True,
            "icon-ignore-placement": True,
            "icon-rotate": rotate,
        },
    }
    if style.min_zoom is not None:
        spec["minzoom"] = style.min_zoom
    return spec
