"""Route commands: compute features and layer declarations for a viewport."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from travel_routes.assets.icons import IconLoader
from travel_routes.core.config import get_config, project_root
from travel_routes.core.viewport import Viewport
from travel_routes.data.trip import load_trip
from travel_routes.mapview import HeadlessMapView
from travel_routes.routing.registry import MapContext, RouteRegistry

app = typer.Typer(help="Compute curved route overlays for a map viewport")


def _default_trip() -> Path:
    return project_root() / "configs" / "trip.yaml"


def _install(
    trip_path: Optional[Path],
    config_path: Optional[Path],
    center: Optional[str],
    zoom: Optional[float],
    width: Optional[int],
    height: Optional[int],
) -> tuple[HeadlessMapView, RouteRegistry, list[str]]:
    config = get_config(config_path)
    try:
        trip = load_trip(trip_path or _default_trip(), config)
        if center:
            lon, lat = map(float, center.split(","))
        else:
            lon, lat = config.map.center_lon, config.map.center_lat
        viewport = Viewport(
            center_lon=lon,
            center_lat=lat,
            zoom=config.map.zoom if zoom is None else zoom,
            width=config.map.width if width is None else width,
            height=config.map.height if height is None else height,
            tile_size=config.map.tile_size,
        )
        registry = RouteRegistry(trip.routes, MapContext(source_id=config.map.source_id))
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    map_view = HeadlessMapView(viewport)
    failed = asyncio.run(registry.install(map_view, config, IconLoader(base_dir=project_root())))
    map_view.load()
    return map_view, registry, failed


@app.command()
def features(
    trip: Optional[Path] = typer.Option(None, "--trip", "-t", help="Trip YAML with waypoints and routes"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Style/defaults YAML"),
    center: Optional[str] = typer.Option(None, "--center", help="Map center lon,lat"),
    zoom: Optional[float] = typer.Option(None, "--zoom", "-z", help="Zoom level"),
    width: Optional[int] = typer.Option(None, "--width", help="Viewport width in px"),
    height: Optional[int] = typer.Option(None, "--height", help="Viewport height in px"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
) -> None:
    """Print the route FeatureCollection as drawn under the given camera."""
    map_view, registry, failed = _install(trip, config, center, zoom, width, height)
    for icon_id in failed:
        typer.echo(f"Warning: icon '{icon_id}' failed to load, markers omitted", err=True)
    collection = map_view.get_source(registry.context.source_id).data
    text = json.dumps(collection, indent=2)
    if output:
        output.write_text(text)
        typer.echo(f"Saved {len(collection['features'])} features to {output}")
    else:
        typer.echo(text)


@app.command()
def layers(
    trip: Optional[Path] = typer.Option(None, "--trip", "-t", help="Trip YAML with waypoints and routes"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Style/defaults YAML"),
) -> None:
    """Print the layer declarations the routes need."""
    map_view, _, _ = _install(trip, config, None, None, None, None)
    typer.echo(json.dumps(list(map_view.layers.values()), indent=2))
