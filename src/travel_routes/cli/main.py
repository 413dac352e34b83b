"""Typer CLI for travel route overlays."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from travel_routes.cli import routes_cmd
from travel_routes.core.config import setup_logging

app = typer.Typer(help="Curved travel routes between map waypoints")
app.add_typer(routes_cmd.app, name="routes")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def info(
    trip: Optional[Path] = typer.Option(None, "--trip", "-t", help="Trip YAML with waypoints and routes"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Style/defaults YAML"),
) -> None:
    """Show waypoints, routes and styles from the current configuration."""
    from travel_routes.core.config import get_config, project_root
    from travel_routes.data.trip import load_trip

    cfg = get_config(config)
    trip_path = trip or project_root() / "configs" / "trip.yaml"
    try:
        plan = load_trip(trip_path, cfg)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo("=== Waypoints ===")
    for wp in plan.waypoints.values():
        marker = "start" if wp.start else ("small" if wp.small else "pin")
        typer.echo(
            f"  {wp.label:<36} {wp.position.lon:>10.4f},{wp.position.lat:>9.4f}"
            f"  r={wp.visual_radius_px(cfg.pins):g}px [{marker}]"
        )

    typer.echo("")
    typer.echo("=== Routes ===")
    for route in plan.routes:
        c = route.curve
        typer.echo(
            f"  {route.route_id}: {route.mode}/{route.marker_kind} "
            f"factor={c.curvature_factor} clamp=[{c.min_px}, {c.max_px}] segments={c.segments} "
            f"bend={c.bend:+d} marker={route.marker_side * route.marker_offset_px:+g}px ({route.tangent})"
        )

    typer.echo("")
    typer.echo("=== Styles ===")
    for mode, style in cfg.lines.items():
        dash = f" dash={style.dasharray}" if style.dasharray else ""
        typer.echo(f"  line {mode}: {style.color} w={style.width} a={style.opacity}{dash}")
    for kind, style in cfg.markers.items():
        typer.echo(f"  marker {kind}: {style.icon_id} <- {style.icon_path} size={style.size}")


if __name__ == "__main__":
    app()
