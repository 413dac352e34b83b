from __future__ import annotations

import json

from typer.testing import CliRunner

from travel_routes.cli.main import app

runner = CliRunner()


def test_features_written_to_file(tmp_path) -> None:
    out = tmp_path / "routes.geojson"
    result = runner.invoke(
        app,
        [
            "routes", "features",
            "--center", "-85.0,12.0",
            "--zoom", "7",
            "--width", "1024",
            "--height", "768",
            "--output", str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["type"] == "FeatureCollection"
    kinds = [(f["properties"]["routeId"], f["properties"]["kind"]) for f in data["features"]]
    assert kinds == [
        ("guatemala_to_antigua", "line"),
        ("guatemala_to_antigua", "marker"),
        ("sansalvador_to_pty", "line"),
        ("sansalvador_to_pty", "marker"),
    ]


def test_features_bad_trip_exits_nonzero(tmp_path) -> None:
    trip = tmp_path / "trip.yaml"
    trip.write_text("routes:\n  - {id: x, from: Nowhere, to: Elsewhere}\n", encoding="utf-8")
    result = runner.invoke(app, ["routes", "features", "--trip", str(trip)])
    assert result.exit_code == 1


def test_layers_lists_declarations() -> None:
    result = runner.invoke(app, ["routes", "layers"])
    assert result.exit_code == 0, result.output
    ids = [layer["id"] for layer in json.loads(result.stdout)]
    assert ids == ["drive-route-line", "flight-route-line", "car-route-marker", "plane-route-marker"]


def test_info_lists_waypoints_and_routes() -> None:
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0, result.output
    assert "Antigua Guatemala (2 Nights)" in result.output
    assert "sansalvador_to_pty: flight/plane" in result.output


def test_features_rejects_zero_width() -> None:
    result = runner.invoke(app, ["routes", "features", "--width", "0"])
    assert result.exit_code == 1
