from __future__ import annotations

import asyncio
import io

import pytest
from PIL import Image

from travel_routes.assets.icons import IconLoader, IconLoadError, decode_icon, fetch_icon_bytes
from travel_routes.core.viewport import Viewport
from travel_routes.mapview import HeadlessMapView

SVG = b'<svg xmlns="http://www.w3.org/2000/svg" width="8" height="8"></svg>'


def _map() -> HeadlessMapView:
    return HeadlessMapView(Viewport(center_lon=0.0, center_lat=0.0, zoom=2.0, width=256, height=256))


class _CountingFetch:
    def __init__(self, fail_first: int = 0) -> None:
        self.calls: list[str] = []
        self.fail_first = fail_first

    def __call__(self, source: str) -> bytes:
        self.calls.append(source)
        if len(self.calls) <= self.fail_first:
            raise OSError("network down")
        return SVG


def test_concurrent_loads_share_one_fetch() -> None:
    fetch = _CountingFetch()
    loader = IconLoader(fetch=fetch)
    map_view = _map()

    async def run():
        return await asyncio.gather(
            loader.load(map_view, "plane-icon", "icons/plane.svg"),
            loader.load(map_view, "plane-icon", "icons/plane.svg"),
        )

    first, second = asyncio.run(run())
    assert len(fetch.calls) == 1
    assert first is second
    assert first.media_type == "image/svg+xml"
    assert map_view.images["plane-icon"][1] == 2.0


def test_existing_image_is_a_noop() -> None:
    fetch = _CountingFetch()
    loader = IconLoader(fetch=fetch)
    map_view = _map()
    map_view.add_image("car-icon", object(), pixel_ratio=1.0)

    assert asyncio.run(loader.load(map_view, "car-icon", "icons/car.svg")) is None
    assert fetch.calls == []


def test_failure_raises_and_is_not_memoized() -> None:
    fetch = _CountingFetch(fail_first=1)
    loader = IconLoader(fetch=fetch)
    map_view = _map()

    with pytest.raises(IconLoadError):
        asyncio.run(loader.load(map_view, "car-icon", "icons/car.svg"))
    assert not map_view.has_image("car-icon")

    image = asyncio.run(loader.load(map_view, "car-icon", "icons/car.svg"))
    assert image is not None
    assert len(fetch.calls) == 2
    assert map_view.has_image("car-icon")


def test_relative_sources_resolve_against_base_dir(tmp_path) -> None:
    (tmp_path / "icons").mkdir()
    (tmp_path / "icons" / "car.svg").write_bytes(SVG)
    loader = IconLoader(base_dir=tmp_path)
    map_view = _map()

    image = asyncio.run(loader.load(map_view, "car-icon", "icons/car.svg"))
    assert image.data == SVG
    assert loader.resolve("https://example.org/car.svg") == "https://example.org/car.svg"


def test_missing_file_is_load_error(tmp_path) -> None:
    loader = IconLoader(base_dir=tmp_path)
    with pytest.raises(IconLoadError):
        asyncio.run(loader.load(_map(), "car-icon", "icons/missing.svg"))


def test_raster_icons_decode_to_png() -> None:
    buf = io.BytesIO()
    Image.new("RGB", (12, 6), (47, 158, 111)).save(buf, format="BMP")
    image = decode_icon("car-icon", buf.getvalue(), "car.bmp")
    assert image.media_type == "image/png"
    assert (image.width, image.height) == (12, 6)
    with Image.open(io.BytesIO(image.data)) as decoded:
        assert decoded.mode == "RGBA"


def test_undecodable_raster_is_load_error(tmp_path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG not really")
    loader = IconLoader()
    with pytest.raises(IconLoadError):
        asyncio.run(loader.load(_map(), "broken", str(path)))


def test_fetch_reads_local_files(tmp_path) -> None:
    path = tmp_path / "plane.svg"
    path.write_bytes(SVG)
    assert fetch_icon_bytes(str(path)) == SVG


def test_shared_loader_registers_on_every_map() -> None:
    fetch = _CountingFetch()
    loader = IconLoader(fetch=fetch)
    first_map, second_map = _map(), _map()

    first = asyncio.run(loader.load(first_map, "car-icon", "icons/car.svg"))
    second = asyncio.run(loader.load(second_map, "car-icon", "icons/car.svg", pixel_ratio=1.5))

    assert len(fetch.calls) == 1
    assert first is second
    assert first_map.images["car-icon"] == (first, 2.0)
    assert second_map.images["car-icon"] == (first, 1.5)
