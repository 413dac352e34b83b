"""Map view contract and an in-memory implementation of it.

The route engine only talks to a map through :class:`MapView`. A browser map
satisfies the same calls; :class:`HeadlessMapView` provides them in-process so
routes can be computed, exported and tested without a renderer.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from travel_routes.core.viewport import Viewport


log = logging.getLogger(__name__)

EVENTS = ("ready", "idle", "move", "zoom", "resize")

Handler = Callable[[], None]


class GeoJSONSourceLike(Protocol):
    def set_data(self, data: Dict[str, Any]) -> None:
        ...


class MapView(Protocol):
    """Calls the route engine needs from a map."""

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        ...

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        ...

    def has_image(self, image_id: str) -> bool:
        ...

    def add_image(self, image_id: str, image: Any, pixel_ratio: float = 1.0) -> None:
        ...

    def add_source(self, source_id: str, data: Dict[str, Any]) -> None:
        ...

    def get_source(self, source_id: str) -> GeoJSONSourceLike:
        ...

    def add_layer(self, spec: Dict[str, Any]) -> None:
        ...

    def on(self, event: str, handler: Handler) -> None:
        ...

    def once(self, event: str, handler: Handler) -> None:
        ...

    def off(self, event: str, handler: Handler) -> None:
        ...


class GeoJSONSource:
    """Holds one feature collection; every write replaces it wholesale."""

    def __init__(self, source_id: str, data: Dict[str, Any]) -> None:
        self.id = source_id
        self.data = data
        self.version = 0

    def set_data(self, data: Dict[str, Any]) -> None:
        self.data = data
        self.version += 1


class HeadlessMapView:
    """In-memory map view backed by a :class:`Viewport`.

    Camera changes emit the same events a browser map would: ``jump_to``
    emits ``move`` (and ``zoom`` when the zoom changed), ``resize`` emits
    ``resize`` and ``load`` emits ``ready`` then ``idle``.
    """

    def __init__(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self.loaded = False
        self.sources: Dict[str, GeoJSONSource] = {}
        self.layers: Dict[str, Dict[str, Any]] = {}
        self.images: Dict[str, Tuple[Any, float]] = {}
        self._handlers: Dict[str, List[Tuple[Handler, bool]]] = {name: [] for name in EVENTS}

    # -- projection -------------------------------------------------------
    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        return self.viewport.project(lon, lat)

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        return self.viewport.unproject(x, y)

    # -- style ------------------------------------------------------------
    def has_image(self, image_id: str) -> bool:
        return image_id in self.images

    def add_image(self, image_id: str, image: Any, pixel_ratio: float = 1.0) -> None:
        if image_id in self.images:
            raise ValueError(f"An image with id '{image_id}' already exists")
        self.images[image_id] = (image, pixel_ratio)

    def add_source(self, source_id: str, data: Dict[str, Any]) -> None:
        if source_id in self.sources:
            raise ValueError(f"Source '{source_id}' already exists")
        self.sources[source_id] = GeoJSONSource(source_id, data)

    def get_source(self, source_id: str) -> GeoJSONSource:
        return self.sources[source_id]

    def add_layer(self, spec: Dict[str, Any]) -> None:
        layer_id = spec["id"]
        if layer_id in self.layers:
            raise ValueError(f"Layer '{layer_id}' already exists")
        if spec.get("source") not in self.sources:
            raise ValueError(f"Layer '{layer_id}' references unknown source '{spec.get('source')}'")
        self.layers[layer_id] = spec

    # -- events -----------------------------------------------------------
    def _check_event(self, event: str) -> None:
        if event not in self._handlers:
            raise ValueError(f"Unknown event '{event}'. Valid: {EVENTS}")

    def on(self, event: str, handler: Handler) -> None:
        self._check_event(event)
        self._handlers[event].append((handler, False))

    def once(self, event: str, handler: Handler) -> None:
        self._check_event(event)
        self._handlers[event].append((handler, True))

    def off(self, event: str, handler: Handler) -> None:
        self._check_event(event)
        self._handlers[event] = [(h, one) for h, one in self._handlers[event] if h != handler]

    def fire(self, event: str) -> None:
        """Dispatch ``event`` to its handlers, one at a time, in registration order."""
        self._check_event(event)
        handlers = self._handlers[event]
        self._handlers[event] = [(h, one) for h, one in handlers if not one]
        for handler, _ in handlers:
            handler()

    # -- camera -----------------------------------------------------------
    def load(self) -> None:
        self.loaded = True
        self.fire("ready")
        self.fire("idle")

    def jump_to(self, center: Optional[Tuple[float, float]] = None, zoom: Optional[float] = None) -> None:
        previous = self.viewport
        viewport = previous
        if center is not None:
            viewport = viewport.with_center(*center)
        if zoom is not None:
            viewport = viewport.with_zoom(zoom)
        self.viewport = viewport
        log.debug("Camera moved to %.5f,%.5f z%.2f", viewport.center_lon, viewport.center_lat, viewport.zoom)
        self.fire("move")
        if viewport.zoom != previous.zoom:
            self.fire("zoom")

    def pan_by(self, dx: float, dy: float) -> None:
        self.viewport = self.viewport.pan_by(dx, dy)
        self.fire("move")

    def resize(self, width: int, height: int) -> None:
        self.viewport = self.viewport.with_size(width, height)
        self.fire("resize")
