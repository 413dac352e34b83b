"""Route registry: rebuilds every route on each viewport event and publishes them."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, TYPE_CHECKING

from travel_routes.assets.icons import IconLoader, IconLoadError
from travel_routes.core.config import LineStyle, TravelConfig
from travel_routes.geometry.bridge import CoordinateBridge
from travel_routes.routing.features import (
    FeatureCollection,
    RouteDefinition,
    build_route_features,
    empty_collection,
)
from travel_routes.routing.layers import line_layer_spec, marker_layer_spec

if TYPE_CHECKING:
    from travel_routes.mapview import MapView


log = logging.getLogger(__name__)

# (event, once) pairs subscribed by RouteRegistry.bind
VIEWPORT_EVENTS: Tuple[Tuple[str, bool], ...] = (
    ("ready", True),
    ("idle", True),
    ("move", False),
    ("zoom", False),
    ("resize", False),
)


@dataclass
class MapContext:
    """What the registry has declared on its map."""
    source_id: str = "routes"
    source_declared: bool = False
    declared_layers: Set[str] = field(default_factory=set)
    bindings: List[Tuple[str, Callable[[], None]]] = field(default_factory=list)


class RouteRegistry:
    """Ordered, immutable set of routes and the scheduler that republishes them.

    The registry is the only writer of its data source. Each publish rebuilds
    all features from the definitions and the current camera and replaces the
    source data in one call.
    """

    def __init__(self, definitions: Iterable[RouteDefinition], context: Optional[MapContext] = None) -> None:
        defs = tuple(definitions)
        seen: Set[str] = set()
        for defn in defs:
            if defn.route_id in seen:
                raise ValueError(f"Duplicate route id '{defn.route_id}'")
            seen.add(defn.route_id)
        self.definitions = defs
        self.context = context or MapContext()
        self.map_view: Optional["MapView"] = None

    def __len__(self) -> int:
        return len(self.definitions)

    def _require_map(self, map_view: Optional["MapView"]) -> "MapView":
        map_view = map_view or self.map_view
        if map_view is None:
            raise RuntimeError("RouteRegistry is not attached to a map view")
        return map_view

    def recompute(self, map_view: Optional["MapView"] = None) -> FeatureCollection:
        """Build the features of every route, in registry order."""
        bridge = CoordinateBridge(self._require_map(map_view))
        collection = empty_collection()
        for defn in self.definitions:
            collection["features"].extend(build_route_features(bridge, defn))
        log.debug("Recomputed %d routes into %d features", len(self.definitions), len(collection["features"]))
        return collection

    def publish(self) -> FeatureCollection:
        """Recompute and replace the source data in a single write."""
        map_view = self._require_map(None)
        collection = self.recompute(map_view)
        map_view.get_source(self.context.source_id).set_data(collection)
        return collection

    # -- declarations ------------------------------------------------------
    def ensure_source(self, map_view: "MapView") -> None:
        if self.context.source_declared:
            return
        map_view.add_source(self.context.source_id, empty_collection())
        self.context.source_declared = True

    def declare_layer(self, map_view: "MapView", spec: Dict) -> bool:
        """Add ``spec`` unless this registry already declared a layer with its id."""
        if spec["id"] in self.context.declared_layers:
            return False
        map_view.add_layer(spec)
        self.context.declared_layers.add(spec["id"])
        return True

    # -- subscriptions -----------------------------------------------------
    def bind(self, map_view: "MapView") -> None:
        """Subscribe to viewport events; each one triggers :meth:`publish`."""
        if self.context.bindings:
            raise RuntimeError("RouteRegistry is already bound; call unbind() first")
        self.map_view = map_view
        for event, once in VIEWPORT_EVENTS:
            handler = self._on_viewport_event
            if once:
                map_view.once(event, handler)
            else:
                map_view.on(event, handler)
            self.context.bindings.append((event, handler))

    def unbind(self) -> None:
        if self.map_view is None:
            return
        for event, handler in self.context.bindings:
            self.map_view.off(event, handler)
        self.context.bindings.clear()

    def _on_viewport_event(self) -> None:
        self.publish()

    # -- setup -------------------------------------------------------------
    async def install(
        self,
        map_view: "MapView",
        config: TravelConfig,
        loader: Optional[IconLoader] = None,
    ) -> List[str]:
        """Declare source and layers, load marker icons, bind events and publish once.

        Marker layers whose icon fails to load are left out, so their routes
        show as lines only.

        Returns:
            Ids of the icons that failed to load.
        """
        loader = loader or IconLoader()
        self.map_view = map_view
        self.ensure_source(map_view)

        for mode in _unique(d.mode for d in self.definitions):
            style = config.lines.get(mode, LineStyle())
            self.declare_layer(map_view, line_layer_spec(mode, style, self.context.source_id))

        kinds = []
        for kind in _unique(d.marker_kind for d in self.definitions):
            if kind not in config.markers:
                log.warning("No marker style for '%s'; its routes render without markers", kind)
                continue
            kinds.append(kind)

        styles = [config.markers[kind] for kind in kinds]
        results = await asyncio.gather(
            *(loader.load(map_view, s.icon_id, s.icon_path, pixel_ratio=s.pixel_ratio) for s in styles),
            return_exceptions=True,
        )

        failed: List[str] = []
        for kind, style, result in zip(kinds, styles, results):
            if isinstance(result, IconLoadError):
                log.error("Marker icon '%s' unavailable: %s", style.icon_id, result)
                failed.append(style.icon_id)
                continue
            if isinstance(result, BaseException):
                raise result
            self.declare_layer(map_view, marker_layer_spec(kind, style, self.context.source_id))

        self.bind(map_view)
        self.publish()
        log.info(
            "Installed %d routes (%d layers) on source '%s'",
            len(self.definitions),
            len(self.context.declared_layers),
            self.context.source_id,
        )
        return failed


def _unique(values: Iterable[str]) -> List[str]:
    out: List[str] = []
    for value in values:
        if value not in out:
            out.append(value)
    return out
