"""One-shot icon loading, shared between concurrent requesters."""
from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, TYPE_CHECKING

import requests
from PIL import Image, UnidentifiedImageError

if TYPE_CHECKING:
    from travel_routes.mapview import MapView


log = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"


class IconLoadError(RuntimeError):
    """An icon could not be fetched or decoded."""


@dataclass(frozen=True)
class IconImage:
    icon_id: str
    data: bytes
    media_type: str
    width: Optional[int] = None
    height: Optional[int] = None


def fetch_icon_bytes(source: str, timeout: float = 10.0) -> bytes:
    """Read icon bytes from an http(s) URL or a local path."""
    if source.startswith(("http://", "https://")):
        resp = requests.get(source, timeout=timeout)
        resp.raise_for_status()
        return resp.content
    return Path(source).read_bytes()


def decode_icon(icon_id: str, data: bytes, source: str) -> IconImage:
    """Wrap SVG text as-is; decode raster formats to RGBA PNG."""
    if source.lower().endswith(".svg") or data.lstrip().startswith(b"<"):
        return IconImage(icon_id, data, SVG_MEDIA_TYPE)
    with Image.open(io.BytesIO(data)) as img:
        rgba = img.convert("RGBA")
    buf = io.BytesIO()
    rgba.save(buf, format="PNG")
    width, height = rgba.size
    return IconImage(icon_id, buf.getvalue(), "image/png", width, height)


class IconLoader:
    """Memoizes icon loads by id.

    Concurrent ``load`` calls for the same id await a single task. A failed
    load is forgotten, so only an explicit later call tries again.
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        fetch: Callable[[str], bytes] = fetch_icon_bytes,
    ) -> None:
        self.base_dir = base_dir
        self._fetch = fetch
        self._tasks: Dict[str, "asyncio.Future[IconImage]"] = {}

    def resolve(self, source: str) -> str:
        if source.startswith(("http://", "https://")) or self.base_dir is None:
            return source
        path = Path(source)
        return str(path if path.is_absolute() else self.base_dir / path)

    async def load(
        self, map_view: "MapView", icon_id: str, source: str, pixel_ratio: float = 2.0
    ) -> Optional[IconImage]:
        """Load ``source`` and register it on ``map_view`` as ``icon_id``.

        The fetch is shared across maps; each map that lacks the id gets its
        own ``add_image``.

        Returns the loaded image, or None when the map already had that id
        and this loader has no image for it.

        Raises:
            IconLoadError: The icon could not be fetched or decoded.
        """
        task = self._tasks.get(icon_id)
        if task is None:
            if map_view.has_image(icon_id):
                return None
            task = asyncio.ensure_future(self._load(icon_id, source))
            self._tasks[icon_id] = task
        image = await task
        if not map_view.has_image(icon_id):
            map_view.add_image(icon_id, image, pixel_ratio=pixel_ratio)
        return image

    async def _load(self, icon_id: str, source: str) -> IconImage:
        resolved = self.resolve(source)
        try:
            data = await asyncio.to_thread(self._fetch, resolved)
            image = decode_icon(icon_id, data, resolved)
        except (OSError, requests.RequestException, UnidentifiedImageError) as exc:
            self._tasks.pop(icon_id, None)
            raise IconLoadError(f"Failed to load {resolved}: {exc}") from exc

        log.info("Loaded icon '%s' from %s (%s)", icon_id, resolved, image.media_type)
        return image
