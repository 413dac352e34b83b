"""Icon assets for route markers."""

from travel_routes.assets.icons import IconImage, IconLoader, IconLoadError, decode_icon, fetch_icon_bytes

__all__ = ["IconImage", "IconLoader", "IconLoadError", "decode_icon", "fetch_icon_bytes"]
