from __future__ import annotations

from .layout_cache import LayoutCache, layout_key

__all__ = ["LayoutCache", "layout_key"]
