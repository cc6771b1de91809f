"""Data access layer."""

from __future__ import annotations

from .cache import LayoutCache, layout_key

__all__ = ["LayoutCache", "layout_key"]
