"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, LayoutSettings, LoggingSettings, StorageSettings, get_settings

__all__ = ["AppSettings", "LayoutSettings", "LoggingSettings", "StorageSettings", "get_settings"]
