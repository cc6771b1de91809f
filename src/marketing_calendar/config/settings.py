from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import DATA_DIR, EVENTS_FILE
from ..core.filters import FilterState

load_dotenv()


@dataclass(frozen=True)
class LayoutSettings:
    cell_display_limit: int
    month_card_limit: int
    range_bar_limit: int
    bar_inset: float
    cache_size: int


@dataclass(frozen=True)
class StorageSettings:
    events_file: Path


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_dir: Path


@dataclass(frozen=True)
class AppSettings:
    layout: LayoutSettings
    storage: StorageSettings
    logging: LoggingSettings
    default_filters: FilterState
    brand_id: Optional[str]


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    layout = LayoutSettings(
        cell_display_limit=_int_from_env("CAL_CELL_DISPLAY_LIMIT", 3),
        month_card_limit=_int_from_env("CAL_MONTH_CARD_LIMIT", 5),
        range_bar_limit=_int_from_env("CAL_RANGE_BAR_LIMIT", 3),
        bar_inset=_float_from_env("CAL_BAR_INSET", 0.005),
        cache_size=_int_from_env("CAL_LAYOUT_CACHE_SIZE", 32),
    )

    storage = StorageSettings(
        events_file=Path(os.getenv("CAL_EVENTS_FILE", str(EVENTS_FILE))),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("CAL_LOG_LEVEL", "INFO").upper(),
        log_dir=Path(os.getenv("CAL_LOG_DIR", str(DATA_DIR / "logs"))),
    )

    return AppSettings(
        layout=layout,
        storage=storage,
        logging=logging_settings,
        default_filters=FilterState(),
        brand_id=os.getenv("CAL_BRAND_ID") or None,
    )
