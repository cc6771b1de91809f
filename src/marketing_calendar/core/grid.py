from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

from .interval import month_bounds

DAYS_PER_WEEK = 7
WEEKS_PER_GRID = 6
GRID_DAYS = DAYS_PER_WEEK * WEEKS_PER_GRID

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

MONTH_NAMES = (
    "January", "February", "March", "April",
    "May", "June", "July", "August",
    "September", "October", "November", "December",
)
MONTH_NAMES_SHORT = tuple(name[:3] for name in MONTH_NAMES)

Week = Tuple[date, ...]


@dataclass(frozen=True)
class GridDay:
    day: date
    in_month: bool
    is_weekend: bool
    is_today: bool

    @property
    def key(self) -> str:
        return self.day.isoformat()


@dataclass(frozen=True)
class MonthGrid:
    month: int
    year: int
    days: Tuple[date, ...]

    @property
    def weeks(self) -> List[Week]:
        return [self.days[index:index + DAYS_PER_WEEK] for index in range(0, GRID_DAYS, DAYS_PER_WEEK)]

    @property
    def first(self) -> date:
        return self.days[0]

    @property
    def last(self) -> date:
        return self.days[-1]

    def in_month(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month + 1

    def cells(self, *, today: Optional[date] = None) -> List[GridDay]:
        today = today or date.today()
        return [
            GridDay(
                day=day,
                in_month=self.in_month(day),
                is_weekend=day.weekday() >= 5,
                is_today=day == today,
            )
            for day in self.days
        ]

    def week_index(self, day: date) -> Optional[int]:
        if not self.first <= day <= self.last:
            return None
        return (day - self.first).days // DAYS_PER_WEEK


def build_month_grid(month: int, year: int) -> MonthGrid:
    """Monday-first 6x7 grid covering ``month`` (0-11) with overflow days on both sides."""

    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")
    first, last = month_bounds(year, month)
    grid_start = first - timedelta(days=first.weekday())
    grid_end = last + timedelta(days=6 - last.weekday())
    span = (grid_end - grid_start).days + 1
    # Always pad forward to six rows.
    total = max(span, GRID_DAYS)
    days = tuple(grid_start + timedelta(days=offset) for offset in range(total))
    return MonthGrid(month=month, year=year, days=days)


def quarter_of(month: int) -> int:
    return month // 3 + 1
