from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Marketing Calendar"
APP_AUTHOR = "MarketingCalendar"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
EVENTS_FILE = DATA_DIR / "events.json"
