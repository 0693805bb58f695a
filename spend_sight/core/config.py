"""
Configuration loading for the expense tracker.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional

from .utils import WEEKDAYS

DEFAULT_CONFIG = {
    "db_path": "./spend_sight.sqlite",
    "categories": ["Groceries", "Dining", "Retail", "Transport", "Bills", "Subscription", "Other"],
    "default_category": "Other",
    "daily_window": 30,
    "weekly_window": 12,
    "week_start": "sunday",
}


def load_config(path: Optional[Path] = None) -> Dict:
    """
    Load settings from a JSON file on top of the defaults.

    A missing file means defaults. SPEND_SIGHT_DB, when set, overrides db_path.
    Example:
        {
          "categories": ["Groceries", "Dining", "Other"],
          "daily_window": 14,
          "week_start": "monday"
        }
    """
    config = dict(DEFAULT_CONFIG)
    config["categories"] = list(DEFAULT_CONFIG["categories"])

    if path is not None and path.exists():
        with path.open("r", encoding="utf-8") as f:
            config.update(json.load(f))

    env_db = os.getenv("SPEND_SIGHT_DB")
    if env_db:
        config["db_path"] = env_db

    validate_config(config)
    return config


def validate_config(config: Dict):
    """Raise ValueError for settings the rest of the app can't work with."""
    if config["default_category"] not in config["categories"]:
        raise ValueError(f"default_category {config['default_category']!r} is not in categories")
    for key in ("daily_window", "weekly_window"):
        if not isinstance(config[key], int) or config[key] < 0:
            raise ValueError(f"{key} must be a non-negative integer")
    if str(config["week_start"]).lower() not in WEEKDAYS:
        raise ValueError(f"Unknown week_start: {config['week_start']!r}")


def week_start_index(config: Dict) -> int:
    """Weekday number (Monday=0) the configured week starts on."""
    return WEEKDAYS[str(config["week_start"]).lower()]
