"""Static configuration for chatview.

All user-editable settings (time display, logging) live in a single JSON file
for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

# CHATVIEW_CONFIG lets a host point at another file without editing code.
CONFIG_PATH = os.getenv("CHATVIEW_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Defaults used when the input document does not carry its own preference.
# - TWENTY_FOUR_HOUR_TIME: "15:05" instead of "3:05 PM"
# - TIMEZONE: IANA zone name for subheader times; None means local time
_rendering = _CONFIG.get("rendering", {})
TWENTY_FOUR_HOUR_TIME = bool(_rendering.get("twenty_four_hour_time", False))
TIMEZONE = _rendering.get("timezone") or None

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
