"""Short time labels for message subheaders."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from core.ports import TimeFormatter


def short_time(instant_ms: int, twenty_four_hour: bool, tz: Optional[tzinfo] = None) -> str:
    """Return ``H:mm`` or ``h:mm AM``; ``tz=None`` uses the local zone."""

    moment = datetime.fromtimestamp(instant_ms / 1000, tz=timezone.utc).astimezone(tz)
    if twenty_four_hour:
        return f"{moment.hour}:{moment.minute:02d}"
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def build_time_formatter(tz: Optional[tzinfo] = None) -> TimeFormatter:
    """Bind a zone so the formatter matches the core TimeFormatter port."""

    def format_time(instant_ms: int, twenty_four_hour: bool) -> str:
        return short_time(instant_ms, twenty_four_hour, tz)

    return format_time
