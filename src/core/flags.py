"""Per-message boolean flag helpers (core domain)."""

from __future__ import annotations

from typing import List

from core.models import FlagsState


def is_flagged(flags: FlagsState, name: str, message_id: int) -> bool:
    """Return True only when ``flags[name][message_id]`` is exactly True."""

    return flags.get(name, {}).get(message_id) is True


def flags_to_list(flags: FlagsState, message_id: int) -> List[str]:
    """Return active flag names for a message, in declaration order.

    Unknown flag names are passed through so new upstream flags need no
    change here.
    """

    return [name for name in flags if is_flagged(flags, name, message_id)]
