"""Ports (interfaces) used by the message renderer.

Ports define the minimal contracts for the collaborators that produce
already-safe HTML pieces, so the core can be reused with different
implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from core.models import FlagsState, Reaction, RealmEmojiTable


class TimeFormatter(Protocol):
    """Localized short time label for a millisecond instant."""

    def __call__(self, instant_ms: int, twenty_four_hour: bool) -> str:
        ...


class AlertWordHighlighter(Protocol):
    """Wrap alert words found in trusted HTML; must preserve existing markup."""

    def __call__(
        self,
        content: str,
        message_id: int,
        alert_words: Sequence[str],
        flags: FlagsState,
    ) -> str:
        ...


class TagsRenderer(Protocol):
    def __call__(self, starred: bool, time_edited: Optional[float]) -> str:
        ...


class ReactionListRenderer(Protocol):
    def __call__(
        self,
        reactions: Sequence[Reaction],
        message_id: int,
        own_email: str,
        realm_emoji: RealmEmojiTable,
    ) -> str:
        ...


@dataclass(frozen=True)
class MessageRenderers:
    """Collaborators required by ``message_as_html``."""

    format_time: TimeFormatter
    highlight: AlertWordHighlighter
    tags: TagsRenderer
    reactions: ReactionListRenderer
