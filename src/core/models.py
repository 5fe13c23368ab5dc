"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the shape of any upstream message store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

# flag name -> message id -> presence; declaration order is significant.
FlagsState = Mapping[str, Mapping[int, bool]]


@dataclass(frozen=True)
class RealmEmoji:
    """Custom emoji defined for the current realm."""

    id: str
    name: str
    source_url: str
    deactivated: bool = False


RealmEmojiTable = Mapping[str, RealmEmoji]


@dataclass(frozen=True)
class ReactionUser:
    id: int
    email: str
    full_name: str


@dataclass(frozen=True)
class Reaction:
    """One user's emoji reaction to a message."""

    emoji_name: str
    emoji_code: str
    reaction_type: str
    user: ReactionUser


@dataclass(frozen=True)
class Subscription:
    stream_id: int
    name: str
    color: str
    in_home_view: bool = True


@dataclass(frozen=True)
class NarrowElement:
    operator: str
    operand: str


Narrow = Tuple[NarrowElement, ...]


@dataclass(frozen=True)
class RenderContext:
    """Data used in rendering every message of the current view.

    See also MessageRenderData.
    """

    alert_words: Tuple[str, ...]
    flags: FlagsState
    own_email: str
    realm_emoji: RealmEmojiTable
    twenty_four_hour_time: bool
    subscriptions: Tuple[Subscription, ...] = ()
    narrow: Narrow = ()


@dataclass(frozen=True)
class MessageRenderData:
    """Data used in rendering one specific message.

    ``content`` is sanitized upstream and is the only field inserted as raw
    HTML. Every other free-text field is escaped.
    """

    content: str
    id: int
    is_outbox: bool
    reactions: Tuple[Reaction, ...]
    time_edited: Optional[float]
    from_name: str
    from_email: str
    timestamp: float
    avatar_url: str
    is_brief: bool
