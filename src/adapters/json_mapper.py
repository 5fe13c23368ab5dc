"""JSON-to-core model mapping adapter.

Upstream stores use camelCase keys while Python callers tend to use
snake_case; both are accepted so the core models stay store-agnostic.
Malformed input is rejected here with ``ValueError`` naming the field, so the
renderer only ever sees well-typed models.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from core.models import (
    MessageRenderData,
    NarrowElement,
    Reaction,
    ReactionUser,
    RealmEmoji,
    RenderContext,
    Subscription,
)

_MISSING = object()

# Flag names become data-* attribute names.
_FLAG_NAME = re.compile(r"[A-Za-z0-9_-]+")


def _get(raw: Mapping[str, Any], snake: str, camel: Optional[str] = None, default: Any = _MISSING) -> Any:
    if snake in raw:
        return raw[snake]
    if camel and camel in raw:
        return raw[camel]
    if default is _MISSING:
        raise ValueError(f"Missing required field: {snake}")
    return default


def _mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Field {field} must be an object")
    return value


def _list(value: Any, field: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"Field {field} must be a list")
    return value


def _string(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Field {field} must be a string")
    return value


def _number(value: Any, field: str, cast: Any = float) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"Field {field} must be a number")
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Field {field} must be a number") from e


def build_flags(raw_flags: Any) -> Dict[str, Dict[int, bool]]:
    """Normalize flags, converting JSON string ids to ints.

    Flag name order is kept as given. Unknown names pass through as long as
    they are valid attribute name fragments.
    """

    flags: Dict[str, Dict[int, bool]] = {}
    for name, by_id in _mapping(raw_flags, "flags").items():
        if not isinstance(name, str) or not _FLAG_NAME.fullmatch(name):
            raise ValueError(f"Invalid flag name: {name!r}")
        field = f"flags.{name}"
        flags[name] = {
            _number(message_id, field, int): bool(value)
            for message_id, value in _mapping(by_id, field).items()
        }
    return flags


def build_realm_emoji(raw_emoji: Any) -> Dict[str, RealmEmoji]:
    table: Dict[str, RealmEmoji] = {}
    for emoji_id, entry in _mapping(raw_emoji, "realm_emoji").items():
        entry = _mapping(entry, f"realm_emoji.{emoji_id}")
        table[str(emoji_id)] = RealmEmoji(
            id=str(_get(entry, "id", default=emoji_id)),
            name=_string(_get(entry, "name"), "realm_emoji.name"),
            source_url=_string(_get(entry, "source_url", "sourceUrl"), "realm_emoji.source_url"),
            deactivated=bool(_get(entry, "deactivated", default=False)),
        )
    return table


def build_reaction(raw: Any) -> Reaction:
    raw = _mapping(raw, "reactions[]")
    user = _mapping(_get(raw, "user"), "reaction.user")
    return Reaction(
        emoji_name=_string(_get(raw, "emoji_name", "emojiName"), "reaction.emoji_name"),
        emoji_code=str(_get(raw, "emoji_code", "emojiCode")),
        reaction_type=_string(
            _get(raw, "reaction_type", "reactionType", default="unicode_emoji"),
            "reaction.reaction_type",
        ),
        user=ReactionUser(
            id=_number(_get(user, "id", default=0), "reaction.user.id", int),
            email=_string(_get(user, "email"), "reaction.user.email"),
            full_name=_string(_get(user, "full_name", "fullName", default=""), "reaction.user.full_name"),
        ),
    )


def build_render_context(raw: Any) -> RenderContext:
    """Build a RenderContext from a plain dictionary."""

    raw = _mapping(raw, "context")
    subscriptions = []
    for entry in _list(_get(raw, "subscriptions", default=[]), "subscriptions"):
        entry = _mapping(entry, "subscriptions[]")
        subscriptions.append(
            Subscription(
                stream_id=_number(_get(entry, "stream_id", "streamId"), "subscription.stream_id", int),
                name=_string(_get(entry, "name"), "subscription.name"),
                color=_string(_get(entry, "color", default=""), "subscription.color"),
                in_home_view=bool(_get(entry, "in_home_view", "inHomeView", default=True)),
            )
        )
    narrow = []
    for entry in _list(_get(raw, "narrow", default=[]), "narrow"):
        entry = _mapping(entry, "narrow[]")
        narrow.append(
            NarrowElement(
                operator=_string(_get(entry, "operator"), "narrow.operator"),
                operand=str(_get(entry, "operand")),
            )
        )
    alert_words = _list(_get(raw, "alert_words", "alertWords", default=[]), "alert_words")
    return RenderContext(
        alert_words=tuple(_string(word, "alert_words[]") for word in alert_words),
        flags=build_flags(_get(raw, "flags", default={})),
        own_email=_string(_get(raw, "own_email", "ownEmail", default=""), "own_email"),
        realm_emoji=build_realm_emoji(_get(raw, "realm_emoji", "realmEmoji", default={})),
        twenty_four_hour_time=bool(
            _get(raw, "twenty_four_hour_time", "twentyFourHourTime", default=False)
        ),
        subscriptions=tuple(subscriptions),
        narrow=tuple(narrow),
    )


def build_message(raw: Any) -> MessageRenderData:
    """Build a MessageRenderData from a plain dictionary."""

    raw = _mapping(raw, "message")
    time_edited = _get(raw, "time_edited", "timeEdited", default=None)
    reactions = _list(_get(raw, "reactions", default=[]), "reactions")
    return MessageRenderData(
        content=_string(_get(raw, "content"), "content"),
        id=_number(_get(raw, "id"), "id", int),
        is_outbox=bool(_get(raw, "is_outbox", "isOutbox", default=False)),
        reactions=tuple(build_reaction(entry) for entry in reactions),
        time_edited=_number(time_edited, "time_edited") if time_edited is not None else None,
        from_name=_string(_get(raw, "from_name", "fromName", default=""), "from_name"),
        from_email=_string(_get(raw, "from_email", "fromEmail", default=""), "from_email"),
        timestamp=_number(_get(raw, "timestamp"), "timestamp"),
        avatar_url=_string(_get(raw, "avatar_url", "avatarUrl", default=""), "avatar_url"),
        is_brief=bool(_get(raw, "is_brief", "isBrief", default=False)),
    )
