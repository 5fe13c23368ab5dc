"""Reaction pills rendered under a message body.

Reactions arrive one per (user, emoji) and are grouped per emoji name so each
pill shows a count and whether the viewer is one of the reacting users.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from core.models import Reaction, RealmEmojiTable
from core.template import HtmlBuilder

LOGGER = logging.getLogger(__name__)


@dataclass
class AggregatedReaction:
    name: str
    code: str
    type: str
    count: int = 0
    self_voted: bool = False


def aggregate_reactions(reactions: Sequence[Reaction], own_email: str) -> List[AggregatedReaction]:
    """Group reactions by emoji name, keeping first-appearance order."""

    grouped: Dict[str, AggregatedReaction] = {}
    for reaction in reactions:
        entry = grouped.get(reaction.emoji_name)
        if entry is None:
            entry = AggregatedReaction(
                name=reaction.emoji_name,
                code=reaction.emoji_code,
                type=reaction.reaction_type,
            )
            grouped[reaction.emoji_name] = entry
        entry.count += 1
        if reaction.user.email == own_email:
            entry.self_voted = True
    return list(grouped.values())


def _unicode_glyph(code: str) -> str:
    """Decode ``1f44d`` or ``1f1fa-1f1f8`` style codes into characters."""

    return "".join(chr(int(part, 16)) for part in code.split("-"))


def _emoji_html(reaction: AggregatedReaction, realm_emoji: RealmEmojiTable) -> str:
    if reaction.type == "realm_emoji":
        emoji = realm_emoji.get(reaction.code)
        if emoji is not None and not emoji.deactivated:
            return (
                HtmlBuilder()
                .literal('<img class="realm-reaction" src="')
                .text(emoji.source_url)
                .literal('">')
                .build()
            )
    elif reaction.type == "unicode_emoji":
        try:
            return HtmlBuilder().text(_unicode_glyph(reaction.code)).build()
        except ValueError:
            LOGGER.debug("Invalid unicode emoji code %r for %s", reaction.code, reaction.name)
    else:
        LOGGER.debug("No image for reaction type %s (%s)", reaction.type, reaction.name)
    return HtmlBuilder().literal(":").text(reaction.name).literal(":").build()


def message_reaction_as_html(reaction: AggregatedReaction, realm_emoji: RealmEmojiTable) -> str:
    css_class = "reaction self-voted" if reaction.self_voted else "reaction"
    return (
        HtmlBuilder()
        .literal('<span class="')
        .literal(css_class)
        .literal('" data-name="')
        .text(reaction.name)
        .literal('" data-code="')
        .text(reaction.code)
        .literal('" data-type="')
        .text(reaction.type)
        .literal('">')
        .raw(_emoji_html(reaction, realm_emoji))
        .literal("&nbsp;")
        .text(reaction.count)
        .literal("</span>")
        .build()
    )


def message_reaction_list_as_html(
    reactions: Sequence[Reaction],
    message_id: int,
    own_email: str,
    realm_emoji: RealmEmojiTable,
) -> str:
    if not reactions:
        return ""
    pills = [
        message_reaction_as_html(reaction, realm_emoji)
        for reaction in aggregate_reactions(reactions, own_email)
    ]
    LOGGER.debug("Rendered %d reaction pill(s) for message %s", len(pills), message_id)
    return HtmlBuilder().literal('<div class="reaction-list">').raw(pills).literal("</div>").build()
