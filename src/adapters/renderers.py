"""Default collaborator bundle for ``core.message_html``."""

from __future__ import annotations

from datetime import tzinfo
from typing import Optional

from adapters.alert_words import process_alert_words
from adapters.date_format import build_time_formatter
from adapters.message_tags import message_tags_as_html
from adapters.reaction_list import message_reaction_list_as_html
from core.ports import MessageRenderers


def build_default_renderers(tz: Optional[tzinfo] = None) -> MessageRenderers:
    return MessageRenderers(
        format_time=build_time_formatter(tz),
        highlight=process_alert_words,
        tags=message_tags_as_html,
        reactions=message_reaction_list_as_html,
    )
