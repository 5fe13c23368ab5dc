"""Render one message as an HTML fragment for the message list.

Message fields are untrusted except ``content``, which is sanitized upstream.
All composition goes through ``HtmlBuilder`` so each interpolation states
whether it is escaped text or already-safe markup.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict

from core.flags import flags_to_list, is_flagged
from core.models import FlagsState, MessageRenderData, RenderContext
from core.ports import MessageRenderers, TimeFormatter
from core.template import HtmlBuilder

LOGGER = logging.getLogger(__name__)

OUTBOX_SPINNER_HTML = '<div class="loading-spinner outbox-spinner"></div>'


class MessageVariant(Enum):
    BRIEF = "message-brief"
    FULL = "message-full"


def message_div(message_id: int, msg_class: str, flags: FlagsState) -> str:
    """Return the opening container tag; the caller closes it."""

    builder = (
        HtmlBuilder()
        .literal('<div class="message ')
        .text(msg_class)
        .literal('" id="msg-')
        .text(message_id)
        .literal('" data-msg-id="')
        .text(message_id)
        .literal('"')
    )
    # Flag names are internal identifiers, checked against [A-Za-z0-9_-]+ where
    # they enter from outside (adapters.json_mapper).
    for flag in flags_to_list(flags, message_id):
        builder.literal(" data-").raw(flag).literal('="true"')
    return builder.literal(">").build()


def message_subheader(
    from_name: str,
    timestamp: float,
    twenty_four_hour_time: bool,
    format_time: TimeFormatter,
) -> str:
    instant_ms = int(timestamp * 1000)
    return (
        HtmlBuilder()
        .literal('<div class="subheader">\n<div class="username">')
        .text(from_name)
        .literal('</div>\n<div class="timestamp">')
        .text(format_time(instant_ms, twenty_four_hour_time))
        .literal("</div>\n</div>")
        .build()
    )


def message_body(
    context: RenderContext,
    message: MessageRenderData,
    renderers: MessageRenderers,
) -> str:
    """Concatenate content, outbox spinner, tag badges and reactions.

    The order is relied upon by styling and event delegation in the host page.
    """

    starred = is_flagged(context.flags, "starred", message.id)
    return (
        HtmlBuilder()
        .raw(renderers.highlight(message.content, message.id, context.alert_words, context.flags))
        .literal("\n")
        .raw(OUTBOX_SPINNER_HTML if message.is_outbox else "")
        .literal("\n")
        .raw(renderers.tags(starred, message.time_edited))
        .literal("\n")
        .raw(renderers.reactions(message.reactions, message.id, context.own_email, context.realm_emoji))
        .build()
    )


def _brief_message_as_html(
    context: RenderContext,
    message: MessageRenderData,
    renderers: MessageRenderers,
) -> str:
    return (
        HtmlBuilder()
        .raw(message_div(message.id, MessageVariant.BRIEF.value, context.flags))
        .literal('\n<div class="content">\n')
        .raw(message_body(context, message, renderers))
        .literal("\n</div>\n</div>")
        .build()
    )


def _full_message_as_html(
    context: RenderContext,
    message: MessageRenderData,
    renderers: MessageRenderers,
) -> str:
    return (
        HtmlBuilder()
        .raw(message_div(message.id, MessageVariant.FULL.value, context.flags))
        .literal('\n<div class="avatar">\n<img src="')
        .text(message.avatar_url)
        .literal('" alt="')
        .text(message.from_name)
        .literal('" class="avatar-img" data-email="')
        .text(message.from_email)
        .literal('">\n</div>\n<div class="content">\n')
        .raw(
            message_subheader(
                message.from_name,
                message.timestamp,
                context.twenty_four_hour_time,
                renderers.format_time,
            )
        )
        .literal("\n")
        .raw(message_body(context, message, renderers))
        .literal("\n</div>\n</div>")
        .build()
    )


_RENDERERS: Dict[
    MessageVariant,
    Callable[[RenderContext, MessageRenderData, MessageRenderers], str],
] = {
    MessageVariant.BRIEF: _brief_message_as_html,
    MessageVariant.FULL: _full_message_as_html,
}


def message_variant(message: MessageRenderData) -> MessageVariant:
    return MessageVariant.BRIEF if message.is_brief else MessageVariant.FULL


def message_as_html(
    context: RenderContext,
    message: MessageRenderData,
    renderers: MessageRenderers,
) -> str:
    """Render ``message`` in brief or full mode; pure and deterministic."""

    variant = message_variant(message)
    LOGGER.debug("Rendering message %s as %s", message.id, variant.value)
    return _RENDERERS[variant](context, message, renderers)
