from __future__ import annotations

from datetime import timezone
from typing import Optional

from adapters.message_tags import STARRED_TAG_HTML
from adapters.renderers import build_default_renderers
from core.message_html import (
    OUTBOX_SPINNER_HTML,
    MessageVariant,
    message_as_html,
    message_div,
    message_subheader,
    message_variant,
)
from core.models import FlagsState, MessageRenderData, Reaction, ReactionUser, RenderContext
from core.ports import MessageRenderers

RENDERERS = build_default_renderers(timezone.utc)


def _context(flags: Optional[FlagsState] = None, *, twenty_four_hour_time: bool = False) -> RenderContext:
    return RenderContext(
        alert_words=("deploy",),
        flags=flags if flags is not None else {},
        own_email="me@example.com",
        realm_emoji={},
        twenty_four_hour_time=twenty_four_hour_time,
    )


def _message(
    *,
    message_id: int = 42,
    content: str = "<p>hi</p>",
    is_brief: bool = False,
    is_outbox: bool = False,
    time_edited: Optional[float] = None,
    from_name: str = "Alice",
    from_email: str = "alice@example.com",
    avatar_url: str = "https://example.com/avatar.png",
    reactions: tuple[Reaction, ...] = (),
) -> MessageRenderData:
    return MessageRenderData(
        content=content,
        id=message_id,
        is_outbox=is_outbox,
        reactions=reactions,
        time_edited=time_edited,
        from_name=from_name,
        from_email=from_email,
        timestamp=1_500_000_000,
        avatar_url=avatar_url,
        is_brief=is_brief,
    )


def test_brief_message_example() -> None:
    html = message_as_html(_context({"starred": {42: True}}), _message(is_brief=True), RENDERERS)
    assert 'id="msg-42"' in html
    assert 'data-msg-id="42"' in html
    assert 'data-starred="true"' in html
    assert STARRED_TAG_HTML in html
    assert "<p>hi</p>" in html
    assert "avatar-img" not in html
    assert "subheader" not in html
    assert "message-brief" in html
    assert "message-full" not in html


def test_full_message_has_avatar_and_subheader() -> None:
    html = message_as_html(_context(), _message(), RENDERERS)
    assert html.startswith('<div class="message message-full" id="msg-42" data-msg-id="42">')
    assert (
        '<img src="https://example.com/avatar.png" alt="Alice" class="avatar-img" '
        'data-email="alice@example.com">'
    ) in html
    assert '<div class="username">Alice</div>' in html
    assert '<div class="timestamp">2:40 AM</div>' in html
    assert "message-brief" not in html
    assert html.endswith("</div>\n</div>")


def test_subheader_respects_twenty_four_hour_preference() -> None:
    html = message_as_html(_context(twenty_four_hour_time=True), _message(), RENDERERS)
    assert '<div class="timestamp">2:40</div>' in html


def test_sender_name_is_escaped_everywhere() -> None:
    html = message_as_html(_context(), _message(from_name="<script>"), RENDERERS)
    assert "<script>" not in html
    assert html.count("&lt;script&gt;") == 2


def test_email_and_avatar_url_cannot_break_out_of_attributes() -> None:
    html = message_as_html(
        _context(),
        _message(
            from_email='x" onclick="steal()',
            avatar_url='javascript:alert(1)" onerror="alert(2)',
        ),
        RENDERERS,
    )
    assert 'onclick="' not in html
    assert 'onerror="' not in html
    assert 'data-email="x&quot; onclick=&quot;steal()"' in html
    assert 'src="javascript:alert(1)&quot; onerror=&quot;alert(2)"' in html


def test_content_is_inserted_raw() -> None:
    content = '<p>see <a href="https://example.com">this</a> &amp; that</p>'
    html = message_as_html(_context(), _message(content=content, is_brief=True), RENDERERS)
    assert content in html


def test_outbox_spinner_appears_exactly_once() -> None:
    outbox = message_as_html(_context(), _message(is_outbox=True), RENDERERS)
    sent = message_as_html(_context(), _message(is_outbox=False), RENDERERS)
    assert outbox.count(OUTBOX_SPINNER_HTML) == 1
    assert sent.count(OUTBOX_SPINNER_HTML) == 0


def test_missing_edit_time_suppresses_edited_badge() -> None:
    assert "edited" not in message_as_html(_context(), _message(), RENDERERS)
    assert "edited" in message_as_html(_context(), _message(time_edited=1_500_000_100), RENDERERS)


def test_body_pieces_keep_fixed_order() -> None:
    renderers = MessageRenderers(
        format_time=lambda instant_ms, twenty_four_hour: "TIME",
        highlight=lambda content, message_id, alert_words, flags: "<p>CONTENT</p>",
        tags=lambda starred, time_edited: "<i>TAGS</i>",
        reactions=lambda reactions, message_id, own_email, realm_emoji: "<b>REACTIONS</b>",
    )
    for is_brief in (True, False):
        html = message_as_html(_context(), _message(is_brief=is_brief, is_outbox=True), renderers)
        positions = [
            html.index("<p>CONTENT</p>"),
            html.index(OUTBOX_SPINNER_HTML),
            html.index("<i>TAGS</i>"),
            html.index("<b>REACTIONS</b>"),
        ]
        assert positions == sorted(positions)


def test_collaborators_receive_context_values() -> None:
    calls: dict[str, tuple] = {}

    def highlight(content, message_id, alert_words, flags):
        calls["highlight"] = (content, message_id, alert_words, flags)
        return content

    def tags(starred, time_edited):
        calls["tags"] = (starred, time_edited)
        return ""

    def reactions(reaction_list, message_id, own_email, realm_emoji):
        calls["reactions"] = (reaction_list, message_id, own_email, realm_emoji)
        return ""

    def format_time(instant_ms, twenty_four_hour):
        calls["format_time"] = (instant_ms, twenty_four_hour)
        return "TIME"

    renderers = MessageRenderers(format_time=format_time, highlight=highlight, tags=tags, reactions=reactions)
    flags = {"starred": {42: True}}
    reaction = Reaction("heart", "2764", "unicode_emoji", ReactionUser(1, "a@example.com", "A"))
    message_as_html(_context(flags), _message(time_edited=5.0, reactions=(reaction,)), renderers)

    assert calls["highlight"] == ("<p>hi</p>", 42, ("deploy",), flags)
    assert calls["tags"] == (True, 5.0)
    assert calls["reactions"] == ((reaction,), 42, "me@example.com", {})
    assert calls["format_time"] == (1_500_000_000_000, False)


def test_rendering_is_deterministic() -> None:
    context = _context({"starred": {42: True}, "read": {42: True}})
    message = _message(is_outbox=True, time_edited=1.0)
    assert message_as_html(context, message, RENDERERS) == message_as_html(context, message, RENDERERS)


def test_variant_is_selected_only_by_is_brief() -> None:
    assert message_variant(_message(is_brief=True)) is MessageVariant.BRIEF
    assert message_variant(_message(is_brief=False)) is MessageVariant.FULL


def test_message_div_lists_flags_in_order() -> None:
    flags = {"read": {7: True}, "starred": {7: False}, "mentioned": {7: True}}
    assert message_div(7, "message-brief", flags) == (
        '<div class="message message-brief" id="msg-7" data-msg-id="7"'
        ' data-read="true" data-mentioned="true">'
    )


def test_message_subheader_converts_seconds_to_milliseconds() -> None:
    seen: list[int] = []

    def format_time(instant_ms: int, twenty_four_hour: bool) -> str:
        seen.append(instant_ms)
        return "<now>"

    html = message_subheader("Bob & Co", 12.5, True, format_time)
    assert seen == [12_500]
    assert "Bob &amp; Co" in html
    assert "&lt;now&gt;" in html
