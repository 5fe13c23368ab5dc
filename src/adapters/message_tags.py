"""Small badges shown under a message body (edited, starred)."""

from __future__ import annotations

from typing import List, Optional

from core.template import HtmlBuilder

EDITED_TAG_HTML = '<span class="message-tag">edited</span>'
STARRED_TAG_HTML = '<span class="message-tag">starred</span>'


def message_tags_as_html(starred: bool, time_edited: Optional[float]) -> str:
    pieces: List[str] = []
    if time_edited is not None:
        pieces.append(EDITED_TAG_HTML)
    if starred:
        pieces.append(STARRED_TAG_HTML)
    if not pieces:
        return ""
    return HtmlBuilder().literal('<div class="message-tags">').raw(pieces).literal("</div>").build()
