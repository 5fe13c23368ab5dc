"""Alert-word highlighting for trusted message HTML.

The content is parsed and only text nodes are rewritten, so tags, attributes
and comments produced upstream are never touched.
"""

from __future__ import annotations

import re
from typing import Sequence

from bs4 import BeautifulSoup, NavigableString
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from core.flags import is_flagged
from core.models import FlagsState

ALERT_WORD_FLAG = "has_alert_word"

# Minimal escaping, no self-closing slash on void elements.
_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)

_SKIPPED_PARENTS = {"script", "style"}


def _compile_alert_words(alert_words: Sequence[str]) -> "re.Pattern[str]":
    words = {word for word in alert_words if word.strip()}
    # Longest first so "foo bar" wins over "foo".
    alternatives = "|".join(re.escape(word) for word in sorted(words, key=len, reverse=True))
    return re.compile(rf"(?<!\w)({alternatives})(?!\w)", re.IGNORECASE)


def _highlight_node(soup: BeautifulSoup, node: NavigableString, pattern: "re.Pattern[str]") -> bool:
    # split() with one capturing group alternates text, match, text, ...
    pieces = pattern.split(str(node))
    if len(pieces) == 1:
        return False

    replacements = []
    for index, piece in enumerate(pieces):
        if index % 2:
            span = soup.new_tag("span", attrs={"class": "alert-word"})
            span.string = piece
            replacements.append(span)
        elif piece:
            replacements.append(NavigableString(piece))
    node.replace_with(*replacements)
    return True


def process_alert_words(
    content: str,
    message_id: int,
    alert_words: Sequence[str],
    flags: FlagsState,
) -> str:
    """Wrap alert words found in text nodes in ``<span class="alert-word">``."""

    if not any(word.strip() for word in alert_words):
        return content
    if not is_flagged(flags, ALERT_WORD_FLAG, message_id):
        return content

    pattern = _compile_alert_words(alert_words)
    soup = BeautifulSoup(content, "html.parser")
    changed = False
    for node in list(soup.find_all(string=lambda text: type(text) is NavigableString)):
        if node.parent is not None and node.parent.name in _SKIPPED_PARENTS:
            continue
        changed = _highlight_node(soup, node, pattern) or changed

    if not changed:
        return content
    return soup.decode(formatter=_FORMATTER)
