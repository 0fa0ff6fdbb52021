# gamelog/utils/text_utils.py

"""Text cleanup for catalog descriptions.

Catalog descriptions arrive as HTML or multi-paragraph text; the game
record wants a short single-line summary.
"""

from __future__ import annotations

import re

__all__ = ["clean_description"]

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

SHORT_LIMIT = 300
SENTENCE_WINDOW = 400
MIN_CUT = 200


def clean_description(raw: str | None) -> str:
    """Strips HTML and shortens a description to roughly 300 characters.

    Cut order: keep whole text if short enough, else cut after the last
    full stop within the first 400 chars (if that keeps more than 200),
    else cut at the last space within 300 chars and add "...".

    Args:
        raw: Description as delivered by the catalog.

    Returns:
        Single-line summary.
    """
    if not raw:
        return ""

    cleaned = _WHITESPACE_RE.sub(" ", _TAG_RE.sub("", raw)).strip()
    if len(cleaned) <= SHORT_LIMIT:
        return cleaned

    last_sentence = cleaned[:SENTENCE_WINDOW].rfind(".")
    if last_sentence > MIN_CUT:
        return cleaned[: last_sentence + 1]

    last_space = cleaned[:SHORT_LIMIT].rfind(" ")
    if last_space > MIN_CUT:
        return cleaned[:last_space] + "..."
    return cleaned[:SHORT_LIMIT] + "..."
