"""Title cleanup: markup stripping, entity decoding, whitespace folding."""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&#x27;": "'",
    "&nbsp;": " ",
    "&rsquo;": "'",
    "&lsquo;": "'",
    "&rdquo;": '"',
    "&ldquo;": '"',
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))

# Single navigational words that never make a usable headline.
_STOPLIST_RE = re.compile(
    r"(home|menu|search|login|sign|subscribe|click|read|view|see|watch"
    r"|more|here|link|url|image|photo)",
    re.IGNORECASE,
)

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 500


def _strip_and_decode(text: str) -> str:
    text = _TAG_RE.sub(" ", text)
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def clean_title(text: str | None) -> str:
    """Return *text* with markup removed, entities decoded and whitespace folded.

    Stripping and decoding are repeated until the text stops changing, so an
    escaped tag such as ``&lt;b&gt;`` is removed as well and the result is a
    fixed point: ``clean_title(clean_title(s)) == clean_title(s)``.  Each pass
    that changes the text also shortens it, so the loop always terminates.
    """
    if not text:
        return ""

    cleaned = str(text)
    while True:
        stripped = _strip_and_decode(cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped

    return _WS_RE.sub(" ", cleaned).strip()


def is_acceptable_title(title: str | None) -> bool:
    """Final gate for a cleaned title: length bounds and the navigation stoplist."""
    if not title:
        return False
    if not MIN_TITLE_LENGTH <= len(title) <= MAX_TITLE_LENGTH:
        return False
    return _STOPLIST_RE.fullmatch(title) is None
