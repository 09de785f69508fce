"""Title resolution for a single candidate link.

Each strategy looks at a progressively larger slice of the document around
the candidate's offset and returns ``None`` when it finds nothing usable:

    1. link text:     the anchor's own content
    2. nearby title:  headings / <title> / title="" / <span> within ±3000
    3. broad area:    any ``>text<`` run from -5000 to +2000
    4. synthetic:     a title-cased version of the URL slug

The window sizes and length bounds are tuned against real homepages.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Optional, TypeVar
from urllib.parse import urlsplit

from timestories.scraper.cleaning import clean_title

logger = logging.getLogger(__name__)

T = TypeVar("T")

ANCHOR_SPAN_LIMIT = 1000
NEARBY_WINDOW = 3000
AREA_BEFORE = 5000
AREA_AFTER = 2000

STRUCTURED_MIN_LENGTH = 10

_CLOSING_ANCHOR_RE = re.compile(r"</a>", re.IGNORECASE)

# Tried in order; only the first class that yields an in-range match is used.
_NEARBY_PATTERNS = (
    re.compile(r"<h[1-6][^>]*>([^<]+(?:<[^>]*>[^<]*)*?)</h[1-6]>", re.IGNORECASE),
    re.compile(r"<title>([^<]+)</title>", re.IGNORECASE),
    re.compile(r'title="([^"]+)"', re.IGNORECASE),
    re.compile(r"<span[^>]*>([^<]+(?:<[^>]*>[^<]*)*?)</span>", re.IGNORECASE),
)
_NEARBY_MIN, _NEARBY_MAX = 15, 200

_TEXT_RUN_RE = re.compile(r">([^<]+)<")
_AREA_MIN, _AREA_MAX = 15, 300
_AREA_MIN_WORDS = 3
_AREA_DENYLIST_RE = re.compile(
    r"subscribe|sign|login|menu|search|home|news|time|click|read|view|see"
    r"|watch|more|here|advertisement|ad",
    re.IGNORECASE,
)

_NUMERIC_RE = re.compile(r"\d+")
_WORD_START_RE = re.compile(r"\b\w")


def best_effort(func: Callable[..., Optional[T]]) -> Callable[..., Optional[T]]:
    """Turn a lookup failure on odd markup into "no result" for that strategy."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Optional[T]:
        try:
            return func(*args, **kwargs)
        except (re.error, ValueError, IndexError, TypeError):
            logger.debug("%s failed; treating as no result", func.__name__, exc_info=True)
            return None

    return wrapper


def _window(html: str, position: int, before: int, after: int) -> str:
    return html[max(0, position - before):min(len(html), position + after)]


def _longest(candidates: list[str]) -> Optional[str]:
    # max() keeps the first of equally long candidates (document order).
    return max(candidates, key=len) if candidates else None


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

@best_effort
def find_link_text(html: str, position: int) -> Optional[str]:
    """Return the cleaned text between the anchor's opening ``>`` and ``</a>``.

    Spans longer than :data:`ANCHOR_SPAN_LIMIT` are treated as a mismatched
    or nested anchor and yield ``None``.
    """
    link_start = html.find(">", position)
    if link_start == -1:
        return None

    closing = _CLOSING_ANCHOR_RE.search(html, link_start)
    if closing is None or closing.start() - link_start > ANCHOR_SPAN_LIMIT:
        return None

    return clean_title(html[link_start + 1:closing.start()])


@best_effort
def find_nearby_title(html: str, position: int) -> Optional[str]:
    """Return the longest heading-like text within ±3000 characters."""
    area = _window(html, position, NEARBY_WINDOW, NEARBY_WINDOW)

    for pattern in _NEARBY_PATTERNS:
        titles = []
        for match in pattern.finditer(area):
            title = clean_title(match.group(1))
            if _NEARBY_MIN <= len(title) <= _NEARBY_MAX:
                titles.append(title)
        if titles:
            return _longest(titles)

    return None


@best_effort
def find_title_in_area(html: str, position: int) -> Optional[str]:
    """Return the longest plausible sentence of text in the broad window."""
    area = _window(html, position, AREA_BEFORE, AREA_AFTER)

    candidates = []
    for match in _TEXT_RUN_RE.finditer(area):
        text = clean_title(match.group(1))
        if not _AREA_MIN <= len(text) <= _AREA_MAX:
            continue
        if _AREA_DENYLIST_RE.fullmatch(text):
            continue
        if len(text.split(" ")) < _AREA_MIN_WORDS:
            continue
        candidates.append(text)

    return _longest(candidates)


@best_effort
def title_from_url(url: str) -> Optional[str]:
    """Build a title from the last meaningful path segment of *url*.

    ``.../7000000/breaking-news-story-today`` gives
    ``"Breaking News Story Today"``.  Segments of three characters or fewer
    and purely numeric segments are skipped; the host name is never used.
    """
    for part in reversed(urlsplit(url).path.split("/")):
        if len(part) > 3 and not _NUMERIC_RE.fullmatch(part):
            words = re.sub(r"[-_]", " ", part)
            return _WORD_START_RE.sub(lambda m: m.group(0).upper(), words).strip()
    return None


# ---------------------------------------------------------------------------
# Fallback chain
# ---------------------------------------------------------------------------

def _structured_title(html: str, position: int) -> Optional[str]:
    link_title = find_link_text(html, position)
    if link_title and len(link_title) >= STRUCTURED_MIN_LENGTH:
        return link_title

    nearby_title = find_nearby_title(html, position)
    if nearby_title and len(nearby_title) >= STRUCTURED_MIN_LENGTH:
        return nearby_title

    return None


def resolve_title(html: str, position: int, url: str) -> Optional[str]:
    """Run the fallback chain for one candidate; ``None`` if every strategy fails."""
    title = _structured_title(html, position)
    if title:
        return title

    return find_title_in_area(html, position) or title_from_url(url)
