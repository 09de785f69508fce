"""Candidate link discovery and filtering.

Discovery is a single regex pass over the document that records every
absolute, on-domain ``href="..."`` value together with its offset.  Filtering
normalises each URL, drops duplicates and obvious non-articles, and keeps
only URLs that look "deep" enough to be a story.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

from timestories.scraper.models import CandidateLink

logger = logging.getLogger(__name__)

# Substrings (lower-case) that mark assets and evergreen site pages.
EXCLUDE_PATTERNS = (
    "wp-content",
    "/img/",
    "/static/",
    "/css/",
    "/js/",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".pdf",
    ".css",
    ".js",
    "subscribe",
    "newsletter",
    "privacy-policy",
    "terms-of-service",
    "contact",
    "about",
)

MIN_URL_LENGTH = 31
MIN_PATH_SEGMENTS = 4

_TRAILING_JUNK_RE = re.compile(r'[/\\"]+$')


def _href_pattern(domain: str) -> re.Pattern[str]:
    return re.compile(
        r'href="(https://' + re.escape(domain) + r'/[^"]+)"',
        re.IGNORECASE,
    )


def discover_links(html: str, domain: str) -> List[CandidateLink]:
    """Return every ``https://<domain>/...`` href in *html*, in document order.

    Duplicates are kept; each occurrence carries the offset of its ``href=``.
    Unterminated attributes simply do not match.
    """
    return [
        CandidateLink(url=m.group(1), position=m.start())
        for m in _href_pattern(domain).finditer(html)
    ]


def normalize_url(url: str) -> str:
    """Drop the query string and fragment, then trailing ``/``, ``\\`` and ``"``."""
    url = url.split("?", 1)[0]
    url = url.split("#", 1)[0]
    return _TRAILING_JUNK_RE.sub("", url)


def is_excluded(url: str) -> bool:
    """``True`` if *url* contains any asset or non-article marker."""
    lowered = url.lower()
    return any(pattern in lowered for pattern in EXCLUDE_PATTERNS)


def looks_like_article(url: str) -> bool:
    """Article paths are long and deep; bare section and home links are not."""
    return len(url) >= MIN_URL_LENGTH and len(url.split("/")) >= MIN_PATH_SEGMENTS


def filter_candidates(links: Iterable[CandidateLink]) -> List[CandidateLink]:
    """Normalise, dedupe and filter *links*; the result is sorted by position.

    The earliest occurrence of a normalised URL wins.  A URL that is rejected is
    still remembered, so a later copy of it is rejected as a duplicate.
    """
    seen: set[str] = set()
    articles: List[CandidateLink] = []

    for link in sorted(links, key=lambda c: c.position):
        url = normalize_url(link.url)
        if url in seen:
            continue
        seen.add(url)

        if is_excluded(url) or not looks_like_article(url):
            continue
        articles.append(CandidateLink(url=url, position=link.position))

    return articles
