"""Story extraction: turns raw homepage HTML into a list of :class:`Story`."""

from __future__ import annotations

import logging
from typing import List, Optional

from timestories.config import settings
from timestories.scraper.cleaning import clean_title, is_acceptable_title
from timestories.scraper.links import discover_links, filter_candidates
from timestories.scraper.models import Story
from timestories.scraper.titles import resolve_title

logger = logging.getLogger(__name__)


def extract_stories(
    html: str,
    domain: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Story]:
    """Extract up to *limit* latest stories from *html*.

    Candidates are discovered and filtered (see
    :mod:`timestories.scraper.links`), then resolved in document order until
    *limit* stories have been accepted.  Candidates past that point are never
    resolved.  An empty list is a valid result; malformed markup never raises.

    Args:
        html: The homepage markup.
        domain: Host whose article links are collected.  Defaults to
            ``settings.target_domain``.
        limit: Maximum number of stories.  Defaults to ``settings.max_stories``.
    """
    domain = domain or settings.target_domain
    limit = settings.max_stories if limit is None else limit

    logger.info("HTML length: %d", len(html))

    links = discover_links(html, domain)
    logger.info("Found %d total %s URLs", len(links), domain)
    for i, link in enumerate(links[:10], start=1):
        logger.debug("  %d. %s", i, link.url)

    candidates = filter_candidates(links)
    logger.info("Filtered to %d potential articles", len(candidates))
    for i, candidate in enumerate(candidates[:15], start=1):
        logger.debug("  %d. %s", i, candidate.url)

    # filter_candidates yields each URL once, so no link is used twice.
    stories: List[Story] = []

    for candidate in candidates:
        if len(stories) >= limit:
            break
        logger.debug("Processing %s", candidate.url)
        title = clean_title(resolve_title(html, candidate.position, candidate.url))
        if not title:
            logger.debug("No title found for %s", candidate.url)
            continue

        if not is_acceptable_title(title):
            logger.debug("Title rejected: %r (length: %d)", title, len(title))
            continue

        stories.append(Story(title=title, link=candidate.url))
        logger.debug("Added story %d: %r", len(stories), title)

    logger.info("Extracted %d stories", len(stories))
    return stories
