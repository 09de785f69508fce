"""Fetch-then-extract, the unit of work behind every stories request.

Nothing is cached between calls; each one re-fetches and re-extracts.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from timestories.scraper.extractor import extract_stories
from timestories.scraper.fetcher import fetch_document
from timestories.scraper.models import FetchedDocument, Story


async def latest_stories(url: Optional[str] = None) -> Tuple[FetchedDocument, List[Story]]:
    """Fetch the homepage and return it together with its extracted stories.

    The stories are extracted for the host of *url* when one is given,
    otherwise for ``settings.target_domain``.

    Raises:
        NetworkError: Propagated from :func:`fetch_document`.
    """
    document = await fetch_document(url)
    domain = urlsplit(url).hostname if url else None
    return document, extract_stories(document.html, domain=domain)
