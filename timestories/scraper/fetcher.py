"""Async HTTP fetcher for the target homepage."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from timestories.config import settings
from timestories.scraper.errors import FetchTimeoutError, NetworkError
from timestories.scraper.models import FetchedDocument

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Connection": "close",
    }


async def fetch_document(url: Optional[str] = None) -> FetchedDocument:
    """GET *url* (default ``settings.target_url``) and return its body.

    The whole response is buffered before returning; on timeout the request
    is cancelled.  There is no retry.

    Raises:
        FetchTimeoutError: If the request exceeds ``settings.request_timeout``.
        NetworkError: On connection, DNS or TLS failure, a 4xx/5xx status, or
            a malformed URL.
    """
    url = url or settings.target_url
    logger.info("Fetching %s", url)

    try:
        async with httpx.AsyncClient(
            headers=_default_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            # httpx bounds each phase; wait_for bounds the whole exchange.
            response = await asyncio.wait_for(client.get(url), settings.request_timeout)
            response.raise_for_status()
    except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
        raise FetchTimeoutError(f"Request timeout after {settings.request_timeout:g}s") from exc
    except httpx.HTTPStatusError as exc:
        raise NetworkError(f"HTTP {exc.response.status_code} from {url}") from exc
    except httpx.HTTPError as exc:
        raise NetworkError(str(exc) or exc.__class__.__name__) from exc
    except httpx.InvalidURL as exc:
        raise NetworkError(f"Invalid URL {url!r}: {exc}") from exc

    return FetchedDocument(url=url, html=response.text, status_code=response.status_code)
