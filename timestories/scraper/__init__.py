"""Scraper package: homepage fetch & latest-story extraction."""

from timestories.scraper.errors import FetchTimeoutError, NetworkError
from timestories.scraper.extractor import extract_stories
from timestories.scraper.fetcher import fetch_document
from timestories.scraper.models import CandidateLink, FetchedDocument, Story
from timestories.scraper.pipeline import latest_stories

__all__ = [
    "fetch_document",
    "extract_stories",
    "latest_stories",
    "FetchedDocument",
    "CandidateLink",
    "Story",
    "NetworkError",
    "FetchTimeoutError",
]
