"""Latest-stories endpoints.

Routes
------
GET /                   Static description of the endpoints
GET /getTimeStories     Fetch the homepage and return up to 6 stories
GET /debug              Same pipeline, wrapped with document statistics
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from timestories.api.responses import PrettyJSONResponse
from timestories.scraper import latest_stories
from timestories.scraper.models import FetchedDocument, Story

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class StoryOut(BaseModel):
    title: str
    link: str


class DebugResponse(BaseModel):
    htmlLength: int
    storiesFound: int
    stories: list[StoryOut]


class StoriesUnavailableError(Exception):
    """The fetch-then-extract pipeline failed; rendered as HTTP 500."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _run_pipeline() -> tuple[FetchedDocument, list[Story]]:
    try:
        document, stories = await latest_stories()
    except Exception as exc:
        logger.error("Error processing request: %s", exc)
        raise StoriesUnavailableError(str(exc) or exc.__class__.__name__) from exc

    for i, story in enumerate(stories, start=1):
        logger.info("%d. %s  %s", i, story.title, story.link)
    return document, stories


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/")
def index() -> dict[str, Any]:
    """Describe the available endpoints."""
    return {
        "message": "Time.com Stories API",
        "endpoints": {
            "GET /getTimeStories": "Get latest 6 stories from Time.com",
            "GET /debug": "Debug extraction process",
        },
    }


@router.get(
    "/getTimeStories",
    response_model=list[StoryOut],
    response_class=PrettyJSONResponse,
)
async def get_time_stories() -> list[dict[str, str]]:
    """Fetch the homepage and return its latest stories in page order."""
    logger.info("Fetching latest stories")
    _, stories = await _run_pipeline()
    return [story.to_dict() for story in stories]


@router.get("/debug", response_model=DebugResponse, response_class=PrettyJSONResponse)
async def debug() -> dict[str, Any]:
    """Run the pipeline and report the document size alongside the stories."""
    document, stories = await _run_pipeline()
    return {
        "htmlLength": len(document.html),
        "storiesFound": len(stories),
        "stories": [story.to_dict() for story in stories],
    }
