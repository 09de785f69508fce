"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging.  No state is kept between requests:
every stories request re-fetches and re-extracts the homepage.

Error mapping
-------------
    pipeline failure            → 500 {"error": "Failed to fetch stories", "message": ...}
    unknown path or method      → 404 {"error": "Endpoint not found"}

Every response, errors included, carries permissive GET-only CORS headers.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from timestories import __version__
from timestories.api.responses import PrettyJSONResponse
from timestories.api.routers import stories as stories_router
from timestories.api.routers.stories import StoriesUnavailableError
from timestories.config import configure_logging, settings

logger = logging.getLogger(__name__)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    configure_logging()
    logger.info("Serving stories for %s", settings.target_url)
    yield


async def _stories_unavailable(request: Request, exc: StoriesUnavailableError) -> PrettyJSONResponse:
    return PrettyJSONResponse(
        status_code=500,
        content={"error": "Failed to fetch stories", "message": str(exc)},
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> PrettyJSONResponse:
    # Unknown paths and non-GET methods both read as "not found".
    if exc.status_code in (404, 405):
        return PrettyJSONResponse(status_code=404, content={"error": "Endpoint not found"})
    return PrettyJSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Time Stories API",
        description=(
            "Fetches the Time.com homepage and heuristically extracts the "
            "latest stories (title + link) from its raw markup."
        ),
        version=__version__,
        lifespan=lifespan,
        default_response_class=PrettyJSONResponse,
        # Paths are matched exactly; "/debug/" is not "/debug".
        redirect_slashes=False,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        # CORSMiddleware only answers requests that carry an Origin header.
        response = await call_next(request)
        response.headers.update(_CORS_HEADERS)
        return response

    app.add_exception_handler(StoriesUnavailableError, _stories_unavailable)
    app.add_exception_handler(StarletteHTTPException, _http_error)

    app.include_router(stories_router.router, tags=["stories"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn timestories.api.app:app --port 3000
app = create_app()
