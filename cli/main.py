"""Time Stories CLI: entry-point for fetching, extracting and serving.

Usage:
    python cli/main.py --help

Commands:
    stories   → fetch the homepage and print its latest stories
    extract   → run the extractor over a saved HTML file (no network)
    serve     → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from timestories.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import List, Optional

import typer

from timestories.config import configure_logging, settings
from timestories.scraper import NetworkError, extract_stories, latest_stories
from timestories.scraper.models import Story

app = typer.Typer(
    name="time-stories",
    help="Time Stories CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: $LOG_LEVEL or INFO)."
    ),
) -> None:
    """Extract the latest stories from a news homepage."""
    configure_logging(log_level)


def _dump(stories: List[Story]) -> str:
    return json.dumps([s.to_dict() for s in stories], ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# Fetch + extract
# ---------------------------------------------------------------------------
@app.command("stories")
def stories_cmd(
    url: Optional[str] = typer.Option(None, help="Homepage URL (default: $TARGET_URL)."),
) -> None:
    """Fetch the homepage and print its latest stories as JSON."""
    target = url or settings.target_url
    typer.echo(f"[stories] Fetching {target!r} …", err=True)
    try:
        document, stories = asyncio.run(latest_stories(url))
    except NetworkError as exc:
        typer.echo(f"[stories] Failed to fetch stories: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[stories] HTML length: {len(document.html)}  stories: {len(stories)}", err=True)
    typer.echo(_dump(stories))


# ---------------------------------------------------------------------------
# Offline extraction
# ---------------------------------------------------------------------------
@app.command("extract")
def extract_cmd(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved HTML file."),
    domain: Optional[str] = typer.Option(
        None, help="Article domain (default: host of $TARGET_URL)."
    ),
    limit: int = typer.Option(settings.max_stories, help="Maximum number of stories."),
) -> None:
    """Extract stories from a local HTML file and print them as JSON."""
    html = path.read_text(encoding="utf-8", errors="replace")
    stories = extract_stories(html, domain=domain, limit=limit)
    typer.echo(_dump(stories))


# ---------------------------------------------------------------------------
# HTTP server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve_cmd(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, help="Port (default: $PORT or 3000)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn  # noqa: PLC0415

    port = port or settings.port
    typer.echo(f"Server running on http://localhost:{port}")
    typer.echo(f"API endpoint: http://localhost:{port}/getTimeStories")
    typer.echo(f"Debug endpoint: http://localhost:{port}/debug")
    uvicorn.run("timestories.api.app:app", host=host, port=port, log_level=settings.log_level.lower())


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
