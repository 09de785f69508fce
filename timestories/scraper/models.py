"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class FetchedDocument:
    """The raw HTTP response for the homepage fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class CandidateLink:
    """An on-domain URL found in the markup, not yet known to be an article.

    ``position`` is the character offset of the ``href=`` occurrence and is
    only ever used for ordering and as the anchor for title searches.
    """

    url: str
    position: int


@dataclass(frozen=True)
class Story:
    """A validated ``{title, link}`` record."""

    title: str
    link: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
