"""Exceptions raised by the fetcher."""

from __future__ import annotations


class NetworkError(Exception):
    """The homepage could not be retrieved (DNS, TLS, reset, bad status)."""


class FetchTimeoutError(NetworkError):
    """The homepage fetch exceeded the configured timeout."""
