"""Scraper package — web fetch."""

from faleproxy.scraper.fetcher import fetch_url, validate_url
from faleproxy.scraper.models import RawPage

__all__ = ["fetch_url", "validate_url", "RawPage"]
