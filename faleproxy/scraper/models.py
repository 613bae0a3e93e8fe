"""Data models for the fetch step."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawPage:
    """A successful HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int
    content_type: str = ""
    encoding: str | None = None

    @property
    def is_html(self) -> bool:
        """``True`` when the upstream declared an HTML (or XHTML) body."""
        return "html" in self.content_type.lower()
