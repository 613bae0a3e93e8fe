"""Fetch-and-rewrite pipeline.

``handle_fetch_request`` orchestrates one request from a client-supplied URL
to rewritten HTML:

    validate → fetch → parse → rewrite text nodes → serialize

Every step is terminal on failure; the caller gets either the complete
rewritten document or a failed :class:`TransformResult`, never a fragment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from faleproxy.errors import ErrorKind, InvalidUrlError, MissingUrlError, ProxyError
from faleproxy.rewrite.models import DEFAULT_TARGET, TargetSpec
from faleproxy.rewrite.walker import (
    document_title,
    parse_document,
    rewrite_document,
    serialize_document,
)
from faleproxy.scraper.fetcher import fetch_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Outcome of a single fetch-and-rewrite request."""

    success: bool
    content: str = ""
    title: str = ""
    original_url: str = ""
    error_kind: ErrorKind | None = None
    message: str = ""

    @classmethod
    def ok(cls, content: str, *, title: str = "", original_url: str = "") -> TransformResult:
        return cls(success=True, content=content, title=title, original_url=original_url)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> TransformResult:
        return cls(success=False, error_kind=kind, message=message)

    @property
    def status_code(self) -> int:
        """HTTP status the boundary layer should answer with."""
        if self.success:
            return 200
        if self.error_kind is ErrorKind.MISSING_URL:
            return 400
        return 500


async def transform_url(
    url: Any,
    *,
    spec: TargetSpec = DEFAULT_TARGET,
    client: httpx.AsyncClient | None = None,
) -> TransformResult:
    """Run the pipeline for *url*, raising :class:`ProxyError` on failure.

    Pipeline:
        1. :func:`~faleproxy.scraper.fetcher.fetch_url` — validate the URL
           and GET it.
        2. :func:`~faleproxy.rewrite.walker.parse_document` — build the tree.
        3. :func:`~faleproxy.rewrite.walker.rewrite_document` — substitute
           words in text nodes only.
        4. :func:`~faleproxy.rewrite.walker.serialize_document` — render it.
    """
    if url is None or (isinstance(url, str) and not url.strip()):
        raise MissingUrlError()
    if not isinstance(url, str):
        raise InvalidUrlError(str(url), f"expected a string, got {type(url).__name__}")

    raw = await fetch_url(url, client=client)
    if not raw.is_html:
        logger.info("%s declared %r; parsing it as HTML anyway", raw.url, raw.content_type)

    soup = parse_document(raw.html)
    replaced = rewrite_document(soup, spec)
    content = serialize_document(soup)

    logger.info(
        "Rewrote %s (%d replacement(s), decoded as %s)",
        raw.url,
        replaced,
        raw.encoding or "unknown",
    )
    return TransformResult.ok(content, title=document_title(soup), original_url=raw.url)


async def handle_fetch_request(
    url: Any,
    *,
    spec: TargetSpec = DEFAULT_TARGET,
    client: httpx.AsyncClient | None = None,
) -> TransformResult:
    """Boundary-facing entry point: like :func:`transform_url` but every
    pipeline error comes back as a failed :class:`TransformResult`.

    Unexpected exceptions are not caught; they reach the framework's own
    500 handler.
    """
    try:
        return await transform_url(url, spec=spec, client=client)
    except ProxyError as exc:
        logger.warning("Request for %r failed [%s]: %s", url, exc.kind.value, exc.message)
        return TransformResult.fail(exc.kind, exc.message)
