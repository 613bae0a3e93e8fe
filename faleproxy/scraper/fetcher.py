"""Async HTTP fetcher.

Redirects are followed by default (``FOLLOW_REDIRECTS``).  The body is decoded
by ``httpx``: the charset declared in ``Content-Type`` wins, otherwise UTF-8
with replacement characters.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import HttpUrl, TypeAdapter, ValidationError

from faleproxy.config import settings
from faleproxy.errors import FetchError, InvalidUrlError, UpstreamError
from faleproxy.scraper.models import RawPage

logger = logging.getLogger(__name__)

_HTTP_URL = TypeAdapter(HttpUrl)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def validate_url(url: str) -> str:
    """Return *url* stripped of surrounding whitespace if it is a well-formed
    absolute ``http``/``https`` URL.

    Raises:
        InvalidUrlError: For anything else (relative paths, other schemes,
            missing host, garbage).
    """
    candidate = url.strip()
    try:
        _HTTP_URL.validate_python(candidate)
    except ValidationError as exc:
        reason = exc.errors()[0].get("msg", "") if exc.errors() else ""
        raise InvalidUrlError(url, reason) from exc

    # pydantic repairs inputs such as "http:/example.com"; httpx sends the
    # string as given, so it must carry a host of its own.
    try:
        host = httpx.URL(candidate).host
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    if not host:
        raise InvalidUrlError(url, "missing host")
    return candidate


def build_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` configured from :data:`settings`."""
    return httpx.AsyncClient(
        headers=_default_headers(),
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=settings.follow_redirects,
    )


async def _get(client: httpx.AsyncClient, url: str, timeout: float | None) -> httpx.Response:
    if timeout is None:
        return await client.get(url)
    return await client.get(url, timeout=timeout)


async def fetch_url(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> RawPage:
    """Fetch *url* with a single GET and return a :class:`RawPage`.

    The URL is validated before any network activity.  When *client* is
    ``None`` a short-lived client is opened for this call only.

    Raises:
        InvalidUrlError: If *url* is not an absolute http(s) URL.
        FetchError: On any transport failure, including timeouts.
        UpstreamError: If the server returns a non-2xx status code.
    """
    target = validate_url(url)
    logger.debug("GET %s", target)

    try:
        if client is None:
            async with build_client(timeout) as own_client:
                response = await _get(own_client, target, None)
        else:
            response = await _get(client, target, timeout)
    except httpx.RequestError as exc:
        logger.warning("Fetching %s failed: %s", target, exc.__class__.__name__)
        raise FetchError(target, str(exc) or exc.__class__.__name__) from exc

    if not response.is_success:
        logger.warning("Fetching %s returned HTTP %d", target, response.status_code)
        raise UpstreamError(target, response.status_code)

    return RawPage(
        url=target,
        html=response.text,
        status_code=response.status_code,
        content_type=response.headers.get("Content-Type", ""),
        encoding=response.encoding,
    )
