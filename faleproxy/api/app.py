"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single ``httpx.AsyncClient`` (shared across all
requests via ``request.app.state.http_client``) so concurrent fetches reuse
one connection pool.  On shutdown it closes the client cleanly.

Routers
-------
    /fetch  — fetch a page and rewrite its visible text
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from faleproxy import __version__
from faleproxy.config import settings
from faleproxy.logger import configure
from faleproxy.scraper.fetcher import build_client

from faleproxy.api.routers import fetch as fetch_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared HTTP client on startup and close it on shutdown."""
    client = build_client()
    app.state.http_client = client
    try:
        yield
    finally:
        await client.aclose()


async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer unusable request bodies (bad JSON, not an object) with the same
    ``{"error": ...}`` shape as every other failure."""
    errors = exc.errors()
    reason = errors[0].get("msg", "") if errors else ""
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {reason}"})


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure(level=settings.log_level, log_file=settings.log_file)

    app = FastAPI(
        title="Fale Proxy",
        description=(
            "Fetches a web page and returns its HTML with every whole-word "
            "'Yale' in the visible text replaced by 'Fale'. Links, attributes "
            "and script/style content are left untouched."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, invalid_body_handler)

    app.include_router(fetch_router.router, prefix="/fetch", tags=["fetch"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn faleproxy.api.app:app --reload
app = create_app()
