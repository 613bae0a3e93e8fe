"""Fetch endpoint.

Routes
------
POST /fetch    Body: {"url": "https://..."}    → handle_fetch_request

Responses
---------
200  {"success": true, "content": "<html>", "title": "...", "originalUrl": "..."}
400  {"error": "URL is required"}
400  {"error": "Invalid request body: ..."}  body is not a JSON object
500  {"error": "<message>"}  invalid URL, network failure, upstream non-2xx,
                             unparseable HTML
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from faleproxy.transform import TransformResult, handle_fetch_request

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class FetchRequest(BaseModel):
    # Any: a missing URL gets the 400 body, a non-string one the invalid-URL 500.
    url: Any = None


class FetchResponse(BaseModel):
    success: bool
    content: str
    title: str
    originalUrl: str


class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _to_response(result: TransformResult) -> JSONResponse:
    if not result.success:
        return JSONResponse(status_code=result.status_code, content={"error": result.message})
    return JSONResponse(
        status_code=result.status_code,
        content={
            "success": True,
            "content": result.content,
            "title": result.title,
            "originalUrl": result.original_url,
        },
    )


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=FetchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def fetch_endpoint(request: Request, body: Optional[FetchRequest] = None) -> JSONResponse:
    """Fetch ``body.url`` and return its HTML with the visible text rewritten."""
    url = body.url if body is not None else None
    client = getattr(request.app.state, "http_client", None)
    result = await handle_fetch_request(url, client=client)
    return _to_response(result)
