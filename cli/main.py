"""Fale Proxy CLI — entry-point for running and exercising the proxy.

Usage:
    faleproxy --help

Commands:
    serve     → run the HTTP API with uvicorn
    fetch     → fetch a URL and print the rewritten HTML
    rewrite   → rewrite a local HTML file
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from faleproxy.config import settings
from faleproxy.errors import ParseFailure
from faleproxy.logger import configure
from faleproxy.rewrite import rewrite_html
from faleproxy.transform import handle_fetch_request

app = typer.Typer(
    name="faleproxy",
    help="Fale Proxy CLI: replace 'Yale' with 'Fale' in web pages.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
    log_file: Optional[Path] = typer.Option(
        settings.log_file, "--log-file", help="Also write logs to this rotating file."
    ),
) -> None:
    """Configure logging before any command runs."""
    configure(level=log_level.upper(), log_file=log_file)


def _emit(html: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(html)
        return
    output.write_text(html, encoding="utf-8")
    typer.echo(f"[faleproxy] Wrote {len(html)} characters to {output}", err=True)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Bind address."),
    port: int = typer.Option(settings.port, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the Fale Proxy HTTP API."""
    import uvicorn  # noqa: PLC0415

    typer.echo(f"[serve] Fale Proxy listening on http://{host}:{port}")
    uvicorn.run("faleproxy.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# One-shot rewrites
# ---------------------------------------------------------------------------
@app.command("fetch")
def fetch(
    url: str = typer.Argument(..., help="Page to fetch."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write HTML to this file."),
) -> None:
    """Fetch URL and print its HTML with the visible text rewritten."""
    result = asyncio.run(handle_fetch_request(url))
    if not result.success:
        typer.echo(f"[fetch] Error: {result.message}", err=True)
        raise typer.Exit(code=1)
    _emit(result.content, output)


@app.command("rewrite")
def rewrite(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local HTML file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write HTML to this file."),
) -> None:
    """Rewrite a local HTML file."""
    html = path.read_text(encoding="utf-8", errors="replace")
    try:
        rewritten = rewrite_html(html)
    except ParseFailure as exc:
        typer.echo(f"[rewrite] Error: {exc.message}", err=True)
        raise typer.Exit(code=1)
    _emit(rewritten, output)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
