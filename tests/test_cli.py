"""Tests for the faleproxy CLI."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def test_rewrite_local_file(tmp_path, sample_html):
    page = tmp_path / "page.html"
    page.write_text(sample_html, encoding="utf-8")

    result = runner.invoke(app, ["rewrite", str(page)])

    assert result.exit_code == 0
    assert "<title>Fale University Test Page</title>" in result.stdout
    assert 'href="https://www.yale.edu/about"' in result.stdout


def test_rewrite_to_output_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<p>YALE</p>", encoding="utf-8")
    out = tmp_path / "out.html"

    result = runner.invoke(app, ["rewrite", str(page), "--output", str(out)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "<p>FALE</p>"


def test_rewrite_missing_file(tmp_path):
    result = runner.invoke(app, ["rewrite", str(tmp_path / "nope.html")])
    assert result.exit_code != 0


def test_fetch_prints_rewritten_html():
    with respx.mock:
        respx.get("https://upstream.example/").mock(
            return_value=httpx.Response(200, html="<h1>Welcome to Yale</h1>")
        )
        result = runner.invoke(app, ["--log-level", "WARNING", "fetch", "https://upstream.example/"])

    assert result.exit_code == 0
    assert "<h1>Welcome to Fale</h1>" in result.stdout


def test_fetch_invalid_url_exits_with_error():
    result = runner.invoke(app, ["--log-level", "CRITICAL", "fetch", "not-a-valid-url"])
    assert result.exit_code == 1
    assert "Invalid URL" in result.output


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "8080"])

    assert result.exit_code == 0
    mock_run.assert_called_once_with(
        "faleproxy.api.app:app", host="0.0.0.0", port=8080, reload=False
    )
