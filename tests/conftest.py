"""Shared fixtures and sample pages."""

from __future__ import annotations

import logging

import pytest

SAMPLE_HTML_WITH_YALE = """\
<!DOCTYPE html>
<html>
<head>
  <title>Yale University Test Page</title>
  <style>.yale-blue { color: #00356b; } /* Yale */</style>
</head>
<body>
  <header>
    <h1>Welcome to Yale University</h1>
    <nav>
      <a href="https://www.yale.edu/about">About Yale</a>
      <a href="https://www.yale.edu/admissions">Admissions</a>
    </nav>
  </header>
  <main>
    <p>Yale University is a private Ivy League research university in New Haven, Connecticut.</p>
    <p>Founded in 1701, YALE is the third-oldest institution of higher education in the United States.</p>
    <img src="https://www.yale.edu/logo.png" alt="Yale Logo">
    <!-- Yale comment -->
  </main>
  <script>var school = "Yale"; console.log(school);</script>
</body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML_WITH_YALE


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers bound to streams that pytest / CliRunner close between tests."""
    yield
    lg = logging.getLogger("faleproxy")
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
