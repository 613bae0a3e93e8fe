"""Document text walker: parse → rewrite text nodes → serialize.

Only plain character data is rewritten.  Attribute values, comments, the
doctype, CDATA sections, processing instructions and the bodies of
``<script>``/``<style>`` are left exactly as parsed.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from faleproxy.config import settings
from faleproxy.errors import ParseFailure
from faleproxy.rewrite.models import DEFAULT_TARGET, TargetSpec
from faleproxy.rewrite.substitution import count_matches, substitute

logger = logging.getLogger(__name__)

EXCLUDED_TAGS: FrozenSet[str] = frozenset({"script", "style"})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_text_node(node: object) -> bool:
    # Comment, Doctype, CData, Declaration and processing instructions are
    # PreformattedString; ruby and template text are ordinary character data.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _eligible_text_nodes(
    soup: BeautifulSoup, excluded_tags: FrozenSet[str]
) -> List[NavigableString]:
    """Collect rewritable text nodes up front so mutation never disturbs the
    depth-first traversal."""
    nodes: List[NavigableString] = []
    for node in soup.descendants:
        if not _is_text_node(node):
            continue
        parent = node.parent
        if isinstance(parent, Tag) and parent.name in excluded_tags:
            continue
        nodes.append(node)
    return nodes


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_document(html: str, parser: str | None = None) -> BeautifulSoup:
    """Parse *html* into a :class:`~bs4.BeautifulSoup` tree.

    Raises:
        ParseFailure: If the payload is not text or the parser rejects it.
    """
    if not isinstance(html, str):
        raise ParseFailure(f"expected text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, parser or settings.html_parser)
    except ParserRejectedMarkup as exc:
        raise ParseFailure(str(exc) or "markup rejected by parser") from exc


def rewrite_document(
    soup: BeautifulSoup,
    spec: TargetSpec = DEFAULT_TARGET,
    *,
    excluded_tags: FrozenSet[str] = EXCLUDED_TAGS,
) -> int:
    """Rewrite every eligible text node of *soup* in place.

    Element attributes are never touched, so ``href``/``src`` targets stay
    valid while the visible link text changes.

    Returns:
        The number of words replaced.
    """
    replaced = 0
    for node in _eligible_text_nodes(soup, excluded_tags):
        text = str(node)
        new_text = substitute(text, spec)
        if new_text is text:
            continue
        replaced += count_matches(text, spec)
        node.replace_with(type(node)(new_text))

    logger.debug("Replaced %d occurrence(s) of %r", replaced, spec.match_term)
    return replaced


def serialize_document(soup: BeautifulSoup) -> str:
    """Render *soup* back to an HTML string."""
    return str(soup)


def document_title(soup: BeautifulSoup) -> str:
    """Return the text of the first ``<title>``, or an empty string."""
    title = soup.find("title")
    if title is None:
        return ""
    return title.get_text().strip()


def rewrite_html(html: str, spec: TargetSpec = DEFAULT_TARGET) -> str:
    """Parse, rewrite and serialize *html* in one call."""
    soup = parse_document(html)
    rewrite_document(soup, spec)
    return serialize_document(soup)
