"""Tests for the document text walker (parse → rewrite → serialize)."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import CData

from faleproxy.errors import ErrorKind, ParseFailure
from faleproxy.rewrite.models import TargetSpec
from faleproxy.rewrite.walker import (
    document_title,
    parse_document,
    rewrite_document,
    rewrite_html,
    serialize_document,
)


def _rewrite(html: str) -> BeautifulSoup:
    soup = parse_document(html)
    rewrite_document(soup)
    return soup


# ---------------------------------------------------------------------------
# Attribute / link preservation
# ---------------------------------------------------------------------------

class TestAttributePreservation:
    def test_link_text_rewritten_href_untouched(self) -> None:
        html = '<a href="http://yale.edu">About Yale</a>'
        assert rewrite_html(html) == '<a href="http://yale.edu">About Fale</a>'

    def test_other_attributes_untouched(self) -> None:
        html = '<img src="/Yale.png" alt="Yale Logo" title="YALE"><p class="yale">Yale</p>'
        soup = _rewrite(html)
        img = soup.find("img")
        assert img["src"] == "/Yale.png"
        assert img["alt"] == "Yale Logo"
        assert img["title"] == "YALE"
        assert soup.find("p")["class"] == ["yale"]
        assert soup.find("p").get_text() == "Fale"

    def test_sample_page_keeps_yale_urls(self, sample_html: str) -> None:
        soup = _rewrite(sample_html)
        hrefs = [a["href"] for a in soup.find_all("a")]
        assert all("yale.edu" in href for href in hrefs)
        assert soup.find("a").get_text() == "About Fale"


# ---------------------------------------------------------------------------
# Text node selection
# ---------------------------------------------------------------------------

class TestTextNodes:
    def test_rewrites_title_heading_and_paragraphs(self, sample_html: str) -> None:
        soup = _rewrite(sample_html)
        assert soup.title.get_text() == "Fale University Test Page"
        assert soup.h1.get_text() == "Welcome to Fale University"
        paragraphs = soup.find_all("p")
        assert paragraphs[0].get_text().startswith("Fale University is a private")
        assert "FALE is the third-oldest" in paragraphs[1].get_text()

    def test_nested_inline_elements(self) -> None:
        html = "<p>Go <b>Yale</b> Bulldogs, <i>go <u>YALE</u></i>!</p>"
        assert rewrite_html(html) == "<p>Go <b>Fale</b> Bulldogs, <i>go <u>FALE</u></i>!</p>"

    def test_script_body_is_not_rewritten(self) -> None:
        html = '<script>var school = "Yale";</script><p>Yale</p>'
        assert rewrite_html(html) == '<script>var school = "Yale";</script><p>Fale</p>'

    def test_style_body_is_not_rewritten(self) -> None:
        html = "<style>/* Yale */ .yale { color: blue; }</style><p>Yale</p>"
        soup = _rewrite(html)
        assert "/* Yale */" in soup.style.string
        assert soup.p.get_text() == "Fale"

    def test_comments_are_not_rewritten(self) -> None:
        html = "<div><!-- Yale --><span>Yale</span></div>"
        assert rewrite_html(html) == "<div><!-- Yale --><span>Fale</span></div>"

    def test_doctype_is_preserved(self, sample_html: str) -> None:
        out = serialize_document(_rewrite(sample_html))
        assert out.startswith("<!DOCTYPE html>")

    def test_template_content_is_rewritten(self) -> None:
        html = "<template><p>Yale</p></template>"
        assert rewrite_html(html) == "<template><p>Fale</p></template>"

    def test_ruby_annotations_are_rewritten(self) -> None:
        html = "<ruby>Yale<rt>Yale</rt><rp>(Yale)</rp></ruby>"
        assert rewrite_html(html) == "<ruby>Fale<rt>Fale</rt><rp>(Fale)</rp></ruby>"

    def test_cdata_is_not_rewritten(self) -> None:
        soup = parse_document("<p>Yale</p>")
        soup.p.append(CData("Yale"))
        rewrite_document(soup)
        assert serialize_document(soup) == "<p>Fale<![CDATA[Yale]]></p>"

    def test_partial_words_in_markup_text_are_left_alone(self) -> None:
        assert rewrite_html("<p>Yalesville</p>") == "<p>Yalesville</p>"

    def test_entities_survive_serialization(self) -> None:
        html = "<p>Yale &amp; Harvard &lt;3</p>"
        assert rewrite_html(html) == "<p>Fale &amp; Harvard &lt;3</p>"

    def test_custom_excluded_tags(self) -> None:
        soup = parse_document("<title>Yale</title><p>Yale</p>")
        rewrite_document(soup, excluded_tags=frozenset({"title"}))
        assert soup.title.get_text() == "Yale"
        assert soup.p.get_text() == "Fale"

    def test_custom_target(self) -> None:
        soup = parse_document("<p>Harvard Yard</p>")
        rewrite_document(soup, TargetSpec("harvard", "yale"))
        assert soup.p.get_text() == "Yale Yard"


# ---------------------------------------------------------------------------
# Return value and in-place mutation
# ---------------------------------------------------------------------------

class TestRewriteDocument:
    def test_returns_number_of_replacements(self) -> None:
        soup = parse_document("<p>Yale yale</p><p>YALE</p><script>Yale</script>")
        assert rewrite_document(soup) == 3

    def test_no_matches_returns_zero_and_keeps_markup(self) -> None:
        html = '<div id="x"><p>Harvard</p></div>'
        soup = parse_document(html)
        assert rewrite_document(soup) == 0
        assert serialize_document(soup) == html

    def test_mutates_in_place(self) -> None:
        soup = parse_document("<p>Yale</p>")
        result = rewrite_document(soup)
        assert isinstance(result, int)
        assert soup.p.string == "Fale"

    def test_second_pass_changes_nothing(self, sample_html: str) -> None:
        soup = _rewrite(sample_html)
        first = serialize_document(soup)
        assert rewrite_document(soup) == 0
        assert serialize_document(soup) == first


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseDocument:
    def test_returns_soup(self) -> None:
        assert isinstance(parse_document("<p>x</p>"), BeautifulSoup)

    def test_non_text_payload_raises(self) -> None:
        with pytest.raises(ParseFailure) as excinfo:
            parse_document(b"<p>Yale</p>")  # type: ignore[arg-type]
        assert excinfo.value.kind is ErrorKind.PARSE_FAILURE

    def test_parser_rejection_raises_parse_failure(self) -> None:
        with patch(
            "faleproxy.rewrite.walker.BeautifulSoup",
            side_effect=ParserRejectedMarkup("bad markup"),
        ):
            with pytest.raises(ParseFailure) as excinfo:
                parse_document("<p>Yale</p>")
        assert isinstance(excinfo.value.__cause__, ParserRejectedMarkup)
        assert excinfo.value.message.startswith("Failed to parse HTML")

    def test_fragment_is_not_wrapped(self) -> None:
        assert serialize_document(parse_document("<p>x</p>")) == "<p>x</p>"


class TestDocumentTitle:
    def test_extracts_title(self, sample_html: str) -> None:
        assert document_title(parse_document(sample_html)) == "Yale University Test Page"

    def test_missing_title_returns_empty(self) -> None:
        assert document_title(parse_document("<p>x</p>")) == ""
