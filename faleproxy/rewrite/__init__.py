"""Rewrite package — word substitution and the HTML text walker."""

from faleproxy.rewrite.models import DEFAULT_TARGET, CaseForm, TargetSpec
from faleproxy.rewrite.substitution import apply_case, classify_case, substitute
from faleproxy.rewrite.walker import (
    parse_document,
    rewrite_document,
    rewrite_html,
    serialize_document,
)

__all__ = [
    "DEFAULT_TARGET",
    "CaseForm",
    "TargetSpec",
    "apply_case",
    "classify_case",
    "substitute",
    "parse_document",
    "rewrite_document",
    "rewrite_html",
    "serialize_document",
]
