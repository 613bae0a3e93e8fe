"""Whole-word, case-preserving word substitution.

``substitute`` knows nothing about markup; the walker decides which strings
it is applied to.
"""

from __future__ import annotations

import re
from functools import lru_cache

from faleproxy.rewrite.models import DEFAULT_TARGET, CaseForm, TargetSpec

# A "word character" here is a letter or a digit; underscore and punctuation
# count as boundaries, so "Yale's" and "Yale_" match but "Yalesville" does not.
_NOT_PRECEDED_BY_ALNUM = r"(?<![^\W_])"
_NOT_FOLLOWED_BY_ALNUM = r"(?![^\W_])"


@lru_cache(maxsize=32)
def _pattern(match_term: str) -> re.Pattern[str]:
    return re.compile(
        _NOT_PRECEDED_BY_ALNUM + re.escape(match_term) + _NOT_FOLLOWED_BY_ALNUM,
        re.IGNORECASE,
    )


def classify_case(word: str) -> CaseForm:
    """Classify *word* as all-uppercase, capitalized, or anything else.

    Uppercase wins ties, so a single uppercase letter is ``UPPER``.
    """
    if word.isupper():
        return CaseForm.UPPER
    if word[:1].isupper() and (len(word) == 1 or word[1:].islower()):
        return CaseForm.CAPITALIZED
    return CaseForm.DEFAULT


def apply_case(replacement: str, form: CaseForm) -> str:
    if form is CaseForm.UPPER:
        return replacement.upper()
    if form is CaseForm.CAPITALIZED:
        return replacement.capitalize()
    return replacement


def count_matches(text: str, spec: TargetSpec = DEFAULT_TARGET) -> int:
    """Return the number of whole-word occurrences of the match term."""
    return sum(1 for _ in _pattern(spec.match_term).finditer(text))


def substitute(text: str, spec: TargetSpec = DEFAULT_TARGET) -> str:
    """Replace every whole-word occurrence of ``spec.match_term`` in *text*.

    Each replacement takes the case form of the word it replaces::

        >>> substitute("YALE, Yale and yale")
        'FALE, Fale and fale'
        >>> substitute("Yalesville")
        'Yalesville'

    Text without any match is returned unchanged.
    """
    pattern = _pattern(spec.match_term)
    if pattern.search(text) is None:
        return text
    return pattern.sub(
        lambda m: apply_case(spec.replacement_term, classify_case(m.group(0))),
        text,
    )
