"""Value types driving the word substitution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CaseForm(Enum):
    """Case pattern of a matched word."""

    UPPER = "upper"
    CAPITALIZED = "capitalized"
    DEFAULT = "default"


@dataclass(frozen=True)
class TargetSpec:
    """The (match term, replacement term) pair.

    Matching is case-insensitive.  The replacement term is used verbatim for
    matches in :attr:`CaseForm.DEFAULT`, so give it in lowercase.
    """

    match_term: str
    replacement_term: str

    def __post_init__(self) -> None:
        if not self.match_term.strip():
            raise ValueError("match_term must not be empty")
        if not self.replacement_term.strip():
            raise ValueError("replacement_term must not be empty")


DEFAULT_TARGET = TargetSpec(match_term="yale", replacement_term="fale")
