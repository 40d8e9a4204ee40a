"""
Text Matching Utility
Single normalized matcher shared by retrieval, destination and activity scoring.

Normalization: case-folded, accents stripped, punctuation collapsed to
single spaces. Two phrases match when either normalized form is a
substring of the other ("paris" ~ "Paris, France", "beach" ~ "Beaches").
"""

import re
import unicodedata
from typing import Iterable, Optional

_NON_WORD = re.compile(r"[\W_]+")


def normalize(text: Optional[str]) -> str:
    """
    Normalize free text for comparison

    Example:
        >>> normalize("  Côte d'Azur!! ")
        'cote d azur'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", str(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_WORD.sub(" ", stripped.casefold()).strip()


def text_matches(a: Optional[str], b: Optional[str]) -> bool:
    """
    True when one phrase contains the other (either direction)

    Empty phrases never match.

    Example:
        >>> text_matches("Paris", "paris, France")
        True
        >>> text_matches("snorkel", "Snorkeling trips")
        True
        >>> text_matches("Goa", "")
        False
    """
    left, right = normalize(a), normalize(b)
    if not left or not right:
        return False
    return left in right or right in left


def matches_any(term: Optional[str], candidates: Iterable[Optional[str]]) -> bool:
    """True when `term` matches at least one candidate phrase"""
    return any(text_matches(term, candidate) for candidate in candidates)


def first_match(term: Optional[str], candidates: Iterable[Optional[str]]) -> Optional[str]:
    """First candidate phrase matched by `term`, if any"""
    for candidate in candidates:
        if text_matches(term, candidate):
            return candidate
    return None
