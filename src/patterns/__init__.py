"""Title-pattern name extraction for case suggestions.

A reduced-feature sibling of the extract module: names only, found through
phrasing that crime-show titles use ("Who Killed X?", "The Murder of X").
Names are returned in Title Case rather than lowercase.
"""

from __future__ import annotations

import re
from typing import Optional


_NAME = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,2}"
_FLAGS = re.ASCII | re.IGNORECASE

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "The [Name] Case" / "The [Name] Murder Case"
    re.compile(rf"the\s+({_NAME})\s+(?:murder\s+)?case", _FLAGS),
    # "Who Killed [Name]?" / "Who Murdered [Name]?"
    re.compile(rf"who\s+(?:killed|murdered)\s+({_NAME})\??", _FLAGS),
    # "[Name] Murder" / "Murder of [Name]"
    re.compile(rf"({_NAME})\s+murder", _FLAGS),
    re.compile(rf"murder\s+of\s+({_NAME})", _FLAGS),
    # "Justice for [Name]"
    re.compile(rf"justice\s+for\s+({_NAME})", _FLAGS),
    # "The [Name] Mystery"
    re.compile(rf"the\s+({_NAME})\s+mystery", _FLAGS),
    # "Death of [Name]" / "[Name]'s Death"
    re.compile(rf"death\s+of\s+({_NAME})", _FLAGS),
    re.compile(r"([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)'s\s+death", _FLAGS),
    # "The Disappearance of [Name]"
    re.compile(rf"disappearance\s+of\s+({_NAME})", _FLAGS),
    # "Searching for [Name]"
    re.compile(rf"searching\s+for\s+({_NAME})", _FLAGS),
    # Quoted names, case-sensitive
    re.compile(rf'"({_NAME})"', re.ASCII),
    re.compile(rf"'({_NAME})'", re.ASCII),
    # "The [First] [Last] Story"
    re.compile(r"the\s+([A-Z][a-z]+\s+[A-Z][a-z]+)\s+story", _FLAGS),
)

STOP_WORDS: frozenset[str] = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "as", "into", "through", "during", "before", "after", "above",
    "below", "between", "under", "again", "further", "then", "once", "here", "there",
    "when", "where", "why", "how", "all", "each", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "just", "case", "murder", "mystery", "death", "killer", "victim", "police",
    "investigation", "true", "crime", "story", "part", "episode", "season", "special",
])

# Street and landscape words that turn a capitalized phrase into a place
LOCATION_WORDS: frozenset[str] = frozenset([
    "street", "avenue", "road", "lane", "drive", "court", "place", "circle",
    "boulevard", "highway", "freeway", "county", "city", "town", "village", "park",
    "lake", "river", "mountain", "beach", "island", "forest",
])

KEYWORD_LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"in\s+([A-Z][a-z]+(?:,?\s+[A-Z]{2})?)", re.ASCII),
    re.compile(r"from\s+([A-Z][a-z]+(?:,?\s+[A-Z]{2})?)", re.ASCII),
)
KEYWORD_YEAR_PATTERN = re.compile(r"\b(19|20)\d{2}\b", re.ASCII)

_CASE_TITLE_WORDS = ("murder", "death", "killed")


def is_valid_name(name: str) -> bool:
    """Check if a captured phrase looks like a person's name."""
    lower = name.lower()

    if lower in STOP_WORDS:
        return False

    if any(word in LOCATION_WORDS for word in lower.split()):
        return False

    if not re.match(r"[A-Z]", name):
        return False

    if len(name) < 2 or len(name) > 50:
        return False

    # All caps is probably an acronym
    if name == name.upper() and len(name) > 3:
        return False

    return True


def normalize_case_name(name: str) -> str:
    """Collapse whitespace and Title Case each word."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


def extract_case_names(title: str, overview: Optional[str] = None) -> list[str]:
    """Extract potential names from an episode's title and overview.

    Args:
        title: Episode title
        overview: Episode synopsis, if any

    Returns:
        Unique Title Case names, in pattern order
    """
    text = f"{title} {overview or ''}"
    names: dict[str, None] = {}

    for pattern in NAME_PATTERNS:
        for match in pattern.finditer(text):
            name = (match.group(1) or "").strip()
            if name and is_valid_name(name):
                names.setdefault(normalize_case_name(name), None)

    return list(names)


def extract_keywords(text: str) -> list[str]:
    """Extract case keywords: "in X" / "from X" places and the first year."""
    keywords: dict[str, None] = {}

    for pattern in KEYWORD_LOCATION_PATTERNS:
        for match in pattern.finditer(text):
            location = (match.group(1) or "").strip()
            if len(location) > 2:
                keywords.setdefault(location, None)

    year = KEYWORD_YEAR_PATTERN.search(text)
    if year:
        keywords.setdefault(year.group(0), None)

    return list(keywords)


def suggest_case_name(title: str, overview: Optional[str] = None) -> Optional[str]:
    """Suggest a case name from episode info.

    Args:
        title: Episode title
        overview: Episode synopsis, if any

    Returns:
        "The <Name> Case" when the title is about a killing, "<Name> Case"
        otherwise, or None when no name can be extracted
    """
    names = extract_case_names(title, overview)
    if not names:
        return None

    primary_name = names[0]
    lowered_title = title.lower()
    if any(word in lowered_title for word in _CASE_TITLE_WORDS):
        return f"The {primary_name} Case"

    return f"{primary_name} Case"
