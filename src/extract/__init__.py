"""Extraction module for rule-based entity extraction from episode text.

Pulls three kinds of terms out of a title + synopsis blob:
- Person names: capitalized word pairs, possessives, role cues
- Locations: "City, State", "X County", "Fort X", bare state names
- Years: 1970-2029

Every rule is a regex scan over non-overlapping matches. Results are
lowercase, deduplicated, and kept in first-seen order so that downstream
scoring ("first shared location") is deterministic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from extract.lexicon import (
    NON_NAME_BIGRAMS,
    ROLE_CUES,
    STATE_ABBREVIATIONS,
    STATE_FRAGMENTS,
    STATE_NAMES,
    STOP_WORDS,
)


# Bump when a rule or word list changes in a way that can move scores
EXTRACTOR_VERSION = "1.0.0"

_WORD = r"[A-Z][a-z]+"
# ASCII whitespace plus Unicode space separators such as the no-break space
_SPACE = r"[\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

FULL_NAME_PATTERN = re.compile(rf"\b({_WORD}){_SPACE}+({_WORD})\b", re.ASCII)
POSSESSIVE_PATTERN = re.compile(rf"\b({_WORD}(?:{_SPACE}+{_WORD})?)'s\b", re.ASCII)
ROLE_CUE_PATTERN = re.compile(
    r"(?:" + "|".join(re.escape(cue) for cue in ROLE_CUES)
    + rf"){_SPACE}+({_WORD}{_SPACE}+{_WORD})\b",
    re.ASCII | re.IGNORECASE,
)

CITY_STATE_PATTERN = re.compile(
    rf"\b({_WORD}(?:{_SPACE}+{_WORD})?),{_SPACE}*({_WORD}(?:{_SPACE}+{_WORD})?|[A-Z]{{2}})\b",
    re.ASCII,
)
COUNTY_PATTERN = re.compile(rf"\b({_WORD}(?:{_SPACE}+{_WORD})?){_SPACE}+County\b", re.ASCII)
FORT_PATTERN = re.compile(rf"\bFort{_SPACE}+({_WORD})\b", re.ASCII)

_SPACE_RUN = re.compile(rf"{_SPACE}+", re.ASCII)

STATE_PATTERN = re.compile(
    r"\b(" + "|".join(STATE_NAMES) + r")\b",
    re.ASCII | re.IGNORECASE,
)

YEAR_PATTERN = re.compile(r"\b(19[7-9]\d|20[0-2]\d)\b", re.ASCII)

_STATE_NAME_SET = frozenset(STATE_NAMES)


@dataclass(frozen=True)
class ExtractedTerms:
    """Terms extracted from one text blob.

    Attributes:
        names: Person names as lowercase "first last" strings
        locations: Lowercase cities, counties, forts and state names
        years: Four-digit year strings
    """

    names: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    years: tuple[str, ...] = ()


def _is_excluded_word(word: str) -> bool:
    return word in STOP_WORDS or word in STATE_FRAGMENTS


def _ordered_unique(values: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _normalize_phrase(phrase: str) -> str:
    """Lowercase a captured phrase and join its words with single spaces."""
    return " ".join(word for word in _SPACE_RUN.split(phrase.lower()) if word)


# --------------------------------------------------------------------------- #
# Names
# --------------------------------------------------------------------------- #

def extract_full_names(text: str) -> tuple[str, ...]:
    """Find "First Last" pairs of capitalized words.

    A pair is rejected when both words are the same (title and synopsis
    often repeat a surname back to back), when either word is a stop word or
    state fragment, or when the pair is a known place ("new york").
    """
    names: list[str] = []
    for match in FULL_NAME_PATTERN.finditer(text):
        first = match.group(1).lower()
        last = match.group(2).lower()

        if first == last:
            continue
        if _is_excluded_word(first) or _is_excluded_word(last):
            continue

        full_name = f"{first} {last}"
        if full_name in NON_NAME_BIGRAMS:
            continue

        names.append(full_name)
    return _ordered_unique(names)


def extract_possessive_names(text: str) -> tuple[str, ...]:
    """Find two-word names in possessive form ("Sarah Hartsfield's")."""
    names: list[str] = []
    for match in POSSESSIVE_PATTERN.finditer(text):
        words = _normalize_phrase(match.group(1)).split(" ")
        if any(_is_excluded_word(word) for word in words):
            continue
        if len(words) >= 2:
            names.append(" ".join(words))
    return _ordered_unique(names)


def extract_role_cue_names(text: str) -> tuple[str, ...]:
    """Find names introduced by a role noun ("victim John Smith").

    Case-insensitive over the cue and the name itself.
    """
    names: list[str] = []
    for match in ROLE_CUE_PATTERN.finditer(text):
        words = _normalize_phrase(match.group(1)).split(" ")
        if any(_is_excluded_word(word) for word in words):
            continue
        names.append(" ".join(words))
    return _ordered_unique(names)


def extract_names(text: Optional[str]) -> tuple[str, ...]:
    """Extract person names from text.

    Args:
        text: Free text (title + synopsis)

    Returns:
        Unique lowercase "first last" names in first-seen order
    """
    if not text:
        return ()
    return _ordered_unique([
        *extract_full_names(text),
        *extract_possessive_names(text),
        *extract_role_cue_names(text),
    ])


# --------------------------------------------------------------------------- #
# Locations
# --------------------------------------------------------------------------- #

def extract_city_states(text: str) -> tuple[str, ...]:
    """Find "City, State" and "City, ST" pairs.

    Emits the city and the state token only when the trailing token is a
    real state name or USPS abbreviation.
    """
    locations: list[str] = []
    for match in CITY_STATE_PATTERN.finditer(text):
        city = _normalize_phrase(match.group(1))
        state = match.group(2)
        state_lower = _normalize_phrase(state)
        if state_lower in _STATE_NAME_SET or state in STATE_ABBREVIATIONS:
            locations.append(city)
            locations.append(state_lower)
    return _ordered_unique(locations)


def extract_counties(text: str) -> tuple[str, ...]:
    """Find "[Place] County" phrases, emitted as "<place> county"."""
    locations: list[str] = []
    for match in COUNTY_PATTERN.finditer(text):
        county = _normalize_phrase(match.group(1))
        if county not in STOP_WORDS and len(county) > 2:
            locations.append(f"{county} county")
    return _ordered_unique(locations)


def extract_forts(text: str) -> tuple[str, ...]:
    """Find military-base style "Fort [Name]" places."""
    return _ordered_unique([f"fort {match.group(1).lower()}" for match in FORT_PATTERN.finditer(text)])


def extract_state_names(text: str) -> tuple[str, ...]:
    """Find full state names anywhere in the text, case-insensitive."""
    return _ordered_unique([match.group(1).lower() for match in STATE_PATTERN.finditer(text)])


def extract_locations(text: Optional[str]) -> tuple[str, ...]:
    """Extract geographic locations from text.

    Only real places are returned (cities paired with a state, counties,
    forts, states), never generic phrases like "her home".

    Args:
        text: Free text (title + synopsis)

    Returns:
        Unique lowercase locations in first-seen order
    """
    if not text:
        return ()
    return _ordered_unique([
        *extract_city_states(text),
        *extract_counties(text),
        *extract_forts(text),
        *extract_state_names(text),
    ])


# --------------------------------------------------------------------------- #
# Years
# --------------------------------------------------------------------------- #

def extract_years(text: Optional[str]) -> tuple[str, ...]:
    """Extract years between 1970 and 2029 from text."""
    if not text:
        return ()
    return _ordered_unique([match.group(1) for match in YEAR_PATTERN.finditer(text)])


def extract_key_terms(text: Optional[str]) -> ExtractedTerms:
    """Extract all key identifiers from episode text.

    Args:
        text: Free text, normally Episode.text()

    Returns:
        ExtractedTerms with names, locations and years
    """
    return ExtractedTerms(
        names=extract_names(text),
        locations=extract_locations(text),
        years=extract_years(text),
    )
