"""Pairwise scoring of two episodes for same-case coverage.

Prioritizes names > locations > years. A person-name correspondence (full
name or surname) is mandatory: without one the score is always zero.
"""

from __future__ import annotations

import re
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Optional

from corpus import Episode
from extract import ExtractedTerms, extract_key_terms
from util import title_case_words


NAME_MATCH_BASE = 0.5
NAME_MATCH_STEP = 0.15
NAME_MATCH_MAX_COUNTED = 3
LOCATION_WITH_NAME_BONUS = 0.2
LOCATION_ONLY_BONUS = 0.1
YEAR_BONUS = 0.1
MAX_SCORE = 1.0

REASON_SEPARATOR = " - "
MAX_REASON_NAMES = 2

_YEAR_IN_REASON = re.compile(r"\d{4}")


@dataclass(frozen=True)
class MatchScore:
    """Confidence that two episodes cover the same case."""

    score: float
    reason: str


def terms_for(
    episode: Episode,
    cache: Optional[MutableMapping[int, ExtractedTerms]] = None,
) -> ExtractedTerms:
    """Extract terms for an episode, memoized by episode ID when a cache is given."""
    if cache is None:
        return extract_key_terms(episode.text())

    terms = cache.get(episode.id)
    if terms is None:
        terms = extract_key_terms(episode.text())
        cache[episode.id] = terms
    return terms


def match_names(source_names: tuple[str, ...], target_names: tuple[str, ...]) -> list[str]:
    """Pair up names across two episodes.

    Every (source, target) pair contributes at most one entry: the name
    itself on an exact match, or "<surname> (last name)" when two multi-word
    names share only their final word. Duplicates are kept; they count
    towards the score.

    Args:
        source_names: Names extracted from the source episode
        target_names: Names extracted from the candidate episode

    Returns:
        Matched name entries in pair order
    """
    matches: list[str] = []
    for source_name in source_names:
        for target_name in target_names:
            if source_name == target_name:
                matches.append(source_name)
                continue

            source_parts = source_name.split(" ")
            target_parts = target_name.split(" ")
            if len(source_parts) >= 2 and len(target_parts) >= 2:
                if source_parts[-1] == target_parts[-1]:
                    matches.append(f"{source_parts[-1]} (last name)")
    return matches


def shared_terms(source_terms: tuple[str, ...], target_terms: tuple[str, ...]) -> list[str]:
    """Return source terms that also appear in the target, in source order."""
    return [term for term in source_terms if term in target_terms]


def calculate_match_score(
    source: Episode,
    target: Episode,
    cache: Optional[MutableMapping[int, ExtractedTerms]] = None,
) -> MatchScore:
    """Calculate the match score between two episodes.

    Args:
        source: Episode being viewed
        target: Candidate episode
        cache: Optional episode ID -> ExtractedTerms memo

    Returns:
        MatchScore with score in [0, 1] and a human-readable reason
    """
    if source.id == target.id:
        return MatchScore(0.0, "")

    source_terms = terms_for(source, cache)
    target_terms = terms_for(target, cache)

    score = 0.0
    reasons: list[str] = []

    # 1. Names
    name_matches = match_names(source_terms.names, target_terms.names)
    if name_matches:
        score += NAME_MATCH_BASE + min(len(name_matches), NAME_MATCH_MAX_COUNTED) * NAME_MATCH_STEP
        unique_names = list(dict.fromkeys(name_matches))[:MAX_REASON_NAMES]
        reasons.append(", ".join(title_case_words(name) for name in unique_names))

    # 2. Locations
    location_matches = shared_terms(source_terms.locations, target_terms.locations)
    if location_matches and name_matches:
        score += LOCATION_WITH_NAME_BONUS
        first = location_matches[0]
        reasons.append(first[:1].upper() + first[1:])
    elif location_matches:
        score += LOCATION_ONLY_BONUS

    # 3. Years, only as confirmation of another signal
    year_matches = shared_terms(source_terms.years, target_terms.years)
    if year_matches and (name_matches or location_matches):
        score += YEAR_BONUS
        if not any(_YEAR_IN_REASON.search(reason) for reason in reasons):
            reasons.append(year_matches[0])

    if not name_matches:
        return MatchScore(0.0, "")

    return MatchScore(min(MAX_SCORE, score), REASON_SEPARATOR.join(reasons))
