"""Ranking of related episodes for a source episode.

Applies the pairwise scorer across a candidate pool, filters by threshold,
and returns a capped, deterministically ordered list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import cmp_to_key
from typing import Any, Optional

from corpus import Episode
from extract import ExtractedTerms
from score import calculate_match_score
from util import air_date_timestamp


DEFAULT_MAX_RESULTS = 5
DEFAULT_MIN_SCORE = 0.3

# Scores this close are a tie and fall back to air date
SCORE_BAND = 0.05


@dataclass(frozen=True)
class RankOptions:
    """Options for find_related_episodes().

    Attributes:
        max_results: Maximum number of results returned
        min_score: Minimum score for a candidate to be kept
        exclude_same_show: Skip candidates from the source episode's show
    """

    max_results: int = DEFAULT_MAX_RESULTS
    min_score: float = DEFAULT_MIN_SCORE
    exclude_same_show: bool = False


@dataclass(frozen=True)
class MatchResult:
    """A candidate episode scored against a source episode."""

    episode_id: int
    show_id: int
    show_name: str
    title: str
    overview: Optional[str]
    air_date: Optional[str]
    season_number: int
    episode_number: int
    still_path: Optional[str]
    score: float
    reason: str

    @classmethod
    def from_episode(cls, episode: Episode, score: float, reason: str) -> "MatchResult":
        return cls(
            episode_id=episode.id,
            show_id=episode.show_id,
            show_name=episode.show_name,
            title=episode.title,
            overview=episode.overview,
            air_date=episode.air_date,
            season_number=episode.season_number,
            episode_number=episode.episode_number,
            still_path=episode.still_path,
            score=score,
            reason=reason,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render using the camelCase keys consumed by the web layer."""
        return {
            "episodeId": self.episode_id,
            "showId": self.show_id,
            "showName": self.show_name,
            "title": self.title,
            "overview": self.overview,
            "airDate": self.air_date,
            "seasonNumber": self.season_number,
            "episodeNumber": self.episode_number,
            "stillImageRef": self.still_path,
            "score": self.score,
            "reason": self.reason,
        }


def _compare_results(a: MatchResult, b: MatchResult) -> float:
    if abs(a.score - b.score) > SCORE_BAND:
        return b.score - a.score
    return air_date_timestamp(b.air_date) - air_date_timestamp(a.air_date)


def sort_results(results: Iterable[MatchResult]) -> list[MatchResult]:
    """Sort by score descending; within the score band, newer episodes first."""
    return sorted(results, key=cmp_to_key(_compare_results))


def find_related_episodes(
    episode: Episode,
    candidates: Iterable[Episode],
    options: Optional[RankOptions] = None,
    **overrides: Any,
) -> list[MatchResult]:
    """Find related episodes for a given episode.

    Args:
        episode: Source episode
        candidates: Candidate pool (may include the source itself)
        options: Ranking options, defaults to RankOptions()
        **overrides: Individual RankOptions fields to replace

    Returns:
        At most options.max_results MatchResults, best first
    """
    options = options or RankOptions()
    if overrides:
        options = replace(options, **overrides)

    cache: dict[int, ExtractedTerms] = {}
    results: list[MatchResult] = []

    for candidate in candidates:
        if candidate.id == episode.id:
            continue
        if options.exclude_same_show and candidate.show_id == episode.show_id:
            continue

        match = calculate_match_score(episode, candidate, cache)
        if match.score >= options.min_score:
            results.append(MatchResult.from_episode(candidate, match.score, match.reason))

    return sort_results(results)[: max(options.max_results, 0)]


def exclude_episodes(results: Iterable[MatchResult], episode_ids: Iterable[int]) -> list[MatchResult]:
    """Drop results for the given episode IDs (e.g. user-denied matches)."""
    excluded = set(episode_ids)
    return [result for result in results if result.episode_id not in excluded]


def find_cross_show_matches(
    source_episodes: Iterable[Episode],
    target_episodes: list[Episode],
    options: Optional[RankOptions] = None,
) -> list[tuple[Episode, MatchResult]]:
    """Find the best match in one show's episodes for each episode of another.

    Args:
        source_episodes: Episodes to look up
        target_episodes: Pool to search in
        options: Ranking options; max_results is ignored

    Returns:
        (source episode, best match) pairs for sources with any match
    """
    options = replace(options or RankOptions(), max_results=1)
    pairs: list[tuple[Episode, MatchResult]] = []
    for source in source_episodes:
        related = find_related_episodes(source, target_episodes, options)
        if related:
            pairs.append((source, related[0]))
    return pairs
