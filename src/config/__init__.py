"""Configuration loading for the related-episode matcher.

Loads ranking options and data paths from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from rank import DEFAULT_MAX_RESULTS, DEFAULT_MIN_SCORE, RankOptions


# --------------------------------------------------------------------------- #
# Defaults
# --------------------------------------------------------------------------- #

DEFAULT_CONFIG_PATH = Path("config/matcher.yaml")
DEFAULT_CORPUS_PATH = Path("data/episodes.json")
DEFAULT_DB_PATH = Path("data/db/crimeweb.db")


@dataclass
class MatcherConfig:
    """Matcher configuration.

    Attributes:
        rank_options: Defaults for find_related_episodes()
        corpus_path: Path to the episode corpus snapshot
        db_path: Path to the SQLite database of decisions and viewed flags
    """

    rank_options: RankOptions = field(default_factory=RankOptions)
    corpus_path: Path = DEFAULT_CORPUS_PATH
    db_path: Path = DEFAULT_DB_PATH


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


def _rank_options(matching: dict[str, Any]) -> RankOptions:
    max_results = matching.get("max_results", DEFAULT_MAX_RESULTS)
    min_score = matching.get("min_score", DEFAULT_MIN_SCORE)
    exclude_same_show = matching.get("exclude_same_show", False)

    if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 0:
        raise ValueError(f"matching.max_results must be a non-negative integer, got {max_results!r}")
    if isinstance(min_score, bool) or not isinstance(min_score, (int, float)):
        raise ValueError(f"matching.min_score must be a number, got {min_score!r}")
    if not 0 <= min_score <= 1:
        raise ValueError(f"matching.min_score must be between 0 and 1, got {min_score!r}")
    if not isinstance(exclude_same_show, bool):
        raise ValueError(f"matching.exclude_same_show must be true or false, got {exclude_same_show!r}")

    return RankOptions(
        max_results=max_results,
        min_score=float(min_score),
        exclude_same_show=exclude_same_show,
    )


def _path(section: dict[str, Any], name: str, default: Path) -> Path:
    if "path" not in section:
        return default
    value = section["path"]
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name}.path must be a non-empty string, got {value!r}")
    return Path(value)


def load_matcher_config(config_path: Path) -> MatcherConfig:
    """Load matcher configuration from a YAML file.

    Args:
        config_path: Path to the matcher.yaml configuration file

    Returns:
        MatcherConfig; defaults when the file does not exist or is empty

    Raises:
        ValueError: If the YAML is invalid or a value has the wrong type
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return MatcherConfig()

    try:
        content = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not data:
        return MatcherConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config in {config_path} must be a mapping")

    corpus = _section(data, "corpus")
    database = _section(data, "database")

    return MatcherConfig(
        rank_options=_rank_options(_section(data, "matching")),
        corpus_path=_path(corpus, "corpus", DEFAULT_CORPUS_PATH),
        db_path=_path(database, "database", DEFAULT_DB_PATH),
    )
