"""Episode records and corpus snapshot loading.

The corpus is a JSON snapshot written by the metadata fetcher:

    {
      "lastUpdated": "...",
      "shows": [{"tmdbId": 78, "name": "Dateline NBC", "network": "NBC"}],
      "episodes": [{"id": 1, "showTmdbId": 78, "name": "...", ...}]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from schema import validate_corpus


@dataclass(frozen=True)
class Episode:
    """One aired installment of a show, as known to the matcher.

    Attributes:
        id: Stable episode identifier
        show_id: Identifier of the owning show
        show_name: Display name of the owning show
        title: Episode title
        overview: Synopsis text, if any
        air_date: ISO air date, if known
        season_number: Season number
        episode_number: Episode number within the season
        still_path: Still-image reference, if any
    """

    id: int
    show_id: int
    show_name: str
    title: str
    overview: Optional[str] = None
    air_date: Optional[str] = None
    season_number: int = 0
    episode_number: int = 0
    still_path: Optional[str] = None

    def text(self) -> str:
        """Return the title and synopsis joined for entity extraction."""
        return f"{self.title} {self.overview or ''}"


def episode_from_record(record: dict[str, Any]) -> Episode:
    """Build an Episode from a snapshot record.

    Args:
        record: Episode dict using the snapshot's camelCase keys

    Returns:
        Episode instance
    """
    return Episode(
        id=int(record["id"]),
        show_id=int(record["showTmdbId"]),
        show_name=record.get("showName") or "",
        title=record.get("name") or "",
        overview=record.get("overview") or None,
        air_date=record.get("airDate") or None,
        season_number=int(record.get("seasonNumber") or 0),
        episode_number=int(record.get("episodeNumber") or 0),
        still_path=record.get("stillPath") or None,
    )


def load_corpus(path: Path, validate: bool = True) -> list[Episode]:
    """Load episodes from a corpus snapshot file.

    Args:
        path: Path to the snapshot JSON file
        validate: Validate the snapshot structure before loading

    Returns:
        Episodes in snapshot order

    Raises:
        FileNotFoundError: If the snapshot does not exist
        ValueError: If the file is not valid JSON
        schema.ValidationError: If the snapshot structure is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus snapshot not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if validate:
        validate_corpus(data)

    return [episode_from_record(record) for record in data.get("episodes", [])]


def episodes_by_show(episodes: list[Episode]) -> dict[int, list[Episode]]:
    """Group episodes by show ID, preserving corpus order."""
    grouped: dict[int, list[Episode]] = {}
    for episode in episodes:
        grouped.setdefault(episode.show_id, []).append(episode)
    return grouped
