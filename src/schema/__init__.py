"""Schema validation for corpus snapshots.

Validates episode snapshot JSON against schemas/episodes.json.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def _schema_dir() -> Path:
    """Return path to schemas directory."""
    return Path(__file__).resolve().parents[2] / "schemas"


def _load_schema() -> dict:
    """Load the corpus snapshot JSON schema."""
    schema_path = _schema_dir() / "episodes.json"
    with open(schema_path) as f:
        return json.load(f)


def validate_corpus(data: dict[str, Any]) -> None:
    """Validate a complete corpus snapshot.

    Args:
        data: Snapshot dictionary

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema()
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        field = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else ""
        if not field and "required" in str(e.message):
            field = e.message.split("'")[1] if "'" in e.message else "unknown"
        raise ValidationError(f"Validation failed for {field or 'snapshot'}: {e.message}") from e

    _validate_unique_ids(data.get("episodes", []))


def validate_episode(data: dict[str, Any]) -> None:
    """Validate a single episode record.

    Args:
        data: Episode dictionary

    Raises:
        ValidationError: If validation fails
    """
    episode_schema = _load_schema()["$defs"]["episode"]
    try:
        jsonschema.validate(data, episode_schema)
    except jsonschema.ValidationError as e:
        field = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "episode"
        raise ValidationError(f"Validation failed for {field}: {e.message}") from e


def _validate_unique_ids(episodes: list[dict[str, Any]]) -> None:
    """Episode IDs must be unique within a snapshot."""
    seen: set[int] = set()
    for episode in episodes:
        episode_id = episode["id"]
        if episode_id in seen:
            raise ValidationError(
                f"Validation failed for episodes: duplicate episode id {episode_id}"
            )
        seen.add(episode_id)
