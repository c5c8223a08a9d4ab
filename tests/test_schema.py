"""Tests for JSON schema validation of corpus snapshots."""

import pytest

from schema import ValidationError, validate_corpus, validate_episode


def _record(**overrides):
    record = {
        "id": 101,
        "showTmdbId": 78,
        "showName": "Dateline NBC",
        "name": "Who Killed John Smith?",
        "overview": "The murder of John Smith shocks the town.",
        "airDate": "2024-01-15",
        "seasonNumber": 32,
        "episodeNumber": 4,
        "stillPath": "/abc.jpg",
    }
    record.update(overrides)
    return record


class TestValidateCorpus:
    """Test validation of complete snapshots."""

    def test_valid_minimal_snapshot(self):
        """Should accept a snapshot with no episodes."""
        validate_corpus({"episodes": []})

    def test_valid_full_snapshot(self):
        validate_corpus({
            "lastUpdated": "2024-02-01T00:00:00Z",
            "shows": [{"tmdbId": 78, "name": "Dateline NBC", "network": "NBC"}],
            "episodes": [_record(), _record(id=102, overview=None, airDate=None, stillPath=None)],
        })

    def test_missing_episodes(self):
        """Should reject a snapshot without an episodes list."""
        with pytest.raises(ValidationError, match="episodes"):
            validate_corpus({"shows": []})

    def test_bad_show(self):
        with pytest.raises(ValidationError):
            validate_corpus({"shows": [{"name": "No Id"}], "episodes": []})

    def test_bad_episode_reports_path(self):
        record = _record()
        del record["showName"]
        with pytest.raises(ValidationError, match="episodes.0"):
            validate_corpus({"episodes": [record]})

    def test_duplicate_ids(self):
        with pytest.raises(ValidationError, match="duplicate episode id 101"):
            validate_corpus({"episodes": [_record(), _record(name="Rerun")]})


class TestValidateEpisode:
    """Test validation of single episode records."""

    def test_valid_episode(self):
        validate_episode(_record())

    def test_nullable_fields(self):
        validate_episode(_record(overview=None, airDate=None, stillPath=None))

    @pytest.mark.parametrize("field", ["id", "showTmdbId", "showName", "name"])
    def test_missing_required(self, field):
        record = _record()
        del record[field]
        with pytest.raises(ValidationError):
            validate_episode(record)

    def test_string_id_rejected(self):
        with pytest.raises(ValidationError, match="id"):
            validate_episode(_record(id="101"))

    def test_negative_season_rejected(self):
        with pytest.raises(ValidationError, match="seasonNumber"):
            validate_episode(_record(seasonNumber=-1))
