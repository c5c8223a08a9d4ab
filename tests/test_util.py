"""Tests for utility functions."""

from datetime import datetime, timezone

import pytest

from util import air_date_timestamp, pair_key, parse_air_date, title_case_words, utc_now_iso


class TestPairKey:
    """Test pair_key() function."""

    def test_orders_ids(self):
        assert pair_key(7, 3) == "3_7"
        assert pair_key(3, 7) == "3_7"

    def test_numeric_not_lexical_order(self):
        """Should compare IDs as numbers, so 10 sorts after 9."""
        assert pair_key(10, 9) == "9_10"

    def test_same_id(self):
        assert pair_key(5, 5) == "5_5"


class TestParseAirDate:
    """Test parse_air_date() function."""

    def test_plain_date_is_midnight_utc(self):
        assert parse_air_date("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_timestamp_with_z(self):
        assert parse_air_date("2024-01-15T12:30:00Z") == datetime(
            2024, 1, 15, 12, 30, tzinfo=timezone.utc
        )

    def test_naive_timestamp_assumed_utc(self):
        assert parse_air_date("2024-01-15T08:00:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", [None, "", "soon", "2024-13-01", "15/01/2024"])
    def test_missing_or_malformed(self, value):
        assert parse_air_date(value) is None


class TestAirDateTimestamp:
    def test_epoch_for_missing(self):
        assert air_date_timestamp(None) == 0.0
        assert air_date_timestamp("garbage") == 0.0

    def test_orders_dates(self):
        assert air_date_timestamp("2024-01-01") > air_date_timestamp("2023-01-01") > 0.0


class TestTitleCaseWords:
    """Test title_case_words() function."""

    def test_upper_cases_first_letters(self):
        assert title_case_words("john smith") == "John Smith"

    def test_leaves_rest_of_word(self):
        """Parenthesized words keep their lowercase first letter."""
        assert title_case_words("smith (last name)") == "Smith (last Name)"

    def test_empty(self):
        assert title_case_words("") == ""


class TestUtcNowIso:
    def test_format(self):
        value = utc_now_iso()
        assert value.endswith("Z")
        assert datetime.fromisoformat(value.replace("Z", "+00:00")).tzinfo is not None
