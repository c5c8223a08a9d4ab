"""Tests for patterns module - title-phrase names and case suggestions."""

import pytest

from patterns import (
    extract_case_names,
    extract_keywords,
    is_valid_name,
    normalize_case_name,
    suggest_case_name,
)


class TestExtractCaseNames:
    """Test extract_case_names()."""

    @pytest.mark.parametrize("title,expected", [
        ("The Smith Case", "Smith"),
        ("Who Killed John Doe?", "John Doe"),
        ("Murder of Jane Smith", "Jane Smith"),
        ("Justice for Mary Johnson", "Mary Johnson"),
        ("Death of Robert Brown", "Robert Brown"),
        ("The John Smith Story", "John Smith"),
        ("The Disappearance of Amy Lee", "Amy Lee"),
        ("Searching for Dana Ward", "Dana Ward"),
    ])
    def test_title_phrases(self, title, expected):
        assert expected in extract_case_names(title)

    def test_overview_is_searched(self):
        names = extract_case_names(
            "Episode Title",
            "This episode covers the murder of Sarah Williams.",
        )
        assert "Sarah Williams" in names

    def test_filters_stop_words(self):
        assert "Case" not in extract_case_names("The Case")

    def test_lowercase_cue(self):
        assert "John Smith" in extract_case_names("murder of John Smith")

    def test_no_names(self):
        assert extract_case_names("Unknown Episode") == []

    def test_deduplicates(self):
        names = extract_case_names("Who Killed John Doe?", "Justice for John Doe")
        assert names.count("John Doe") == 1


class TestIsValidName:
    """Test is_valid_name() filters."""

    def test_accepts_name(self):
        assert is_valid_name("John Smith")

    def test_rejects_stop_word(self):
        assert not is_valid_name("Police")

    def test_rejects_place(self):
        assert not is_valid_name("Elm Street")

    def test_rejects_lowercase_start(self):
        assert not is_valid_name("episode covers the")

    def test_rejects_acronym(self):
        assert not is_valid_name("NCIS")


class TestNormalizeCaseName:
    def test_title_cases_and_collapses(self):
        assert normalize_case_name("jOHN   smith") == "John Smith"


class TestExtractKeywords:
    """Test extract_keywords()."""

    def test_in_location(self):
        assert "Chicago" in extract_keywords("Murder in Chicago")

    def test_from_location(self):
        assert "Texas" in extract_keywords("A killer from Texas")

    def test_year(self):
        assert "2019" in extract_keywords("The 2019 Murder Case")

    def test_multiple(self):
        assert len(extract_keywords("Murder in Miami from 2020")) >= 2

    def test_none(self):
        assert extract_keywords("Unknown title") == []


class TestSuggestCaseName:
    """Test suggest_case_name()."""

    @pytest.mark.parametrize("title,expected", [
        ("The Murder of John Doe", "The John Doe Case"),
        ("Death of Jane Smith", "The Jane Smith Case"),
        ("Who Killed Mary Johnson?", "The Mary Johnson Case"),
        ("The John Smith Story", "John Smith Case"),
    ])
    def test_from_title(self, title, expected):
        assert suggest_case_name(title) == expected

    def test_no_name(self):
        assert suggest_case_name("Unknown Episode") is None

    def test_name_from_overview(self):
        """Without a killing word in the title there is no leading "The"."""
        name = suggest_case_name(
            "Episode 5",
            "This episode explores the murder of Robert Brown.",
        )
        assert name == "Robert Brown Case"
