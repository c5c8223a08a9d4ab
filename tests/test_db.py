"""Tests for database schema and operations for match decisions and viewed flags."""

import sqlite3

import pytest

from db import (
    CONFIRMED,
    DENIED,
    get_confirmed_match_ids,
    get_decision,
    get_denied_match_ids,
    get_viewed_ids,
    init_db,
    is_match_confirmed,
    is_match_denied,
    is_viewed,
    list_decisions,
    mark_unviewed,
    mark_viewed,
    remove_decision,
    save_decision,
    toggle_viewed,
)


@pytest.fixture
def db_conn(tmp_path):
    """Create a temporary database with schema initialized."""
    db_path = tmp_path / "test.sqlite"
    conn = init_db(db_path)
    yield conn
    conn.close()


class TestInitDb:
    """Test database initialization."""

    def test_creates_database_file(self, tmp_path):
        """Should create database file, including parent directories."""
        db_path = tmp_path / "nested" / "test.sqlite"
        conn = init_db(db_path)
        conn.close()
        assert db_path.exists()

    @pytest.mark.parametrize("table", ["match_decisions", "viewed_episodes"])
    def test_creates_tables(self, db_conn, table):
        cursor = db_conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
        )
        assert cursor.fetchone() is not None

    def test_reinit_is_idempotent(self, tmp_path):
        """Should keep existing rows when opened again."""
        db_path = tmp_path / "test.sqlite"
        conn = init_db(db_path)
        save_decision(conn, 1, 2, CONFIRMED)
        conn.close()

        conn = init_db(db_path)
        assert get_decision(conn, 1, 2) == CONFIRMED
        conn.close()

    def test_decision_check_constraint(self, db_conn):
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute(
                "INSERT INTO match_decisions VALUES ('1_2', 1, 2, 'maybe', '2024-01-01')"
            )


class TestDecisions:
    """Test storing and querying match decisions."""

    def test_save_returns_pair_key(self, db_conn):
        assert save_decision(db_conn, 7, 3, CONFIRMED) == "3_7"

    def test_decision_is_order_independent(self, db_conn):
        save_decision(db_conn, 7, 3, DENIED)
        assert get_decision(db_conn, 3, 7) == DENIED
        assert get_decision(db_conn, 7, 3) == DENIED

    def test_undecided_pair(self, db_conn):
        assert get_decision(db_conn, 1, 2) is None
        assert not is_match_confirmed(db_conn, 1, 2)
        assert not is_match_denied(db_conn, 1, 2)

    def test_later_decision_replaces_earlier(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED, decided_at="2024-01-01T00:00:00Z")
        save_decision(db_conn, 2, 1, DENIED, decided_at="2024-02-01T00:00:00Z")

        decisions = list_decisions(db_conn)

        assert len(decisions) == 1
        assert decisions[0]["decision"] == DENIED
        assert decisions[0]["source_episode_id"] == 2
        assert decisions[0]["matched_episode_id"] == 1
        assert decisions[0]["decided_at"] == "2024-02-01T00:00:00Z"

    def test_unknown_decision_rejected(self, db_conn):
        with pytest.raises(ValueError, match="Unknown match decision"):
            save_decision(db_conn, 1, 2, "maybe")

    def test_decided_at_defaults_to_now(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        decided_at = list_decisions(db_conn)[0]["decided_at"]
        assert decided_at.endswith("Z")

    def test_remove_decision(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        assert remove_decision(db_conn, 2, 1) is True
        assert get_decision(db_conn, 1, 2) is None
        assert remove_decision(db_conn, 1, 2) is False

    def test_list_filters_by_decision(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        save_decision(db_conn, 1, 3, DENIED)
        save_decision(db_conn, 4, 1, CONFIRMED)

        assert [d["pair_key"] for d in list_decisions(db_conn)] == ["1_2", "1_3", "1_4"]
        assert [d["pair_key"] for d in list_decisions(db_conn, CONFIRMED)] == ["1_2", "1_4"]
        assert [d["pair_key"] for d in list_decisions(db_conn, DENIED)] == ["1_3"]

    def test_counterpart_ids_in_both_directions(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        save_decision(db_conn, 3, 1, CONFIRMED)
        save_decision(db_conn, 1, 4, DENIED)
        save_decision(db_conn, 5, 1, DENIED)

        assert get_confirmed_match_ids(db_conn, 1) == {2, 3}
        assert get_denied_match_ids(db_conn, 1) == {4, 5}
        assert get_confirmed_match_ids(db_conn, 2) == {1}
        assert get_denied_match_ids(db_conn, 2) == set()
        assert is_match_confirmed(db_conn, 3, 1)
        assert is_match_denied(db_conn, 1, 5)


class TestViewed:
    """Test viewed flags and their propagation across confirmed matches."""

    def test_mark_viewed(self, db_conn):
        assert mark_viewed(db_conn, 1) == {1}
        assert is_viewed(db_conn, 1)
        assert get_viewed_ids(db_conn) == {1}

    def test_mark_viewed_propagates_to_confirmed(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        save_decision(db_conn, 1, 3, DENIED)

        marked = mark_viewed(db_conn, 1)

        assert marked == {1, 2}
        assert get_viewed_ids(db_conn) == {1, 2}

    def test_propagation_is_one_hop(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        save_decision(db_conn, 2, 3, CONFIRMED)

        mark_viewed(db_conn, 1)

        assert 3 not in get_viewed_ids(db_conn)

    def test_viewed_via_confirmed_match(self, db_conn):
        """A confirmed match confirmed after viewing still counts as viewed."""
        mark_viewed(db_conn, 1)
        save_decision(db_conn, 1, 2, CONFIRMED)

        assert 2 not in get_viewed_ids(db_conn)
        assert is_viewed(db_conn, 2)

    def test_denied_match_not_viewed(self, db_conn):
        mark_viewed(db_conn, 1)
        save_decision(db_conn, 1, 2, DENIED)
        assert not is_viewed(db_conn, 2)

    def test_own_timestamp_refreshed(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        mark_viewed(db_conn, 2, viewed_at="2024-01-01T00:00:00Z")
        mark_viewed(db_conn, 1, viewed_at="2024-03-01T00:00:00Z")
        mark_viewed(db_conn, 1, viewed_at="2024-04-01T00:00:00Z")

        rows = {
            row["episode_id"]: row["viewed_at"]
            for row in db_conn.execute("SELECT * FROM viewed_episodes")
        }

        assert rows == {1: "2024-04-01T00:00:00Z", 2: "2024-01-01T00:00:00Z"}

    def test_mark_unviewed_clears_confirmed(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)
        mark_viewed(db_conn, 1)
        mark_viewed(db_conn, 5)

        cleared = mark_unviewed(db_conn, 2)

        assert cleared == {1, 2}
        assert get_viewed_ids(db_conn) == {5}

    def test_toggle(self, db_conn):
        save_decision(db_conn, 1, 2, CONFIRMED)

        assert toggle_viewed(db_conn, 1) is True
        assert get_viewed_ids(db_conn) == {1, 2}

        assert toggle_viewed(db_conn, 1) is False
        assert get_viewed_ids(db_conn) == set()

    def test_toggle_uses_direct_flag(self, db_conn):
        """An episode viewed only through a match toggles on, not off."""
        mark_viewed(db_conn, 1)
        save_decision(db_conn, 1, 2, CONFIRMED)

        assert is_viewed(db_conn, 2)
        assert toggle_viewed(db_conn, 2) is True
        assert get_viewed_ids(db_conn) == {1, 2}
