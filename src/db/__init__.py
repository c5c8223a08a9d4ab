"""Database operations for match decisions and viewed episodes.

Users confirm or deny suggested matches; decisions are stored once per
unordered episode pair. Viewed flags propagate one hop across confirmed
matches: watching one episode of a case marks its confirmed counterparts.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Optional

from util import pair_key, utc_now_iso


CONFIRMED = "confirmed"
DENIED = "denied"
MATCH_DECISIONS = frozenset([CONFIRMED, DENIED])


def _schema_path() -> Path:
    """Return path to SQL schema file."""
    return Path(__file__).resolve().parents[2] / "schemas" / "sqlite.sql"


def init_db(db_path: Path) -> sqlite3.Connection:
    """Initialize database with schema.

    Args:
        db_path: Path to SQLite database file

    Returns:
        Database connection
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row

    schema = _schema_path().read_text(encoding="utf-8")
    conn.executescript(schema)
    conn.commit()

    return conn


# --------------------------------------------------------------------------- #
# Match decisions
# --------------------------------------------------------------------------- #

def save_decision(
    conn: sqlite3.Connection,
    source_episode_id: int,
    matched_episode_id: int,
    decision: str,
    decided_at: Optional[str] = None,
) -> str:
    """Insert or replace the decision for an episode pair.

    Args:
        conn: Database connection
        source_episode_id: Episode the suggestion was shown on
        matched_episode_id: Suggested episode
        decision: "confirmed" or "denied"
        decided_at: Decision time (ISO), defaults to now

    Returns:
        The pair key the decision is stored under

    Raises:
        ValueError: If decision is not a known value
    """
    if decision not in MATCH_DECISIONS:
        raise ValueError(f"Unknown match decision: {decision!r}")

    key = pair_key(source_episode_id, matched_episode_id)
    conn.execute(
        """
        INSERT INTO match_decisions (pair_key, source_episode_id, matched_episode_id, decision, decided_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(pair_key) DO UPDATE SET
            source_episode_id = excluded.source_episode_id,
            matched_episode_id = excluded.matched_episode_id,
            decision = excluded.decision,
            decided_at = excluded.decided_at
        """,
        (key, source_episode_id, matched_episode_id, decision, decided_at or utc_now_iso()),
    )
    conn.commit()
    return key


def get_decision(
    conn: sqlite3.Connection,
    source_episode_id: int,
    matched_episode_id: int,
) -> Optional[str]:
    """Get the decision for an episode pair, in either order.

    Returns:
        "confirmed", "denied", or None if undecided
    """
    row = conn.execute(
        "SELECT decision FROM match_decisions WHERE pair_key = ?",
        (pair_key(source_episode_id, matched_episode_id),),
    ).fetchone()
    return row["decision"] if row else None


def remove_decision(
    conn: sqlite3.Connection,
    source_episode_id: int,
    matched_episode_id: int,
) -> bool:
    """Reset an episode pair to its auto-detected state.

    Returns:
        True if a decision was removed
    """
    cursor = conn.execute(
        "DELETE FROM match_decisions WHERE pair_key = ?",
        (pair_key(source_episode_id, matched_episode_id),),
    )
    conn.commit()
    return cursor.rowcount > 0


def list_decisions(
    conn: sqlite3.Connection,
    decision: Optional[str] = None,
) -> list[dict[str, Any]]:
    """List stored decisions, optionally filtered by decision value."""
    if decision is None:
        cursor = conn.execute("SELECT * FROM match_decisions ORDER BY pair_key")
    else:
        cursor = conn.execute(
            "SELECT * FROM match_decisions WHERE decision = ? ORDER BY pair_key",
            (decision,),
        )
    return [dict(row) for row in cursor.fetchall()]


def _counterpart_ids(conn: sqlite3.Connection, episode_id: int, decision: str) -> set[int]:
    cursor = conn.execute(
        """
        SELECT matched_episode_id AS other_id FROM match_decisions
        WHERE decision = ? AND source_episode_id = ?
        UNION
        SELECT source_episode_id AS other_id FROM match_decisions
        WHERE decision = ? AND matched_episode_id = ?
        """,
        (decision, episode_id, decision, episode_id),
    )
    return {row["other_id"] for row in cursor.fetchall()}


def get_denied_match_ids(conn: sqlite3.Connection, episode_id: int) -> set[int]:
    """Episodes the user said are NOT related to episode_id."""
    return _counterpart_ids(conn, episode_id, DENIED)


def get_confirmed_match_ids(conn: sqlite3.Connection, episode_id: int) -> set[int]:
    """Episodes the user confirmed as covering the same case as episode_id."""
    return _counterpart_ids(conn, episode_id, CONFIRMED)


def is_match_confirmed(conn: sqlite3.Connection, source_episode_id: int, matched_episode_id: int) -> bool:
    return get_decision(conn, source_episode_id, matched_episode_id) == CONFIRMED


def is_match_denied(conn: sqlite3.Connection, source_episode_id: int, matched_episode_id: int) -> bool:
    return get_decision(conn, source_episode_id, matched_episode_id) == DENIED


# --------------------------------------------------------------------------- #
# Viewed episodes
# --------------------------------------------------------------------------- #

def get_viewed_ids(conn: sqlite3.Connection) -> set[int]:
    """Return IDs of all directly viewed episodes."""
    cursor = conn.execute("SELECT episode_id FROM viewed_episodes")
    return {row["episode_id"] for row in cursor.fetchall()}


def _is_directly_viewed(conn: sqlite3.Connection, episode_id: int) -> bool:
    row = conn.execute(
        "SELECT 1 FROM viewed_episodes WHERE episode_id = ?",
        (episode_id,),
    ).fetchone()
    return row is not None


def is_viewed(conn: sqlite3.Connection, episode_id: int) -> bool:
    """Check if an episode is viewed directly or via a confirmed match."""
    if _is_directly_viewed(conn, episode_id):
        return True

    viewed = get_viewed_ids(conn)
    return any(other_id in viewed for other_id in get_confirmed_match_ids(conn, episode_id))


def mark_viewed(
    conn: sqlite3.Connection,
    episode_id: int,
    viewed_at: Optional[str] = None,
) -> set[int]:
    """Mark an episode as viewed, along with its confirmed matches.

    The episode's own timestamp is refreshed; confirmed matches that are
    already viewed keep theirs.

    Returns:
        IDs of every episode marked
    """
    viewed_at = viewed_at or utc_now_iso()
    conn.execute(
        """
        INSERT INTO viewed_episodes (episode_id, viewed_at) VALUES (?, ?)
        ON CONFLICT(episode_id) DO UPDATE SET viewed_at = excluded.viewed_at
        """,
        (episode_id, viewed_at),
    )

    marked = {episode_id}
    for other_id in get_confirmed_match_ids(conn, episode_id):
        conn.execute(
            "INSERT OR IGNORE INTO viewed_episodes (episode_id, viewed_at) VALUES (?, ?)",
            (other_id, viewed_at),
        )
        marked.add(other_id)

    conn.commit()
    return marked


def mark_unviewed(conn: sqlite3.Connection, episode_id: int) -> set[int]:
    """Clear viewed status from an episode and its confirmed matches.

    Returns:
        IDs of every episode cleared
    """
    cleared = {episode_id} | get_confirmed_match_ids(conn, episode_id)
    conn.executemany(
        "DELETE FROM viewed_episodes WHERE episode_id = ?",
        [(other_id,) for other_id in cleared],
    )
    conn.commit()
    return cleared


def toggle_viewed(conn: sqlite3.Connection, episode_id: int) -> bool:
    """Toggle viewed status using the direct flag only.

    Returns:
        The new viewed state
    """
    if _is_directly_viewed(conn, episode_id):
        mark_unviewed(conn, episode_id)
        return False

    mark_viewed(conn, episode_id)
    return True
