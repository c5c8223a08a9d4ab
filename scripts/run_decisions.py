#!/usr/bin/env python3
"""
Match Decisions Runner

Records user decisions on suggested episode matches and viewed flags.

    run_decisions.py confirm 101 202
    run_decisions.py deny 101 303
    run_decisions.py reset 101 303
    run_decisions.py list --decision confirmed
    run_decisions.py viewed 101
    run_decisions.py unviewed 101
    run_decisions.py toggle 101
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from config import DEFAULT_CONFIG_PATH, load_matcher_config
from db import (
    CONFIRMED,
    DENIED,
    MATCH_DECISIONS,
    init_db,
    list_decisions,
    mark_unviewed,
    mark_viewed,
    remove_decision,
    save_decision,
    toggle_viewed,
)


REPO_ROOT = Path(__file__).parent.parent


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Confirm or deny episode matches and track viewed episodes"
    )
    parser.add_argument(
        '--config',
        default=str(DEFAULT_CONFIG_PATH),
        help=f'Matcher config path (default: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--db',
        default=None,
        help='Database path (default: from config)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    for command, help_text in (
        ('confirm', 'Confirm two episodes cover the same case'),
        ('deny', 'Mark a suggested match as unrelated'),
        ('reset', 'Remove the decision for a pair'),
    ):
        pair_parser = subparsers.add_parser(command, help=help_text)
        pair_parser.add_argument('source_id', type=int)
        pair_parser.add_argument('matched_id', type=int)

    list_parser = subparsers.add_parser('list', help='List stored decisions')
    list_parser.add_argument('--decision', choices=sorted(MATCH_DECISIONS), default=None)

    for command, help_text in (
        ('viewed', 'Mark an episode (and confirmed matches) as viewed'),
        ('unviewed', 'Clear viewed status (and from confirmed matches)'),
        ('toggle', 'Toggle viewed status'),
    ):
        viewed_parser = subparsers.add_parser(command, help=help_text)
        viewed_parser.add_argument('episode_id', type=int)

    return parser


def resolve_path(value):
    """Resolve a path relative to the repository root."""
    path = Path(value)
    return path if path.is_absolute() else REPO_ROOT / path


def run_command(conn, args):
    """Execute one subcommand against an open connection."""
    if args.command in ('confirm', 'deny'):
        if args.source_id == args.matched_id:
            print("ERROR: an episode cannot be matched with itself", file=sys.stderr)
            sys.exit(1)
        decision = CONFIRMED if args.command == 'confirm' else DENIED
        key = save_decision(conn, args.source_id, args.matched_id, decision)
        print(f"{decision}: {key}")

    elif args.command == 'reset':
        if remove_decision(conn, args.source_id, args.matched_id):
            print(f"Removed decision for {args.source_id} / {args.matched_id}")
        else:
            print(f"No decision stored for {args.source_id} / {args.matched_id}", file=sys.stderr)

    elif args.command == 'list':
        decisions = list_decisions(conn, args.decision)
        for record in decisions:
            print(
                f"{record['pair_key']}\t{record['decision']}\t"
                f"{record['source_episode_id']} -> {record['matched_episode_id']}\t{record['decided_at']}"
            )
        print(f"{len(decisions)} decision(s)", file=sys.stderr)

    elif args.command == 'viewed':
        marked = mark_viewed(conn, args.episode_id)
        print(f"Marked viewed: {', '.join(str(i) for i in sorted(marked))}")

    elif args.command == 'unviewed':
        cleared = mark_unviewed(conn, args.episode_id)
        print(f"Cleared viewed: {', '.join(str(i) for i in sorted(cleared))}")

    elif args.command == 'toggle':
        state = toggle_viewed(conn, args.episode_id)
        print(f"Episode {args.episode_id} is now {'viewed' if state else 'not viewed'}")


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.db:
        db_path = resolve_path(args.db)
    else:
        try:
            db_path = resolve_path(load_matcher_config(resolve_path(args.config)).db_path)
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(1)

    conn = init_db(db_path)
    try:
        run_command(conn, args)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
