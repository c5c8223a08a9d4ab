#!/usr/bin/env python3
"""
Related Episodes Runner

Loads the episode corpus snapshot, prints the terms extracted from each
selected episode and the related episodes the matcher finds for it.
Optionally hides matches the user has denied, suggests a case name per
episode, or runs a cross-show analysis between two shows.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from config import DEFAULT_CONFIG_PATH, load_matcher_config
from corpus import episodes_by_show, load_corpus
from db import get_denied_match_ids, init_db
from extract import EXTRACTOR_VERSION, extract_key_terms
from patterns import extract_keywords, suggest_case_name
from rank import exclude_episodes, find_cross_show_matches, find_related_episodes
from schema import ValidationError


REPO_ROOT = Path(__file__).parent.parent


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Find related episodes across true-crime shows"
    )
    parser.add_argument(
        '--config',
        default=str(DEFAULT_CONFIG_PATH),
        help=f'Matcher config path (default: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--corpus',
        default=None,
        help='Corpus snapshot path (default: from config)'
    )
    parser.add_argument(
        '--episode-id',
        type=int,
        action='append',
        dest='episode_ids',
        help='Episode to look up (repeatable; default: first --sample episodes)'
    )
    parser.add_argument(
        '--sample',
        type=int,
        default=5,
        help='Number of episodes to look up when no --episode-id is given (default: 5)'
    )
    parser.add_argument('--max-results', type=int, default=None, help='Override matching.max_results')
    parser.add_argument('--min-score', type=float, default=None, help='Override matching.min_score')
    parser.add_argument(
        '--exclude-same-show',
        action='store_true',
        default=None,
        help='Skip candidates from the same show'
    )
    parser.add_argument(
        '--db',
        default=None,
        help='Decisions database; denied matches are hidden when given'
    )
    parser.add_argument(
        '--cross-show',
        nargs=2,
        type=int,
        metavar=('SOURCE_SHOW', 'TARGET_SHOW'),
        help='Report the best match in TARGET_SHOW for each SOURCE_SHOW episode'
    )
    parser.add_argument(
        '--cross-show-limit',
        type=int,
        default=20,
        help='Source episodes checked in cross-show mode (default: 20)'
    )
    parser.add_argument(
        '--suggest-case',
        action='store_true',
        help='Also suggest a case name and case keywords for each episode'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print results as JSON instead of text'
    )
    return parser


def resolve_path(value):
    """Resolve a path relative to the repository root."""
    path = Path(value)
    return path if path.is_absolute() else REPO_ROOT / path


def rank_options_from_args(args, base):
    """Apply command-line overrides on top of configured rank options."""
    overrides = {}
    if args.max_results is not None:
        overrides['max_results'] = args.max_results
    if args.min_score is not None:
        overrides['min_score'] = args.min_score
    if args.exclude_same_show is not None:
        overrides['exclude_same_show'] = args.exclude_same_show
    return replace(base, **overrides)


def select_episodes(episodes, episode_ids, sample):
    """Pick episodes by ID, or the first `sample` episodes."""
    if not episode_ids:
        return episodes[:sample]

    by_id = {episode.id: episode for episode in episodes}
    selected = []
    for episode_id in episode_ids:
        if episode_id not in by_id:
            print(f"Warning: episode {episode_id} not in corpus", file=sys.stderr)
            continue
        selected.append(by_id[episode_id])
    return selected


def print_episode_report(episode, related):
    terms = extract_key_terms(episode.text())
    print(f"\n=== {episode.show_name}: \"{episode.title}\" ===")
    if episode.overview:
        print(f"Overview: {episode.overview[:150]}...")
    print(f"Names: {', '.join(terms.names) or '(none)'}")
    print(f"Locations: {', '.join(terms.locations) or '(none)'}")
    print(f"Years: {', '.join(terms.years) or '(none)'}")

    if related:
        print(f"\nRelated episodes ({len(related)}):")
        for result in related:
            print(f"  - {result.show_name}: \"{result.title}\" ({round(result.score * 100)}% - {result.reason})")
    else:
        print("\nNo related episodes found")


def case_suggestion(episode):
    """Suggested case name and keywords from the title-pattern matcher."""
    return {
        "suggestedCase": suggest_case_name(episode.title, episode.overview),
        "caseKeywords": extract_keywords(episode.text()),
    }


def print_case_suggestion(episode):
    suggestion = case_suggestion(episode)
    print(f"Suggested case: {suggestion['suggestedCase'] or '(none)'}")
    print(f"Case keywords: {', '.join(suggestion['caseKeywords']) or '(none)'}")


def run_cross_show(episodes, source_show, target_show, limit, options):
    grouped = episodes_by_show(episodes)
    sources = grouped.get(source_show, [])
    targets = grouped.get(target_show, [])

    print(f"Show {source_show} episodes: {len(sources)}")
    print(f"Show {target_show} episodes: {len(targets)}")

    pairs = find_cross_show_matches(sources[:limit], targets, options)
    for source, match in pairs:
        print(f"\n{source.show_name} \"{source.title}\"")
        print(f"  -> {match.show_name} \"{match.title}\" ({round(match.score * 100)}% - {match.reason})")
    print(f"\nCross-show matches found: {len(pairs)}")
    return pairs


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_matcher_config(resolve_path(args.config))
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    corpus_path = resolve_path(args.corpus or config.corpus_path)
    try:
        episodes = load_corpus(corpus_path)
    except FileNotFoundError:
        print(f"ERROR: Corpus snapshot not found at {corpus_path}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(episodes)} episodes", file=sys.stderr)
    options = rank_options_from_args(args, config.rank_options)

    if args.cross_show:
        source_show, target_show = args.cross_show
        run_cross_show(episodes, source_show, target_show, args.cross_show_limit, options)
        return

    conn = init_db(resolve_path(args.db)) if args.db else None
    try:
        report = []
        for episode in select_episodes(episodes, args.episode_ids, args.sample):
            related = find_related_episodes(episode, episodes, options)
            if conn is not None:
                related = exclude_episodes(related, get_denied_match_ids(conn, episode.id))

            if args.json:
                entry = {
                    "episodeId": episode.id,
                    "title": episode.title,
                    "extractorVersion": EXTRACTOR_VERSION,
                    "related": [result.to_dict() for result in related],
                }
                if args.suggest_case:
                    entry.update(case_suggestion(episode))
                report.append(entry)
            else:
                print_episode_report(episode, related)
                if args.suggest_case:
                    print_case_suggestion(episode)

        if args.json:
            print(json.dumps(report, indent=2, ensure_ascii=False))
    finally:
        if conn is not None:
            conn.close()


if __name__ == "__main__":
    main()
