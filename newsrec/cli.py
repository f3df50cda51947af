"""
Command-line entry point.

Usage:
    python -m newsrec recommend --articles articles.csv \\
        --interactions interactions.csv --user-id 1 --limit 10

    python -m newsrec preferences --articles articles.json \\
        --interactions interactions.json --user-id 1
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config
from .corpus import load_articles, load_interactions, recommendations_to_frame
from .recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='newsrec',
        description='Content-based news recommendations from article and interaction files',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, help_text in (
        ('recommend', 'Rank articles for a user'),
        ('preferences', 'Export a user preference summary as JSON'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('--articles', type=str, required=True,
                         help='Path to the article corpus (.csv or .json)')
        sub.add_argument('--interactions', type=str, required=True,
                         help='Path to the interaction log (.csv or .json)')
        sub.add_argument('--user-id', type=int, required=True,
                         help='User to recommend for')

        if name == 'recommend':
            sub.add_argument('--limit', type=int, default=Config.DEFAULT_LIMIT,
                             help='Number of recommendations')
            sub.add_argument('--exclude-viewed', action='store_true',
                             help='Skip articles the user already interacted with')

    parser.add_argument('--log-level', type=str, default=Config.LOG_LEVEL,
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    return parser


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return its printable output."""
    articles = load_articles(args.articles)
    interactions = [
        i for i in load_interactions(args.interactions) if i.user_id == args.user_id
    ]

    engine = RecommendationEngine()
    engine.initialize(articles)

    if args.command == 'preferences':
        summary = engine.export_user_preferences(args.user_id, interactions)
        return json.dumps(summary.model_dump(by_alias=True), indent=2)

    exclude_ids = [i.article_id for i in interactions] if args.exclude_viewed else []
    recommendations = engine.get_recommendations(
        args.user_id, interactions, articles, exclude_ids, args.limit
    )
    return recommendations_to_frame(recommendations).to_string(index=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=Config.LOG_FORMAT)

    for path in (args.articles, args.interactions):
        if not Path(path).exists():
            logger.error(f"File not found: {path}")
            return 1

    if getattr(args, 'limit', 1) <= 0:
        logger.error("--limit must be positive")
        return 1

    try:
        output = run(args)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        logger.error(f"Error: {e}")
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
