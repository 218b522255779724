#!/usr/bin/env python3
"""
find_movies.py - OMDb movie finder (command line)

Queries:
1. genre    → best-rated movies of a genre, found via a broad seed search
2. related  → movies sharing a genre, director or actor with a seed movie
3. movie    → one movie by title or IMDb id

Results are printed as JSON with OMDb-style field names.
"""

import sys
import json
import logging
import argparse
from pathlib import Path

from finder.aggregator import MovieFinder
from finder.config import FinderConfig
from finder.errors import ConfigError, SeedNotFound, MovieNotFound
from finder.omdb import OMDbClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Find and rank movies from OMDb',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python find_movies.py genre Comedy
  python find_movies.py genre Horror --limit 5
  python find_movies.py related "Inception"
  python find_movies.py movie --title "The Matrix"
  python find_movies.py movie --id tt0133093
        """
    )
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                        help='Configuration file (default: config.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    genre = subparsers.add_parser('genre', help='Top movies of a genre')
    genre.add_argument('genre', help='Genre name, e.g. Comedy')
    genre.add_argument('--limit', type=int, default=None,
                       help='Maximum results (default: category_limit from config)')

    related = subparsers.add_parser('related', help='Movies related to a seed movie')
    related.add_argument('title', help='Seed movie title')
    related.add_argument('--limit', type=int, default=None,
                         help='Maximum results per axis (default: related_limit from config)')

    movie = subparsers.add_parser('movie', help='Look up one movie')
    movie.add_argument('--title', help='Movie title')
    movie.add_argument('--id', dest='imdb_id', help='IMDb id, e.g. tt0133093')

    return parser


def run(args, finder: MovieFinder):
    """Dispatch one parsed command and return a JSON-ready object"""
    if args.command == 'genre':
        return [r.to_dict() for r in finder.find_by_category(args.genre, limit=args.limit)]
    if args.command == 'related':
        return finder.find_related(args.title, limit=args.limit).to_dict()
    if args.command == 'movie':
        return finder.get_movie(title=args.title, imdb_id=args.imdb_id).to_dict()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == 'movie' and not args.title and not args.imdb_id:
        parser.error('movie needs --title or --id')

    try:
        config = FinderConfig.from_file(args.config)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    client = OMDbClient(config)
    finder = MovieFinder(client, config)

    try:
        output = run(args, finder)
    except (SeedNotFound, MovieNotFound) as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 2

    print(json.dumps(output, indent=2, ensure_ascii=False))

    stats = client.get_stats()
    logger.info(f"OMDb: {stats['requests']} requests, {stats['failures']} failures, "
                f"{stats['not_found']} not found")
    return 0


if __name__ == '__main__':
    sys.exit(main())
