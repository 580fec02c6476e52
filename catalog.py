#!/usr/bin/env python3
"""
catalog.py - Personal movie catalog manager

Loads the catalog JSON, applies one operation, and saves after every change.
Remote commands (enrich, lookup) query OMDb and need omdb_api_key in config.

Examples:
  python catalog.py init
  python catalog.py add "The Shawshank Redemption" "Frank Darabont" 1994 Drama 9.3
  python catalog.py update 1 --genre "Crime/Drama"
  python catalog.py search shawshank
  python catalog.py filter genre Drama
  python catalog.py enrich --term star --limit 5
  python catalog.py lookup 1917
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Optional

from moviecat.config import load_config
from moviecat.display import render_added, render_catalog, render_search, render_filter
from moviecat.errors import CatalogError, NotFoundError
from moviecat.manager import CatalogManager
from moviecat.omdb import OMDbClient
from moviecat.store import JsonCatalogStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

REMOTE_COMMANDS = {'enrich', 'lookup'}


def parse_year(value: str):
    """Years are stored as integers when they look like one, text otherwise"""
    try:
        return int(value)
    except ValueError:
        return value


def parse_rating(value: str):
    try:
        return float(value)
    except ValueError:
        return value


def parse_number(value: str):
    try:
        return int(value)
    except ValueError:
        return float(value)


def build_manager(config: dict, remote: bool) -> Optional[CatalogManager]:
    """Wire store and (optionally) OMDb client. Returns None when remote is needed but not configured."""
    store = JsonCatalogStore(Path(config['catalog_path']))

    provider = None
    api_key = config.get('omdb_api_key')
    if api_key:
        provider = OMDbClient(
            api_key=api_key,
            base_url=config['omdb_base_url'],
            timeout=config['request_timeout']
        )
    elif remote:
        logger.error("OMDb API key missing (set omdb_api_key in config)")
        return None

    return CatalogManager(
        store,
        provider=provider,
        search_term=config['enrich_search_term'],
        enrich_limit=config['enrich_limit']
    )


def run_demo(manager: CatalogManager):
    """Walk through every catalog operation once"""
    print(render_catalog(manager.list()))

    shawshank = manager.add("The Shawshank Redemption", "Frank Darabont", 1994, "Drama", 9.3)
    war_film = manager.add("1917", "lorem Darabont", 2017, "Real", 8.9)
    print(render_catalog(manager.list()))

    manager.update(shawshank.id, {'genre': "Crime/Drama"})
    print(render_catalog(manager.list()))

    manager.delete(war_film.id)
    print(render_catalog(manager.list()))

    print(render_search("shawshank", manager.search("shawshank")))
    print(render_filter("genre", "Drama", manager.filter("genre", "Drama")))

    if manager.provider is None:
        logger.info("Skipping OMDb steps (no API key in config)")
        return

    manager.enrich_from_remote()
    data = manager.lookup_by_name("1917")
    if data is not None:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    print(render_catalog(manager.list()))


def dispatch(args, manager: CatalogManager) -> int:
    if args.command == 'init':
        if not manager.store.initialize():
            logger.info(f"Catalog already exists: {manager.store.path}")
        return 0

    # lookup never touches the catalog file
    if args.command == 'lookup':
        data = manager.lookup_by_name(args.name)
        if data is None:
            return 1
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    manager.load()

    if args.command == 'list':
        print(render_catalog(manager.list()))

    elif args.command == 'add':
        movie = manager.add(
            args.title, args.director,
            parse_year(args.year), args.genre, parse_rating(args.rating)
        )
        logger.info(f"Added movie {movie.id}: {movie.title}")

    elif args.command == 'update':
        fields = {}
        if args.title is not None:
            fields['title'] = args.title
        if args.director is not None:
            fields['director'] = args.director
        if args.year is not None:
            fields['yearOfRelease'] = parse_year(args.year)
        if args.genre is not None:
            fields['genre'] = args.genre
        if args.rating is not None:
            fields['imdbRating'] = parse_rating(args.rating)
        if not fields:
            logger.error("Nothing to update (pass at least one field option)")
            return 1
        manager.update(args.id, fields)

    elif args.command == 'delete':
        manager.delete(args.id)

    elif args.command == 'search':
        print(render_search(args.term, manager.search(args.term)))

    elif args.command == 'filter':
        value = args.value
        if args.numeric:
            try:
                value = parse_number(value)
            except ValueError:
                logger.error(f"Not a number: {args.value}")
                return 1
        print(render_filter(args.field, value, manager.filter(args.field, value)))

    elif args.command == 'enrich':
        added = manager.enrich_from_remote(term=args.term, limit=args.limit)
        print(render_added(added))

    elif args.command == 'demo':
        run_demo(manager)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Manage a personal movie catalog',
        epilog="""
Every change is written back to the catalog file immediately.

Examples:
  python catalog.py init
  python catalog.py list
  python catalog.py add "1917" "Sam Mendes" 2019 War 8.2
  python catalog.py filter imdbRating 8.2 --numeric
  python catalog.py --config my_config.yaml enrich --term alien
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                       help='Configuration file (default: config.yaml)')
    parser.add_argument('--catalog', type=Path, default=None,
                       help='Catalog JSON path (default: catalog_path from config)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Enable debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('init', help='Create an empty catalog if none exists')
    sub.add_parser('list', help='Print the catalog')

    add = sub.add_parser('add', help='Add a movie')
    add.add_argument('title')
    add.add_argument('director')
    add.add_argument('year')
    add.add_argument('genre')
    add.add_argument('rating')

    update = sub.add_parser('update', help='Update fields of a movie')
    update.add_argument('id', type=int)
    update.add_argument('--title')
    update.add_argument('--director')
    update.add_argument('--year')
    update.add_argument('--genre')
    update.add_argument('--rating')

    delete = sub.add_parser('delete', help='Delete a movie')
    delete.add_argument('id', type=int)

    search = sub.add_parser('search', help='Search title, director and genre')
    search.add_argument('term')

    filt = sub.add_parser('filter', help='Movies whose FIELD equals VALUE exactly')
    filt.add_argument('field', help='e.g. genre, director, yearOfRelease, imdbRating')
    filt.add_argument('value')
    filt.add_argument('--numeric', action='store_true',
                      help='Compare VALUE as a number')

    enrich = sub.add_parser('enrich', help='Add movies found by an OMDb search')
    enrich.add_argument('--term', default=None,
                        help='Search term (default: enrich_search_term from config)')
    enrich.add_argument('--limit', type=int, default=None,
                        help='Maximum movies to add (default: enrich_limit from config)')

    lookup = sub.add_parser('lookup', help='Fetch OMDb details for an exact title')
    lookup.add_argument('name')

    sub.add_parser('demo', help='Run every operation once against the catalog')

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.config.exists():
        logger.error(f"Config file not found: {args.config}")
        return 1

    config = load_config(args.config)
    if args.catalog is not None:
        config['catalog_path'] = str(args.catalog)

    manager = build_manager(config, remote=args.command in REMOTE_COMMANDS)
    if manager is None:
        return 1

    try:
        return dispatch(args, manager)
    except NotFoundError:
        # Already reported by the manager
        return 1
    except CatalogError as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
