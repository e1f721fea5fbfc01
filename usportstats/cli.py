"""
CLI entrypoints for usportstats.

Usage:
    usportstats schedule basketball w --season 2018 --season 2019 --out games.csv
    usportstats pbp hockey m --season 2019
    usportstats box soccer w --season 2019 --export
    usportstats drives --season 2019
    usportstats facet kicking --season 2019
    usportstats rankings track_and_field w --event 60m --event "Long Jump"
    usportstats universities
"""
import argparse
import logging
import sys

import pandas as pd

from usportstats.api import get_router
from usportstats.cache import DatasetCache
from usportstats.config import settings
from usportstats.errors import RequestFailed, UsportsError
from usportstats.export import to_parquet_multi, write_table
from usportstats.http import log_event
from usportstats.normalizer import project_facet
from usportstats.router import QueryResult, QueryRouter
from usportstats.sports import DRIVES, PBP, PLAYER_BOX, RANKINGS, SCHEDULE, FOOTBALL_FACETS

logger = logging.getLogger('usportstats')


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _router(no_cache: bool) -> QueryRouter:
    if no_cache:
        return QueryRouter(cache=DatasetCache(settings.cache_dir, enabled=False))
    return get_router()


def _emit(frame: pd.DataFrame, table: str, out: str | None, export: bool) -> None:
    if out:
        path = write_table(frame, out)
        logger.info(f'Wrote {len(frame)} rows to {path}')
    if export and len(frame):
        paths = to_parquet_multi(frame, table)
        logger.info(f'Exported {len(paths)} season files')
    if not out and not export:
        print(frame.to_string(max_rows=20))


def run_dataset(
    sport: str,
    gender: str,
    kind: str,
    seasons: list[int] | None = None,
    variants: list[str] | None = None,
    out: str | None = None,
    export: bool = False,
    write_db: bool = False,
    no_cache: bool = False,
) -> int:
    """
    Fetch one dataset and write it out.

    Returns:
        Number of rows fetched
    """
    router = _router(no_cache)
    result = router.get(sport, gender, seasons, kind=kind, variants=variants)
    frame = result.to_frame()

    for failure in result.failures:
        logger.warning(f'Failed: season={failure.season} game={failure.game_id} {failure.error_type}: {failure.message}')

    # Write to database
    if write_db and kind == SCHEDULE:
        if not settings.db_url:
            logger.error('--db given but DATABASE_URL is not set')
        else:
            from usportstats.db import upsert_schedules
            spec, _adapter = router.resolve(sport, gender, kind)
            count = upsert_schedules(frame, source=spec.source)
            logger.info(f'Upserted {count} games to database')

    _emit(frame, f'{sport}_{gender}_{kind}', out, export)
    log_event(event='dataset_done', sport=sport, gender=gender, kind=kind, rows=len(frame), failures=len(result.failures))
    return len(frame)


def run_facet(
    facet: str,
    seasons: list[int] | None = None,
    out: str | None = None,
    export: bool = False,
    no_cache: bool = False,
) -> int:
    """Football box score projected onto one statistical category."""
    result = _router(no_cache).get('football', 'm', seasons, kind=PLAYER_BOX)
    frame = project_facet(result.frame, facet)
    _emit(frame, f'football_{facet}', out, export)
    log_event(event='facet_done', facet=facet, rows=len(frame), failures=len(result.failures))
    return len(frame)


def run_universities(out: str | None = None) -> int:
    result: QueryResult = get_router().reference('track_and_field')
    frame = result.to_frame()
    unresolved = int((~frame['resolved'].astype(bool)).sum()) if len(frame) else 0
    if unresolved:
        logger.warning(f'{unresolved} universities could not be resolved to a canonical name')
    _emit(frame, 'universities', out, False)
    return len(frame)


def _add_common(p: argparse.ArgumentParser, seasons: bool = True):
    if seasons:
        p.add_argument('--season', type=int, action='append', dest='seasons',
                       help='Season start year (repeat for several)')
    p.add_argument('--out', help='Write to a single .csv or .parquet file')
    p.add_argument('--export', action='store_true', help='Export season-partitioned Parquet')
    p.add_argument('--no-cache', action='store_true', help='Bypass the dataset cache')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='usportstats',
        description='Canadian university sports statistics',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Team sport tables
    for command, help_text in (
        ('schedule', 'Game schedule and results'),
        ('pbp', 'Play-by-play events'),
        ('box', 'Player box scores'),
    ):
        p = subparsers.add_parser(command, help=help_text)
        p.add_argument('sport', help='Sport key (basketball, soccer, hockey, ...)')
        p.add_argument('gender', choices=['m', 'w'])
        _add_common(p)
        if command == 'schedule':
            p.add_argument('--db', action='store_true', help='Upsert schedule into DATABASE_URL')

    # Football
    p = subparsers.add_parser('drives', help='Football drive summaries')
    _add_common(p)

    p = subparsers.add_parser('facet', help='Football box score category')
    p.add_argument('facet', choices=sorted(FOOTBALL_FACETS))
    _add_common(p)

    # Individual sports
    p = subparsers.add_parser('rankings', help='Athlete rankings (track & field, swimming, wrestling)')
    p.add_argument('sport')
    p.add_argument('gender', choices=['m', 'w'])
    p.add_argument('--event', action='append', dest='events',
                   help='Event or weight class (repeat for several; default all)')
    _add_common(p)

    p = subparsers.add_parser('universities', help='Track & field university list')
    p.add_argument('--out', help='Write to a single .csv or .parquet file')

    return parser


KINDS = {'schedule': SCHEDULE, 'pbp': PBP, 'box': PLAYER_BOX}


def main(argv=None):
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command in KINDS:
            count = run_dataset(
                args.sport, args.gender, KINDS[args.command],
                seasons=args.seasons,
                out=args.out,
                export=args.export,
                write_db=getattr(args, 'db', False),
                no_cache=args.no_cache,
            )
        elif args.command == 'drives':
            count = run_dataset('football', 'm', DRIVES, seasons=args.seasons,
                                out=args.out, export=args.export, no_cache=args.no_cache)
        elif args.command == 'facet':
            count = run_facet(args.facet, seasons=args.seasons, out=args.out,
                              export=args.export, no_cache=args.no_cache)
        elif args.command == 'rankings':
            count = run_dataset(
                args.sport, args.gender, RANKINGS,
                seasons=args.seasons,
                variants=args.events,
                out=args.out,
                export=args.export,
                no_cache=args.no_cache,
            )
        else:
            count = run_universities(out=args.out)
    except RequestFailed as e:
        logger.error(str(e))
        sys.exit(1)
    except UsportsError as e:
        parser.error(str(e))

    print(f'{args.command}: {count} rows')
    sys.exit(0 if count > 0 else 1)


if __name__ == '__main__':
    main()
