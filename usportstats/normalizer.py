"""
Schema normalizer.

Maps adapter records onto the canonical row models. Dispatch is by data kind
only; anything sport-specific (period tables, clock direction, box-score
column names, event units) comes from the SportSpec.

No coercion step drops a row. A non-blank value that fails to parse becomes
None and its field name is added to the row's `quality` column.
"""
import logging
import re

import pandas as pd

from usportstats.coerce import (
    clean_text,
    clock_to_elapsed,
    coerce_drive_result,
    coerce_int,
    coerce_number,
    coerce_season_type,
    extract_game_id,
    is_blank,
    parse_clock,
    parse_date,
    parse_performance,
    parse_period,
    parse_plays_yards,
    parse_score_pair,
    period_label,
    split_made_attempt,
)
from usportstats.http import log_event
from usportstats.models import (
    BoxScoreRow,
    DriveSummaryRow,
    PlayByPlayEvent,
    RankingRow,
    ScheduleRow,
    UniversityRow,
)
from usportstats.sports import (
    DRIVES,
    FOOTBALL_FACETS,
    PBP,
    PLAYER_BOX,
    RANKINGS,
    SCHEDULE,
    UNIVERSITIES,
    SportSpec,
)
from usportstats.universities import try_resolve_university, university_info

logger = logging.getLogger('usportstats')

IDENTITY_COLUMNS = ('player', 'number', 'position')

BOX_KEYS = ['sport', 'gender', 'season', 'quality', 'game_id', 'season_type', 'side', 'team', 'player', 'number', 'position']


class _Quality:
    """Collects names of fields whose raw value could not be coerced."""

    def __init__(self):
        self.fields: list[str] = []

    def check(self, name: str, raw, value):
        if value is None and not is_blank(raw):
            self.fields.append(name)
        return value

    def flag(self, name: str):
        self.fields.append(name)

    def __str__(self) -> str:
        return ';'.join(dict.fromkeys(self.fields))


def _frame(model, rows: list) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=model.columns())
    return pd.DataFrame([row.model_dump() for row in rows], columns=model.columns())


def _snake(header: str) -> str:
    s = re.sub(r'[^a-z0-9]+', '_', header.lower()).strip('_')
    return s or 'col'


def _group_by_game(records: list[dict]) -> dict[str, list[dict]]:
    games: dict[str, list[dict]] = {}
    for record in records:
        games.setdefault(record['game_id'], []).append(record)
    return games


# =============================================================================
# SCHEDULE
# =============================================================================

def normalize_schedule(spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    rows = []
    seen: set[str] = set()
    for rec in records:
        q = _Quality()
        box_url = rec.get('box_score_url')
        game_id = q.check('game_id', box_url, extract_game_id(box_url))
        if game_id is not None:
            if game_id in seen:
                log_event(event='duplicate_game', sport=spec.key, season=season, game_id=game_id)
                continue
            seen.add(game_id)

        rows.append(ScheduleRow(
            sport=spec.key,
            gender=gender,
            season=season,
            game_id=game_id,
            season_type=coerce_season_type(rec.get('season_type_raw'), rec.get('notes')),
            date=q.check('date', rec.get('date_raw'), parse_date(rec.get('date_raw'), season)),
            home_team=clean_text(rec.get('home_team_raw')),
            away_team=clean_text(rec.get('away_team_raw')),
            home_score=q.check('home_score', rec.get('home_score_raw'), coerce_int(rec.get('home_score_raw'))),
            away_score=q.check('away_score', rec.get('away_score_raw'), coerce_int(rec.get('away_score_raw'))),
            notes=clean_text(rec.get('notes')),
            box_score_url=box_url,
            quality=str(q),
        ))
    return _frame(ScheduleRow, rows)


# =============================================================================
# PLAY-BY-PLAY
# =============================================================================

def _order_game_events(events: list[dict]) -> list[dict]:
    """
    Sort by period, then by time elapsed in the period, then source order.
    Events whose period or clock could not be read stay next to the event
    before them.
    """
    last_period = 0
    last_elapsed = 0.0
    for index, event in enumerate(events):
        if event['period_number'] is not None and event['period_number'] != last_period:
            last_period = event['period_number']
            last_elapsed = 0.0
        if event['clock_seconds'] is not None:
            last_elapsed = event['clock_seconds']
        event['_order'] = (last_period, last_elapsed, index)
    return sorted(events, key=lambda e: e['_order'])


def normalize_pbp(spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    rows = []
    for game_id, game_records in _group_by_game(records).items():
        events = []
        for rec in sorted(game_records, key=lambda r: r['sequence']):
            q = _Quality()
            period_number = q.check('period', rec.get('period_raw'), parse_period(rec.get('period_raw'), spec.regulation_periods))
            clock_seconds = q.check('clock', rec.get('clock_raw'), parse_clock(rec.get('clock_raw')))
            elapsed, game_seconds = clock_to_elapsed(spec, period_number, clock_seconds)
            if elapsed is None and clock_seconds is not None and period_number is not None \
                    and spec.period_length(period_number) is not None:
                # Reading does not fit inside a timed period
                q.flag('clock')
            score = q.check('score', rec.get('score_raw'), parse_score_pair(rec.get('score_raw')))
            events.append({
                'rec': rec,
                'q': q,
                'period_number': period_number,
                'clock_seconds': elapsed,
                'game_seconds': game_seconds,
                'score': score,
            })

        away = home = 0
        for sequence, event in enumerate(_order_game_events(events)):
            rec, q = event['rec'], event['q']
            if event['score'] is not None:
                new_away, new_home = event['score']
                if new_away < away or new_home < home:
                    # Running scores never go down; keep the higher value
                    q.flag('score')
                    log_event(event='score_decrease', sport=spec.key, game_id=game_id, sequence=sequence)
                away, home = max(new_away, away), max(new_home, home)

            period_number = event['period_number']
            if period_number is not None:
                period = period_label(period_number, spec.regulation_periods)
            else:
                period = clean_text(rec.get('period_raw'))

            rows.append(PlayByPlayEvent(
                sport=spec.key,
                gender=gender,
                season=season,
                game_id=game_id,
                season_type=coerce_season_type(rec.get('season_type_raw'), rec.get('notes')),
                sequence=sequence,
                period=period,
                period_number=period_number,
                clock=clean_text(rec.get('clock_raw')),
                clock_seconds=event['clock_seconds'],
                game_seconds=event['game_seconds'],
                away_text=clean_text(rec.get('away_text')),
                home_text=clean_text(rec.get('home_text')),
                away_score=away,
                home_score=home,
                quality=str(q),
            ))
    return _frame(PlayByPlayEvent, rows)


# =============================================================================
# BOX SCORE
# =============================================================================

def _box_target(spec: SportSpec, category: str, header: str):
    return (
        spec.box_columns.get(f'{category}.{header}')
        or spec.box_columns.get(header)
        or _snake(header)
    )


def normalize_player_box(spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    """
    One wide row per player per game.

    Football's per-category tables (passing, rushing, defence, ...) are merged
    into the same row with category-prefixed columns.
    """
    merged: dict[tuple, dict] = {}
    for rec in records:
        category = rec.get('category') or 'lineup'
        prefix = '' if category == 'lineup' else f'{category}_'
        stats = rec.get('stats') or {}

        identity = {}
        for header, raw in stats.items():
            target = _box_target(spec, category, header)
            if target in IDENTITY_COLUMNS:
                identity[target] = clean_text(raw)

        player = identity.get('player')
        key = (rec['game_id'], rec.get('side'), player or f"#{identity.get('number')}")
        row = merged.get(key)
        if row is None:
            row = {
                'game_id': rec['game_id'],
                'season_type': coerce_season_type(rec.get('season_type_raw'), rec.get('notes')),
                'side': rec.get('side'),
                'team': clean_text(rec.get('team_raw')),
                'player': player,
                'number': identity.get('number'),
                'position': identity.get('position'),
                'q': _Quality(),
            }
            merged[key] = row
        q = row['q']

        for header, raw in stats.items():
            target = _box_target(spec, category, header)
            if target in IDENTITY_COLUMNS:
                continue
            if isinstance(target, tuple):
                parts = q.check(prefix + target[0], raw, split_made_attempt(raw, len(target)))
                for name, value in zip(target, parts or (None,) * len(target)):
                    row[prefix + name] = value
            else:
                row[prefix + target] = q.check(prefix + target, raw, coerce_number(raw))

    rows = []
    for row in merged.values():
        q = row.pop('q')
        rows.append(BoxScoreRow(sport=spec.key, gender=gender, season=season, quality=str(q), **row))

    if not rows:
        return pd.DataFrame(columns=BOX_KEYS)
    frame = pd.DataFrame([r.model_dump() for r in rows])
    stat_cols = [c for c in frame.columns if c not in BOX_KEYS]
    return frame[BOX_KEYS + stat_cols]


def project_facet(frame: pd.DataFrame, facet: str) -> pd.DataFrame:
    """
    Football facet view (offence, kicking, punting, scoring, defence) of the
    wide box score: key columns plus the facet's columns, for players with at
    least one value in the facet.
    """
    try:
        prefixes = FOOTBALL_FACETS[facet]
    except KeyError:
        raise ValueError(f'Unknown facet {facet!r}; expected one of {sorted(FOOTBALL_FACETS)}') from None
    cols = [c for c in frame.columns if c.startswith(prefixes)]
    if not cols:
        return pd.DataFrame(columns=BOX_KEYS)
    view = frame.loc[frame[cols].notna().any(axis=1), BOX_KEYS + cols]
    return view.reset_index(drop=True)


# =============================================================================
# DRIVES
# =============================================================================

def normalize_drives(spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    rows = []
    for game_id, game_records in _group_by_game(records).items():
        for rec in sorted(game_records, key=lambda r: r['sequence']):
            q = _Quality()
            plays_yards = q.check('yards', rec.get('plays_yards_raw'), parse_plays_yards(rec.get('plays_yards_raw')))
            plays, yards = plays_yards or (None, None)
            rows.append(DriveSummaryRow(
                sport=spec.key,
                gender=gender,
                season=season,
                game_id=game_id,
                team=clean_text(rec.get('team_raw')),
                sequence=rec['sequence'],
                quarter=q.check('quarter', rec.get('quarter_raw'), parse_period(rec.get('quarter_raw'), spec.regulation_periods)),
                start_clock=clean_text(rec.get('start_clock')),
                obtained=clean_text(rec.get('obtained')),
                start_spot=clean_text(rec.get('start_spot')),
                plays=plays,
                yards=yards,
                result=coerce_drive_result(rec.get('result_raw')),
                result_raw=clean_text(rec.get('result_raw')),
                possession_seconds=q.check('possession', rec.get('top_raw'), parse_clock(rec.get('top_raw'))),
                quality=str(q),
            ))
    return _frame(DriveSummaryRow, rows)


# =============================================================================
# RANKINGS
# =============================================================================

def _rank(raw) -> int | None:
    s = clean_text(raw)
    if s is None:
        return None
    return coerce_int(s.strip('.=T'))


def normalize_rankings(spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    rows = []
    for rec in records:
        q = _Quality()
        event = rec.get('event') or ''
        unit = spec.unit_for(event)

        raw_performance = clean_text(rec.get('performance'))
        performance = q.check('performance', raw_performance, parse_performance(raw_performance, unit))

        raw_university = clean_text(rec.get('university'))
        university = q.check('university', raw_university, try_resolve_university(raw_university))
        if university is None and raw_university is not None:
            log_event(event='unresolved_university', sport=spec.key, raw=raw_university)

        rows.append(RankingRow(
            sport=spec.key,
            gender=gender,
            season=season,
            event=event,
            rank=q.check('rank', rec.get('rank'), _rank(rec.get('rank'))),
            athlete=clean_text(rec.get('athlete')),
            university=university,
            university_raw=raw_university,
            university_resolved=university is not None,
            performance=performance,
            performance_raw=raw_performance,
            performance_valid=performance is not None,
            performance_unit=unit,
            date=q.check('date', rec.get('date'), parse_date(rec.get('date'), season)),
            meet=clean_text(rec.get('meet')),
            quality=str(q),
        ))
    return _frame(RankingRow, rows)


def normalize_universities(records: list[dict]) -> pd.DataFrame:
    rows = []
    for rec in records:
        raw = clean_text(rec.get('university')) or ''
        canonical = try_resolve_university(raw)
        if canonical is None:
            rows.append(UniversityRow(university_raw=raw, quality='university'))
            log_event(event='unresolved_university', raw=raw)
            continue
        rows.append(UniversityRow(university_raw=raw, resolved=True, **university_info(canonical)))
    return _frame(UniversityRow, rows)


NORMALIZERS = {
    SCHEDULE: normalize_schedule,
    PBP: normalize_pbp,
    PLAYER_BOX: normalize_player_box,
    DRIVES: normalize_drives,
    RANKINGS: normalize_rankings,
}


def normalize(kind: str, spec: SportSpec, gender: str, season: int, records: list[dict]) -> pd.DataFrame:
    """
    Map intermediate records for one season onto the canonical table for kind.

    Returns:
        DataFrame with the canonical columns (empty but typed by column when
        there are no records)
    """
    if kind == UNIVERSITIES:
        return normalize_universities(records)
    try:
        normalizer = NORMALIZERS[kind]
    except KeyError:
        raise ValueError(f'Unknown data kind {kind!r}') from None
    frame = normalizer(spec, gender, season, records)

    flagged = int((frame['quality'] != '').sum()) if len(frame) else 0
    if flagged:
        log_event(event='quality', sport=spec.key, kind=kind, season=season, rows=len(frame), flagged=flagged)
    return frame
