"""
University sports portal adapter.

Source: en.usports.ca (Presto Sports pages)
Schedule:    /sports/{code}/{season}/schedule
Box score:   /sports/{code}/{season}/boxscores/{game_id}.xml
Plays:       box score URL + ?view=plays
Drive chart: box score URL + ?view=drives (football)

Season pages are fetched first; play-by-play, box score and drive chart
requests then walk every game on the schedule that has a box score link.
"""
import logging
from urllib.parse import urljoin

from usportstats.adapters.base import RawBatch, SourceAdapter
from usportstats.adapters.tables import cell_text, make_soup, read_table
from usportstats.coerce import extract_game_id
from usportstats.errors import NetworkFailure, SourceFormatChange
from usportstats.http import log_event
from usportstats.sports import DRIVES, PBP, PLAYER_BOX, PRESTO, SCHEDULE, SportSpec

logger = logging.getLogger('usportstats')

DRIVE_HEADERS = {
    'Team': 'team_raw',
    'Qtr': 'quarter_raw',
    'Start': 'start_clock',
    'Obtained': 'obtained',
    'How Obtained': 'obtained',
    'Spot': 'start_spot',
    'Start Spot': 'start_spot',
    'Plays-Yds': 'plays_yards_raw',
    'TOP': 'top_raw',
    'Result': 'result_raw',
    'How Lost': 'result_raw',
}


def parse_schedule(html: str, page_url: str) -> list[dict]:
    """
    Parse a season schedule page.

    A page with a schedule container but no event rows is an empty season.
    """
    soup = make_soup(html)
    rows = soup.select('tr.event-row')
    if not rows:
        if soup.select_one('table.schedule, .schedule-content, .no-events') is not None:
            return []
        raise SourceFormatChange('No schedule table found', url=page_url)

    records = []
    for tr in rows:
        link = tr.select_one('a[href*="boxscores/"]')
        records.append({
            'date_raw': tr.get('data-date') or cell_text(tr, 'td.e_date'),
            'away_team_raw': cell_text(tr, 'td.e_team.away'),
            'home_team_raw': cell_text(tr, 'td.e_team.home'),
            'away_score_raw': cell_text(tr, 'td.e_score.away'),
            'home_score_raw': cell_text(tr, 'td.e_score.home'),
            'notes': cell_text(tr, 'td.e_notes'),
            'season_type_raw': tr.get('data-season-type'),
            'box_score_url': urljoin(page_url, link['href']) if link else None,
        })
    return records


def parse_box_score(html: str, page_url: str) -> list[dict]:
    """
    Parse player tables from a box score page.

    Each `div.stats-box` holds one team's table for one stat category
    (`data-category`, default 'lineup'); team totals rows are skipped.
    """
    soup = make_soup(html)
    boxes = soup.select('div.stats-box')
    if not boxes:
        if soup.select_one('.no-stats') is not None:
            return []
        raise SourceFormatChange('No box score tables found', url=page_url)

    records = []
    for box in boxes:
        table = box.find('table')
        if table is None:
            continue
        classes = box.get('class', [])
        if 'home' in classes:
            side = 'home'
        elif 'visitor' in classes or 'away' in classes:
            side = 'away'
        else:
            side = None
        team = cell_text(table.caption) if table.caption else None
        headers, body = read_table(table)
        for cells, tr in body:
            if 'totals' in tr.get('class', []):
                continue
            records.append({
                'side': side,
                'team_raw': team,
                'category': box.get('data-category', 'lineup'),
                'stats': dict(zip(headers, cells)),
            })
    return records


def parse_play_by_play(html: str, page_url: str) -> list[dict]:
    """
    Parse the plays view: one `table.play-by-play` per period, captioned with
    the period name; score cells read 'away-home'.
    """
    soup = make_soup(html)
    tables = soup.select('table.play-by-play')
    if not tables:
        if soup.select_one('.no-plays') is not None:
            return []
        raise SourceFormatChange('No play-by-play tables found', url=page_url)

    records = []
    sequence = 0
    for table in tables:
        period = cell_text(table.caption) if table.caption else None
        for tr in table.select('tbody tr'):
            records.append({
                'sequence': sequence,
                'period_raw': period,
                'clock_raw': cell_text(tr, 'td.time'),
                'away_text': cell_text(tr, 'td.play.away'),
                'home_text': cell_text(tr, 'td.play.home'),
                'score_raw': cell_text(tr, 'td.score'),
            })
            sequence += 1
    return records


def parse_drive_chart(html: str, page_url: str) -> list[dict]:
    """Parse the football drive chart table."""
    soup = make_soup(html)
    table = soup.select_one('table.drive-chart')
    if table is None:
        if soup.select_one('.no-drives') is not None:
            return []
        raise SourceFormatChange('No drive chart found', url=page_url)

    headers, body = read_table(table)
    keys = [DRIVE_HEADERS.get(h, h) for h in headers]
    records = []
    for sequence, (cells, _tr) in enumerate(body):
        record = dict(zip(keys, cells))
        record['sequence'] = sequence
        records.append(record)
    return records


GAME_PAGES = {
    PBP: ('plays', parse_play_by_play),
    PLAYER_BOX: (None, parse_box_score),
    DRIVES: ('drives', parse_drive_chart),
}


class PrestoAdapter(SourceAdapter):
    """Schedules, box scores, play-by-play and drive charts for team sports."""

    name = PRESTO
    kinds = frozenset({SCHEDULE, PBP, PLAYER_BOX, DRIVES})

    BASE = 'https://en.usports.ca'

    def schedule_url(self, spec: SportSpec, gender: str, season: int) -> str:
        """Build season schedule URL."""
        return f'{self.BASE}/sports/{spec.code(gender)}/{spec.season_slug(season)}/schedule'

    def box_score_url(self, spec: SportSpec, gender: str, season: int, game_id: str) -> str:
        """Build box score URL."""
        return f'{self.BASE}/sports/{spec.code(gender)}/{spec.season_slug(season)}/boxscores/{game_id}.xml'

    def _fetch(self, kind, spec, gender, season, variant) -> RawBatch:
        url = self.schedule_url(spec, gender, season)
        html = self.fetcher.get_text(url, allow_missing=True)
        if html is None:
            logger.info(f'No schedule page for {spec.key} {gender} {season}')
            return RawBatch()

        games = parse_schedule(html, url)
        if kind == SCHEDULE:
            return RawBatch(records=games)
        return self._fetch_games(kind, spec, gender, season, games)

    def _fetch_games(self, kind, spec, gender, season, games) -> RawBatch:
        """Fetch one sub-page per played game; failed games are skipped, not fatal."""
        view, parser = GAME_PAGES[kind]
        params = {'view': view} if view else None
        batch = RawBatch()

        for game in games:
            game_id = extract_game_id(game['box_score_url'])
            if game_id is None:
                continue
            url = self.box_score_url(spec, gender, season, game_id)
            try:
                html = self.fetcher.get_text(url, params=params)
                records = parser(html, url)
            except (NetworkFailure, SourceFormatChange) as e:
                logger.warning(f'Skipping {kind} for game {game_id}: {e}')
                log_event(event='game_skipped', kind=kind, sport=spec.key, season=season, game_id=game_id)
                batch.skipped.append({
                    'game_id': game_id,
                    'error_type': type(e).__name__,
                    'message': str(e),
                    'url': url,
                })
                continue

            for record in records:
                record['game_id'] = game_id
                record['season_type_raw'] = game['season_type_raw']
                record['notes'] = game['notes']
            batch.records.extend(records)

        return batch
