"""
Individual-sport ranking adapters.

Trackie        track & field rankings, one page per event; university list
Swimming       registration-site rankings, one page per event
Wrestling      federation rankings, one page per season holding every weight class

All three emit the same intermediate keys: event, rank, athlete, university,
performance, date, meet.
"""
import logging
import re

from usportstats.adapters.base import RawBatch, SourceAdapter
from usportstats.adapters.tables import cell_text, make_soup, table_records
from usportstats.errors import SourceFormatChange
from usportstats.sports import RANKINGS, SWIMMING, TRACKIE, UNIVERSITIES, WRESTLING

logger = logging.getLogger('usportstats')

RANKING_KEYS = ('event', 'rank', 'athlete', 'university', 'performance', 'date', 'meet')


def event_slug(event: str) -> str:
    """'High Jump' -> 'high-jump', '4x400m' -> '4x400m'."""
    return re.sub(r'[^a-z0-9]+', '-', event.lower()).strip('-')


def _ranking_records(table, header_map: dict[str, str], event: str) -> list[dict]:
    records = []
    for row in table_records(table, header_map):
        record = {key: row.get(key) for key in RANKING_KEYS}
        record['event'] = event
        records.append(record)
    return records


# =============================================================================
# TRACK & FIELD
# =============================================================================

TRACKIE_HEADERS = {
    'Rank': 'rank',
    '#': 'rank',
    'Athlete': 'athlete',
    'Name': 'athlete',
    'University': 'university',
    'School': 'university',
    'Team': 'university',
    'Performance': 'performance',
    'Mark': 'performance',
    'Result': 'performance',
    'Date': 'date',
    'Meet': 'meet',
    'Competition': 'meet',
}


def parse_trackie_rankings(html: str, page_url: str, event: str) -> list[dict]:
    soup = make_soup(html)
    table = soup.select_one('table.rankings')
    if table is None:
        if soup.select_one('.no-results') is not None:
            return []
        raise SourceFormatChange('No rankings table found', url=page_url)
    return _ranking_records(table, TRACKIE_HEADERS, event)


def parse_trackie_universities(html: str, page_url: str) -> list[dict]:
    soup = make_soup(html)
    items = soup.select('ul.university-list li')
    if not items:
        raise SourceFormatChange('No university list found', url=page_url)
    return [{'university': cell_text(li)} for li in items if cell_text(li)]


class TrackieAdapter(SourceAdapter):
    """Track & field rankings from the timing-results site."""

    name = TRACKIE
    kinds = frozenset({RANKINGS, UNIVERSITIES})

    BASE = 'https://www.trackie.com/usports/tnf'
    GENDER_SLUGS = {'m': 'men', 'w': 'women'}

    def rankings_url(self, gender: str, season: int, event: str) -> str:
        return f'{self.BASE}/rankings/{season}-{season + 1}/{self.GENDER_SLUGS[gender]}/{event_slug(event)}/'

    def universities_url(self) -> str:
        return f'{self.BASE}/universities/'

    def _fetch(self, kind, spec, gender, season, variant) -> RawBatch:
        url = self.rankings_url(gender, season, variant)
        html = self.fetcher.get_text(url, allow_missing=True)
        if html is None:
            return RawBatch()
        return RawBatch(records=parse_trackie_rankings(html, url, variant))

    def fetch_reference(self, kind, spec) -> RawBatch:
        if kind != UNIVERSITIES:
            return super().fetch_reference(kind, spec)
        url = self.universities_url()
        return RawBatch(records=parse_trackie_universities(self.fetcher.get_text(url), url))


# =============================================================================
# SWIMMING
# =============================================================================

SWIMMING_HEADERS = {
    'Rank': 'rank',
    'Name': 'athlete',
    'Swimmer': 'athlete',
    'Club': 'university',
    'Team': 'university',
    'Time': 'performance',
    'Date': 'date',
    'Meet': 'meet',
}


def parse_swimming_rankings(html: str, page_url: str, event: str) -> list[dict]:
    soup = make_soup(html)
    table = soup.select_one('table#rankings')
    if table is None:
        if soup.select_one('.no-results') is not None:
            return []
        raise SourceFormatChange('No rankings table found', url=page_url)
    return _ranking_records(table, SWIMMING_HEADERS, event)


class SwimmingAdapter(SourceAdapter):
    """Short-course rankings from the swimming registration site."""

    name = SWIMMING
    kinds = frozenset({RANKINGS})

    URL = 'https://registration.swimming.ca/Rankings/USports'
    GENDER_PARAMS = {'m': 'M', 'w': 'F'}

    def rankings_params(self, gender: str, season: int, event: str) -> dict:
        return {
            'season': f'{season}-{season + 1}',
            'gender': self.GENDER_PARAMS[gender],
            'event': event,
            'course': 'SCM',
        }

    def _fetch(self, kind, spec, gender, season, variant) -> RawBatch:
        params = self.rankings_params(gender, season, variant)
        html = self.fetcher.get_text(self.URL, params=params, allow_missing=True)
        if html is None:
            return RawBatch()
        return RawBatch(records=parse_swimming_rankings(html, self.URL, variant))


# =============================================================================
# WRESTLING
# =============================================================================

WRESTLING_HEADERS = {
    'Rank': 'rank',
    'Name': 'athlete',
    'Wrestler': 'athlete',
    'University': 'university',
    'Points': 'performance',
    'Pts': 'performance',
}


def weight_class_label(text: str | None) -> str | None:
    """'48 kg' / '48KG' / '48 Kg' -> '48kg'."""
    if not text:
        return None
    m = re.search(r'(\d+)\s*(?:\+)?\s*kg', text, re.IGNORECASE)
    return f'{m.group(1)}kg' if m else text.strip()


def parse_wrestling_rankings(html: str, page_url: str) -> list[dict]:
    soup = make_soup(html)
    sections = soup.select('div.weight-class')
    if not sections:
        if soup.select_one('.no-rankings') is not None:
            return []
        raise SourceFormatChange('No weight class sections found', url=page_url)

    records = []
    for section in sections:
        table = section.find('table')
        if table is None:
            continue
        event = weight_class_label(cell_text(section.find(['h2', 'h3', 'h4'])))
        records.extend(_ranking_records(table, WRESTLING_HEADERS, event))
    return records


class WrestlingAdapter(SourceAdapter):
    """Rankings from the wrestling federation site."""

    name = WRESTLING
    kinds = frozenset({RANKINGS})

    BASE = 'https://wrestling.ca/rankings/u-sports'
    GENDER_SLUGS = {'m': 'men', 'w': 'women'}

    def rankings_url(self, gender: str, season: int) -> str:
        return f'{self.BASE}/{season}-{season + 1}/{self.GENDER_SLUGS[gender]}/'

    def _fetch(self, kind, spec, gender, season, variant) -> RawBatch:
        url = self.rankings_url(gender, season)
        html = self.fetcher.get_text(url, allow_missing=True)
        if html is None:
            return RawBatch()
        return RawBatch(records=parse_wrestling_rankings(html, url))
