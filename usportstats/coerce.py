"""
Field coercion helpers.

Every parser here returns None for a value it cannot read instead of raising;
the normalizer decides whether that None is "missing" (blank source cell) or
"invalid" (non-blank cell that failed to parse) and flags it in-row.
"""
import re
from datetime import date, datetime

from usportstats.sports import SportSpec

SEASON_TYPES = ('pre', 'regular', 'post')

DRIVE_RESULTS = ('touchdown', 'field_goal', 'one_point', 'other')

INVALID_MARKS = {'dnf', 'dns', 'dq', 'nm', 'nh', 'foul', 'ns', 'scr', 'nt', 'x'}

_SEASON_TYPE_ALIASES = {
    'pre': 'pre',
    'preseason': 'pre',
    'pre-season': 'pre',
    'exhibition': 'pre',
    'regular': 'regular',
    'conference': 'regular',
    'league': 'regular',
    'post': 'post',
    'postseason': 'post',
    'playoff': 'post',
    'playoffs': 'post',
    'championship': 'post',
}

_POST_HINTS = ('playoff', 'championship', 'final', 'quarterfinal', 'semifinal', 'bowl', 'cup')

_ORDINAL_WORDS = {'first': 1, 'second': 2, 'third': 3, 'fourth': 4}

_OT_RE = re.compile(r'\b\d*ot\b|overtime|extra time')
_REG_RE = re.compile(r'(\d+)(?:st|nd|rd|th)?\b')

_NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$')
_CLOCK_RE = re.compile(r'^\d+(?::\d{1,2}){0,2}(?:\.\d+)?$')
_MINUTE_MARK_RE = re.compile(r"^(\d+)(?:\+(\d+))?'$")

_DATE_FORMATS = ['%Y-%m-%d', '%b %d %Y', '%B %d %Y', '%a %b %d %Y', '%A %B %d %Y', '%m/%d/%Y']
_YEARLESS_FORMATS = ['%b %d', '%B %d', '%a %b %d', '%A %B %d']


def clean_text(value) -> str | None:
    """Collapse whitespace; None for blank."""
    if value is None:
        return None
    s = re.sub(r'\s+', ' ', str(value)).strip()
    return s or None


def is_blank(value) -> bool:
    return clean_text(value) in (None, '-', '--')


def coerce_number(value) -> float | None:
    """Read a numeric cell ('12', '.456', '1,234', '45%', '32:15' minutes)."""
    s = clean_text(value)
    if s is None:
        return None
    s = s.replace(',', '').rstrip('%')
    if _NUMBER_RE.match(s):
        return float(s)
    if re.fullmatch(r'\d+:\d{2}', s):
        minutes, seconds = s.split(':')
        return int(minutes) + int(seconds) / 60
    return None


def coerce_int(value) -> int | None:
    num = coerce_number(value)
    if num is None or num != int(num):
        return None
    return int(num)


def split_made_attempt(value, parts: int) -> tuple[int, ...] | None:
    """Split '5-10' (or '12-20-1') into integers."""
    s = clean_text(value)
    if s is None:
        return None
    pieces = s.split('-')
    if len(pieces) != parts or not all(p.strip().isdigit() for p in pieces):
        return None
    return tuple(int(p) for p in pieces)


def parse_plays_yards(value) -> tuple[int, int] | None:
    """'8-75' -> (8, 75); '3--5' -> (3, -5)."""
    s = clean_text(value)
    if s is None:
        return None
    m = re.fullmatch(r'(\d+)\s*-\s*(-?\d+)', s)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def parse_score_pair(value) -> tuple[int, int] | None:
    """'2-1' -> (2, 1)."""
    s = clean_text(value)
    if s is None:
        return None
    m = re.fullmatch(r'(\d+)\s*-\s*(\d+)', s)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def parse_clock(value) -> float | None:
    """
    Parse clock text into seconds.

    Accepts 'MM:SS', 'M:SS.s', 'SS.s', 'H:MM:SS' and match-minute marks
    such as "67'" or "45+2'".
    """
    s = clean_text(value)
    if s is None:
        return None
    m = _MINUTE_MARK_RE.match(s)
    if m:
        return (int(m.group(1)) + int(m.group(2) or 0)) * 60.0
    if not _CLOCK_RE.match(s):
        return None
    total = 0.0
    for part in s.split(':'):
        total = total * 60 + float(part)
    return total


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f'{n}{suffix}'


def period_label(period_number: int, regulation_periods: int) -> str:
    """Canonical label: '1st'..'4th', then 'OT', '2OT', '3OT'..."""
    if period_number <= regulation_periods:
        return ordinal(period_number)
    extra = period_number - regulation_periods
    return 'OT' if extra == 1 else f'{extra}OT'


def parse_period(value, regulation_periods: int | None) -> int | None:
    """
    Turn a period caption into its position in the game.

    '2nd Quarter' -> 2, 'OT' -> regulation + 1, '2nd OT' / '2OT' -> regulation + 2.
    Returns None for shootouts and anything unrecognised.
    """
    s = clean_text(value)
    if s is None or regulation_periods is None:
        return None
    s = s.lower()

    if _OT_RE.search(s):
        m = re.search(r'(\d+)', s)
        extra = int(m.group(1)) if m else 1
        return regulation_periods + extra if extra >= 1 else None

    first = s.split(' ')[0]
    if first in _ORDINAL_WORDS:
        n = _ORDINAL_WORDS[first]
    else:
        m = _REG_RE.search(s)
        if not m:
            return None
        n = int(m.group(1))
    if 1 <= n <= regulation_periods:
        return n
    return None


def clock_to_elapsed(spec: SportSpec, period_number: int | None, clock_seconds: float | None):
    """
    Convert a clock reading into (seconds elapsed in period, seconds elapsed in game).

    Either value is None when the sport's period table cannot place it.
    """
    if period_number is None or clock_seconds is None:
        return None, None
    length = spec.period_length(period_number)
    start = spec.period_start(period_number)

    if spec.clock == 'down':
        if length is None:
            return None, None
        elapsed = length * 60 - clock_seconds
    elif spec.clock == 'up':
        elapsed = clock_seconds
    elif spec.clock == 'game':
        if start is None:
            return None, None
        elapsed = clock_seconds - start
    else:
        return None, None

    if elapsed < 0:
        return None, None
    game = start + elapsed if start is not None else None
    return elapsed, game


def parse_performance(value, unit: str) -> float | None:
    """
    Read a ranking performance.

    time     -> seconds ('10.45', '1:52.34', '15:02.1')
    distance -> metres ('7.45', '7.45m', '7.01w')
    points   -> points ('5432', '5,432 pts')
    """
    s = clean_text(value)
    if s is None:
        return None
    s = s.lower().lstrip('*#')
    if s in INVALID_MARKS:
        return None
    s = re.sub(r'\(.*?\)', '', s).strip()
    s = s.replace(',', '')
    s = re.sub(r'\s*(?:pts|points|m|w|h|a|q)$', '', s)

    if unit == 'time':
        return parse_clock(s)
    if _NUMBER_RE.match(s):
        return float(s)
    return None


def coerce_drive_result(value) -> str:
    """Map drive-chart result text onto touchdown / field_goal / one_point / other."""
    s = clean_text(value)
    if s is None:
        return 'other'
    s = s.lower()
    if s == 'td' or s.startswith('td ') or 'touchdown' in s:
        return 'touchdown'
    if 'rouge' in s or 'single' in s or s in ('s', '1pt', 'one point'):
        return 'one_point'
    if 'miss' in s or 'block' in s or s == 'fga':
        return 'other'
    if s in ('fg', 'fgm') or s.startswith('fg ') or 'field goal' in s:
        return 'field_goal'
    return 'other'


def coerce_season_type(raw, notes=None) -> str:
    """Season type from an explicit marker, else from game notes, else 'regular'."""
    key = clean_text(raw)
    if key and key.lower() in _SEASON_TYPE_ALIASES:
        return _SEASON_TYPE_ALIASES[key.lower()]
    text = (clean_text(notes) or '').lower()
    if 'exhibition' in text:
        return 'pre'
    if any(hint in text for hint in _POST_HINTS):
        return 'post'
    return 'regular'


def parse_date(value, season: int) -> date | None:
    """
    Parse a schedule date.

    Dates printed without a year are placed in the season: August onwards
    belongs to the season's start year, January-July to the following year.
    """
    s = clean_text(value)
    if s is None:
        return None
    s = re.sub(r'(\d+)(st|nd|rd|th)\b', r'\1', s)
    s = s.replace('Sept', 'Sep').replace('.', '').replace(',', '')
    s = re.sub(r'\s+', ' ', s).strip()

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue

    for fmt in _YEARLESS_FORMATS:
        try:
            # Parse with a leap year so 'Feb 29' survives
            dt = datetime.strptime(f'2000 {s}', f'%Y {fmt}')
        except ValueError:
            continue
        year = season if dt.month >= 8 else season + 1
        try:
            return dt.replace(year=year).date()
        except ValueError:
            return None
    return None


def extract_game_id(ref, prefix: str = 'boxscores/', suffix: str = '.xml') -> str | None:
    """Game identifier embedded in a box-score reference between prefix and suffix."""
    if not ref:
        return None
    start = ref.find(prefix)
    if start < 0:
        return None
    start += len(prefix)
    end = ref.find(suffix, start)
    if end < 0:
        return None
    return ref[start:end] or None
