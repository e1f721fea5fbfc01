"""
Sport registry.

One SportSpec per sport holds everything the adapters and the normalizer need
to know about it: which source serves it, the genders and data kinds offered,
period lengths and clock direction, box-score column names and ranking events.

Period tables can be overridden from a JSON file (SPORTS_CONFIG), e.g.

    {"basketball": {"period_minutes": 10, "overtime_minutes": 5}}
"""
from dataclasses import dataclass, field, replace
import json
from pathlib import Path

import pandas as pd

from usportstats.config import settings

# Data kinds
SCHEDULE = 'schedule'
PBP = 'pbp'
PLAYER_BOX = 'player_box'
DRIVES = 'drives'
RANKINGS = 'rankings'
UNIVERSITIES = 'universities'

# Sources
PRESTO = 'presto'
TRACKIE = 'trackie'
SWIMMING = 'swimming'
WRESTLING = 'wrestling'

GENDERS = ('m', 'w')

# 2020-21: every U SPORTS competition was cancelled.
CANCELLED = (2020,)

OVERRIDABLE = (
    'regulation_periods',
    'period_minutes',
    'overtime_minutes',
    'clock',
    'first_season',
    'cancelled_seasons',
)


@dataclass(frozen=True)
class SportSpec:
    """Static description of one sport."""

    key: str
    name: str
    source: str
    genders: tuple[str, ...]
    kinds: frozenset[str]
    first_season: int
    codes: dict[str, str] = field(default_factory=dict)
    season_format: str = 'split'
    cancelled_seasons: tuple[int, ...] = CANCELLED

    # Clock: 'down' = time remaining in period, 'up' = elapsed in period,
    # 'game' = cumulative match clock, 'none' = untimed (sets, innings)
    regulation_periods: int | None = None
    period_minutes: float | None = None
    overtime_minutes: float | None = None
    clock: str = 'none'

    # Box score header -> canonical column. 'category.HEADER' keys win over
    # plain 'HEADER' keys. A tuple splits made-attempt cells.
    box_columns: dict[str, str | tuple[str, ...]] = field(default_factory=dict)

    # Rankings
    events: dict[str, tuple[str, ...]] = field(default_factory=dict)
    event_units: dict[str, str] = field(default_factory=dict)
    default_unit: str = 'time'
    per_event_pages: bool = True

    def supports(self, kind: str) -> bool:
        return kind in self.kinds

    def is_cancelled(self, season: int) -> bool:
        return season in self.cancelled_seasons

    def code(self, gender: str) -> str:
        return self.codes[gender]

    def season_slug(self, season: int) -> str:
        """Season path segment: '2019-20' for split seasons, '2019' otherwise."""
        if self.season_format == 'split':
            return f'{season}-{str(season + 1)[-2:]}'
        return str(season)

    def unit_for(self, event: str) -> str:
        return self.event_units.get(event, self.default_unit)

    def period_length(self, period_number: int) -> float | None:
        """Length of a period in minutes (None when untimed or unknown)."""
        if self.regulation_periods is None or period_number < 1:
            return None
        if period_number <= self.regulation_periods:
            return self.period_minutes
        return self.overtime_minutes

    def period_start(self, period_number: int) -> float | None:
        """Seconds of game time elapsed before the period starts."""
        total = 0.0
        for n in range(1, period_number):
            length = self.period_length(n)
            if length is None:
                return None
            total += length * 60
        return total


BASKETBALL_BOX = {
    '##': 'number',
    'No.': 'number',
    'Player': 'player',
    'POS': 'position',
    'MIN': 'minutes',
    'FGM-A': ('fgm', 'fga'),
    '3PM-A': ('fg3m', 'fg3a'),
    'FTM-A': ('ftm', 'fta'),
    'OREB': 'oreb',
    'DREB': 'dreb',
    'REB': 'reb',
    'AST': 'ast',
    'TO': 'tov',
    'STL': 'stl',
    'BLK': 'blk',
    'PF': 'pf',
    'PTS': 'pts',
}

SOCCER_BOX = {
    '##': 'number',
    'Player': 'player',
    'POS': 'position',
    'MIN': 'minutes',
    'SH': 'shots',
    'SOG': 'shots_on_goal',
    'G': 'goals',
    'A': 'assists',
    'YC': 'yellow_cards',
    'RC': 'red_cards',
    'GA': 'goals_against',
    'SV': 'saves',
}

HOCKEY_BOX = {
    '##': 'number',
    'Player': 'player',
    'POS': 'position',
    'G': 'goals',
    'A': 'assists',
    'PTS': 'pts',
    'SOG': 'shots_on_goal',
    '+/-': 'plus_minus',
    'PIM': 'pim',
    'GA': 'goals_against',
    'SV': 'saves',
}

VOLLEYBALL_BOX = {
    '##': 'number',
    'Player': 'player',
    'SP': 'sets_played',
    'K': 'kills',
    'E': 'errors',
    'TA': 'total_attacks',
    'PCT': 'hitting_pct',
    'A': 'assists',
    'SA': 'service_aces',
    'SE': 'service_errors',
    'DIG': 'digs',
    'BS': 'block_solos',
    'BA': 'block_assists',
    'PTS': 'pts',
}

RUGBY_BOX = {
    '##': 'number',
    'Player': 'player',
    'POS': 'position',
    'T': 'tries',
    'C': 'conversions',
    'PG': 'penalty_goals',
    'DG': 'drop_goals',
    'PTS': 'pts',
}

# Football box scores come as one table per category; columns are prefixed
# with the category by the normalizer (passing_yds, defence_sacks, ...).
FOOTBALL_BOX = {
    '##': 'number',
    'Player': 'player',
    'passing.CMP-ATT-INT': ('cmp', 'att', 'int'),
    'passing.YDS': 'yds',
    'passing.TD': 'td',
    'passing.LONG': 'long',
    'rushing.NO': 'att',
    'rushing.YDS': 'yds',
    'rushing.TD': 'td',
    'rushing.LONG': 'long',
    'receiving.NO': 'rec',
    'receiving.YDS': 'yds',
    'receiving.TD': 'td',
    'receiving.LONG': 'long',
    'field_goals.FGM-A': ('made', 'att'),
    'field_goals.LONG': 'long',
    'kickoffs.NO': 'no',
    'kickoffs.YDS': 'yds',
    'kickoffs.AVG': 'avg',
    'punting.NO': 'no',
    'punting.YDS': 'yds',
    'punting.AVG': 'avg',
    'punting.LONG': 'long',
    'punting.SINGLES': 'singles',
    'scoring.TD': 'td',
    'scoring.FG': 'fg',
    'scoring.PAT': 'pat',
    'scoring.S': 'singles',
    'scoring.SAF': 'safeties',
    'scoring.PTS': 'pts',
    'defence.SOLO': 'tackles_solo',
    'defence.AST': 'tackles_ast',
    'defence.TFL': 'tfl',
    'defence.SACKS': 'sacks',
    'defence.INT': 'int',
    'defence.FF': 'ff',
    'defence.FR': 'fr',
    'defence.PD': 'pd',
}

FOOTBALL_FACETS: dict[str, tuple[str, ...]] = {
    'offence': ('passing_', 'rushing_', 'receiving_'),
    'kicking': ('field_goals_', 'kickoffs_'),
    'punting': ('punting_',),
    'scoring': ('scoring_',),
    'defence': ('defence_',),
}

_TNF_COMMON = (
    '60m', '300m', '600m', '1000m', '1500m', '3000m', '60mH',
    '4x200m', '4x400m', '4x800m',
    'High Jump', 'Pole Vault', 'Long Jump', 'Triple Jump',
    'Shot Put', 'Weight Throw',
)

TNF_EVENTS = {
    'm': _TNF_COMMON + ('Heptathlon',),
    'w': _TNF_COMMON + ('Pentathlon',),
}

TNF_UNITS = {
    'High Jump': 'distance',
    'Pole Vault': 'distance',
    'Long Jump': 'distance',
    'Triple Jump': 'distance',
    'Shot Put': 'distance',
    'Weight Throw': 'distance',
    'Heptathlon': 'points',
    'Pentathlon': 'points',
}

_SWIM_EVENTS = (
    '50 Free', '100 Free', '200 Free', '400 Free', '800 Free', '1500 Free',
    '50 Back', '100 Back', '200 Back',
    '50 Breast', '100 Breast', '200 Breast',
    '50 Fly', '100 Fly', '200 Fly',
    '100 IM', '200 IM', '400 IM',
)

WRESTLING_CLASSES = {
    'm': ('57kg', '61kg', '65kg', '70kg', '74kg', '79kg', '86kg', '92kg', '97kg', '125kg'),
    'w': ('48kg', '51kg', '55kg', '59kg', '63kg', '67kg', '72kg', '82kg'),
}

TEAM_KINDS = frozenset({SCHEDULE, PLAYER_BOX})
PBP_KINDS = TEAM_KINDS | {PBP}

DEFAULT_SPORTS: dict[str, SportSpec] = {
    'basketball': SportSpec(
        key='basketball',
        name='Basketball',
        source=PRESTO,
        genders=GENDERS,
        kinds=PBP_KINDS,
        first_season=2009,
        codes={'m': 'mbkb', 'w': 'wbkb'},
        regulation_periods=4,
        period_minutes=10,
        overtime_minutes=5,
        clock='down',
        box_columns=BASKETBALL_BOX,
    ),
    'soccer': SportSpec(
        key='soccer',
        name='Soccer',
        source=PRESTO,
        genders=GENDERS,
        kinds=PBP_KINDS,
        first_season=2009,
        codes={'m': 'msoc', 'w': 'wsoc'},
        season_format='single',
        regulation_periods=2,
        period_minutes=45,
        overtime_minutes=15,
        clock='game',
        box_columns=SOCCER_BOX,
    ),
    'hockey': SportSpec(
        key='hockey',
        name='Ice Hockey',
        source=PRESTO,
        genders=GENDERS,
        kinds=PBP_KINDS,
        first_season=2009,
        codes={'m': 'mice', 'w': 'wice'},
        regulation_periods=3,
        period_minutes=20,
        overtime_minutes=5,
        clock='up',
        box_columns=HOCKEY_BOX,
    ),
    'volleyball': SportSpec(
        key='volleyball',
        name='Volleyball',
        source=PRESTO,
        genders=GENDERS,
        kinds=TEAM_KINDS,
        first_season=2009,
        codes={'m': 'mvball', 'w': 'wvball'},
        box_columns=VOLLEYBALL_BOX,
    ),
    'rugby': SportSpec(
        key='rugby',
        name='Rugby',
        source=PRESTO,
        genders=('w',),
        kinds=TEAM_KINDS,
        first_season=2012,
        codes={'w': 'wrugby'},
        season_format='single',
        regulation_periods=2,
        period_minutes=40,
        overtime_minutes=10,
        clock='game',
        box_columns=RUGBY_BOX,
    ),
    'football': SportSpec(
        key='football',
        name='Football',
        source=PRESTO,
        genders=('m',),
        kinds=PBP_KINDS | {DRIVES},
        first_season=2009,
        codes={'m': 'fball'},
        season_format='single',
        regulation_periods=4,
        period_minutes=15,
        # Canadian overtime is played in untimed possessions
        overtime_minutes=None,
        clock='down',
        box_columns=FOOTBALL_BOX,
    ),
    'track_and_field': SportSpec(
        key='track_and_field',
        name='Track and Field',
        source=TRACKIE,
        genders=GENDERS,
        kinds=frozenset({RANKINGS, UNIVERSITIES}),
        first_season=2010,
        events=TNF_EVENTS,
        event_units=TNF_UNITS,
    ),
    'swimming': SportSpec(
        key='swimming',
        name='Swimming',
        source=SWIMMING,
        genders=GENDERS,
        kinds=frozenset({RANKINGS}),
        first_season=2010,
        events={'m': _SWIM_EVENTS, 'w': _SWIM_EVENTS},
    ),
    'wrestling': SportSpec(
        key='wrestling',
        name='Wrestling',
        source=WRESTLING,
        genders=GENDERS,
        kinds=frozenset({RANKINGS}),
        first_season=2012,
        events=WRESTLING_CLASSES,
        default_unit='points',
        per_event_pages=False,
    ),
}


def apply_overrides(
    registry: dict[str, SportSpec],
    overrides: dict[str, dict],
) -> dict[str, SportSpec]:
    """Return a new registry with period-table overrides applied."""
    result = dict(registry)
    for key, values in overrides.items():
        if key not in result:
            raise ValueError(f'Unknown sport in overrides: {key!r}')
        unknown = set(values) - set(OVERRIDABLE)
        if unknown:
            raise ValueError(f'Cannot override {sorted(unknown)} for {key!r}')
        values = dict(values)
        if 'cancelled_seasons' in values:
            values['cancelled_seasons'] = tuple(values['cancelled_seasons'])
        result[key] = replace(result[key], **values)
    return result


def load_sport_overrides(path: str, registry: dict[str, SportSpec] | None = None) -> dict[str, SportSpec]:
    """Load a JSON override file on top of the default registry."""
    overrides = json.loads(Path(path).read_text())
    return apply_overrides(registry or DEFAULT_SPORTS, overrides)


def build_registry(path: str = '') -> dict[str, SportSpec]:
    if path:
        return load_sport_overrides(path)
    return dict(DEFAULT_SPORTS)


SPORTS = build_registry(settings.sports_config)


def get_sport(key: str, registry: dict[str, SportSpec] | None = None) -> SportSpec:
    """Look up a sport; raises KeyError for unknown keys."""
    return (registry or SPORTS)[key]


def period_table(registry: dict[str, SportSpec] | None = None) -> pd.DataFrame:
    """Period lengths per timed sport, one row per sport."""
    rows = []
    for spec in (registry or SPORTS).values():
        if spec.regulation_periods is None:
            continue
        rows.append({
            'sport': spec.key,
            'regulation_periods': spec.regulation_periods,
            'period_minutes': spec.period_minutes,
            'overtime_minutes': spec.overtime_minutes,
            'clock': spec.clock,
        })
    return pd.DataFrame(rows)
