"""
usportstats - Canadian university sports statistics.

- Team sports (basketball, soccer, hockey, volleyball, rugby, football):
  schedules, player box scores, play-by-play, football drive charts
- Individual sports (track & field, swimming, wrestling): ranking lists
- Output: pandas DataFrames with one canonical shape per data kind
"""

__version__ = '1.0.0'

from usportstats.api import (
    basketball_pbp,
    basketball_player_box_score,
    basketball_schedule,
    football_defence,
    football_drive_summaries,
    football_kicking,
    football_offence,
    football_pbp,
    football_player_box_score,
    football_punting,
    football_schedule,
    football_scoring,
    game_ids,
    hockey_pbp,
    hockey_player_box_score,
    hockey_schedule,
    rugby_player_box_score,
    rugby_schedule,
    soccer_pbp,
    soccer_player_box_score,
    soccer_schedule,
    swimming_athlete_rankings,
    tnf_athlete_rankings,
    tnf_universities,
    volleyball_player_box_score,
    volleyball_schedule,
    wrestling_rankings,
)
from usportstats.coerce import extract_game_id
from usportstats.errors import (
    NetworkFailure,
    PartialSeasonFailure,
    RequestFailed,
    SourceFormatChange,
    UnresolvedAlias,
    UnsupportedQuery,
    UsportsError,
)
from usportstats.router import QueryResult, QueryRouter
from usportstats.sports import period_table
from usportstats.universities import resolve_university

__all__ = [
    'QueryRouter',
    'QueryResult',
    'UsportsError',
    'NetworkFailure',
    'SourceFormatChange',
    'PartialSeasonFailure',
    'RequestFailed',
    'UnsupportedQuery',
    'UnresolvedAlias',
    'extract_game_id',
    'game_ids',
    'period_table',
    'resolve_university',
    'basketball_schedule',
    'basketball_pbp',
    'basketball_player_box_score',
    'soccer_schedule',
    'soccer_pbp',
    'soccer_player_box_score',
    'hockey_schedule',
    'hockey_pbp',
    'hockey_player_box_score',
    'volleyball_schedule',
    'volleyball_player_box_score',
    'rugby_schedule',
    'rugby_player_box_score',
    'football_schedule',
    'football_pbp',
    'football_player_box_score',
    'football_drive_summaries',
    'football_offence',
    'football_kicking',
    'football_punting',
    'football_scoring',
    'football_defence',
    'tnf_athlete_rankings',
    'tnf_universities',
    'swimming_athlete_rankings',
    'wrestling_rankings',
]
