"""
Public per-sport accessors.

Every accessor returns a DataFrame in the canonical shape for its data kind.
Seasons that failed are listed in `frame.attrs['failures']`.

    >>> from usportstats import basketball_schedule, basketball_pbp
    >>> games = basketball_schedule('w', seasons=[2018, 2019])
    >>> plays = basketball_pbp('w', 2019)
"""
from typing import Iterable

import pandas as pd

from usportstats.coerce import extract_game_id
from usportstats.normalizer import project_facet
from usportstats.router import QueryRouter
from usportstats.sports import DRIVES, PBP, PLAYER_BOX, RANKINGS, SCHEDULE, UNIVERSITIES

Seasons = int | Iterable[int] | None

_router: QueryRouter | None = None


def get_router() -> QueryRouter:
    """Shared router (created on first use)."""
    global _router
    if _router is None:
        _router = QueryRouter()
    return _router


def set_router(router: QueryRouter | None) -> None:
    """Replace the shared router (None resets to a fresh default on next use)."""
    global _router
    _router = router


def _table(sport: str, gender: str, seasons: Seasons, kind: str, variants=None) -> pd.DataFrame:
    return get_router().get(sport, gender, seasons, kind=kind, variants=variants).to_frame()


def _facet(seasons: Seasons, facet: str) -> pd.DataFrame:
    box = football_player_box_score(seasons)
    view = project_facet(box, facet)
    view.attrs['failures'] = box.attrs.get('failures', [])
    return view


# =============================================================================
# BASKETBALL
# =============================================================================

def basketball_schedule(gender: str, seasons: Seasons = None) -> pd.DataFrame:
    """Basketball schedule; every available season when seasons is None."""
    return _table('basketball', gender, seasons, SCHEDULE)


def basketball_pbp(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('basketball', gender, seasons, PBP)


def basketball_player_box_score(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('basketball', gender, seasons, PLAYER_BOX)


# =============================================================================
# SOCCER
# =============================================================================

def soccer_schedule(gender: str, seasons: Seasons = None) -> pd.DataFrame:
    """Soccer schedule; every available season when seasons is None."""
    return _table('soccer', gender, seasons, SCHEDULE)


def soccer_pbp(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('soccer', gender, seasons, PBP)


def soccer_player_box_score(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('soccer', gender, seasons, PLAYER_BOX)


# =============================================================================
# ICE HOCKEY
# =============================================================================

def hockey_schedule(gender: str, seasons: Seasons = None) -> pd.DataFrame:
    return _table('hockey', gender, seasons, SCHEDULE)


def hockey_pbp(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('hockey', gender, seasons, PBP)


def hockey_player_box_score(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('hockey', gender, seasons, PLAYER_BOX)


# =============================================================================
# VOLLEYBALL / RUGBY
# =============================================================================

def volleyball_schedule(gender: str, seasons: Seasons = None) -> pd.DataFrame:
    return _table('volleyball', gender, seasons, SCHEDULE)


def volleyball_player_box_score(gender: str, seasons: Seasons) -> pd.DataFrame:
    return _table('volleyball', gender, seasons, PLAYER_BOX)


def rugby_schedule(gender: str = 'w', seasons: Seasons = None) -> pd.DataFrame:
    return _table('rugby', gender, seasons, SCHEDULE)


def rugby_player_box_score(gender: str = 'w', seasons: Seasons = None) -> pd.DataFrame:
    return _table('rugby', gender, seasons, PLAYER_BOX)


# =============================================================================
# FOOTBALL
# =============================================================================

def football_schedule(seasons: Seasons = None) -> pd.DataFrame:
    return _table('football', 'm', seasons, SCHEDULE)


def football_pbp(seasons: Seasons) -> pd.DataFrame:
    return _table('football', 'm', seasons, PBP)


def football_player_box_score(seasons: Seasons) -> pd.DataFrame:
    """Wide football box score: one row per player per game, every category."""
    return _table('football', 'm', seasons, PLAYER_BOX)


def football_drive_summaries(seasons: Seasons) -> pd.DataFrame:
    """Drive chart rows with typed result and possession time."""
    return _table('football', 'm', seasons, DRIVES)


def football_offence(seasons: Seasons) -> pd.DataFrame:
    """Passing, rushing and receiving columns of the football box score."""
    return _facet(seasons, 'offence')


def football_kicking(seasons: Seasons) -> pd.DataFrame:
    """Field goal and kickoff columns of the football box score."""
    return _facet(seasons, 'kicking')


def football_punting(seasons: Seasons) -> pd.DataFrame:
    return _facet(seasons, 'punting')


def football_scoring(seasons: Seasons) -> pd.DataFrame:
    return _facet(seasons, 'scoring')


def football_defence(seasons: Seasons) -> pd.DataFrame:
    return _facet(seasons, 'defence')


# =============================================================================
# INDIVIDUAL SPORTS
# =============================================================================

def tnf_athlete_rankings(gender: str, events: str | Iterable[str] | None = None, seasons: Seasons = None) -> pd.DataFrame:
    """
    Track & field rankings.

    Args:
        gender: 'm' or 'w'
        events: Event names (e.g. '60m', 'Long Jump'); all events when None
        seasons: Season start years; current season when None
    """
    return _table('track_and_field', gender, seasons, RANKINGS, variants=events)


def tnf_universities() -> pd.DataFrame:
    """Universities listed by the track & field results site, with conference and province."""
    return get_router().reference('track_and_field', UNIVERSITIES).to_frame()


def swimming_athlete_rankings(gender: str, events: str | Iterable[str] | None = None, seasons: Seasons = None) -> pd.DataFrame:
    return _table('swimming', gender, seasons, RANKINGS, variants=events)


def wrestling_rankings(gender: str, weight_classes: str | Iterable[str] | None = None, seasons: Seasons = None) -> pd.DataFrame:
    return _table('wrestling', gender, seasons, RANKINGS, variants=weight_classes)


def game_ids(schedule: pd.DataFrame, prefix: str = 'boxscores/', suffix: str = '.xml') -> pd.Series:
    """Game identifiers re-derived from a schedule's box_score_url column."""
    return schedule['box_score_url'].map(lambda ref: extract_game_id(ref, prefix, suffix))
