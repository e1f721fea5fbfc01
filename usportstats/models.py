"""
Pydantic models for the canonical row shapes.

Every row keeps its place even when fields fail to parse: such fields are
None and their names are listed in `quality`.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, field_validator

from usportstats.coerce import DRIVE_RESULTS, SEASON_TYPES


class CanonicalRow(BaseModel):
    """Columns shared by every dataset."""

    model_config = ConfigDict(extra='forbid')

    sport: str
    gender: str
    season: int
    quality: str = ''

    @field_validator('gender')
    @classmethod
    def gender_known(cls, v: str) -> str:
        if v not in ('m', 'w'):
            raise ValueError(f'gender must be m or w, got {v!r}')
        return v

    @classmethod
    def columns(cls) -> list[str]:
        return list(cls.model_fields)


class ScheduleRow(CanonicalRow):
    """One game on a team schedule."""

    game_id: str | None = None
    season_type: str = 'regular'
    date: dt.date | None = None
    home_team: str | None = None
    away_team: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    notes: str | None = None
    box_score_url: str | None = None

    @field_validator('season_type')
    @classmethod
    def season_type_known(cls, v: str) -> str:
        if v not in SEASON_TYPES:
            raise ValueError(f'season_type must be one of {SEASON_TYPES}')
        return v

    @property
    def played(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def home_win(self) -> bool:
        """Check if home team won."""
        return self.played and self.home_score > self.away_score

    @property
    def margin(self) -> int | None:
        """Get margin (positive = home win)."""
        if not self.played:
            return None
        return self.home_score - self.away_score


class PlayByPlayEvent(CanonicalRow):
    """One line of a play-by-play log."""

    game_id: str
    season_type: str = 'regular'
    sequence: int
    period: str | None = None
    period_number: int | None = None
    clock: str | None = None
    clock_seconds: float | None = None
    game_seconds: float | None = None
    away_text: str | None = None
    home_text: str | None = None
    away_score: int = 0
    home_score: int = 0

    @field_validator('away_score', 'home_score')
    @classmethod
    def score_nonnegative(cls, v: int) -> int:
        if v < 0:
            raise ValueError('score must be non-negative')
        return v


class BoxScoreRow(CanonicalRow):
    """Player line in a box score; stat columns vary by sport."""

    model_config = ConfigDict(extra='allow')

    game_id: str
    season_type: str = 'regular'
    side: str | None = None
    team: str | None = None
    player: str | None = None
    number: str | None = None
    position: str | None = None

    @field_validator('side')
    @classmethod
    def side_known(cls, v: str | None) -> str | None:
        if v is not None and v not in ('home', 'away'):
            raise ValueError('side must be home or away')
        return v


class DriveSummaryRow(CanonicalRow):
    """One football possession from the drive chart."""

    game_id: str
    team: str | None = None
    sequence: int
    quarter: int | None = None
    start_clock: str | None = None
    obtained: str | None = None
    start_spot: str | None = None
    plays: int | None = None
    yards: int | None = None
    result: str = 'other'
    result_raw: str | None = None
    possession_seconds: float | None = None

    @field_validator('result')
    @classmethod
    def result_known(cls, v: str) -> str:
        if v not in DRIVE_RESULTS:
            raise ValueError(f'result must be one of {DRIVE_RESULTS}')
        return v

    @property
    def scored(self) -> bool:
        return self.result != 'other'


class RankingRow(CanonicalRow):
    """Athlete performance from an individual-sport ranking list."""

    event: str
    rank: int | None = None
    athlete: str | None = None
    university: str | None = None
    university_raw: str | None = None
    university_resolved: bool = False
    performance: float | None = None
    performance_raw: str | None = None
    performance_valid: bool = False
    performance_unit: str = 'time'
    date: dt.date | None = None
    meet: str | None = None

    @field_validator('performance_unit')
    @classmethod
    def unit_known(cls, v: str) -> str:
        if v not in ('time', 'distance', 'points'):
            raise ValueError('performance_unit must be time, distance or points')
        return v


class UniversityRow(BaseModel):
    """University as listed by a source, with its resolved identity."""

    university: str | None = None
    university_raw: str
    resolved: bool = False
    short_name: str | None = None
    conference: str | None = None
    conference_name: str | None = None
    province: str | None = None
    quality: str = ''

    @classmethod
    def columns(cls) -> list[str]:
        return list(cls.model_fields)
