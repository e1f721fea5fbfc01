"""
Database layer for schedule persistence.

SQLAlchemy 2.0; PostgreSQL via psycopg3 in production, SQLite works for
local use. Upserts are idempotent on (source, game_id).
"""
from contextlib import contextmanager
from typing import Generator, Iterable

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine

from usportstats.config import settings

_engines: dict[str, Engine] = {}

CREATE_SCHEDULES = text("""
CREATE TABLE IF NOT EXISTS schedules (
    source VARCHAR(32) NOT NULL,
    game_id VARCHAR(64) NOT NULL,
    sport VARCHAR(32) NOT NULL,
    gender VARCHAR(1) NOT NULL,
    season INTEGER NOT NULL,
    season_type VARCHAR(16) NOT NULL,
    date DATE,
    home_team VARCHAR(128),
    away_team VARCHAR(128),
    home_score INTEGER,
    away_score INTEGER,
    notes TEXT,
    box_score_url TEXT,
    quality TEXT,
    PRIMARY KEY (source, game_id)
)
""")

# Upsert SQL with ON CONFLICT
UPSERT_SCHEDULE = text("""
INSERT INTO schedules (
    source, game_id, sport, gender, season, season_type, date,
    home_team, away_team, home_score, away_score, notes, box_score_url, quality
) VALUES (
    :source, :game_id, :sport, :gender, :season, :season_type, :date,
    :home_team, :away_team, :home_score, :away_score, :notes, :box_score_url, :quality
)
ON CONFLICT (source, game_id) DO UPDATE SET
    sport = EXCLUDED.sport,
    gender = EXCLUDED.gender,
    season = EXCLUDED.season,
    season_type = EXCLUDED.season_type,
    date = EXCLUDED.date,
    home_team = EXCLUDED.home_team,
    away_team = EXCLUDED.away_team,
    home_score = EXCLUDED.home_score,
    away_score = EXCLUDED.away_score,
    notes = EXCLUDED.notes,
    box_score_url = EXCLUDED.box_score_url,
    quality = EXCLUDED.quality;
""")

COLUMNS = [
    'game_id', 'sport', 'gender', 'season', 'season_type', 'date',
    'home_team', 'away_team', 'home_score', 'away_score', 'notes', 'box_score_url', 'quality',
]


def _normalize_url(db_url: str) -> str:
    # Handle Railway postgres:// -> postgresql+psycopg://
    if db_url.startswith('postgres://'):
        db_url = db_url.replace('postgres://', 'postgresql+psycopg://', 1)
    elif db_url.startswith('postgresql://'):
        db_url = db_url.replace('postgresql://', 'postgresql+psycopg://', 1)
    return db_url


def get_engine(db_url: str | None = None) -> Engine:
    """Get or create database engine."""
    db_url = db_url or settings.db_url
    if not db_url:
        raise ValueError('DATABASE_URL not configured')
    db_url = _normalize_url(db_url)
    if db_url not in _engines:
        _engines[db_url] = create_engine(db_url, pool_pre_ping=True)
    return _engines[db_url]


@contextmanager
def session(db_url: str | None = None) -> Generator[Connection, None, None]:
    """Get transactional database connection (creates the schema if needed)."""
    engine = get_engine(db_url)
    with engine.begin() as conn:
        conn.execute(CREATE_SCHEDULES)
        yield conn


def _records(frame: pd.DataFrame, source: str) -> Iterable[dict]:
    for row in frame.to_dict('records'):
        record = {col: row.get(col) for col in COLUMNS}
        for col in ('home_score', 'away_score'):
            value = record[col]
            record[col] = None if value is None or pd.isna(value) else int(value)
        # Dates are bound as ISO strings so SQLite and PostgreSQL behave alike
        value = record['date']
        record['date'] = None if value is None or pd.isna(value) else pd.Timestamp(value).date().isoformat()
        record['season'] = int(record['season'])
        record['source'] = source
        yield record


def upsert_schedules(frame: pd.DataFrame, source: str = 'presto', db_url: str | None = None) -> int:
    """
    Upsert schedule rows (idempotent). Rows without a game_id are skipped.

    Returns:
        Number of rows written
    """
    count = 0
    with session(db_url) as conn:
        for record in _records(frame, source):
            if not record['game_id']:
                continue
            conn.execute(UPSERT_SCHEDULE, record)
            count += 1
    return count


def count_games(season: int | None = None, db_url: str | None = None) -> int:
    """Count games in database."""
    with session(db_url) as conn:
        if season:
            result = conn.execute(
                text('SELECT COUNT(*) FROM schedules WHERE season = :season'),
                {'season': season},
            )
        else:
            result = conn.execute(text('SELECT COUNT(*) FROM schedules'))
        return result.scalar() or 0


def load_games(season: int | None = None, db_url: str | None = None) -> list[dict]:
    """Load games from database."""
    with session(db_url) as conn:
        if season:
            result = conn.execute(
                text('SELECT * FROM schedules WHERE season = :season ORDER BY date'),
                {'season': season},
            )
        else:
            result = conn.execute(text('SELECT * FROM schedules ORDER BY date'))
        return [dict(row._mapping) for row in result]
