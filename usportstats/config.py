"""
Configuration for usportstats.

All values come from the environment (or a local .env file).
"""
from dataclasses import dataclass
from datetime import date
import os

from dotenv import load_dotenv

load_dotenv()


def _default_current_season() -> int:
    """University seasons start in the fall; Jan-Jul belongs to last year's season."""
    today = date.today()
    return today.year if today.month >= 8 else today.year - 1


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key, '').strip().lower()
    if val in ('1', 'true', 'yes'):
        return True
    if val in ('0', 'false', 'no'):
        return False
    return default


@dataclass(frozen=True)
class Settings:
    """Immutable settings from environment."""

    cache_dir: str = os.getenv('CACHE_DIR', 'data/cache')
    exports_dir: str = os.getenv('EXPORTS_DIR', 'data/exports')
    use_cache: bool = _env_bool('USE_CACHE', True)
    user_agent: str = os.getenv('USER_AGENT', 'usportstats/1.0 (+github)')
    req_timeout_s: float = float(os.getenv('REQ_TIMEOUT_S', '15'))
    rate_limit_rps: float = float(os.getenv('RATE_LIMIT_RPS', '2'))
    retries: int = int(os.getenv('RETRIES', '4'))
    backoff_initial_s: float = float(os.getenv('BACKOFF_INITIAL_S', '0.5'))
    max_workers: int = int(os.getenv('MAX_WORKERS', '4'))
    current_season: int = int(os.getenv('CURRENT_SEASON', str(_default_current_season())))
    sports_config: str = os.getenv('SPORTS_CONFIG', '')
    db_url: str = os.getenv('DATABASE_URL', '')


settings = Settings()
