"""
Dataset cache.

Normalized season tables are stored as Parquet partitions keyed by
source/kind/sport/gender[/variant]/season. Only finished seasons are cached,
so a cached partition never goes stale.
"""
from dataclasses import dataclass
import json
import logging
from pathlib import Path
import threading

import pandas as pd

from usportstats.export import write_partition
from usportstats.http import log_event

logger = logging.getLogger('usportstats')


@dataclass(frozen=True)
class CacheKey:
    source: str
    kind: str
    sport: str
    gender: str
    season: int
    variant: str | None = None

    def parts(self) -> list[str]:
        parts = [self.source, self.kind, self.sport, self.gender]
        if self.variant:
            parts.append(_safe(self.variant))
        parts.append(f'season={self.season}')
        return parts


def _safe(s: str) -> str:
    return ''.join(c if c.isalnum() or c in '-_' else '_' for c in s)


class DatasetCache:
    """Parquet-backed cache with per-key locking."""

    def __init__(self, root: str, enabled: bool = True):
        self.root = Path(root)
        self.enabled = enabled
        self._locks: dict[CacheKey, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock(self, key: CacheKey) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())

    def path(self, key: CacheKey) -> Path:
        return self.root.joinpath(*key.parts())

    def get(self, key: CacheKey) -> pd.DataFrame | None:
        """Cached table for key, or None on a miss."""
        if not self.enabled:
            return None
        part = self.path(key) / 'part-000.parquet'
        with self._lock(key):
            if not part.exists():
                return None
            frame = pd.read_parquet(part)
        log_event(event='cache_hit', **{k: v for k, v in key.__dict__.items() if v is not None})
        return frame

    def put(self, key: CacheKey, frame: pd.DataFrame) -> str | None:
        if not self.enabled:
            return None
        with self._lock(key):
            path = write_partition(frame, self.path(key), {
                'source': key.source,
                'kind': key.kind,
                'sport': key.sport,
                'gender': key.gender,
                'variant': key.variant,
                'season': key.season,
            })
        logger.debug(f'Cached {len(frame)} rows at {path}')
        return path

    def manifest(self, key: CacheKey) -> dict | None:
        path = self.path(key) / '_manifest.json'
        if not path.exists():
            return None
        return json.loads(path.read_text())

    def clear(self) -> int:
        """Remove every cached partition; returns the number removed."""
        removed = 0
        for part in self.root.rglob('part-000.parquet'):
            part.unlink()
            manifest = part.parent / '_manifest.json'
            if manifest.exists():
                manifest.unlink()
            removed += 1
        return removed
