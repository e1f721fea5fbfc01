"""
Query router.

Validates a (sport, gender, seasons, kind) request, fans the seasons out to
the sport's source adapter on a bounded worker pool, normalizes each season
and concatenates the results in the caller's season order.

A season that fails (network, layout change) does not abort the request: it
is reported in QueryResult.failures. Only when every season fails does the
request raise RequestFailed.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
import logging
from typing import Iterable

import pandas as pd

from usportstats.adapters import SourceAdapter, default_adapters
from usportstats.cache import CacheKey, DatasetCache
from usportstats.config import Settings, settings as default_settings
from usportstats.errors import (
    NetworkFailure,
    PartialSeasonFailure,
    RequestFailed,
    SourceFormatChange,
    UnsupportedQuery,
)
from usportstats.http import Fetcher, log_event
from usportstats.normalizer import normalize
from usportstats.sports import RANKINGS, SCHEDULE, SPORTS, UNIVERSITIES, SportSpec

logger = logging.getLogger('usportstats')


@dataclass
class SeasonFailure:
    """One failed season (or one failed game page inside a season)."""

    season: int | None
    error_type: str
    message: str
    variant: str | None = None
    game_id: str | None = None
    url: str | None = None

    @property
    def season_level(self) -> bool:
        return self.game_id is None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class QueryResult:
    """Concatenated table plus the failure report."""

    frame: pd.DataFrame
    seasons: list[int] = field(default_factory=list)
    failures: list[SeasonFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_seasons(self) -> list[int]:
        """Seasons that returned no data at all, in request order."""
        failed = {f.season for f in self.failures if f.season_level}
        return [s for s in self.seasons if s in failed]

    def to_frame(self) -> pd.DataFrame:
        """The table with the failure report attached as attrs['failures']."""
        frame = self.frame
        frame.attrs['failures'] = [f.to_dict() for f in self.failures]
        return frame


def _as_season_list(seasons) -> list[int]:
    if isinstance(seasons, bool):
        raise UnsupportedQuery(f'Invalid season: {seasons!r}')
    if isinstance(seasons, int):
        return [seasons]
    if isinstance(seasons, str):
        raise UnsupportedQuery(f'Seasons must be integers (start year), got {seasons!r}')
    result = []
    for season in seasons:
        if isinstance(season, bool) or not isinstance(season, int):
            raise UnsupportedQuery(f'Seasons must be integers (start year), got {season!r}')
        result.append(season)
    return result


class QueryRouter:
    """Routes dataset requests to adapters and merges seasons."""

    def __init__(
        self,
        adapters: dict[str, SourceAdapter] | None = None,
        cache: DatasetCache | None = None,
        settings: Settings | None = None,
        registry: dict[str, SportSpec] | None = None,
    ):
        self.settings = settings or default_settings
        self.registry = registry or SPORTS
        if adapters is None:
            adapters = default_adapters(Fetcher(self.settings))
        self.adapters = adapters
        if cache is None:
            cache = DatasetCache(self.settings.cache_dir, enabled=self.settings.use_cache)
        self.cache = cache

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def resolve(self, sport: str, gender: str | None, kind: str) -> tuple[SportSpec, SourceAdapter]:
        """Sport spec and adapter for a request; raises UnsupportedQuery."""
        spec = self.registry.get(sport)
        if spec is None:
            raise UnsupportedQuery(f'Unknown sport {sport!r}; expected one of {sorted(self.registry)}')
        if not spec.supports(kind):
            raise UnsupportedQuery(f'{spec.name} has no {kind} data; available: {sorted(spec.kinds)}')
        if gender is not None and gender not in spec.genders:
            raise UnsupportedQuery(f'{spec.name} is not offered for gender {gender!r}; available: {list(spec.genders)}')
        adapter = self.adapters.get(spec.source)
        if adapter is None:
            raise UnsupportedQuery(f'No adapter registered for source {spec.source!r}')
        return spec, adapter

    def validate_seasons(self, spec: SportSpec, kind: str, seasons) -> list[int]:
        """Season list in caller order; default is every season for schedules, else the current one."""
        if seasons is None:
            if kind == SCHEDULE:
                return list(range(spec.first_season, self.settings.current_season + 1))
            return [self.settings.current_season]

        result = _as_season_list(seasons)
        if not result:
            raise UnsupportedQuery('No seasons requested')
        if len(set(result)) != len(result):
            raise UnsupportedQuery(f'Duplicate seasons in request: {result}')
        for season in result:
            if not spec.first_season <= season <= self.settings.current_season:
                raise UnsupportedQuery(
                    f'{spec.name} season {season} not available '
                    f'({spec.first_season}-{self.settings.current_season})'
                )
        return result

    def validate_variants(self, spec: SportSpec, gender: str, kind: str, variants) -> list[str] | None:
        """Ranking events (or weight classes) in caller order, canonical spelling."""
        if kind != RANKINGS:
            if variants:
                raise UnsupportedQuery(f'{kind} requests do not take events')
            return None
        known = spec.events.get(gender, ())
        if variants is None:
            return list(known)
        if isinstance(variants, str):
            variants = [variants]
        lookup = {v.lower().replace(' ', ''): v for v in known}
        result = []
        for variant in variants:
            canonical = lookup.get(str(variant).lower().replace(' ', ''))
            if canonical is None:
                raise UnsupportedQuery(f'Unknown {spec.name} event {variant!r}; expected one of {list(known)}')
            result.append(canonical)
        if not result:
            raise UnsupportedQuery('No events requested')
        return result

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def get(
        self,
        sport: str,
        gender: str,
        seasons: int | Iterable[int] | None = None,
        kind: str = SCHEDULE,
        variants: str | Iterable[str] | None = None,
        strict: bool = False,
    ) -> QueryResult:
        """
        Fetch one dataset for one or many seasons.

        Args:
            sport: Sport key (see usportstats.sports)
            gender: 'm' or 'w'
            seasons: Season start year, or several in the order wanted
            kind: Data kind (schedule, pbp, player_box, drives, rankings)
            variants: Ranking events / weight classes (rankings only)
            strict: Raise PartialSeasonFailure when any season fails

        Returns:
            QueryResult with the concatenated table and failure report

        Raises:
            UnsupportedQuery: invalid request, before any fetch
            RequestFailed: every season failed
            PartialSeasonFailure: strict mode and at least one failure
        """
        gender = (gender or '').strip().lower()
        spec, adapter = self.resolve(sport, gender, kind)
        season_list = self.validate_seasons(spec, kind, seasons)
        variant_list = self.validate_variants(spec, gender, kind, variants)

        if variant_list is not None and spec.per_event_pages:
            tasks = [(season, variant) for season in season_list for variant in variant_list]
        else:
            tasks = [(season, None) for season in season_list]

        workers = max(1, min(self.settings.max_workers, len(tasks)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self._load_season, spec, adapter, kind, gender, season, variant)
                for season, variant in tasks
            ]
            outcomes = [future.result() for future in futures]

        frames = [frame for frame, _failures in outcomes if frame is not None]
        failures = [f for _frame, task_failures in outcomes for f in task_failures]

        if not frames:
            raise RequestFailed(
                f'All {len(tasks)} requested {spec.key} {kind} seasons failed: '
                f'{sorted({f.season for f in failures})}',
                failures,
            )

        frame = self._concat(frames)
        if variant_list is not None and not spec.per_event_pages and variants is not None:
            frame = frame[frame['event'].isin(variant_list)].reset_index(drop=True)

        result = QueryResult(frame=frame, seasons=season_list, failures=failures)
        if failures:
            logger.warning(
                f'{spec.key} {gender} {kind}: {len(failures)} failures '
                f'(failed seasons: {result.failed_seasons})'
            )
            if strict:
                raise PartialSeasonFailure(f'{len(failures)} failures in {spec.key} {kind} request', result)
        return result

    @staticmethod
    def _concat(frames: list[pd.DataFrame]) -> pd.DataFrame:
        non_empty = [f for f in frames if len(f)]
        if not non_empty:
            return frames[0].reset_index(drop=True)
        if len(non_empty) == 1:
            return non_empty[0].reset_index(drop=True)
        return pd.concat(non_empty, ignore_index=True)

    def _load_season(
        self,
        spec: SportSpec,
        adapter: SourceAdapter,
        kind: str,
        gender: str,
        season: int,
        variant: str | None,
    ) -> tuple[pd.DataFrame | None, list[SeasonFailure]]:
        """One season: cache, else fetch + normalize. Adapter failures are returned, not raised."""
        key = CacheKey(adapter.name, kind, spec.key, gender, season, variant)
        finished = season < self.settings.current_season
        if finished:
            cached = self.cache.get(key)
            if cached is not None:
                return cached, []

        try:
            batch = adapter.fetch_raw(kind, spec, gender, season, variant)
        except (NetworkFailure, SourceFormatChange) as e:
            logger.error(f'Failed to fetch {spec.key} {gender} {kind} {season} {variant or ""}: {e}')
            log_event(event='season_failed', sport=spec.key, kind=kind, season=season, variant=variant, error=str(e))
            return None, [SeasonFailure(season, type(e).__name__, str(e), variant, url=getattr(e, 'url', None))]

        failures = [
            SeasonFailure(season, s['error_type'], s['message'], variant, game_id=s['game_id'], url=s.get('url'))
            for s in batch.skipped
        ]
        if batch.skipped and not batch.records:
            message = f'All {len(batch.skipped)} game pages failed'
            log_event(event='season_failed', sport=spec.key, kind=kind, season=season, error=message)
            return None, [SeasonFailure(season, batch.skipped[0]['error_type'], message, variant)] + failures

        frame = normalize(kind, spec, gender, season, batch.records)
        if finished and not batch.skipped:
            self.cache.put(key, frame)

        log_event(event='season_done', sport=spec.key, kind=kind, season=season, variant=variant, rows=len(frame))
        return frame, failures

    def reference(self, sport: str, kind: str = UNIVERSITIES) -> QueryResult:
        """Season-independent reference table (university list)."""
        spec, adapter = self.resolve(sport, None, kind)
        try:
            batch = adapter.fetch_reference(kind, spec)
        except (NetworkFailure, SourceFormatChange) as e:
            failure = SeasonFailure(None, type(e).__name__, str(e), url=getattr(e, 'url', None))
            raise RequestFailed(f'{spec.name} {kind} unavailable: {e}', [failure]) from e
        return QueryResult(frame=normalize(kind, spec, None, None, batch.records))
