"""
Source adapter contract.

An adapter knows one site's URLs and page structure and turns pages into
intermediate records (plain dicts with source-neutral keys). It never builds
canonical rows; that is the normalizer's job.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging

from usportstats.errors import UnsupportedQuery
from usportstats.http import Fetcher, log_event
from usportstats.sports import SportSpec

logger = logging.getLogger('usportstats')


@dataclass
class RawBatch:
    """Intermediate records for one (sport, gender, season[, variant]) fetch."""

    records: list[dict] = field(default_factory=list)
    # Sub-pages (games) that could not be fetched or parsed
    skipped: list[dict] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class SourceAdapter(ABC):
    """Base class for one data source."""

    name: str = ''
    kinds: frozenset[str] = frozenset()

    def __init__(self, fetcher: Fetcher | None = None):
        self.fetcher = fetcher or Fetcher()

    def fetch_raw(
        self,
        kind: str,
        spec: SportSpec,
        gender: str,
        season: int,
        variant: str | None = None,
    ) -> RawBatch:
        """
        Fetch intermediate records for one season.

        Cancelled seasons return an empty batch without touching the network.

        Raises:
            UnsupportedQuery: kind not served by this adapter for this sport
            NetworkFailure: season page unreachable
            SourceFormatChange: season page no longer parses
        """
        if kind not in self.kinds or not spec.supports(kind):
            raise UnsupportedQuery(f'{self.name} does not serve {kind} for {spec.key}')
        if spec.is_cancelled(season):
            log_event(event='season_cancelled', source=self.name, sport=spec.key, gender=gender, season=season)
            return RawBatch()
        return self._fetch(kind, spec, gender, season, variant)

    @abstractmethod
    def _fetch(self, kind: str, spec: SportSpec, gender: str, season: int, variant: str | None) -> RawBatch:
        ...

    def fetch_reference(self, kind: str, spec: SportSpec) -> RawBatch:
        """Season-independent reference data (e.g. a university list)."""
        raise UnsupportedQuery(f'{self.name} has no {kind} reference data')
