"""Source adapters, one per site."""

from usportstats.adapters.base import RawBatch, SourceAdapter
from usportstats.adapters.presto import PrestoAdapter
from usportstats.adapters.rankings import SwimmingAdapter, TrackieAdapter, WrestlingAdapter
from usportstats.http import Fetcher


def default_adapters(fetcher: Fetcher | None = None) -> dict[str, SourceAdapter]:
    """One adapter per source, sharing a fetcher."""
    fetcher = fetcher or Fetcher()
    adapters = [
        PrestoAdapter(fetcher),
        TrackieAdapter(fetcher),
        SwimmingAdapter(fetcher),
        WrestlingAdapter(fetcher),
    ]
    return {adapter.name: adapter for adapter in adapters}


__all__ = [
    'RawBatch',
    'SourceAdapter',
    'PrestoAdapter',
    'TrackieAdapter',
    'SwimmingAdapter',
    'WrestlingAdapter',
    'default_adapters',
]
