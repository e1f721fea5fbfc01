"""Tests for the Parquet dataset cache and exports."""
import json

import pandas as pd
import pytest

from usportstats.cache import CacheKey, DatasetCache
from usportstats.export import load_parquet, to_parquet_multi, write_table


@pytest.fixture
def frame():
    return pd.DataFrame({
        'sport': ['hockey', 'hockey'],
        'gender': ['m', 'm'],
        'season': [2019, 2019],
        'game_id': ['g1', 'g2'],
        'home_score': [3.0, None],
    })


class TestDatasetCache:
    """Tests for cache keys and round trips."""

    def test_key_path(self, tmp_path):
        cache = DatasetCache(str(tmp_path))
        key = CacheKey('trackie', 'rankings', 'track_and_field', 'w', 2019, 'Long Jump')
        assert cache.path(key) == tmp_path / 'trackie' / 'rankings' / 'track_and_field' / 'w' / 'Long_Jump' / 'season=2019'

    def test_round_trip(self, tmp_path, frame):
        cache = DatasetCache(str(tmp_path))
        key = CacheKey('presto', 'schedule', 'hockey', 'm', 2019)
        assert cache.get(key) is None
        cache.put(key, frame)
        cached = cache.get(key)
        pd.testing.assert_frame_equal(cached, frame)
        manifest = cache.manifest(key)
        assert manifest['rows'] == 2
        assert manifest['season'] == 2019

    def test_disabled(self, tmp_path, frame):
        cache = DatasetCache(str(tmp_path), enabled=False)
        key = CacheKey('presto', 'schedule', 'hockey', 'm', 2019)
        assert cache.put(key, frame) is None
        assert cache.get(key) is None

    def test_clear(self, tmp_path, frame):
        cache = DatasetCache(str(tmp_path))
        cache.put(CacheKey('presto', 'schedule', 'hockey', 'm', 2018), frame)
        cache.put(CacheKey('presto', 'schedule', 'hockey', 'm', 2019), frame)
        assert cache.clear() == 2
        assert cache.get(CacheKey('presto', 'schedule', 'hockey', 'm', 2019)) is None


class TestExport:
    """Tests for file exports."""

    def test_partitioned_export(self, tmp_path, frame):
        both = pd.concat([frame, frame.assign(season=2018)], ignore_index=True)
        paths = to_parquet_multi(both, 'hockey_m_schedule', exports_dir=str(tmp_path))
        assert len(paths) == 2
        out = tmp_path / 'hockey_m_schedule' / 'season=2018'
        assert (out / 'part-000.parquet').exists()
        manifest = json.loads((out / '_manifest.json').read_text())
        assert manifest['table'] == 'hockey_m_schedule'
        assert manifest['rows'] == 2
        assert len(load_parquet(paths[0])) == 2

    def test_write_table(self, tmp_path, frame):
        path = write_table(frame, str(tmp_path / 'out' / 'games.csv'))
        assert pd.read_csv(path)['game_id'].tolist() == ['g1', 'g2']
        write_table(frame, str(tmp_path / 'games.parquet'))
        with pytest.raises(ValueError):
            write_table(frame, str(tmp_path / 'games.xlsx'))
