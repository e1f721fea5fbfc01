"""
Parquet export module.

Writes season-partitioned Parquet files (plus a JSON manifest per partition)
for DuckDB/Pandas analysis. The dataset cache uses the same layout.
"""
import json
import os
from pathlib import Path
import tempfile

import pandas as pd

from usportstats.config import settings


def write_partition(frame: pd.DataFrame, out_dir: Path, manifest: dict) -> str:
    """
    Write one Parquet partition and its manifest.

    The Parquet file is written to a temp file and renamed into place so
    readers never see a half-written partition.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / 'part-000.parquet'

    fd, tmp = tempfile.mkstemp(dir=out_dir, suffix='.tmp')
    os.close(fd)
    try:
        frame.to_parquet(tmp, index=False, compression='snappy')
        os.replace(tmp, out_path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)

    manifest = {'version': '1', **manifest, 'rows': len(frame)}
    (out_dir / '_manifest.json').write_text(json.dumps(manifest, indent=2, default=str))
    return str(out_path)


def to_parquet(frame: pd.DataFrame, table: str, season: int, exports_dir: str | None = None) -> str:
    """
    Export one season of a dataset to partitioned Parquet.

    Args:
        frame: Rows for a single season
        table: Table name (e.g., 'basketball_m_schedule')
        season: Season year for partitioning

    Returns:
        Path to output file
    """
    out_dir = Path(exports_dir or settings.exports_dir) / table / f'season={season}'
    return write_partition(frame, out_dir, {'table': table, 'season': season})


def to_parquet_multi(frame: pd.DataFrame, table: str, exports_dir: str | None = None) -> list[str]:
    """
    Export a dataset to Parquet, partitioned by season.

    Returns:
        List of output paths
    """
    paths = []
    for season, group in frame.groupby('season', sort=False):
        paths.append(to_parquet(group.reset_index(drop=True), table, int(season), exports_dir))
    return paths


def load_parquet(path: str) -> pd.DataFrame:
    """Load Parquet file or directory."""
    return pd.read_parquet(path)


def write_table(frame: pd.DataFrame, path: str) -> str:
    """Write a single file; format follows the suffix (.csv or .parquet)."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix == '.parquet':
        frame.to_parquet(out, index=False)
    elif out.suffix == '.csv':
        frame.to_csv(out, index=False)
    else:
        raise ValueError(f'Unsupported output format: {out.suffix!r} (use .csv or .parquet)')
    return str(out)
