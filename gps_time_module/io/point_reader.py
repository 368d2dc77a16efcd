"""
Point batch readers.

Loads the point records of a collection file into a (Geo)DataFrame. Supported
inputs are Parquet, GeoParquet, CSV with x/y columns, GeoJSON and GeoPackage.
"""

from pathlib import Path

import geopandas as gpd
import pandas as pd
import pyarrow.parquet as pq
from shapely.geometry import Point

from ..config import logger
from ..errors import PointBatchError

INPUT_FORMATS = {'parquet', 'geoparquet', 'csv', 'geojson', 'gpkg'}

_SUFFIX_FORMATS = {
    '.parquet': 'parquet',
    '.geoparquet': 'geoparquet',
    '.csv': 'csv',
    '.geojson': 'geojson',
    '.json': 'geojson',
    '.gpkg': 'gpkg',
}


def infer_input_format(path: str | Path) -> str:
    """
    Guess the input format from the file suffix.

    A ``.parquet`` file carrying GeoParquet ``geo`` metadata is reported as
    ``geoparquet``.

    Args:
        path: Path to the point file

    Returns:
        One of INPUT_FORMATS

    Raises:
        PointBatchError: If the suffix is not recognised
    """
    path = Path(path)
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise PointBatchError(f"Cannot infer point format from suffix '{path.suffix}'",
                              f"Supported suffixes: {sorted(_SUFFIX_FORMATS)}")

    if fmt == 'parquet' and path.exists():
        metadata = pq.read_schema(path).metadata or {}
        if b'geo' in metadata:
            fmt = 'geoparquet'

    return fmt


def points_from_xy_frame(df: pd.DataFrame, x_field: str = 'x', y_field: str = 'y',
                         crs: str = 'EPSG:4326') -> pd.DataFrame:
    """Attach Point geometries built from x/y columns; frames without them are returned as-is."""
    if x_field not in df.columns or y_field not in df.columns:
        logger.debug(f"No '{x_field}'/'{y_field}' columns, keeping plain DataFrame")
        return df

    geometry = [Point(x, y) for x, y in zip(df[x_field], df[y_field])]
    return gpd.GeoDataFrame(df, geometry=geometry, crs=crs)


def load_points(path: str | Path, input_format: str | None = None,
                crs: str = 'EPSG:4326') -> pd.DataFrame:
    """
    Load a point batch from disk.

    Args:
        path: Path to the point file
        input_format: One of INPUT_FORMATS, inferred from the suffix if None
        crs: CRS assigned to points built from CSV/Parquet x/y columns

    Returns:
        GeoDataFrame when geometry is available, DataFrame otherwise

    Raises:
        PointBatchError: If the format is unknown
    """
    path = Path(path)
    fmt = input_format or infer_input_format(path)
    if fmt not in INPUT_FORMATS:
        raise PointBatchError(f"Invalid input format: {fmt}. Must be one of {INPUT_FORMATS}")

    logger.info(f"Reading {fmt} points: {path}")

    if fmt == 'geoparquet':
        points = gpd.read_parquet(path)
    elif fmt == 'parquet':
        points = points_from_xy_frame(pd.read_parquet(path), crs=crs)
    elif fmt == 'csv':
        points = points_from_xy_frame(pd.read_csv(path), crs=crs)
    else:
        points = gpd.read_file(path)

    logger.info(f"Loaded {len(points):,} points")
    return points
