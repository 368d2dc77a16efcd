"""
Point batch writers.

Exports a converted point batch to one or more formats next to a common
output base path (``<output_base>.<format>``).
"""

from pathlib import Path

import geopandas as gpd
import pandas as pd

from ..config import logger
from ..errors import PointBatchError

OUTPUT_FORMATS = {'geojson', 'csv', 'parquet', 'geoparquet'}


def flatten_geometry(points: pd.DataFrame) -> pd.DataFrame:
    """Replace point geometry with x/y columns for tabular outputs."""
    if not isinstance(points, gpd.GeoDataFrame):
        return pd.DataFrame(points)

    df = pd.DataFrame(points.drop(columns=points.geometry.name))
    df['x'] = points.geometry.x.to_numpy()
    df['y'] = points.geometry.y.to_numpy()
    return df


def check_output_formats(points: pd.DataFrame, output_formats: list[str]) -> None:
    """
    Reject unknown formats and geometry formats for batches without geometry.

    Raises:
        PointBatchError: On the first format that cannot be written
    """
    for fmt in output_formats:
        if fmt not in OUTPUT_FORMATS:
            raise PointBatchError(f"Invalid output format: {fmt}. Must be one of {OUTPUT_FORMATS}")

        if fmt in ('geojson', 'geoparquet') and not isinstance(points, gpd.GeoDataFrame):
            raise PointBatchError(f"{fmt} output requires point geometry",
                                  f"Batch columns: {list(points.columns)}")


def export_points(points: pd.DataFrame, output_base: str | Path,
                  output_formats: list[str]) -> dict[str, Path]:
    """
    Write a point batch in every requested format.

    All formats are checked before the first file is written, so a bad
    format leaves no partial output behind.

    Args:
        points: Converted point batch
        output_base: Base path for output files (without extension)
        output_formats: Formats to write (geojson, csv, parquet, geoparquet)

    Returns:
        Mapping of format to the written file path

    Raises:
        PointBatchError: If a geometry format is requested for a batch
            without geometry, or a format is unknown
    """
    check_output_formats(points, output_formats)
    output_paths = {fmt: Path(f"{output_base}.{fmt}") for fmt in output_formats}

    for fmt, path in output_paths.items():
        if fmt == 'geojson':
            points.to_file(path, driver='GeoJSON')
        elif fmt == 'geoparquet':
            points.to_parquet(path)
        elif fmt == 'parquet':
            flatten_geometry(points).to_parquet(path, index=False)
        else:
            flatten_geometry(points).to_csv(path, index=False)

        logger.success(f"{fmt} created: {path}")

    return output_paths
