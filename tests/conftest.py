"""Shared test fixtures."""

from datetime import date

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import Point

from gps_time_module.processing.epoch_calendar import week_start_seconds

# Sunday; GPS week 2148
COLLECT_DATE = date(2021, 3, 7)


@pytest.fixture
def week_start():
    return week_start_seconds(COLLECT_DATE)


@pytest.fixture
def gps_points(week_start):
    """Four points in GPS Time, the last one past the end of the week."""
    times = [week_start + 10.0, week_start + 3600.5, week_start + 604790.0, week_start + 604810.0]
    return gpd.GeoDataFrame(
        {
            "GpsTime": times,
            "Intensity": [12, 40, 33, 7],
        },
        geometry=[Point(8.54, 47.37), Point(8.55, 47.38), Point(8.56, 47.39), Point(8.57, 47.40)],
        crs="EPSG:4326",
        index=[10, 5, 7, 3],
    )


@pytest.fixture
def gps_points_csv(tmp_path, gps_points):
    path = tmp_path / "points.csv"
    df = pd.DataFrame(gps_points.drop(columns="geometry"))
    df["x"] = gps_points.geometry.x.to_numpy()
    df["y"] = gps_points.geometry.y.to_numpy()
    df.to_csv(path, index=False)
    return path
