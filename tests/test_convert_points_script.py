"""Tests for the convert_points command line script."""

import importlib.util
from pathlib import Path

import pandas as pd
import pytest
from numpy.testing import assert_array_equal

SCRIPT = Path(__file__).parent.parent / "scripts" / "convert_points.py"


def load_script():
    spec = importlib.util.spec_from_file_location("convert_points", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_converts_csv(tmp_path, gps_points_csv) -> None:
    script = load_script()
    out = tmp_path / "gst"

    exit_code = script.main([str(gps_points_csv), str(out), "--conversion", "gt2gst", "--format", "csv"])

    assert exit_code == 0
    result = pd.read_csv(tmp_path / "gst.csv")
    source = pd.read_csv(gps_points_csv)
    assert_array_equal(result["GpsTime"].to_numpy(), source["GpsTime"].to_numpy() - 1_000_000_000)


def test_cli_reports_missing_start_date(tmp_path, gps_points_csv) -> None:
    script = load_script()

    exit_code = script.main([str(gps_points_csv), str(tmp_path / "out"), "--conversion", "ws2gt"])

    assert exit_code == 1
    assert not (tmp_path / "out.geoparquet").exists()


def test_cli_rejects_unknown_format_before_writing(tmp_path, gps_points_csv) -> None:
    """An unknown format is a usage error; no other requested format is written."""
    script = load_script()
    out = tmp_path / "gst"

    with pytest.raises(SystemExit) as exc_info:
        script.main([str(gps_points_csv), str(out), "--conversion", "gt2gst", "--format", "csv", "las"])

    assert exc_info.value.code == 2
    assert not (tmp_path / "gst.csv").exists()


def test_cli_reports_missing_input_file(tmp_path) -> None:
    script = load_script()

    exit_code = script.main([str(tmp_path / "missing.csv"), str(tmp_path / "out"),
                             "--conversion", "gt2gst", "--format", "csv"])

    assert exit_code == 1
    assert not (tmp_path / "out.csv").exists()
