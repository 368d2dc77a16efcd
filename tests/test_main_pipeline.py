"""Tests for the YAML-driven conversion pipeline."""

import pandas as pd
import pytest
import yaml
from numpy.testing import assert_array_equal
from pydantic import ValidationError

from gps_time_module.pipeline.main_pipeline import PipelineConfig, load_config, main


def write_config(tmp_path, config: dict):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


def test_pipeline_gt2ws_csv_to_csv(tmp_path, gps_points_csv) -> None:
    """Points are read, converted and exported with wrapped week seconds."""
    config = write_config(tmp_path, {
        "paths": {"input": str(gps_points_csv), "output_base": str(tmp_path / "out")},
        "conversion": {"conversion": "gt2ws", "wrap": True},
        "processing": {"output_formats": ["csv", "geoparquet"]},
    })

    assert main(config) == 0

    result = pd.read_csv(tmp_path / "out.csv")
    assert_array_equal(result["GpsTime"].to_numpy(), [10.0, 3600.5, 604790.0, 10.0])
    assert (tmp_path / "out.geoparquet").exists()


def test_pipeline_ws2gst_with_unquoted_yaml_date(tmp_path, week_start) -> None:
    source = tmp_path / "ws.csv"
    pd.DataFrame({"GpsTime": [604790.0, 5.0], "x": [1.0, 2.0], "y": [3.0, 4.0]}).to_csv(source, index=False)
    config = tmp_path / "config.yaml"
    config.write_text(
        "paths:\n"
        f"  input: {source}\n"
        f"  output_base: {tmp_path / 'gst'}\n"
        "conversion:\n"
        "  conversion: WS2GST\n"
        "  start_date: 2021-03-07\n"
        "  wrapped: 'true'\n"
        "processing:\n"
        "  output_formats: [parquet]\n"
    )

    assert main(config) == 0

    result = pd.read_parquet(tmp_path / "gst.parquet")
    offset = week_start - 1_000_000_000
    assert_array_equal(result["GpsTime"].to_numpy(), [offset + 604790.0, offset + 604805.0])


def test_pipeline_invalid_conversion_writes_nothing(tmp_path, gps_points_csv) -> None:
    config = write_config(tmp_path, {
        "paths": {"input": str(gps_points_csv), "output_base": str(tmp_path / "out")},
        "conversion": {"conversion": "foo2bar"},
        "processing": {"output_formats": ["csv"]},
    })

    assert main(config) == 1
    assert not (tmp_path / "out.csv").exists()


def test_pipeline_missing_time_field_fails(tmp_path, gps_points_csv) -> None:
    config = write_config(tmp_path, {
        "paths": {"input": str(gps_points_csv), "output_base": str(tmp_path / "out")},
        "conversion": {"conversion": "gt2gst"},
        "processing": {"time_field": "Time", "output_formats": ["csv"]},
    })

    assert main(config) == 1


def test_missing_input_file_fails_validation(tmp_path) -> None:
    config = write_config(tmp_path, {
        "paths": {"input": str(tmp_path / "nope.csv"), "output_base": str(tmp_path / "out")},
        "conversion": {"conversion": "gt2gst"},
    })

    assert main(config) == 1
    with pytest.raises(ValidationError):
        load_config(config)


def test_invalid_output_format_is_rejected(tmp_path, gps_points_csv) -> None:
    with pytest.raises(ValidationError):
        PipelineConfig(
            paths={"input": gps_points_csv, "output_base": tmp_path / "out"},
            conversion={"conversion": "gt2gst"},
            processing={"output_formats": ["las"]},
        )


def test_processing_defaults(tmp_path, gps_points_csv) -> None:
    config = PipelineConfig(
        paths={"input": gps_points_csv, "output_base": tmp_path / "out"},
        conversion={"conversion": "gt2gst"},
    )
    assert config.processing.time_field == "GpsTime"
    assert config.processing.output_formats == ["geoparquet"]
    assert config.conversion.wrap == "false"
