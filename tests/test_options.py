"""Tests for filters.gpstimeconvert option validation."""

from datetime import date, datetime

import pytest

from gps_time_module.errors import (
    ConfigError,
    InvalidDateError,
    InvalidFlagError,
    InvalidModeError,
    MissingStartDateError,
)
from gps_time_module.pipeline.options import validate_option_mapping, validate_options
from gps_time_module.processing.transforms import ConversionMode


@pytest.mark.parametrize("raw, mode", [
    ("gt2ws", ConversionMode.GT2WS),
    ("GT2WS", ConversionMode.GT2WS),
    ("Gst2Gt", ConversionMode.GST2GT),
    (" gt2gst ", ConversionMode.GT2GST),
    ("gst2ws", ConversionMode.GST2WS),
])
def test_mode_is_case_insensitive(raw, mode) -> None:
    assert validate_options(raw).mode is mode


@pytest.mark.parametrize("raw", ["foo2bar", "", "gt2", "ws2gps", None])
def test_unknown_mode_is_rejected(raw) -> None:
    with pytest.raises(InvalidModeError):
        validate_options(raw)


def test_week_seconds_input_parses_start_date() -> None:
    request = validate_options("WS2GT", start_date="2021-03-07", wrapped="TRUE")
    assert request.mode is ConversionMode.WS2GT
    assert request.start_date == date(2021, 3, 7)
    assert request.input_is_wrapped is True
    assert request.wrap_output is False


@pytest.mark.parametrize("mode", ["ws2gst", "ws2gt"])
@pytest.mark.parametrize("start_date", [None, "", "   "])
def test_missing_start_date(mode, start_date) -> None:
    with pytest.raises(MissingStartDateError):
        validate_options(mode, start_date=start_date)


@pytest.mark.parametrize("start_date", ["2021-3-7", "03/07/2021", "2021-02-30", "2021-13-01", "20210307", "2021-03-07T00:00"])
def test_invalid_start_date(start_date) -> None:
    with pytest.raises(InvalidDateError):
        validate_options("ws2gst", start_date=start_date)


def test_yaml_date_objects_are_accepted() -> None:
    """Unquoted YAML dates arrive as date objects."""
    assert validate_options("ws2gt", start_date=date(2021, 3, 7)).start_date == date(2021, 3, 7)
    assert validate_options("ws2gt", start_date=datetime(2021, 3, 7, 12)).start_date == date(2021, 3, 7)


@pytest.mark.parametrize("raw, expected", [("true", True), ("TRUE", True), ("False", False), (True, True), (False, False)])
def test_wrap_flag_values(raw, expected) -> None:
    assert validate_options("gt2ws", wrap=raw).wrap_output is expected


@pytest.mark.parametrize("raw", ["yes", "1", "", 1, "truee"])
def test_invalid_flags(raw) -> None:
    with pytest.raises(InvalidFlagError):
        validate_options("gst2ws", wrap=raw)
    with pytest.raises(InvalidFlagError):
        validate_options("ws2gst", start_date="2021-03-07", wrapped=raw)


def test_unused_options_are_ignored() -> None:
    """Options that do not apply to the mode are not validated."""
    request = validate_options("gt2gst", start_date="garbage", wrap="banana", wrapped="banana")
    assert request.start_date is None
    assert request.wrap_output is False
    assert request.input_is_wrapped is False

    assert validate_options("gt2ws", start_date="garbage", wrapped="banana").start_date is None
    assert validate_options("ws2gt", start_date="2021-03-07", wrap="banana").wrap_output is False


def test_flags_default_to_false() -> None:
    assert validate_options("gt2ws").wrap_output is False
    assert validate_options("ws2gt", start_date="2021-03-07").input_is_wrapped is False


def test_option_mapping() -> None:
    request = validate_option_mapping({"conversion": "gst2ws", "wrap": "true", "wrapped": None})
    assert request.mode is ConversionMode.GST2WS
    assert request.wrap_output is True


def test_option_mapping_without_conversion() -> None:
    with pytest.raises(InvalidModeError):
        validate_option_mapping({"start_date": "2021-03-07"})


def test_option_mapping_missing_start_date() -> None:
    with pytest.raises(MissingStartDateError):
        validate_option_mapping({"conversion": "ws2gst"})


def test_all_option_errors_are_config_errors() -> None:
    for error in (InvalidModeError, InvalidDateError, InvalidFlagError, MissingStartDateError):
        assert issubclass(error, ConfigError)
