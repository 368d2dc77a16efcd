"""Main pipeline coordinator for GPS time conversion of point files.

This module runs the complete conversion of a point collection file from
loading through export. It provides a configuration-driven workflow with
Pydantic validation and loguru logging.

Pipeline Stages:
    1. Load points: Read the input file into a (Geo)DataFrame
       - Parquet, GeoParquet, CSV (x/y columns), GeoJSON or GeoPackage
       - Format inferred from the file suffix unless configured

    2. filters.gpstimeconvert: Convert the time field of every point
       - GPS Time, GPS Standard Time and GPS Week Seconds in any direction
       - Optional unwrapping of weekly resets in the input
       - Optional wrapping of output week seconds

    3. Export: Write the converted points
       - Multiple output formats (GeoJSON, CSV, Parquet, GeoParquet)

Configuration:
    All pipeline parameters are specified via YAML configuration files. File
    paths and processing settings are validated by Pydantic; the conversion
    options are validated by :mod:`gps_time_module.pipeline.options`, so option
    errors surface as ConfigError subclasses before any point is read.

Example:
    Run pipeline with configuration file:
        $ python -m gps_time_module.pipeline.main_pipeline config.yaml

Note:
    The whole batch is held in memory; the week anchoring for week seconds
    output is taken from the first point in file order.
"""

from pathlib import Path
import time
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml

from ..config import logger
from ..io.point_reader import INPUT_FORMATS, load_points
from ..io.point_writer import OUTPUT_FORMATS, export_points
from ..processing.transforms import ConversionRequest
from ..utils.logger import log_conversion_request, log_point_file, log_stage, setup_logger
from .gps_time_convert import DEFAULT_TIME_FIELD, GpsTimeConvertFilter


class PathConfig(BaseModel):
    """File paths configuration for pipeline input and outputs.

    Attributes:
        input: Path to the point file to convert
        output_base: Base path for output files (without file extension)
        log_dir: Directory for the rotating log file, or None for console only
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    input: Path = Field(..., description="Input point file")
    output_base: Path = Field(..., description="Base path for output files (without extension)")
    log_dir: Optional[Path] = Field(None, description="Directory for log files")

    @field_validator('input')
    @classmethod
    def validate_input_exists(cls, v: Path) -> Path:
        """Check that the input file exists before the pipeline starts."""
        if not v.exists():
            raise ValueError(f"Input file does not exist: {v}")
        return v

    @field_validator('output_base')
    @classmethod
    def validate_output_dir(cls, v: Path) -> Path:
        """Check that output directory exists."""
        if not v.parent.exists():
            raise ValueError(f"Output directory does not exist: {v.parent}")
        return v


class ConversionOptions(BaseModel):
    """Raw ``filters.gpstimeconvert`` options as written in the YAML file.

    Values are kept as given (YAML may produce bools or dates) and checked by
    the options validator, which knows which options apply to which mode.
    """
    conversion: Any = Field(None, description="ws2gst, ws2gt, gst2ws, gt2ws, gst2gt or gt2gst")
    start_date: Any = Field(None, description="GMT start date of data collect (YYYY-MM-DD)")
    wrap: Any = Field("false", description="Reset output week seconds to zero on Sundays")
    wrapped: Any = Field("false", description="Input week seconds reset to zero on Sundays")


class ProcessingConfig(BaseModel):
    """Processing and output configuration.

    Attributes:
        time_field: Column holding the timestamps
        input_format: Input format, inferred from the suffix when None
        crs: CRS for points built from x/y columns
        output_formats: List of output formats for the converted points
    """
    time_field: str = Field(DEFAULT_TIME_FIELD, min_length=1, description="Timestamp column")
    input_format: Optional[str] = Field(None, description="parquet, geoparquet, csv, geojson, gpkg")
    crs: str = Field("EPSG:4326", description="CRS for x/y point columns")
    output_formats: list[str] = Field(
        default=["geoparquet"],
        description="Output formats: geojson, csv, parquet, geoparquet"
    )

    @field_validator('input_format')
    @classmethod
    def validate_input_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate input format."""
        if v is not None and v not in INPUT_FORMATS:
            raise ValueError(f"Invalid input format: {v}. Must be one of {INPUT_FORMATS}")
        return v

    @field_validator('output_formats')
    @classmethod
    def validate_output_formats(cls, v: list[str]) -> list[str]:
        """Validate output formats."""
        if not v:
            raise ValueError("At least one output format is required")
        for fmt in v:
            if fmt not in OUTPUT_FORMATS:
                raise ValueError(f"Invalid output format: {fmt}. Must be one of {OUTPUT_FORMATS}")
        return v


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""
    paths: PathConfig
    conversion: ConversionOptions
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)


def load_config(config_path: str | Path) -> PipelineConfig:
    """Load and validate pipeline configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PipelineConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML syntax is invalid
        pydantic.ValidationError: If configuration values are invalid
    """
    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    return PipelineConfig(**config_dict)


def print_config_summary(config: PipelineConfig, request: ConversionRequest):
    """Print pipeline configuration summary to logs.

    Args:
        config: Validated pipeline configuration object
        request: Validated conversion request
    """
    logger.info("=" * 80)
    logger.info("PIPELINE CONFIGURATION")
    logger.info("=" * 80)

    log_point_file(config.paths.input, "Input points")
    logger.info(f"Output base: {config.paths.output_base} ({', '.join(config.processing.output_formats)})")
    log_conversion_request(request, config.processing.time_field)
    logger.info("=" * 80)


def run_pipeline(config: PipelineConfig) -> dict[str, Path]:
    """Run the three pipeline stages for an already validated configuration.

    Args:
        config: Validated pipeline configuration

    Returns:
        Mapping of output format to written file path

    Raises:
        ConfigError: If the conversion options are invalid
        PointBatchError: If the input cannot supply the time field
    """
    stage = GpsTimeConvertFilter(config.conversion.model_dump(), time_field=config.processing.time_field)
    request = stage.initialize()

    print_config_summary(config, request)

    log_stage(1, "Load points")
    points = load_points(config.paths.input, config.processing.input_format, crs=config.processing.crs)

    log_stage(2, stage.get_name())
    start = time.time()
    points = stage.run(points)
    elapsed = time.time() - start
    logger.success(f"Conversion completed in {elapsed:.2f} seconds")

    log_stage(3, "Export")
    output_paths = export_points(points, config.paths.output_base, config.processing.output_formats)
    for fmt, path in output_paths.items():
        log_point_file(path, f"Output ({fmt})")
    return output_paths


def main(config_path: str | Path) -> int:
    """Execute the complete GPS time conversion pipeline.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Integer exit code (0 for success, 1 for failure)

    Example:
        >>> exit_code = main("configs/gt2ws.yaml")
        >>> if exit_code == 0:
        ...     print("Pipeline completed successfully")

    Note:
        All exceptions are caught, logged, and converted to exit codes.
    """
    logger.info(f"Starting pipeline with config: {config_path}")

    # Load and validate configuration
    try:
        config = load_config(config_path)
        logger.success("Configuration loaded and validated")
    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        return 1

    if config.paths.log_dir is not None:
        setup_logger(config.paths.log_dir)

    try:
        output_paths = run_pipeline(config)
    except Exception as e:
        logger.error(f"Pipeline failed: {e}")
        logger.exception("Full traceback:")
        return 1

    logger.info("=" * 80)
    logger.info("PIPELINE COMPLETED SUCCESSFULLY")
    logger.info("=" * 80)
    logger.info(f"{len(output_paths)} output file(s) written to {config.paths.output_base.parent}")

    return 0


if __name__ == "__main__":
    import sys

    if len(sys.argv) != 2:
        print("Usage: python -m gps_time_module.pipeline.main_pipeline <config.yaml>")
        sys.exit(1)

    config_path = sys.argv[1]

    if not Path(config_path).exists():
        print(f"ERROR: Config file not found: {config_path}")
        sys.exit(1)

    sys.exit(main(config_path))
