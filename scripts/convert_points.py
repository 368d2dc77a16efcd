"""
Convert the time field of a point file without writing a YAML config.

Usage:
    python scripts/convert_points.py points.parquet out/points --conversion gt2ws --wrap true
    python scripts/convert_points.py ws.csv out/ws --conversion ws2gst --start-date 2021-03-07 \
        --wrapped true --format csv parquet
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gps_time_module.config import logger
from gps_time_module.errors import GpsTimeError
from gps_time_module.io.point_reader import load_points
from gps_time_module.io.point_writer import OUTPUT_FORMATS, export_points
from gps_time_module.pipeline.gps_time_convert import DEFAULT_TIME_FIELD, GpsTimeConvertFilter


def build_parser():
    parser = argparse.ArgumentParser(description="Convert between GPS Time, GPS Standard Time, and GPS Week Seconds")
    parser.add_argument("input", help="Input point file (parquet, geoparquet, csv, geojson, gpkg)")
    parser.add_argument("output_base", help="Base path for output (without extension)")
    parser.add_argument("--conversion", required=True,
                        help="ws2gst, ws2gt, gst2ws, gt2ws, gst2gt or gt2gst")
    parser.add_argument("--start-date", default=None, help="GMT start date of data collect (YYYY-MM-DD)")
    parser.add_argument("--wrap", default="false", help="Reset output week seconds to zero on Sundays")
    parser.add_argument("--wrapped", default="false", help="Input week seconds reset to zero on Sundays")
    parser.add_argument("--time-field", default=DEFAULT_TIME_FIELD, help="Timestamp column")
    parser.add_argument("--format", nargs='+', default=['geoparquet'], dest="output_formats",
                        choices=sorted(OUTPUT_FORMATS), help="Output formats")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    options = {
        "conversion": args.conversion,
        "start_date": args.start_date,
        "wrap": args.wrap,
        "wrapped": args.wrapped,
    }

    stage = GpsTimeConvertFilter(options, time_field=args.time_field)
    try:
        stage.initialize()
        points = stage.run(load_points(args.input))
        export_points(points, args.output_base, args.output_formats)
    except GpsTimeError as e:
        logger.error(f"{e} ({e.internal()})")
        return 1
    except Exception as e:
        logger.error(f"Conversion failed: {e}")
        logger.exception("Full traceback:")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
