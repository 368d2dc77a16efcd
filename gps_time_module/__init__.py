"""GPS Time Conversion Module.

This package converts the timestamp field of geospatial point batches between
GPS Time, GPS Standard Time and GPS Week Seconds.

Main components:
    - processing: Epoch calendar math, week rollover correction and the
      six directional time transforms
    - pipeline: Option validation, the ``filters.gpstimeconvert`` stage and
      the YAML-driven pipeline
    - io: Point batch readers and writers
    - config: Global configuration and logging setup

Example:
    >>> from gps_time_module.pipeline.gps_time_convert import convert_point_times
    >>> convert_point_times(points, {"conversion": "gt2ws", "wrap": "true"})
"""

__version__ = "0.1.0"
