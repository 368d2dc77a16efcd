"""Exception hierarchy for GPS time conversion."""


class GpsTimeError(Exception):
    """Base exception for GPS time conversion errors.

    Carries a short user-facing message plus optional internal details
    for the log file.
    """

    def __init__(self, user_message: str, internal_details: str = "") -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message

    def internal(self) -> str:
        return self.internal_details


class ConfigError(GpsTimeError):
    """Raised when conversion options are invalid. Always fatal."""


class InvalidModeError(ConfigError):
    """Raised when the conversion type is not one of the six known modes."""


class InvalidDateError(ConfigError):
    """Raised when 'start_date' is not a valid YYYY-MM-DD calendar date."""


class InvalidFlagError(ConfigError):
    """Raised when 'wrap' or 'wrapped' is not 'true' or 'false'."""


class MissingStartDateError(ConfigError):
    """Raised when a week seconds input mode is given no 'start_date'."""


class PointBatchError(GpsTimeError):
    """Raised when a point batch cannot supply the time field."""


ERR_MSG_INVALID_MODE = "Invalid conversion type."
ERR_MSG_MISSING_START_DATE = "'start_date' option is required."
ERR_MSG_INVALID_DATE = "'start_date' must be in YYYY-MM-DD format."
