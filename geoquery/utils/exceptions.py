"""
Custom exception hierarchy for geoquery.

All custom exceptions inherit from GeoQueryError for easy catching.
Input errors also inherit from ValueError so callers that only know
about builtin exceptions still catch them.
"""


class GeoQueryError(Exception):
    """Base exception for all geoquery errors."""
    pass


class ConfigurationError(GeoQueryError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Config root must be a mapping, got list")
    """
    pass


class InvalidLocationError(GeoQueryError, ValueError):
    """Invalid [latitude, longitude] pair.

    Attributes:
        location: The offending value as it was passed in
    """

    def __init__(self, message: str, location=None):
        super().__init__(message)
        self.location = location

    def __str__(self):
        base = super().__str__()
        if self.location is not None:
            return f"{base} (location={self.location!r})"
        return base


class InvalidRadiusError(GeoQueryError, ValueError):
    """Radius is not a finite, non-negative number of meters."""
    pass


class InvalidGeohashError(GeoQueryError, ValueError):
    """Geohash is empty, not a string, or contains non-base32 characters.

    Example:
        >>> raise InvalidGeohashError("Invalid geohash character: 'a'")
    """
    pass


class InvalidPrecisionError(GeoQueryError, ValueError):
    """Geohash precision (characters) or bit count out of bounds."""
    pass


class DataLoadError(GeoQueryError):
    """Data loading errors.

    Raised when a backing table cannot be loaded or parsed.

    Example:
        >>> raise DataLoadError("Failed to load locations: file not found")
    """
    pass


class DataSourceError(GeoQueryError):
    """Range-scan source errors.

    Attributes:
        path: Path of the collection the operation targeted
    """

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path

    def __str__(self):
        base = super().__str__()
        if self.path:
            return f"{base} (path={self.path})"
        return base


class SubscriptionNotSupportedError(DataSourceError):
    """The source only supports one-shot scans."""
    pass
