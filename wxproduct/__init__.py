"""Parse WMO-style weather bulletins into named, time-stamped products."""

from .errors import ClassMismatch, IncompatibleProduct, MalformedTimestamp, SourceUnreadable
from .products import WeatherProduct

__version__ = "1.2.0"

__all__ = [
    "ClassMismatch",
    "IncompatibleProduct",
    "MalformedTimestamp",
    "SourceUnreadable",
    "WeatherProduct",
]
