"""Exception hierarchy for impact-profile."""

from .base import ImpactProfileError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
    MissingDependencyError,
)
from .serialization import InvalidStatsError, SerializationError, SnapshotFormatError

__all__ = [
    "ImpactProfileError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "MissingDependencyError",
    "SerializationError",
    "InvalidStatsError",
    "SnapshotFormatError",
]
