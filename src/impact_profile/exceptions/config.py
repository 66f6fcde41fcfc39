"""Configuration exceptions: config files, environment, settings values."""

from pathlib import Path
from typing import Any, Optional

from .base import ImpactProfileError


class ConfigurationError(ImpactProfileError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ConfigFileError(ConfigurationError):
    """Raised when a config file is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid config file '{path}'", details={"reason": reason})
        self.path = path
        self.reason = reason


class MissingDependencyError(ConfigurationError):
    """Raised when an optional runtime dependency is unavailable."""

    def __init__(self, package: str, hint: Optional[str] = None):
        details = {"package": package}
        if hint:
            details["hint"] = hint
        super().__init__(f"Missing dependency: {package}", details=details)
        self.package = package
