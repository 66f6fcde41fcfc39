"""Interchange exceptions: malformed stats and snapshot documents.

Raised only at the JSON boundary. The scoring and history functions
assume validated input and never raise these themselves.
"""

from pathlib import Path
from typing import Any, Optional

from .base import ImpactProfileError


class SerializationError(ImpactProfileError):
    """Base class for errors reading or writing interchange documents."""

    pass


class InvalidStatsError(SerializationError):
    """Raised when a stats document has a missing or malformed field."""

    def __init__(self, field: str, reason: str, value: Any = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(f"Invalid stats field '{field}'", details=details)
        self.field = field
        self.reason = reason
        self.value = value


class SnapshotFormatError(SerializationError):
    """Raised when a snapshot or snapshot history document is malformed."""

    def __init__(self, reason: str, path: Optional[Path] = None, index: Optional[int] = None):
        details = {"reason": reason}
        if path is not None:
            details["path"] = str(path)
        if index is not None:
            details["index"] = str(index)
        super().__init__("Malformed snapshot data", details=details)
        self.reason = reason
        self.path = path
        self.index = index
