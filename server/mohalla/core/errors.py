from __future__ import annotations

from typing import Any


class DirectoryError(Exception):
    """Base class for validation failures raised by the directory core."""

    code = "directory_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidParameter(DirectoryError):
    """A query parameter is malformed or outside its allowed range."""

    code = "invalid_parameter"

    def __init__(self, field: str, kind: str = "malformed", message: str | None = None) -> None:
        self.field = field
        self.kind = kind
        super().__init__(message or f"Invalid value for '{field}' ({kind})")


class ConflictingUniqueValue(DirectoryError):
    code = "conflicting_unique_value"

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"{field} '{value}' already exists")
