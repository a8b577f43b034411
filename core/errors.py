from __future__ import annotations

from typing import Any, Dict, Optional


class PipelineError(Exception):
    """Base class for recoverable data page failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "type": type(self).__name__}


class FormatError(PipelineError):
    """Malformed CSV input. ``row`` is 1-based with the header as row 1."""

    def __init__(
        self,
        message: str,
        *,
        row: Optional[int] = None,
        found: Optional[int] = None,
        expected: Optional[int] = None,
    ):
        super().__init__(message)
        self.row = row
        self.found = found
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update({"row": self.row, "found": self.found, "expected": self.expected})
        return payload


class InvalidSelectionError(PipelineError):
    def __init__(self, message: str, *, column: Optional[str] = None):
        super().__init__(message)
        self.column = column

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["column"] = self.column
        return payload


class ProjectionError(PipelineError):
    def __init__(self, message: str, *, column: str, row: int):
        super().__init__(message)
        self.column = column
        self.row = row

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update({"column": self.column, "row": self.row})
        return payload
