"""Errors raised while building a FlowSet or reading flow files."""

from __future__ import annotations

from typing import Optional


class FlowParseError(ValueError):
    """Raised when a flow record array cannot be turned into a FlowSet."""

    def __init__(self, message: str, *, object_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.object_id = object_id


class InvalidRecordError(FlowParseError):
    """A record is not a mapping with string `id` and `type` fields."""


class DuplicateIdError(FlowParseError):
    """Two records share the same id."""


class DanglingParentError(FlowParseError):
    """A record's `z` names neither a flow nor a subflow."""


class MissingSubflowError(FlowParseError):
    """A subflow instance references an unknown subflow definition."""


class FlowFileError(ValueError):
    """Raised when a flow file cannot be read or does not hold a record array."""
