"""
Custom exception hierarchy for the Aurae insights engine.

Rule: every error has a machine-readable `code` string so host layers
can branch on it without parsing English messages.

The analyzers themselves never raise for sparse or absent data; these
exceptions only cover malformed input records handed to the ingest layer.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class AuraeException(Exception):
    """Base class for all engine-level errors."""
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class EpisodeValidationError(AuraeException):
    code = "EPISODE_VALIDATION_ERROR"

    def __init__(self, exc: ValidationError, index: Optional[int] = None):
        details: dict[str, Any] = {"errors": field_errors(exc)}
        if index is not None:
            details["index"] = index
            message = f"Episode record at index {index} failed validation."
        else:
            message = "Episode record failed validation."
        super().__init__(message=message, details=details)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def field_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a pydantic ValidationError into `{field, message, type}` dicts."""
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
