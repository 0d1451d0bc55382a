"""Structured exception hierarchy for record assembly.

Provides the exception types raised while turning ingested file data
into outbound messages, with context for debugging and troubleshooting.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "RecordError",
    "InvalidRecordError",
    "ConfigurationError",
]


class RecordError(Exception):
    """Base exception for all record assembly errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        topic: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.topic = topic
        self.details = details or {}
        self.suggestion = suggestion

        # Build full message
        parts = [message]

        if topic:
            parts.insert(0, f"[{topic}]")

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "topic": self.topic,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class InvalidRecordError(RecordError):
    """A record could not be assembled from its inputs.

    Raised when a required assembly input is missing or when both the
    key and the value of a record are absent. The record is dropped by
    the calling stage, it is never retried in place.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.field = field

        details = kwargs.pop("details", {})
        if field:
            details["field"] = field

        super().__init__(message, details=details, **kwargs)


class ConfigurationError(RecordError):
    """Error in assembler or settings configuration.

    Raised when configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value

        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)
