"""Error types surfaced to CLI and web users."""

from __future__ import annotations


class FormatterError(Exception):
    """Base error carrying a user-facing message and a machine readable type."""

    error_type = "unknown_error"

    def __init__(self, message: str, error_type: str | None = None):
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type


class ValidationError(FormatterError):
    """Upload rejected before any conversion was attempted."""

    error_type = "invalid_file"


class ConversionError(FormatterError):
    error_type = "parse_error"


class ExportError(FormatterError):
    error_type = "export_error"
