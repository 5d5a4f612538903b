"""Custom exceptions for the photo geolocation toolkit.

This module provides a hierarchy of specific exceptions for better error handling
and debugging. Note that "no coordinates found" is never an exception: parsers
and extractors return an absent GeoPoint for that outcome.
"""

from typing import Optional, Any


class GeoException(Exception):
    """Base exception for all photo_geo errors.

    Attributes:
        message: Human-readable error description
        details: Additional context for debugging
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# =============================================================================
# Input Errors
# =============================================================================

class InvalidInputError(GeoException):
    """Raised when an input file or payload is invalid or malformed."""

    def __init__(self, message: str, filepath: Optional[str] = None,
                 details: Optional[dict[str, Any]] = None):
        details = details or {}
        if filepath:
            details["filepath"] = filepath
        super().__init__(message, details)
        self.filepath = filepath


class EmptyInputError(InvalidInputError):
    """Raised when an input file has no content."""

    def __init__(self, filepath: Optional[str] = None):
        super().__init__(
            "Input has no content",
            filepath=filepath,
            details={"error_type": "empty_input"}
        )


class JSONParseError(InvalidInputError):
    """Raised when JSON parsing fails."""

    def __init__(self, original_error: str, filepath: Optional[str] = None):
        super().__init__(
            f"Invalid JSON format: {original_error}",
            filepath=filepath,
            details={"json_error": original_error}
        )


# =============================================================================
# Coordinate Errors
# =============================================================================

class CoordinateError(GeoException):
    """Base class for coordinate-related errors."""
    pass


class InvalidCoordinateError(CoordinateError):
    """Raised when a GeoPoint is built from out-of-range or partial values."""

    def __init__(self, lat: Any, lon: Any, reason: str):
        super().__init__(
            f"Invalid coordinates ({lat}, {lon}): {reason}",
            {"lat": lat, "lon": lon, "reason": reason}
        )
        self.lat = lat
        self.lon = lon
        self.reason = reason


class MissingCoordinatesError(CoordinateError):
    """Raised when an absent GeoPoint reaches code that requires a location."""

    def __init__(self, operation: str, item_id: Optional[int] = None):
        details: dict[str, Any] = {"operation": operation}
        if item_id is not None:
            details["item_id"] = item_id
        super().__init__(
            f"'{operation}' requires a point with coordinates",
            details
        )
        self.operation = operation
        self.item_id = item_id


# =============================================================================
# Output Errors
# =============================================================================

class OutputError(GeoException):
    """Base class for output-related errors."""
    pass


class FileWriteError(OutputError):
    """Raised when file writing fails."""

    def __init__(self, filepath: str, original_error: str):
        super().__init__(
            f"Failed to write file: {filepath}",
            {"filepath": filepath, "error": original_error}
        )
        self.filepath = filepath


class UnsupportedFormatError(OutputError):
    """Raised when an export or display format is not supported."""

    def __init__(self, format_name: str, supported_formats: list[str]):
        super().__init__(
            f"Unsupported format: '{format_name}'",
            {"format": format_name, "supported": supported_formats}
        )
        self.format_name = format_name
        self.supported_formats = supported_formats


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GeoException):
    """Raised when configuration validation fails."""

    def __init__(self, field: str, value: Any, message: str):
        super().__init__(
            f"Invalid configuration for '{field}': {message} (got: {value})",
            {"field": field, "value": value}
        )
        self.field = field
        self.value = value
