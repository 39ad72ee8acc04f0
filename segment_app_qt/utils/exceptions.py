"""
Exception classes for the segment overlay application.

The rendering and interaction core never raises for well-formed input;
these exceptions cover the host side (configuration and mask loading).

Usage:
    from segment_app_qt.utils.exceptions import MaskFormatError

    try:
        masks = load_masks_json(path)
    except MaskFormatError as e:
        logger.error(f"Invalid masks file: {e}")
"""

from typing import Any, Optional


class SegmentAppError(Exception):
    """
    Base exception class for the segment overlay application.

    All custom exceptions inherit from this class, allowing
    broad exception catching when needed.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SegmentAppError):
    """
    Exception for invalid configuration values.

    Raised for an unknown interaction mode, a mask area threshold
    outside [0, 1], or a config file that cannot be read.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        value: Any = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if key:
            details["key"] = key
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.key = key
        self.value = value


class MaskFormatError(SegmentAppError):
    """
    Exception for malformed mask records.

    Raised when a masks file is not valid JSON, or a record lacks a
    bbox or segmentation field or has fields of the wrong shape.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        index: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if source:
            details["source"] = source
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.source = source
        self.index = index
