# ai_tagger/errors.py
"""
Exception hierarchy for tagging operations.
"""

from typing import Any, Optional


class TaggerError(Exception):
    """Base class for all ai_tagger errors."""


class ConfigurationError(TaggerError):
    """A required setting (API key, endpoint, model name) is missing or invalid."""


class NetworkError(TaggerError):
    """HTTP request failed: connection error or non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ProviderError(TaggerError):
    """The provider answered, but the body carries an error message."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class ResponseFormatError(TaggerError):
    """Provider response did not have the expected shape."""


class ExtractionError(TaggerError):
    """No JSON object could be located in model output."""


class UnsupportedTaggingModeError(TaggerError):
    """Tagging mode is declared but not implemented."""
