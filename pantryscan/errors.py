# pantryscan/errors.py
from __future__ import annotations
from typing import Any, Optional


class AnalyzerError(Exception):
    """Base error; carries the HTTP status the route should answer with."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AnalyzerError):
    status_code = 400


class InvalidImageError(ValidationError):
    pass


class AuthenticationError(AnalyzerError):
    status_code = 401


class ConfigurationError(AnalyzerError):
    pass


class GatewayError(AnalyzerError):
    """Upstream model call failed or came back without usable content."""

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message, details)
        self.status = status


class ShapeError(ValueError):
    """Model output parsed but lacks the fields for the requested type.

    Never raised: the normalizer carries it in an Err and falls back, so it
    has no HTTP status.
    """
