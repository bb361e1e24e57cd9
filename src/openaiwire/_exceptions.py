"""
Custom exceptions for openaiwire.
"""

from typing import Any, Optional


class BuildError(ValueError):
    """A request could not be built because a required field is missing."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class DecodeError(Exception):
    """Response payload does not match the expected shape (unknown tag, missing field)."""

    def __init__(self, message: str, field: str = None, value: Any = None, context: str = None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.context = context


class TransportError(Exception):
    """Network failure, non-2xx status or malformed JSON. Never retried internally."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None,
                 method: str = None, url: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body  # Raw response text, kept for diagnosis
        self.method = method
        self.url = url
