# courtside/core/errors.py
from __future__ import annotations

from typing import Optional


class CourtsideError(Exception):
    """Base class for errors raised by courtside itself."""


class ConfigError(CourtsideError):
    pass


class UpstreamError(CourtsideError):
    """
    The upstream API answered, but not with something we can read
    (non-JSON body, or a JSON body that is not an object).
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
