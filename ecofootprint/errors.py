# ecofootprint/errors.py
from __future__ import annotations
from typing import Optional


class FootprintError(Exception):
    """Base error. ``status_code`` is what the HTTP layer answers with."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---- caller mistakes (400) --------------------------------------------------
class ValidationError(FootprintError):
    status_code = 400


class MissingField(ValidationError):
    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message)


class InvalidUnit(ValidationError):
    def __init__(self, unit):
        super().__init__(f"Invalid unit: {unit}")
        self.unit = unit


class InvalidWeight(ValidationError):
    def __init__(self, message: str = "Invalid weight value"):
        super().__init__(message)


class InvalidURL(ValidationError):
    def __init__(self, message: str = "Invalid URL format"):
        super().__init__(message)


# ---- upstream page fetch ----------------------------------------------------
class FetchError(FootprintError):
    """Product page could not be fetched. Carries the upstream status when known."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.upstream_status = status_code
        if status_code and 400 <= status_code <= 599:
            self.status_code = status_code
        else:
            self.status_code = 500


UpstreamFetchError = FetchError


# ---- cache (never leaves ResultCache) ---------------------------------------
class CacheUnavailable(FootprintError):
    pass
