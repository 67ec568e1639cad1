# backend/boothmedia/exceptions.py
"""
Custom exceptions for the booth media core.

Centralized location for all custom exception classes. Each exception type
represents a distinct error domain with its own handling at the HTTP boundary.
"""

from typing import Optional


class BoothMediaError(Exception):
    """Base exception for all booth-media errors."""

    pass


class ValidationError(BoothMediaError):
    """Bad or missing input. Surfaced to clients as a 4xx response."""

    pass


class UpstreamError(BoothMediaError):
    """Non-success response (or transport failure) from an upstream service."""

    def __init__(self, status_code: Optional[int], body: str, service: str = "upstream"):
        self.status_code = status_code
        self.body = body
        self.service = service
        super().__init__(f"Upstream Error ({status_code}) from {service}: {body}")


class ExtractionError(BoothMediaError):
    """Upstream reported success but its body could not be interpreted."""

    def __init__(self, message: str, diagnostic: str = ""):
        self.diagnostic = diagnostic
        super().__init__(message)


class UploadError(BoothMediaError):
    """Remote storage rejected the upload or reported failure."""

    pass
