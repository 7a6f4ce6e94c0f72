"""
Exceptions raised by TrackMyIP.

Lookup failures carry a user-facing message; the controllers show it through
the dialog service. Database errors are not wrapped and propagate as Django
raises them.
"""
from typing import Any, Dict, Optional


class TrackMyIPError(Exception):
    """Base exception for all TrackMyIP errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        return self.message


class GeolocationLookupError(TrackMyIPError):
    """Base class for failures while asking the geolocation API."""
    pass


class InvalidApiKey(GeolocationLookupError):
    """The API rejected the access key (ipstack error code 101)."""

    def __init__(self, message: str = "Invalid API key.", details=None):
        super().__init__(message, details)


class MissingApiKey(InvalidApiKey):
    """No API key is configured, so no request was attempted."""

    def __init__(self, message: str = "No API key configured.", details=None):
        super().__init__(message, details)


class InvalidQuery(GeolocationLookupError):
    """The API could not resolve the address (ipstack error code 106)."""

    def __init__(self, message: str = "Invalid IP address / URL.", details=None):
        super().__init__(message, details)


class NetworkError(GeolocationLookupError):
    """
    Transport-level failure: DNS, refused connection or timeout.

    The controllers replace the message with FRIENDLY_MESSAGE when showing it.
    """
    FRIENDLY_MESSAGE = "Internet connection problem."


class HttpError(GeolocationLookupError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, details=None):
        self.status = status
        super().__init__(f"HTTP Error: {status}", details)


class ApiError(GeolocationLookupError):
    """The API reported an error code TrackMyIP has no dedicated type for."""

    def __init__(self, message: str, code: Optional[str] = None, details=None):
        self.code = code
        super().__init__(message, details)


class DuplicateRecord(TrackMyIPError):
    """A record with the same IP is already in the controller's list."""

    def __init__(self, ip: str):
        self.ip = ip
        super().__init__(
            "A geolocation for this IP address/URL already exists in the database.",
            {'ip': ip},
        )


class NavigationError(TrackMyIPError):
    """Opening a URL in the web browser failed."""
    pass
