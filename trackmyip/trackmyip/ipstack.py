"""
Client for the ipstack geolocation API.

One GET per lookup, no retries and no caching:

    GET http://api.ipstack.com/<query>?access_key=<key>

The response is either the location fields or an `error` object whose
`code` tells what went wrong (101 invalid key, 106 unresolvable query).
"""
import enum
import logging
from typing import Optional

import requests
from django.conf import settings

from .exceptions import (
    ApiError,
    GeolocationLookupError,
    HttpError,
    InvalidApiKey,
    InvalidQuery,
    MissingApiKey,
    NetworkError,
)
from .models import GeolocationRecord
from .settings_store import ApiKeyStore

logger = logging.getLogger(__name__)

ERROR_INVALID_ACCESS_KEY = '101'
ERROR_INVALID_QUERY = '106'

DEFAULT_BASE_URL = 'http://api.ipstack.com/'
DEFAULT_TIMEOUT = 10
DEFAULT_PROBE_QUERY = 'www.google.pl'


class ApiKeyStatus(enum.Enum):
    VALID = 'valid'
    INVALID = 'invalid'
    UNREACHABLE = 'unreachable'


def _text(data, name):
    value = data.get(name)
    return '' if value is None else str(value)


def _number(data, name):
    value = data.get(name)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_location(data: dict) -> GeolocationRecord:
    """
    Map an ipstack success payload onto an unsaved GeolocationRecord.

    Missing or null strings become "", missing or null numbers become 0.0.
    """
    return GeolocationRecord(
        ip=_text(data, 'ip'),
        country=_text(data, 'country_name'),
        region=_text(data, 'region_name'),
        city=_text(data, 'city'),
        latitude=_number(data, 'latitude'),
        longitude=_number(data, 'longitude'),
    )


def _error_code(data: dict) -> Optional[str]:
    error = data.get('error')
    if not isinstance(error, dict):
        return None
    code = error.get('code')
    return None if code is None else str(code)


class IpStackClient:
    """
    Geolocation lookups against ipstack.

    Arguments left as None are read from configuration: the API key from
    ApiKeyStore on every request (so a key saved at runtime applies to the
    next lookup), the base URL and timeout from Django settings.
    """

    def __init__(self, api_key=None, base_url=None, timeout=None, key_store=None):
        self._api_key = api_key
        self.base_url = base_url or getattr(settings, 'IPSTACK_BASE_URL', DEFAULT_BASE_URL)
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.timeout = timeout or getattr(settings, 'IPSTACK_TIMEOUT', DEFAULT_TIMEOUT)
        self.key_store = key_store or ApiKeyStore()

    @property
    def api_key(self) -> str:
        if self._api_key is not None:
            return self._api_key
        return self.key_store.get_api_key()

    def _send_request(self, query: str, api_key: str) -> dict:
        url = f'{self.base_url}{query}'
        try:
            response = requests.get(
                url,
                params={'access_key': api_key},
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning(f"Geolocation request for {query} failed: {e}")
            raise NetworkError(str(e), {'query': query}) from e
        except requests.RequestException as e:
            logger.warning(f"Geolocation request for {query} could not be sent: {e}")
            raise GeolocationLookupError(str(e), {'query': query}) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"Geolocation request for {query} returned HTTP {response.status_code}")
            raise HttpError(response.status_code, {'query': query})

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError("Unreadable response from the geolocation API.", details={'query': query}) from e
        if not isinstance(data, dict):
            raise ApiError("Unexpected response from the geolocation API.", details={'query': query})
        return data

    def fetch(self, query: str) -> GeolocationRecord:
        """
        Look up `query` (an IP literal or a hostname).

        Returns an unsaved GeolocationRecord. Raises InvalidApiKey,
        InvalidQuery, NetworkError, HttpError or ApiError.
        """
        query = (query or '').strip()
        if not query:
            raise InvalidQuery()
        api_key = self.api_key
        if not api_key:
            raise MissingApiKey()

        data = self._send_request(query, api_key)
        code = _error_code(data)
        if code == ERROR_INVALID_ACCESS_KEY:
            raise InvalidApiKey(details={'query': query})
        if code == ERROR_INVALID_QUERY:
            raise InvalidQuery(details={'query': query})
        if code is not None:
            info = data['error'].get('info') or f"Geolocation API error {code}."
            raise ApiError(info, code=code, details={'query': query})

        record = parse_location(data)
        logger.info(f"Fetched geolocation for {query}: {record}")
        return record

    def check_api_key(self) -> ApiKeyStatus:
        """
        Probe the API with an always-resolvable host.

        Only error code 101 (or having no key at all) means INVALID. Any
        other answer, including other error codes, means VALID. A request
        that fails outright is UNREACHABLE.
        """
        api_key = self.api_key
        if not api_key:
            return ApiKeyStatus.INVALID
        probe = getattr(settings, 'IPSTACK_PROBE_QUERY', DEFAULT_PROBE_QUERY)
        try:
            data = self._send_request(probe, api_key)
        except GeolocationLookupError as e:
            logger.warning(f"Could not verify API key: {e}")
            return ApiKeyStatus.UNREACHABLE
        if _error_code(data) == ERROR_INVALID_ACCESS_KEY:
            return ApiKeyStatus.INVALID
        return ApiKeyStatus.VALID

    def validate_api_key(self) -> bool:
        """True only when the probe shows the key is accepted."""
        return self.check_api_key() is ApiKeyStatus.VALID
