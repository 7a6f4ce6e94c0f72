"""Test doubles and payload builders shared by the TrackMyIP tests."""
from trackmyip.models import GeolocationRecord

TEST_BASE_URL = 'http://api.ipstack.test/'
TEST_API_KEY = 'test-key'


def make_record(pk=None, **fields):
    values = {
        'ip': '134.201.250.155',
        'country': 'United States',
        'region': 'California',
        'city': 'Los Angeles',
        'latitude': 34.0456,
        'longitude': -118.2416,
    }
    values.update(fields)
    return GeolocationRecord(pk=pk, **values)


def location_payload(**fields):
    """A successful ipstack response body."""
    data = {
        'ip': '134.201.250.155',
        'type': 'ipv4',
        'country_name': 'United States',
        'region_name': 'California',
        'city': 'Los Angeles',
        'latitude': 34.04563903808594,
        'longitude': -118.24163818359375,
    }
    data.update(fields)
    return data


def error_payload(code, info='error'):
    return {'success': False, 'error': {'code': code, 'type': 'error', 'info': info}}


class FakeRepository:
    """In-memory stand-in for GeolocationRepository."""

    def __init__(self, records=None):
        self.rows = {}
        self.next_id = 1
        self.calls = []
        self.on_call = None
        for record in records or []:
            self._insert(record)

    def _insert(self, record):
        record.pk = self.next_id
        self.next_id += 1
        self.rows[record.pk] = GeolocationRecord(pk=record.pk, **record.field_values())
        return record

    def _track(self, name):
        self.calls.append(name)
        if self.on_call is not None:
            self.on_call(name)

    async def list_all(self):
        self._track('list_all')
        return [GeolocationRecord(pk=pk, **row.field_values()) for pk, row in self.rows.items()]

    async def add(self, record):
        self._track('add')
        return self._insert(record)

    async def update(self, record):
        self._track('update')
        row = self.rows.get(record.pk)
        if row is None:
            return False
        row.copy_from(record)
        return True

    async def delete(self, record_id):
        self._track('delete')
        return self.rows.pop(record_id, None) is not None


class FakeClient:
    """Lookup client returning a copy of `result` or raising `error`."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.queries = []

    def fetch(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return GeolocationRecord(**self.result.field_values())


class RecordingDialogs:
    """DialogService that records messages and answers confirmations with `answer`."""

    def __init__(self, answer=True):
        self.answer = answer
        self.messages = []
        self.questions = []

    async def show_message(self, title, message):
        self.messages.append((title, message))

    async def confirm(self, title, message):
        self.questions.append((title, message))
        return self.answer
