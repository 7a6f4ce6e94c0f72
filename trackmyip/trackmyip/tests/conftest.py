"""
Shared fixtures for TrackMyIP tests.

Controller tests run against in-memory fakes of the repository, lookup
client and dialog service; repository and command tests use the
pytest-django test database.
"""
import pytest

from .fakes import FakeRepository, RecordingDialogs, TEST_API_KEY, TEST_BASE_URL


@pytest.fixture
def ipstack_settings(settings):
    settings.IPSTACK_API_KEY = TEST_API_KEY
    settings.IPSTACK_BASE_URL = TEST_BASE_URL
    settings.IPSTACK_TIMEOUT = 5
    return settings


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def dialogs():
    return RecordingDialogs()
