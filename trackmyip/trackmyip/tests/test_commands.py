import json
from io import StringIO

import pytest
import responses
from django.core.management import call_command
from django.core.management.base import CommandError

from trackmyip.models import GeolocationRecord
from trackmyip.settings_store import ApiKeyStore

from .fakes import TEST_BASE_URL, error_payload, location_payload

pytestmark = pytest.mark.django_db


def run(*args, **kwargs):
    out = StringIO()
    call_command(*args, stdout=out, **kwargs)
    return out.getvalue()


def stored(**fields):
    values = {
        'ip': '8.8.8.8',
        'country': 'United States',
        'region': 'California',
        'city': 'Mountain View',
        'latitude': 37.386,
        'longitude': -122.0838,
    }
    values.update(fields)
    return GeolocationRecord.objects.create(**values)


class TestLookupIp:

    @responses.activate
    def test_adds_geolocation(self, ipstack_settings):
        responses.add(responses.GET, f'{TEST_BASE_URL}134.201.250.155', json=location_payload())

        output = run('lookup_ip', '134.201.250.155')

        assert 'Added geolocation' in output
        record = GeolocationRecord.objects.get()
        assert record.ip == '134.201.250.155'
        assert record.city == 'Los Angeles'

    @responses.activate
    def test_rejects_duplicate(self, ipstack_settings):
        stored(ip='134.201.250.155')
        responses.add(responses.GET, f'{TEST_BASE_URL}134.201.250.155', json=location_payload())
        out = StringIO()

        with pytest.raises(CommandError):
            call_command('lookup_ip', '134.201.250.155', stdout=out)

        assert 'already exists' in out.getvalue()
        assert GeolocationRecord.objects.count() == 1

    @responses.activate
    def test_reports_lookup_failure(self, ipstack_settings):
        responses.add(responses.GET, f'{TEST_BASE_URL}1.2.3.4', json=error_payload(101))
        out = StringIO()

        with pytest.raises(CommandError):
            call_command('lookup_ip', '1.2.3.4', stdout=out)

        assert 'Invalid API key.' in out.getvalue()
        assert not GeolocationRecord.objects.exists()

    @responses.activate
    def test_adds_each_query(self, ipstack_settings):
        responses.add(responses.GET, f'{TEST_BASE_URL}1.1.1.1', json=location_payload(ip='1.1.1.1'))
        responses.add(responses.GET, f'{TEST_BASE_URL}9.9.9.9', json=location_payload(ip='9.9.9.9'))

        run('lookup_ip', '1.1.1.1', '9.9.9.9')

        assert list(GeolocationRecord.objects.values_list('ip', flat=True)) == ['1.1.1.1', '9.9.9.9']


class TestListGeolocations:

    def test_empty(self):
        assert 'No geolocations stored' in run('list_geolocations')

    def test_lists_records(self):
        stored(ip='8.8.8.8')
        stored(ip='1.1.1.1', city='Brisbane')

        lines = run('list_geolocations').splitlines()

        assert len(lines) == 2
        assert '8.8.8.8' in lines[0]
        assert 'Brisbane' in lines[1]

    def test_json(self):
        record = stored()

        data = json.loads(run('list_geolocations', '--json'))

        assert data == [{
            'id': record.pk,
            'ip': '8.8.8.8',
            'country': 'United States',
            'region': 'California',
            'city': 'Mountain View',
            'latitude': 37.386,
            'longitude': -122.0838,
        }]


class TestUpdateGeolocation:

    def test_updates_given_fields(self):
        record = stored()

        output = run('update_geolocation', record.pk, '--city', 'Sunnyvale', '--latitude', '37.37')

        record.refresh_from_db()
        assert record.city == 'Sunnyvale'
        assert record.latitude == 37.37
        assert record.ip == '8.8.8.8'
        assert 'Sunnyvale' in output

    def test_requires_a_field(self):
        record = stored()

        with pytest.raises(CommandError):
            run('update_geolocation', record.pk)

    def test_unknown_id(self):
        with pytest.raises(CommandError):
            run('update_geolocation', 999, '--city', 'Nowhere')

    def test_rejects_invalid_latitude(self):
        record = stored()

        with pytest.raises(CommandError):
            run('update_geolocation', record.pk, '--latitude', '123')

        record.refresh_from_db()
        assert record.latitude == 37.386


class TestDeleteGeolocation:

    def test_delete_with_yes(self):
        record = stored()

        output = run('delete_geolocation', record.pk, '--yes')

        assert 'Deleted geolocation' in output
        assert not GeolocationRecord.objects.exists()

    def test_delete_asks_for_confirmation(self, mocker):
        record = stored()
        prompt = mocker.patch('builtins.input', return_value='n')

        output = run('delete_geolocation', record.pk)

        prompt.assert_called_once()
        assert 'Deletion cancelled' in output
        assert GeolocationRecord.objects.filter(pk=record.pk).exists()

    def test_delete_confirmed(self, mocker):
        record = stored()
        mocker.patch('builtins.input', return_value='y')

        run('delete_geolocation', record.pk)

        assert not GeolocationRecord.objects.exists()

    def test_delete_unknown_id(self):
        stored()

        output = run('delete_geolocation', 999, '--yes')

        assert 'does not exist' in output
        assert GeolocationRecord.objects.count() == 1


class TestApiKey:

    def test_shows_masked_key(self, ipstack_settings):
        ApiKeyStore().set_api_key('0123456789abcdef')

        output = run('api_key')

        assert 'API key: ************cdef' in output
        assert '0123456789' not in output

    def test_no_key(self, settings):
        settings.IPSTACK_API_KEY = ''

        assert 'No API key configured' in run('api_key')

    def test_set_key(self, ipstack_settings):
        output = run('api_key', '--set', 'new-key-1234')

        assert 'Settings saved.' in output
        assert ApiKeyStore().get_api_key() == 'new-key-1234'

    def test_clear_key(self, ipstack_settings):
        ApiKeyStore().set_api_key('stored-key')

        run('api_key', '--clear')

        assert ApiKeyStore().get_api_key() == 'test-key'

    @responses.activate
    def test_check_valid_key(self, ipstack_settings):
        responses.add(responses.GET, f'{TEST_BASE_URL}www.google.pl', json=location_payload())

        output = run('api_key', '--check')

        assert 'The API key is valid.' in output
        assert responses.calls[0].request.url.endswith('access_key=test-key')

    @responses.activate
    def test_check_invalid_key(self, ipstack_settings):
        responses.add(responses.GET, f'{TEST_BASE_URL}www.google.pl', json=error_payload(101))

        with pytest.raises(CommandError, match='invalid'):
            run('api_key', '--check')

    def test_open_website(self, ipstack_settings, mocker):
        browser = mocker.patch('trackmyip.navigation.webbrowser.open', return_value=True)

        run('api_key', '--website')

        browser.assert_called_once_with('https://ipstack.com/')


class TestOpenMap:

    def test_opens_browser(self, mocker):
        record = stored()
        browser = mocker.patch('trackmyip.navigation.webbrowser.open', return_value=True)

        output = run('open_map', record.pk)

        browser.assert_called_once_with(record.as_map_url())
        assert 'Opened' in output

    def test_unknown_id(self, mocker):
        browser = mocker.patch('trackmyip.navigation.webbrowser.open')

        with pytest.raises(CommandError):
            run('open_map', 999)
        browser.assert_not_called()
