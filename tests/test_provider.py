"""
MailerLite client.
"""

import pytest
import requests

from brave_counters.modules.counters.provider import MailerLiteClient, ProviderError
from tests.conftest import PROVIDER_API_URL


@pytest.fixture
def ml_client():
    return MailerLiteClient(base_url=PROVIDER_API_URL + '/', timeout=3)


def test_group_url(ml_client):
    assert ml_client.group_url('123') == f'{PROVIDER_API_URL}/groups/123'
    assert ml_client.group_url('a/b') == f'{PROVIDER_API_URL}/groups/a%2Fb'


def test_get_group_returns_body(ml_client, mailerlite):
    mailerlite.responses['123'] = (200, {'id': 123, 'active': 8})

    assert ml_client.get_group('123', 'secret') == {'id': 123, 'active': 8}
    call = mailerlite.calls[0]
    assert call['headers']['X-MailerLite-ApiKey'] == 'secret'
    assert call['timeout'] == 3


def test_get_group_http_error(ml_client, mailerlite):
    mailerlite.responses['123'] = (401, {'error': {'message': 'Unauthorized'}})

    with pytest.raises(ProviderError) as exc_info:
        ml_client.get_group('123', 'wrong')
    assert exc_info.value.status_code == 401


def test_get_group_network_error(ml_client, mailerlite):
    mailerlite.responses['123'] = requests.ConnectionError('no route to host')

    with pytest.raises(ProviderError):
        ml_client.get_group('123', 'secret')


def test_get_group_non_object_body(ml_client, mailerlite):
    mailerlite.responses['123'] = (200, ['not', 'a', 'group'])

    with pytest.raises(ProviderError):
        ml_client.get_group('123', 'secret')


@pytest.mark.parametrize('active,expected', [(0, 0), (42, 42), ('17', 17), (5.0, 5), (None, 0)])
def test_active_count_accepted(ml_client, mailerlite, active, expected):
    mailerlite.responses['123'] = (200, {'active': active})

    assert ml_client.get_active_count('123', 'secret') == expected


@pytest.mark.parametrize('active', [-3, 2.5, True, 'many', [1], float('inf')])
def test_active_count_rejected(ml_client, mailerlite, active):
    mailerlite.responses['123'] = (200, {'active': active})

    with pytest.raises(ProviderError):
        ml_client.get_active_count('123', 'secret')
