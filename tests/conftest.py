"""
Shared fixtures
===============

Every test gets its own data directory and a Flask app with the scheduler off.
MailerLite is never called for real: the `mailerlite` fixture patches requests.get
in the provider module and answers from a dict keyed by MailerLite group id.

Run with: pytest tests/ -v
"""

import os
import shutil
import tempfile
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from brave_counters.app import create_app

TEST_COURSES = {
    'k1': {'name': 'Course One', 'api_key': 'key-1'},
    'k2': {'name': 'Course Two', 'api_key': 'key-2'},
    'nokey': {'name': 'No Key Course', 'api_key': ''},
}

PROVIDER_API_URL = 'https://api.mailerlite.test/api/v2'


def fake_response(status, body):
    """Stand-in for requests.Response"""
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.text = str(body)
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def tmp_data_dir():
    """Temporary data directory, cleaned up after."""
    d = tempfile.mkdtemp(prefix="brave-counters-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


def make_config(data_dir, **overrides):
    config = {
        'TESTING': True,
        'DATA_DIR': data_dir,
        'DATA_FILE': os.path.join(data_dir, 'db.json'),
        'LOG_DB': os.path.join(data_dir, 'activity_log.db'),
        'BASE_URL': 'https://counters.test',
        'PROVIDER_API_URL': PROVIDER_API_URL,
        'PROVIDER_TIMEOUT': 5,
        'REFRESH_MAX_WORKERS': 2,
        'SCHEDULER_ENABLED': False,
        'REFRESH_ON_STARTUP': False,
        'COURSES': {key: dict(course) for key, course in TEST_COURSES.items()},
    }
    config.update(overrides)
    return config


@pytest.fixture
def app(tmp_data_dir):
    """Flask app with BRAVE Counters initialised against a temp data dir"""
    return create_app(make_config(tmp_data_dir))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ext(app):
    """The BraveCounters extension of the test app"""
    return app.extensions['brave_counters']


@pytest.fixture
def store(ext):
    return ext.store


@pytest.fixture
def mailerlite():
    """
    Fake MailerLite. Set responses[group_id] to (status, body) or to an exception
    instance to raise it. Unknown ids answer 404.
    """
    responses = {}
    calls = []

    def fake_get(url, headers=None, timeout=None, **kwargs):
        group_id = url.rsplit('/', 1)[-1]
        calls.append({'url': url, 'headers': headers, 'timeout': timeout, 'group_id': group_id})
        outcome = responses.get(group_id, (404, {'error': {'message': 'Group not found'}}))
        if callable(outcome) and not isinstance(outcome, Exception):
            outcome = outcome()
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        return fake_response(status, body)

    with patch('brave_counters.modules.counters.provider.requests.get', side_effect=fake_get) as mock_get:
        yield SimpleNamespace(responses=responses, calls=calls, mock=mock_get)


def make_group(group_id, course_key='k1', provider_id='111', name=None):
    return {
        'id': group_id,
        'courseKey': course_key,
        'groupName': name or f'Group {group_id}',
        'groupId': provider_id,
    }


def make_counter(count, course_name='Course One', group_name='Group', last_update='2000-01-01T00:00:00+00:00'):
    return {
        'courseName': course_name,
        'groupName': group_name,
        'count': count,
        'lastUpdate': last_update,
    }
