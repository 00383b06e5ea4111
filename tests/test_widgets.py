"""
Widget preferences, render data, embed snippet and widget.js.
"""

import pytest

from brave_counters.modules.widgets.preferences import (
    WidgetValidationError,
    format_count,
    normalize_preference,
    render_text,
    text_template,
)
from tests.conftest import make_counter, make_group


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------

def test_set_widget_is_upsert(client, store):
    first = {'template': 'waitlist', 'customText': '', 'animate': False}
    second = {'template': 'custom', 'customText': '{count} happy students', 'animate': True}

    assert client.post('/api/widgets/a', json=first).status_code == 200
    response = client.put('/api/widgets/a', json=second)

    assert response.status_code == 200
    assert response.get_json()['widget'] == second
    widgets = client.get('/api/widgets').get_json()
    assert widgets == {'a': second}


def test_set_widget_applies_defaults(client):
    response = client.post('/api/widgets/a', json={})

    assert response.status_code == 200
    assert response.get_json()['widget'] == {'template': 'enrolled', 'customText': '', 'animate': True}


def test_set_widget_for_unknown_group_is_allowed(client, store):
    response = client.post('/api/widgets/not_yet_created', json={'template': 'enrolled'})

    assert response.status_code == 200
    assert 'not_yet_created' in store.get_widgets()
    assert store.list_groups() == []


def test_set_widget_rejects_unknown_template(client, store):
    response = client.post('/api/widgets/a', json={'template': 'fancy'})

    assert response.status_code == 400
    assert 'fancy' in response.get_json()['error']
    assert store.get_widgets() == {}


def test_set_widget_rejects_bad_animate(client, store):
    response = client.post('/api/widgets/a', json={'template': 'enrolled', 'animate': 'maybe'})

    assert response.status_code == 400
    assert store.get_widgets() == {}


def test_set_widget_from_form_data(client, store):
    response = client.post('/api/widgets/a', data={'template': 'waitlist', 'animate': 'off'})

    assert response.status_code == 200
    assert store.get_widget('a') == {'template': 'waitlist', 'customText': '', 'animate': False}


@pytest.mark.parametrize('value,expected', [
    (True, True), (False, False), ('true', True), ('FALSE', False),
    ('1', True), ('0', False), ('on', True), ('off', False), (1, True), (0, False),
])
def test_animate_parsing(value, expected):
    assert normalize_preference({'animate': value})['animate'] is expected


def test_custom_text_must_be_string():
    with pytest.raises(WidgetValidationError):
        normalize_preference({'template': 'custom', 'customText': 12})


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------

def test_text_templates():
    assert text_template({'template': 'enrolled'}) == '{count} people already enrolled'
    assert text_template({'template': 'waitlist'}) == '{count} people on the waitlist'
    assert text_template({'template': 'custom', 'customText': 'Join {count} others'}) == 'Join {count} others'
    assert text_template({'template': 'custom', 'customText': 'students'}) == '{count} students'
    assert text_template({'template': 'custom', 'customText': ''}) == '{count}'


def test_render_text_groups_thousands():
    assert format_count(999) == '999'
    assert format_count(12345) == '12\u2009345'
    assert render_text({'template': 'waitlist'}, 1200) == '1\u2009200 people on the waitlist'


# ---------------------------------------------------------------------------
# Public widget data
# ---------------------------------------------------------------------------

def test_widget_data_uses_defaults(client, store):
    store.append_group(make_group('a'))
    store.apply_counters({'a': make_counter(12345)})

    response = client.get('/api/widget/a')

    assert response.status_code == 200
    data = response.get_json()
    assert data['id'] == 'a'
    assert data['count'] == 12345
    assert data['template'] == 'enrolled'
    assert data['animate'] is True
    assert data['text'] == '12\u2009345 people already enrolled'
    assert data['textTemplate'] == '{count} people already enrolled'
    assert data['lastUpdate'] == make_counter(0)['lastUpdate']


def test_widget_data_uses_stored_preference(client, store):
    store.append_group(make_group('a'))
    store.apply_counters({'a': make_counter(8)})
    client.post('/api/widgets/a', json={'template': 'custom', 'customText': 'Already {count} of us!', 'animate': False})

    data = client.get('/api/widget/a').get_json()

    assert data['text'] == 'Already 8 of us!'
    assert data['animate'] is False


def test_widget_data_not_found(client, store):
    store.append_group(make_group('a'))

    assert client.get('/api/widget/a').status_code == 404
    assert client.get('/api/widget/nope').status_code == 404


# ---------------------------------------------------------------------------
# Embedding
# ---------------------------------------------------------------------------

def test_embed_snippet(client):
    response = client.get('/api/widgets/k1_webinar/embed')

    assert response.status_code == 200
    data = response.get_json()
    assert data['scriptUrl'] == 'https://counters.test/widget.js'
    assert '<div data-brave-counter="k1_webinar"></div>' in data['html']
    assert '<script async src="https://counters.test/widget.js"></script>' in data['html']


def test_widget_script(client):
    response = client.get('/widget.js')

    assert response.status_code == 200
    assert response.mimetype == 'application/javascript'
    body = response.get_data(as_text=True)
    assert '"https://counters.test"' in body
    assert '"data-brave-counter"' in body
    assert '/api/widget/' in body


def test_widget_endpoints_allow_cross_origin(client, store):
    store.append_group(make_group('a'))
    store.apply_counters({'a': make_counter(1)})

    response = client.get('/api/widget/a', headers={'Origin': 'https://landing.example.com'})

    assert response.headers.get('Access-Control-Allow-Origin') == '*'
