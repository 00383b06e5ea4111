"""
Widget Preferences
==================

How a group's counter is shown when embedded on a page:

    {"template": "enrolled" | "waitlist" | "custom", "customText": str, "animate": bool}

Preferences are keyed by group id and may be set before the group exists.
"""

from ...core.logging_service import LoggingService

WIDGET_TEMPLATES = ('enrolled', 'waitlist', 'custom')

TEMPLATE_TEXTS = {
    'enrolled': '{count} people already enrolled',
    'waitlist': '{count} people on the waitlist',
}

DEFAULT_PREFERENCE = {
    'template': 'enrolled',
    'customText': '',
    'animate': True,
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')

LOG_SOURCE = 'widgets'


class WidgetValidationError(ValueError):
    """Rejected preference update; the message is shown to the caller"""


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise WidgetValidationError(f"Invalid value for animate: {value!r}")


def normalize_preference(payload):
    """Build a full preference from a request payload, applying defaults"""
    payload = payload or {}

    template = payload.get('template', DEFAULT_PREFERENCE['template'])
    template = str(template).strip().lower() if template is not None else ''
    if template not in WIDGET_TEMPLATES:
        raise WidgetValidationError(
            f"Unknown template {template!r}, expected one of: {', '.join(WIDGET_TEMPLATES)}"
        )

    custom_text = payload.get('customText', '')
    if custom_text is None:
        custom_text = ''
    if not isinstance(custom_text, str):
        raise WidgetValidationError("customText must be a string")

    animate = payload.get('animate', DEFAULT_PREFERENCE['animate'])

    return {
        'template': template,
        'customText': custom_text.strip(),
        'animate': _parse_bool(animate),
    }


def set_preference(store, group_id, payload):
    """Create or replace the widget preference of a group"""
    preference = normalize_preference(payload)
    store.put_widget(group_id, preference)
    LoggingService.info(LOG_SOURCE, f"Updated widget for {group_id}", preference)
    return preference


def get_preferences(store):
    return store.get_widgets()


def get_preference(store, group_id):
    """Stored preference with defaults filled in"""
    preference = dict(DEFAULT_PREFERENCE)
    preference.update(store.get_widget(group_id) or {})
    return preference


def text_template(preference):
    """Display text with a {count} placeholder"""
    if preference['template'] == 'custom':
        text = preference.get('customText') or ''
        if not text:
            return '{count}'
        if '{count}' not in text:
            return '{count} ' + text
        return text
    return TEMPLATE_TEXTS[preference['template']]


def format_count(count):
    """Group thousands with a thin space"""
    return f"{count:,}".replace(',', '\u2009')


def render_text(preference, count):
    return text_template(preference).replace('{count}', format_count(count))


def build_widget_data(store, group_id):
    """Everything widget.js needs to draw one counter, or None if there is no counter"""
    counter = store.get_counter(group_id)
    if counter is None:
        return None

    preference = get_preference(store, group_id)
    count = counter.get('count', 0)
    return {
        'id': group_id,
        'count': count,
        'text': render_text(preference, count),
        'textTemplate': text_template(preference),
        'template': preference['template'],
        'animate': preference['animate'],
        'lastUpdate': counter.get('lastUpdate'),
    }
