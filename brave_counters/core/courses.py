"""
Course Registry
===============

Static mapping of course keys to a display name and the MailerLite API key of
that course's account. Each course lives in its own MailerLite account, so the
API key is what decides whether groups can be tracked for it.

API keys come from ML_API_KEY_<KEY> environment variables (key upper-cased).
"""

import os

# key -> display name
COURSE_NAMES = {
    'ai_marketers': 'AI_marketers',
    'ai_managers': 'AI_managers',
    'ai_ready_hr': 'AI Ready HR',
    'excel_ai': 'Excel AI',
    '10xdevs': '10xDevs',
    'ai_product_heroes': 'AI Product Heroes',
}


def api_key_env_name(course_key):
    """ML_API_KEY_<KEY> for a course key"""
    return f"ML_API_KEY_{course_key.upper()}"


def load_courses(names=None):
    """Build the course registry from the environment.

    Returns:
        dict of course key -> {'name': str, 'api_key': str}
    """
    names = names or COURSE_NAMES
    return {
        key: {
            'name': name,
            'api_key': os.getenv(api_key_env_name(key), '').strip(),
        }
        for key, name in names.items()
    }


def get_course(courses, course_key):
    """Return the course config for a key, or None"""
    if not course_key:
        return None
    return courses.get(course_key)


def has_api_key(course):
    return bool(course and course.get('api_key'))


def course_choices(courses):
    """Courses for the admin select box. Never includes the API key itself."""
    return [
        {
            'key': key,
            'name': course['name'],
            'hasApiKey': has_api_key(course),
        }
        for key, course in courses.items()
    ]
