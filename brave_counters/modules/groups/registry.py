"""
Group Registry
==============

A group is one tracked MailerLite group (webinar, cohort or waitlist):

    {
        "id": "ai_marketers_kohorta_luty_2026",   # URL-safe, unique
        "courseKey": "ai_marketers",               # must be a configured course
        "groupName": "Kohorta luty 2026",          # display name
        "groupId": "123456789"                     # MailerLite group id
    }
"""

import re
import unicodedata

from ...core.courses import get_course, has_api_key
from ...core.logging_service import LoggingService
from ...core.store import DuplicateGroupError

REQUIRED_FIELDS = ('courseKey', 'groupName', 'id', 'groupId')

GROUP_ID_REGEX = re.compile(r'^[A-Za-z0-9_-]+$')

LOG_SOURCE = 'groups'


class GroupValidationError(ValueError):
    """Rejected add request; the message is shown to the caller"""


def slugify_group_id(course_key, group_name):
    """Suggested group id: '<courseKey>_<slug of group name>'"""
    if not course_key or not group_name:
        return ''
    ascii_name = unicodedata.normalize('NFKD', group_name)
    ascii_name = ascii_name.encode('ascii', 'ignore').decode('ascii')
    slug = re.sub(r'[^a-z0-9]+', '_', ascii_name.lower()).strip('_')
    if not slug:
        return ''
    return f"{course_key}_{slug}"


def normalize_group(payload):
    """Pick the group fields out of a request payload, trimming strings"""
    group = {}
    for field in REQUIRED_FIELDS:
        value = payload.get(field) if payload else None
        if value is None:
            value = ''
        group[field] = str(value).strip()
    return group


def validate_group(group, courses, existing_ids):
    """Raise GroupValidationError if the group cannot be added"""
    missing = [field for field in REQUIRED_FIELDS if not group.get(field)]
    if missing:
        raise GroupValidationError(f"Missing required fields: {', '.join(missing)}")

    course = get_course(courses, group['courseKey'])
    if course is None:
        raise GroupValidationError(f"Unknown course: {group['courseKey']}")

    if not has_api_key(course):
        raise GroupValidationError(f"No MailerLite API key configured for course {course['name']}")

    if not GROUP_ID_REGEX.match(group['id']):
        raise GroupValidationError("Group id may only contain letters, digits, '_' and '-'")

    if group['id'] in existing_ids:
        raise GroupValidationError(f"A group with id {group['id']} already exists")


def add_group(store, courses, payload):
    """Validate and register a new group. Returns the stored group."""
    group = normalize_group(payload)
    existing_ids = {g.get('id') for g in store.list_groups()}
    validate_group(group, courses, existing_ids)

    try:
        store.append_group(group)
    except DuplicateGroupError:
        # Lost a race with a concurrent add of the same id
        raise GroupValidationError(f"A group with id {group['id']} already exists") from None

    LoggingService.info(LOG_SOURCE, f"Added group {group['id']}", group)
    return group


def remove_group(store, group_id):
    """Remove a group with its counter and widget preference. Unknown ids are a no-op."""
    removed = store.delete_group(group_id)
    if removed:
        LoggingService.info(LOG_SOURCE, f"Removed group {group_id}")
    return removed


def list_groups(store):
    return store.list_groups()
