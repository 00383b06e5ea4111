"""
Groups Routes
=============
"""

import logging

from flask import current_app, jsonify, request

from . import groups_bp
from .registry import GroupValidationError, add_group, list_groups, remove_group, slugify_group_id

logger = logging.getLogger(__name__)


def _extension():
    return current_app.extensions['brave_counters']


def _request_payload():
    """JSON body, falling back to form data"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


@groups_bp.route('', methods=['GET'])
def get_groups():
    return jsonify(list_groups(_extension().store))


@groups_bp.route('/suggest-id', methods=['GET'])
def suggest_id():
    course_key = request.args.get('courseKey', '').strip()
    group_name = request.args.get('groupName', '').strip()
    return jsonify({'id': slugify_group_id(course_key, group_name)})


@groups_bp.route('', methods=['POST'])
def create_group():
    """Add a group and populate its counter before answering"""
    ext = _extension()

    try:
        group = add_group(ext.store, ext.courses, _request_payload())
    except GroupValidationError as e:
        return jsonify({'error': str(e)}), 400

    result = ext.refresh_service.run()
    if group['id'] not in result.updated:
        logger.warning(f"Group {group['id']} was added but its counter could not be fetched")

    return jsonify({
        'success': True,
        'group': group,
        'counter': ext.store.get_counter(group['id']),
    }), 201


@groups_bp.route('/<group_id>', methods=['DELETE'])
def delete_group(group_id):
    deleted = remove_group(_extension().store, group_id)
    return jsonify({'success': True, 'deleted': deleted})
