"""
Counters Routes
===============
"""

from flask import current_app, jsonify

from . import counters_bp


def _extension():
    return current_app.extensions['brave_counters']


@counters_bp.route('/counters', methods=['GET'])
def list_counters():
    """All counters keyed by group id"""
    return jsonify(_extension().store.get_counters())


@counters_bp.route('/counter/<group_id>', methods=['GET'])
def get_counter(group_id):
    entry = _extension().store.get_counter(group_id)
    if entry is None:
        return jsonify({'error': f'No counter for group {group_id}'}), 404
    return jsonify(entry)


@counters_bp.route('/refresh', methods=['GET', 'POST'])
def refresh():
    """Run a refresh cycle and return the resulting counters"""
    ext = _extension()
    result = ext.refresh_service.run()
    return jsonify({
        'status': 'refreshed',
        'data': ext.store.get_counters(),
        'summary': result.summary(),
    })
