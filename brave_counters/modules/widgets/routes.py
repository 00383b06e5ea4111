"""
Widgets Routes
==============
"""

from flask import Response, current_app, jsonify, request

from . import widgets_bp, widget_public_bp
from .preferences import WidgetValidationError, build_widget_data, get_preferences, set_preference
from .renderer import embed_snippet, render_widget_script, script_url


def _store():
    return current_app.extensions['brave_counters'].store


# ===== Admin API =====

@widgets_bp.route('', methods=['GET'])
def list_widgets():
    return jsonify(get_preferences(_store()))


@widgets_bp.route('/<group_id>', methods=['POST', 'PUT'])
def save_widget(group_id):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form.to_dict()

    try:
        preference = set_preference(_store(), group_id, payload)
    except WidgetValidationError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({'success': True, 'widget': preference})


@widgets_bp.route('/<group_id>/embed', methods=['GET'])
def widget_embed(group_id):
    return jsonify({
        'html': embed_snippet(group_id),
        'scriptUrl': script_url(),
    })


# ===== Public =====

@widget_public_bp.route('/api/widget/<group_id>', methods=['GET'])
def widget_data(group_id):
    data = build_widget_data(_store(), group_id)
    if data is None:
        return jsonify({'error': f'No counter for group {group_id}'}), 404
    return jsonify(data)


@widget_public_bp.route('/widget.js', methods=['GET'])
def widget_script():
    response = Response(render_widget_script(), mimetype='application/javascript')
    response.headers['Cache-Control'] = 'public, max-age=300'
    return response
