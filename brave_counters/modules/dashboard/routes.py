"""
Dashboard Routes
================
"""

from flask import current_app, jsonify, render_template, request

from . import dashboard_bp
from ...core.courses import course_choices
from ...core.logging_service import LoggingService
from ..widgets.preferences import WIDGET_TEMPLATES
from ..widgets.renderer import get_base_url, script_url

MAX_LOG_LIMIT = 500
DEFAULT_LOG_LIMIT = 50


def _extension():
    return current_app.extensions['brave_counters']


@dashboard_bp.route('/', methods=['GET'])
def status():
    """Service status"""
    return jsonify({
        'status': 'ok',
        'service': 'BRAVE Courses Counters API',
        'totalGroups': len(_extension().store.list_groups()),
        'adminPanel': '/admin',
    })


@dashboard_bp.route('/admin', methods=['GET'])
def admin():
    """Admin page"""
    ext = _extension()
    return render_template(
        'dashboard/admin.html',
        courses=course_choices(ext.courses),
        widget_templates=WIDGET_TEMPLATES,
        base_url=get_base_url(),
        script_url=script_url(),
        refresh_interval=current_app.config.get('REFRESH_INTERVAL'),
    )


@dashboard_bp.route('/api/courses', methods=['GET'])
def courses():
    return jsonify(course_choices(_extension().courses))


@dashboard_bp.route('/api/logs', methods=['GET'])
def logs():
    """Recent activity, newest first"""
    limit = request.args.get('limit', DEFAULT_LOG_LIMIT, type=int)
    limit = max(1, min(limit, MAX_LOG_LIMIT))
    source = request.args.get('source') or None
    return jsonify(LoggingService.get_recent_logs(limit=limit, source=source))
