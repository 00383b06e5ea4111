"""
Dashboard Module
================

Provides:
- GET / -- service status
- GET /admin -- admin page (groups, counters, widgets, activity)
- GET /api/courses -- configured courses (without API keys)
- GET /api/logs -- recent activity log entries
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'dashboard',
    __name__,
    template_folder='templates'
)

from . import routes
