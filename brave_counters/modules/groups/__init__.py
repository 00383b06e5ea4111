"""
Groups Module
=============

Provides:
- GET /api/groups -- list registered groups
- GET /api/groups/suggest-id -- id suggestion for the admin form
- POST /api/groups -- add a group (validates, then runs a refresh cycle)
- DELETE /api/groups/<id> -- remove a group with its counter and widget settings
"""

from flask import Blueprint

groups_bp = Blueprint('groups', __name__, url_prefix='/api/groups')

from . import routes
