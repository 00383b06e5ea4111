"""
Widgets Module
==============

Embeddable counter widgets.

Admin API:
- GET /api/widgets -- all widget preferences
- POST|PUT /api/widgets/<id> -- set a group's widget preference
- GET /api/widgets/<id>/embed -- HTML snippet to paste into a page

Public:
- GET /api/widget/<id> -- render data used by widget.js
- GET /widget.js -- the embed script
"""

from flask import Blueprint

widgets_bp = Blueprint(
    'widgets',
    __name__,
    url_prefix='/api/widgets',
    template_folder='templates'
)

widget_public_bp = Blueprint(
    'widget_public',
    __name__,
    template_folder='templates'
)

from . import routes
