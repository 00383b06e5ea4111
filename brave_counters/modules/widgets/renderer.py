"""
Widget Renderer
===============

Builds the embeddable pieces of a counter widget: the HTML snippet a page owner
pastes into their site and the widget.js script that fills it in.
"""

import logging

from flask import current_app, render_template
from markupsafe import escape

from ...core.config import Config

logger = logging.getLogger(__name__)

WIDGET_ATTRIBUTE = 'data-brave-counter'


def get_base_url():
    """Externally visible base URL (no trailing slash)"""
    try:
        base_url = current_app.config.get('BASE_URL') or Config.BASE_URL
    except RuntimeError:
        base_url = Config.BASE_URL
    return base_url.rstrip('/')


def script_url(base_url=None):
    return f"{base_url or get_base_url()}/widget.js"


def embed_snippet(group_id, base_url=None):
    """HTML to paste where the counter should appear"""
    return (
        f'<div {WIDGET_ATTRIBUTE}="{escape(group_id)}"></div>\n'
        f'<script async src="{escape(script_url(base_url))}"></script>'
    )


def render_widget_script():
    """widget.js with the service's base URL baked in"""
    return render_template(
        'widgets/widget.js',
        base_url=get_base_url(),
        widget_attribute=WIDGET_ATTRIBUTE,
    )
