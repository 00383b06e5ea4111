"""
Counters Module
===============

Provides:
- GET /api/counters -- all cached counters
- GET /api/counter/<id> -- one counter (404 if none)
- GET|POST /api/refresh -- run a refresh cycle now

The refresh cycle itself lives in refresh.py, the MailerLite client in provider.py.
"""

from flask import Blueprint

counters_bp = Blueprint('counters', __name__, url_prefix='/api')

from . import routes
