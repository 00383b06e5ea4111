"""
BRAVE Counters
==============

Polls MailerLite for the number of active subscribers in a set of tracked
groups (course cohorts, webinars, waitlists), caches the counts and serves
them over HTTP together with an admin page and embeddable widgets.

Usage:
    from flask import Flask
    from brave_counters import BraveCounters

    app = Flask(__name__)
    counters = BraveCounters(app)
    counters.start()   # startup refresh + refresh every REFRESH_INTERVAL seconds
"""

import logging
import os

from flask_cors import CORS

from .core.config import Config
from .core.courses import load_courses
from .core.logging_service import LoggingService
from .core.store import CounterStore
from .modules.counters.provider import MailerLiteClient
from .modules.counters.refresh import RefreshScheduler, RefreshService

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

CONFIG_DEFAULTS = (
    'DATA_DIR', 'DATA_FILE', 'LOG_DB', 'BASE_URL', 'PORT',
    'PROVIDER_API_URL', 'PROVIDER_TIMEOUT',
    'REFRESH_INTERVAL', 'REFRESH_MAX_WORKERS', 'REFRESH_ON_STARTUP', 'SCHEDULER_ENABLED',
    'LOG_LEVEL', 'LOG_RETENTION_DAYS',
)


class BraveCounters:
    """Flask extension wiring the store, MailerLite client, refresh cycle and blueprints"""

    def __init__(self, app=None):
        self.app = None
        self.store = None
        self.courses = {}
        self.client = None
        self.refresh_service = None
        self.scheduler = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))

        data_dir = app.config['DATA_DIR']
        if data_dir:
            os.makedirs(data_dir, exist_ok=True)

        LoggingService.init_app(app)

        self.courses = app.config.get('COURSES') or load_courses()

        self.store = CounterStore(app.config['DATA_FILE'])
        self.store.load()

        self.client = MailerLiteClient(
            base_url=app.config['PROVIDER_API_URL'],
            timeout=app.config['PROVIDER_TIMEOUT'],
        )
        self.refresh_service = RefreshService(
            self.store,
            self.courses,
            self.client,
            max_workers=app.config['REFRESH_MAX_WORKERS'],
        )
        self.scheduler = RefreshScheduler(
            self.refresh_service,
            interval=app.config['REFRESH_INTERVAL'],
            run_on_start=app.config['REFRESH_ON_STARTUP'],
            log_retention_days=app.config['LOG_RETENTION_DAYS'],
        )

        CORS(app, resources={
            r"/api/*": {"origins": "*"},
            r"/widget.js": {"origins": "*"},
        }, methods=['GET', 'POST', 'PUT', 'DELETE'], send_wildcard=True)

        self._register_blueprints(app)

        app.extensions['brave_counters'] = self
        self.app = app

        configured = [key for key, course in self.courses.items() if course.get('api_key')]
        logger.info(f"BRAVE Counters ready: {len(self.store.list_groups())} groups, "
                    f"{len(configured)}/{len(self.courses)} courses with API keys")

    def _register_blueprints(self, app):
        from .modules.counters import counters_bp
        from .modules.dashboard import dashboard_bp
        from .modules.groups import groups_bp
        from .modules.widgets import widget_public_bp, widgets_bp

        for blueprint in (dashboard_bp, groups_bp, counters_bp, widgets_bp, widget_public_bp):
            app.register_blueprint(blueprint)

    def get_registered_modules(self):
        if self.app is None:
            return []
        return list(self.app.blueprints.keys())

    def start(self):
        """Start the refresh schedule (no-op when SCHEDULER_ENABLED is off)"""
        if not self.app.config.get('SCHEDULER_ENABLED', True):
            logger.info("Refresh scheduler disabled")
            return
        self.scheduler.start()

    def stop(self):
        if self.scheduler is not None:
            self.scheduler.stop()


__all__ = ['BraveCounters', '__version__']
