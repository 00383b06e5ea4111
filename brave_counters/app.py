"""
BRAVE Counters Application
==========================

Run with:
    brave-counters            (console script)
    python -m brave_counters.app

Visit:
    http://localhost:3000          - Service status
    http://localhost:3000/admin    - Admin panel
"""

import logging

from flask import Flask

from . import BraveCounters
from .core.config import Config
from .core.logging_service import configure_logging

logger = logging.getLogger(__name__)


def create_app(config_overrides=None):
    """Application factory"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    BraveCounters(app)
    return app


def main():
    configure_logging()
    app = create_app()
    counters = app.extensions['brave_counters']
    counters.start()

    port = app.config['PORT']
    logger.info(f"Server listening on port {port}")
    logger.info(f"Admin panel: http://localhost:{port}/admin")
    try:
        app.run(host='0.0.0.0', port=port, use_reloader=False)
    finally:
        counters.stop()


if __name__ == '__main__':
    main()
