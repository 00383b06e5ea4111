"""
BRAVE Counters Core
===================

Configuration, course registry, the JSON document store and activity logging.
"""

from .config import Config
from .logging_service import LoggingService, db_log, configure_logging
from .store import CounterStore, DuplicateGroupError

__all__ = ['Config', 'LoggingService', 'db_log', 'configure_logging', 'CounterStore', 'DuplicateGroupError']
