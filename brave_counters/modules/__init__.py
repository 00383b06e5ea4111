"""
BRAVE Counters Modules
======================

Flask blueprints for the service: groups, counters, widgets and the admin dashboard.
"""

__all__ = ['counters', 'dashboard', 'groups', 'widgets']
