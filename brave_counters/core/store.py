"""
Counter Store
=============

The whole persisted state is one JSON document:

    {
        "groups":   [Group, ...],
        "counters": {group_id: CounterEntry},
        "widgets":  {group_id: WidgetPreference}
    }

Every mutation rewrites the whole document. All reads hand out copies and all
mutations (including the write to disk) happen under a single lock, so the
refresh cycle and registry edits never lose each other's updates.
"""

import copy
import json
import logging
import os
import tempfile
import threading

logger = logging.getLogger(__name__)


class DuplicateGroupError(ValueError):
    """A group with this id is already registered"""


def empty_document():
    return {'groups': [], 'counters': {}, 'widgets': {}}


class CounterStore:
    """JSON document store for groups, counters and widget preferences"""

    def __init__(self, path):
        self.path = path
        self._lock = threading.RLock()
        self._data = empty_document()

    # ===== Persistence =====

    def load(self):
        """Read the document from disk, starting empty if there is none"""
        with self._lock:
            if not os.path.exists(self.path):
                logger.info(f"No data file at {self.path}, starting with an empty store")
                self._data = empty_document()
                return

            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError(f"Data file {self.path} does not hold a JSON object")

            document = empty_document()
            document['groups'] = list(data.get('groups') or [])
            document['counters'] = dict(data.get('counters') or {})
            document['widgets'] = dict(data.get('widgets') or {})
            self._data = document
            logger.info(f"Loaded {len(document['groups'])} groups from {self.path}")

    def persist(self):
        """Write the whole document atomically (temp file + rename)"""
        with self._lock:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(prefix='.db-', suffix='.json', dir=directory)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise

    def snapshot(self):
        with self._lock:
            return copy.deepcopy(self._data)

    # ===== Groups =====

    def list_groups(self):
        with self._lock:
            return copy.deepcopy(self._data['groups'])

    def get_group(self, group_id):
        with self._lock:
            for group in self._data['groups']:
                if group.get('id') == group_id:
                    return dict(group)
            return None

    def has_group(self, group_id):
        return self.get_group(group_id) is not None

    def append_group(self, group):
        """Add a group and persist. Raises DuplicateGroupError if the id is taken."""
        with self._lock:
            if any(g.get('id') == group['id'] for g in self._data['groups']):
                raise DuplicateGroupError(group['id'])
            self._data['groups'].append(dict(group))
            self.persist()

    def delete_group(self, group_id):
        """Remove a group together with its counter and widget preference.

        Returns True if the group existed. Unknown ids are a no-op: nothing is
        removed and nothing is written.
        """
        with self._lock:
            groups = self._data['groups']
            remaining = [g for g in groups if g.get('id') != group_id]
            if len(remaining) == len(groups):
                return False

            self._data['groups'] = remaining
            self._data['counters'].pop(group_id, None)
            self._data['widgets'].pop(group_id, None)
            self.persist()
            return True

    # ===== Counters =====

    def get_counters(self):
        with self._lock:
            return copy.deepcopy(self._data['counters'])

    def get_counter(self, group_id):
        with self._lock:
            entry = self._data['counters'].get(group_id)
            return dict(entry) if entry is not None else None

    def apply_counters(self, entries):
        """Write fresh counter entries and persist once.

        Entries for groups that are no longer registered are dropped.
        Returns the ids that were written.
        """
        with self._lock:
            registered = {g.get('id') for g in self._data['groups']}
            written = []
            for group_id, entry in entries.items():
                if group_id not in registered:
                    logger.info(f"Dropping counter for removed group {group_id}")
                    continue
                self._data['counters'][group_id] = dict(entry)
                written.append(group_id)
            self.persist()
            return written

    # ===== Widget preferences =====

    def get_widgets(self):
        with self._lock:
            return copy.deepcopy(self._data['widgets'])

    def get_widget(self, group_id):
        with self._lock:
            pref = self._data['widgets'].get(group_id)
            return dict(pref) if pref is not None else None

    def put_widget(self, group_id, preference):
        with self._lock:
            self._data['widgets'][group_id] = dict(preference)
            self.persist()
