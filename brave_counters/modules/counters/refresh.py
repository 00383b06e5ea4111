"""
Refresh Cycle
=============

Fetches the active subscriber count of every registered group from MailerLite
and writes the results into the counter cache.

- Groups whose course is unknown or has no API key are skipped.
- A failing group is logged and keeps its previous counter entry.
- Provider calls run on a small thread pool, each with a request timeout.
- All results are written to the store in one go (one persist per cycle).
- Cycles never overlap: a trigger that arrives mid-cycle waits for it to finish
  and then runs its own.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone

from ...core.courses import get_course, has_api_key
from ...core.logging_service import LoggingService
from .provider import ProviderError

logger = logging.getLogger(__name__)

LOG_SOURCE = 'refresh'


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


class RefreshResult:
    """Outcome of one refresh cycle"""

    def __init__(self, started_at):
        self.started_at = started_at
        self.finished_at = None
        self.updated = []
        self.failed = []
        self.skipped = []

    def summary(self):
        return {
            'updated': list(self.updated),
            'failed': list(self.failed),
            'skipped': list(self.skipped),
            'startedAt': self.started_at,
            'finishedAt': self.finished_at,
        }

    def __repr__(self):
        return (f"<RefreshResult updated={len(self.updated)} failed={len(self.failed)} "
                f"skipped={len(self.skipped)}>")


class RefreshService:
    """Runs refresh cycles against a CounterStore"""

    def __init__(self, store, courses, client, max_workers=4):
        self.store = store
        self.courses = courses
        self.client = client
        self.max_workers = max(1, int(max_workers))
        self._cycle_lock = threading.Lock()
        self.last_result = None

    def run(self):
        """Run one full refresh cycle. Returns a RefreshResult."""
        with self._cycle_lock:
            result = self._run_cycle()
            self.last_result = result
            return result

    def _run_cycle(self):
        result = RefreshResult(utc_now_iso())
        groups = self.store.list_groups()

        if not groups:
            logger.info("No groups configured, nothing to refresh")
            result.finished_at = utc_now_iso()
            return result

        LoggingService.info(LOG_SOURCE, f"Refreshing {len(groups)} groups")

        jobs = []
        for group in groups:
            course = get_course(self.courses, group.get('courseKey'))
            if not has_api_key(course):
                LoggingService.warning(
                    LOG_SOURCE,
                    f"Skipping {group.get('id')}: no API key for course {group.get('courseKey')}",
                    {'group_id': group.get('id'), 'course_key': group.get('courseKey')},
                )
                result.skipped.append(group.get('id'))
                continue
            if not group.get('groupId'):
                LoggingService.warning(
                    LOG_SOURCE,
                    f"Skipping {group.get('id')}: no MailerLite group id",
                    {'group_id': group.get('id')},
                )
                result.skipped.append(group.get('id'))
                continue
            jobs.append((group, course))

        entries = {}
        if jobs:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(jobs))) as executor:
                future_to_job = {
                    executor.submit(self.client.get_active_count, group['groupId'], course['api_key']): (group, course)
                    for group, course in jobs
                }

                for future in as_completed(future_to_job):
                    group, course = future_to_job[future]
                    try:
                        count = future.result()
                    except ProviderError as e:
                        LoggingService.error(
                            LOG_SOURCE,
                            f"Failed to fetch {course['name']} / {group.get('groupName')}: {e}",
                            {'group_id': group['id'], 'provider_group_id': group['groupId'],
                             'status_code': e.status_code},
                        )
                        result.failed.append(group['id'])
                        continue
                    except Exception as e:
                        logger.exception(f"Unexpected error refreshing {group['id']}")
                        LoggingService.error(
                            LOG_SOURCE,
                            f"Failed to fetch {course['name']} / {group.get('groupName')}: {e}",
                            {'group_id': group['id'], 'provider_group_id': group['groupId']},
                        )
                        result.failed.append(group['id'])
                        continue

                    entries[group['id']] = {
                        'courseName': course['name'],
                        'groupName': group.get('groupName', ''),
                        'count': count,
                        'lastUpdate': utc_now_iso(),
                    }
                    logger.info(f"{course['name']} / {group.get('groupName')}: {count}")

        result.updated = self.store.apply_counters(entries)
        result.finished_at = utc_now_iso()

        LoggingService.info(
            LOG_SOURCE,
            f"Refresh finished: {len(result.updated)} updated, {len(result.failed)} failed, "
            f"{len(result.skipped)} skipped",
            result.summary(),
        )
        return result


def seconds_until_next_run(interval, now=None):
    """Seconds until the next wall-clock multiple of interval (e.g. :00, :10, :20 for 600)"""
    now = time.time() if now is None else now
    remaining = interval - (now % interval)
    return remaining if remaining > 0 else interval


class RefreshScheduler:
    """
    Background thread that runs the refresh cycle on a fixed wall-clock schedule
    """

    def __init__(self, service, interval=600, run_on_start=True, log_retention_days=30):
        if interval < 1:
            raise ValueError(f"Refresh interval must be at least 1 second, got {interval}")
        self.service = service
        self.interval = interval
        self.run_on_start = run_on_start
        self.log_retention_days = log_retention_days
        self._stop_event = threading.Event()
        self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Starts the scheduler"""
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._scheduler_loop, name='refresh_scheduler', daemon=True)
        self._thread.start()
        logger.info(f"Refresh scheduler started (every {self.interval}s)")

    def stop(self, timeout=None):
        """Stops the scheduler and waits for the thread to exit"""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Refresh scheduler stopped")

    def _scheduler_loop(self):
        if self.run_on_start:
            self._run_once()

        while not self._stop_event.wait(seconds_until_next_run(self.interval)):
            self._run_once()

    def _run_once(self):
        try:
            self.service.run()
        except Exception as e:
            logger.exception(f"Scheduled refresh failed: {e}")
        LoggingService.cleanup_old_logs(self.log_retention_days)
