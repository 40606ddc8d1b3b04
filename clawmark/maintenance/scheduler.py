import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import schedule

logger = logging.getLogger(__name__)


class MaintenanceScheduler:
    """Runs periodic housekeeping jobs on a background daemon thread"""

    def __init__(self, poll_seconds: float = 1.0):
        self.scheduler = schedule.Scheduler()
        self.jobs: Dict[str, Dict[str, Any]] = {}
        self.poll_seconds = poll_seconds
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self):
        """Start the scheduler loop in a background thread"""
        if self.running:
            return

        self.running = True
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run_scheduler, name="clawmark-maintenance")
        self.thread.daemon = True
        self.thread.start()
        logger.info("Maintenance scheduler started")

    def _run_scheduler(self):
        while not self._stop_event.is_set():
            self.scheduler.run_pending()
            self._stop_event.wait(self.poll_seconds)

    def stop(self):
        if not self.running:
            return
        self.running = False
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=5)
        logger.info("Maintenance scheduler stopped")

    def add_job(self, job_id: str, task_func: Callable, interval_minutes: int, *args, **kwargs) -> str:
        """Add a periodic job, replacing any job with the same id"""
        self.remove_job(job_id)

        self.scheduler.every(interval_minutes).minutes.do(self._guarded, job_id, task_func, *args, **kwargs).tag(job_id)
        self.jobs[job_id] = {
            "function": getattr(task_func, "__name__", repr(task_func)),
            "interval": interval_minutes,
            "created_at": time.time(),
        }
        logger.info(f"Added maintenance job: {job_id}, interval: {interval_minutes}min")
        return job_id

    def remove_job(self, job_id: str) -> bool:
        if job_id in self.jobs:
            self.scheduler.clear(job_id)
            del self.jobs[job_id]
            logger.info(f"Removed maintenance job: {job_id}")
            return True
        return False

    def run_job_once(self, job_id: str) -> bool:
        """Run a job immediately, outside its schedule"""
        for job in self.scheduler.get_jobs(job_id):
            job.job_func()
            return True
        return False

    @staticmethod
    def _guarded(job_id: str, task_func: Callable, *args, **kwargs):
        # job errors stay inside the scheduler thread
        try:
            return task_func(*args, **kwargs)
        except Exception:
            logger.exception(f"Maintenance job {job_id} failed")
            return None
