"""
Background execution of project scans.

A ScanRunner runs at most one scan at a time on a single worker thread so the
caller can keep serving requests while a long directory walk is in progress.
Callers are expected to leave the project alone (no export, no edits) until
the running job is done; ScanRunner.busy tells them when that is.
"""

import concurrent.futures
import logging
import threading
from enum import Enum
from typing import Optional

from source_structure.errors import ScanInProgressError
from source_structure.models import Project
from source_structure.services.project import scan_project
from source_structure.services.scanner import CancellationToken

logger = logging.getLogger(__name__)


class ScanState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ScanJob:
    def __init__(self, project: Project, future: "concurrent.futures.Future[bool]", token: CancellationToken):
        self.project = project
        self._future = future
        self._token = token

    def cancel(self) -> None:
        self._token.cancel()

    @property
    def done(self) -> bool:
        return self._future.done()

    @property
    def state(self) -> ScanState:
        if not self._future.done():
            return ScanState.RUNNING
        if self._future.exception() is not None:
            return ScanState.FAILED
        return ScanState.COMPLETED if self._future.result() else ScanState.CANCELLED

    @property
    def error(self) -> Optional[BaseException]:
        if not self._future.done():
            return None
        return self._future.exception()

    def wait(self, timeout: Optional[float] = None) -> ScanState:
        """Block until the job finishes (or ``timeout`` elapses) and return its state."""
        concurrent.futures.wait([self._future], timeout=timeout)
        return self.state

    def result(self, timeout: Optional[float] = None) -> bool:
        """True if the scan ran to completion; re-raises a scan failure."""
        return self._future.result(timeout=timeout)


class ScanRunner:
    def __init__(self) -> None:
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="scan")
        self._lock = threading.Lock()
        self._current: Optional[ScanJob] = None

    @property
    def current(self) -> Optional[ScanJob]:
        return self._current

    @property
    def busy(self) -> bool:
        job = self._current
        return job is not None and not job.done

    def start(self, project: Project) -> ScanJob:
        with self._lock:
            if self.busy:
                raise ScanInProgressError(f"A scan of {self._current.project.root_path} is already running")
            token = CancellationToken()
            future = self._executor.submit(self._run, project, token)
            self._current = ScanJob(project, future, token)
            return self._current

    def cancel(self) -> bool:
        """Signal the running job to stop. Returns False if nothing was running."""
        job = self._current
        if job is None or job.done:
            return False
        job.cancel()
        return True

    def shutdown(self) -> None:
        self.cancel()
        self._executor.shutdown(wait=True)

    @staticmethod
    def _run(project: Project, token: CancellationToken) -> bool:
        try:
            return scan_project(project, token)
        except Exception:
            logger.exception("Scan of %s failed", project.root_path)
            raise
