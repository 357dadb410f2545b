"""Bounded parallel execution of download tasks."""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence

import requests

from .downloader_lib.fetch import download_to_path
from .events import EventSink
from .planner import DOWNLOADED, FAILED, DownloadTask, FetchOutcome
from .utils.constants import DEFAULT_TIMEOUT


class FetchScheduler:
    """Run download tasks on a fixed pool of `throttle_limit` worker threads.

    Each task is isolated: a failure is reported once as a failed outcome and
    never cancels or delays the other tasks. `run` returns only after every
    task has finished. Completion order is not submission order.
    """

    def __init__(self, throttle_limit: int, sink: EventSink, timeout: float = DEFAULT_TIMEOUT,
                 verify_ssl: bool = True, session_factory: Callable[[], requests.Session] = requests.Session,
                 fetch: Callable = download_to_path):
        if int(throttle_limit) < 1:
            raise ValueError(f"throttle_limit must be at least 1, got {throttle_limit}")
        self.throttle_limit = int(throttle_limit)
        self.sink = sink
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session_factory = session_factory
        self.fetch = fetch
        self._local = threading.local()

    def _session(self):
        # requests sessions are not shared between threads; one per worker
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self.session_factory()
            self._local.session = session
        return session

    def _run_task(self, task: DownloadTask) -> FetchOutcome:
        try:
            size = self.fetch(self._session(), task.url, task.destination_path,
                              timeout=self.timeout, verify=self.verify_ssl)
        except (requests.RequestException, OSError) as e:
            self.sink.error(f"Download failed for {task.display_label} ({task.url}): {e}",
                            console=f"  ✗ Failed: {task.display_label} ({e})")
            return FetchOutcome(label=task.display_label, outcome=FAILED, reason=str(e))
        size_mb = (size or 0) / (1024 * 1024)
        self.sink.info(f"Downloaded {task.display_label} -> {task.destination_path} ({size_mb:.2f} MB)",
                       console=f"  ✅ Downloaded: {task.display_label} ({size_mb:.2f} MB)")
        return FetchOutcome(label=task.display_label, outcome=DOWNLOADED)

    def run(self, tasks: Sequence[DownloadTask],
            on_outcome: Optional[Callable[[FetchOutcome], None]] = None) -> List[FetchOutcome]:
        """Execute all tasks; outcomes are returned (and streamed to `on_outcome`) as they complete."""
        outcomes: List[FetchOutcome] = []
        if not tasks:
            return outcomes
        with ThreadPoolExecutor(max_workers=self.throttle_limit, thread_name_prefix='romfetch') as pool:
            futures = {pool.submit(self._run_task, task): task for task in tasks}
            for future in as_completed(futures):
                task = futures[future]
                try:
                    outcome = future.result()
                except Exception as e:
                    # Anything the task did not anticipate still only fails that task
                    self.sink.error(f"Unexpected error downloading {task.display_label}: {e}", exc_info=True)
                    outcome = FetchOutcome(label=task.display_label, outcome=FAILED, reason=str(e))
                outcomes.append(outcome)
                if on_outcome:
                    on_outcome(outcome)
        return outcomes
