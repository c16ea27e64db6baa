import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def _check_interval(interval: float) -> None:
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")


class PeriodicTask:
    """Runs ``task`` every ``interval`` seconds on a daemon thread.

    A failing run is logged and the schedule carries on. The first run
    happens one interval after ``start``.
    """

    def __init__(self, interval: float, task: Optional[Callable[[], None]] = None, name: str = "periodic-task"):
        _check_interval(interval)
        self.interval = interval
        self.task = task
        self.name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def set_task(self, task: Callable[[], None]) -> None:
        self.task = task

    def set_interval(self, interval: float) -> None:
        """Change the period, restarting the schedule if it is running."""
        _check_interval(interval)
        self.interval = interval
        if self.is_running:
            self.stop()
            self.start()

    def start(self) -> None:
        if self.is_running or self.task is None:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name=self.name, daemon=True
        )
        self._thread.start()
        logger.info(f"{self.name} started with interval {self.interval}s")

    def stop(self) -> None:
        """Stop the schedule. Safe to call from inside the task itself."""
        if not self.is_running:
            return
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1)
        logger.info(f"{self.name} stopped")

    def run_once(self) -> None:
        try:
            self.task()
        except Exception:
            logger.exception(f"{self.name} task error")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.run_once()
