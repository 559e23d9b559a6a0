"""Periodic triggering of conversion runs."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class PeriodicRunner:
    """Calls a job once at start and then every ``interval`` seconds.

    The job runs on the calling thread, so a tick never starts while the
    previous run is still in progress. ``stop()`` may be called from another
    thread (or a signal handler) to end ``run_forever``.
    """

    def __init__(self, job: Callable[[], Any], interval: float):
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self._job = job
        self._interval = interval
        self._stop = threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Ask the loop to exit after the current run."""
        self._stop.set()

    def run_forever(self, max_runs: int | None = None) -> int:
        """Run the job until stopped.

        Args:
            max_runs: Stop after this many runs (None for no limit).

        Returns:
            Number of runs performed.
        """
        runs = 0
        logger.info(f"Running every {self._interval}s")
        while not self._stop.is_set():
            self._job()
            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            # Waits for the full interval measured from the end of the run
            if self._stop.wait(self._interval):
                break
        logger.info(f"Stopped after {runs} runs")
        return runs
