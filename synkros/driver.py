import logging
import time
from typing import Callable, Optional

from .notifier import status_message
from .reconciler import CycleReport

logger = logging.getLogger(__name__)


class CycleDriver:
    """
    Run reconciliation passes back to back with a fixed pause in between.

    The pause starts when a pass ends, so passes never overlap. Every pass,
    successful or not, is followed by exactly one status notification.
    """

    def __init__(self, run_pass: Callable[[], CycleReport], notifier, interval: float):
        self._run_pass = run_pass
        self._notifier = notifier
        self._interval = interval

    def run_once(self) -> Optional[CycleReport]:
        try:
            report = self._run_pass()
        except Exception:
            logger.exception("Sync pass failed.")
            report = None

        pending = report.pending if report is not None else 0
        self._notifier.notify(status_message(pending))
        return report

    def run_forever(self, max_cycles: Optional[int] = None):
        cycles = 0
        while True:
            self.run_once()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                return
            logger.info("Waiting %d seconds until the next sync cycle...", self._interval)
            time.sleep(self._interval)
