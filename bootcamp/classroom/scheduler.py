"""
NavigationScheduler - One-shot deferred navigation.

The page shows a completion animation before moving to the next lesson.
Scheduling a new action replaces the pending one; cancel() discards it
when the hosting view goes away.

Used by hosts with their own event loop, through
ProgressController.schedule_navigation. The Streamlit app waits inside the
script run and reruns itself, since a timer thread cannot trigger a rerun.
"""

import logging
import threading
from typing import Callable, Optional


logger = logging.getLogger(__name__)


class NavigationScheduler:
    """Run at most one delayed callback at a time."""

    def __init__(self, timer_factory: Callable[..., threading.Timer] = threading.Timer):
        """
        Args:
            timer_factory: Callable with threading.Timer's signature (interval, function, args)
        """
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """Whether a scheduled action has neither fired nor been cancelled."""
        with self._lock:
            return self._timer is not None

    def schedule(self, delay_seconds: float, callback: Callable[[], None]):
        """Schedule callback after delay_seconds, replacing any pending action."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(
                delay_seconds, self._fire, args=(self._generation, callback)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()
        logger.debug(f"Scheduled navigation in {delay_seconds}s")

    def _fire(self, generation: int, callback: Callable[[], None]):
        with self._lock:
            # A replaced timer may still fire if cancel() lost the race
            if generation != self._generation:
                return
            self._timer = None
        callback()

    def cancel(self) -> bool:
        """
        Discard the pending action.

        Returns True if an action was pending.
        """
        with self._lock:
            timer, self._timer = self._timer, None
            self._generation += 1
        if timer is None:
            return False
        timer.cancel()
        logger.debug("Cancelled pending navigation")
        return True
