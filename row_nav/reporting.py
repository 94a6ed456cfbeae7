"""
Throttled status announcements.

The host loop calls `tick()` once per control cycle. A status line goes out
only when at least `interval_ticks` cycles have passed since the last one
and the state differs from what was last announced.
"""

from typing import Callable, Optional

from .constants import CONTROL_RATE_HZ, STATUS_INTERVAL_SEC
from .state import Session


class StatusReporter:
    """Emits the navigation state at most once per interval, on change only."""

    def __init__(self, interval_ticks: int = 10, emit: Callable[[str], None] = print):
        """
        Args:
            interval_ticks: Control cycles between announcements
            emit: Sink for status lines (print, a node logger, ...)
        """
        if interval_ticks < 1:
            raise ValueError(f"interval_ticks must be >= 1, got {interval_ticks}")
        self.interval_ticks = interval_ticks
        self.emit = emit

    @classmethod
    def for_rate(cls, rate_hz: float = CONTROL_RATE_HZ,
                 interval_sec: float = STATUS_INTERVAL_SEC,
                 emit: Callable[[str], None] = print) -> 'StatusReporter':
        """Reporter for a loop running at `rate_hz`, one line per `interval_sec`."""
        return cls(max(1, round(rate_hz * interval_sec)), emit)

    def tick(self, session: Session) -> Optional[str]:
        """
        Count one control cycle and announce the state if due.

        Only `session.ticks` and `session.last_announced` are touched.

        Returns:
            The announced label, or None
        """
        message = None
        if session.ticks >= self.interval_ticks and session.state is not session.last_announced:
            message = session.state.label
            self.emit(message)
            session.ticks = 0
            session.last_announced = session.state
        session.ticks += 1
        return message
