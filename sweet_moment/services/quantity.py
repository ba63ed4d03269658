"""
Quantity increment/decrement control.

Each control drops a trigger that arrives within a short window of the
previous accepted one, so an accidental double tap changes the quantity once.
A dropped trigger is gone; it is not queued for later.
"""

import logging
import time
from typing import Any, Callable

from ..config import MAX_ITEM_QUANTITY, QUANTITY_DEBOUNCE_MS
from .diagnostics import DiagnosticsRecorder, INVALID_QUANTITY_RESET, NULL_RECORDER


logger = logging.getLogger(__name__)


class QuantityControl:
    """
    Quantity stepper for one product page or cart line.

    Args:
        initial: Starting quantity
        maximum: Largest quantity the control allows
        guard_ms: Re-entrancy window in milliseconds
        clock: Monotonic clock in seconds (injectable for tests)
    """

    def __init__(
        self,
        initial: Any = 1,
        maximum: int = MAX_ITEM_QUANTITY,
        guard_ms: int = QUANTITY_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
        recorder: DiagnosticsRecorder = NULL_RECORDER,
    ):
        self.maximum = maximum
        self.guard_seconds = guard_ms / 1000
        self._clock = clock
        self._recorder = recorder
        self._busy_until = float("-inf")
        self.quantity = self._sanitize(initial)

    def _sanitize(self, value: Any) -> int:
        try:
            quantity = int(value)
        except (TypeError, ValueError):
            self._recorder.record(INVALID_QUANTITY_RESET, "Invalid quantity reset to 1", value=repr(value))
            return 1
        return min(max(quantity, 1), self.maximum)

    def _acquire(self) -> bool:
        now = self._clock()
        if now < self._busy_until:
            logger.debug("Quantity trigger dropped inside guard window")
            return False
        self._busy_until = now + self.guard_seconds
        return True

    def increase(self) -> bool:
        """Add one, up to the maximum. Returns False if the trigger was dropped or capped."""
        if self.quantity >= self.maximum or not self._acquire():
            return False
        self.quantity += 1
        return True

    def decrease(self) -> bool:
        """Remove one, down to 1. Returns False if the trigger was dropped or floored."""
        if self.quantity <= 1 or not self._acquire():
            return False
        self.quantity -= 1
        return True

    def set(self, value: Any) -> int:
        """Set directly (typed input). Not debounced."""
        self.quantity = self._sanitize(value)
        return self.quantity
