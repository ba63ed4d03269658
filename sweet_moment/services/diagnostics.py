"""
Structured diagnostics for graceful-degradation paths.

Malformed catalog strings, unparsable prices, missing piece counts and storage
failures never reach the shopper. Each of those fallbacks logs a line AND
records a DiagnosticEvent so callers (and tests) can see what degraded without
scraping log output.

Usage:
------
    recorder = DiagnosticsRecorder()
    sizes = resolve_options(product, "size", recorder=recorder)
    if "catalog_parse_failed" in recorder.codes():
        ...
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List


logger = logging.getLogger(__name__)


# Event codes
CATALOG_PARSE_FAILED = "catalog_parse_failed"
CATALOG_DEFAULT_USED = "catalog_default_used"
PIECE_COUNT_FROM_LABEL = "piece_count_from_label"
PIECE_COUNT_DEFAULTED = "piece_count_defaulted"
INVALID_PRICE_ZEROED = "invalid_price_zeroed"
INVALID_QUANTITY_RESET = "invalid_quantity_reset"
CART_HYDRATE_FAILED = "cart_hydrate_failed"
CART_PERSIST_FAILED = "cart_persist_failed"
STALE_PRODUCT_IGNORED = "stale_product_ignored"


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single degradation that was absorbed instead of raised."""
    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


class DiagnosticsRecorder:
    """Collects diagnostic events. Every event is also logged."""

    def __init__(self, log_level: int = logging.WARNING):
        self._events: List[DiagnosticEvent] = []
        self._lock = threading.Lock()
        self._log_level = log_level

    def record(self, code: str, message: str, **context: Any) -> DiagnosticEvent:
        event = DiagnosticEvent(code=code, message=message, context=context)
        logger.log(self._log_level, "[%s] %s %s", code, message, context or "")
        with self._lock:
            self._events.append(event)
        return event

    @property
    def events(self) -> List[DiagnosticEvent]:
        with self._lock:
            return list(self._events)

    def codes(self) -> List[str]:
        return [event.code for event in self.events]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


class _LoggingOnlyRecorder(DiagnosticsRecorder):
    """Recorder used when the caller does not pass one. Keeps nothing."""

    def record(self, code: str, message: str, **context: Any) -> DiagnosticEvent:
        event = DiagnosticEvent(code=code, message=message, context=context)
        logger.log(self._log_level, "[%s] %s %s", code, message, context or "")
        return event


NULL_RECORDER: DiagnosticsRecorder = _LoggingOnlyRecorder()
