import threading
from enum import Enum
from typing import Dict

from webapi.shared.logger import StructuredLogger


class UserMetrics(str, Enum):
    CREATED = "users_created"
    REPLACED = "users_replaced"
    PATCHED = "users_patched"
    DELETED = "users_deleted"
    NOT_FOUND = "users_not_found"
    VALIDATION_FAILED = "users_validation_failed"
    MALFORMED = "requests_malformed"


class MetricsCollector:
    """
    Simple metrics collector to track counters across components.
    Supports thread-safe increments and structured logging via injected logger.
    """
    def __init__(self, logger: StructuredLogger):
        self.logger = logger
        self._counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, amount: int = 1):
        """Increment a metric counter"""
        key = getattr(key, "value", key)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def report(self):
        """Emit structured log of current metrics"""
        with self._lock:
            if self._counters:
                self.logger.info("Metrics update", **self._counters)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)
