"""In-process counters and gauges for guestbook activity."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import DefaultDict, Dict, Protocol

from .logging import get_logger

__all__ = [
    "InMemoryMetricsClient",
    "MetricsClient",
    "get_metrics_client",
]

logger = get_logger(__name__)


class MetricsClient(Protocol):  # pragma: no cover - interface only
    def increment(self, metric: str, value: int = 1) -> None: ...

    def gauge(self, metric: str, value: int) -> None: ...


@dataclass
class InMemoryMetricsClient:
    """Thread-safe sink; stores may be shared across request threads."""

    counters: DefaultDict[str, int] = field(default_factory=lambda: defaultdict(int))
    gauges: Dict[str, int] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def increment(self, metric: str, value: int = 1) -> None:
        with self._lock:
            self.counters[metric] += value
        logger.debug("metrics_increment", extra={"metric": metric, "value": value})

    def gauge(self, metric: str, value: int) -> None:
        with self._lock:
            self.gauges[metric] = value
        logger.debug("metrics_gauge", extra={"metric": metric, "value": value})

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        with self._lock:
            return {"counters": dict(self.counters), "gauges": dict(self.gauges)}

    def reset(self) -> None:
        with self._lock:
            self.counters.clear()
            self.gauges.clear()


_metrics_singleton: InMemoryMetricsClient | None = None


def get_metrics_client() -> InMemoryMetricsClient:
    """Return the shared metrics client."""

    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = InMemoryMetricsClient()
    return _metrics_singleton
