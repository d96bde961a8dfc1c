from collections import Counter
from threading import Lock


class MetricsStore:
    """Process-wide request counters and latency, exposed on ``/metrics``."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._total_requests = 0
        self._total_errors = 0
        self._by_status: Counter[str] = Counter()
        self._by_method: Counter[str] = Counter()
        self._duration_total_ms = 0
        self._duration_max_ms = 0

    def record(self, status_code: int, method: str | None = None, duration_ms: int = 0) -> None:
        with self._lock:
            self._total_requests += 1
            self._by_status[str(status_code)] += 1
            if method:
                self._by_method[method.upper()] += 1
            if status_code >= 500:
                self._total_errors += 1
            self._duration_total_ms += duration_ms
            self._duration_max_ms = max(self._duration_max_ms, duration_ms)

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            average_ms = (
                round(self._duration_total_ms / self._total_requests, 2)
                if self._total_requests
                else 0.0
            )
            return {
                "total_requests": self._total_requests,
                "total_errors": self._total_errors,
                "by_status": dict(self._by_status),
                "by_method": dict(self._by_method),
                "latency_ms": {"average": average_ms, "max": self._duration_max_ms},
            }


metrics = MetricsStore()
