"""Process-local counters behind the /metrics endpoint."""
from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Optional


class RuntimeObservability:
    """Request latency aggregates and the time of the last supply write."""

    def __init__(self):
        self.process_started_at = datetime.now(timezone.utc)
        self.last_supply_write: Optional[datetime] = None
        self._latencies = {"request_count": 0, "total": 0.0, "max": 0.0, "last": 0.0}
        self._lock = Lock()

    def mark_supply_write(self, written_at: datetime):
        self.last_supply_write = written_at.astimezone(timezone.utc)

    def record_request(self, elapsed_ms: float):
        with self._lock:
            stats = self._latencies
            stats["request_count"] += 1
            stats["total"] += elapsed_ms
            stats["last"] = elapsed_ms
            stats["max"] = max(stats["max"], elapsed_ms)

    def latency_summary(self) -> dict[str, Any]:
        """Milliseconds, rounded for serialization."""
        with self._lock:
            stats = dict(self._latencies)
        count = stats["request_count"]
        return {
            "request_count": count,
            "average": round(stats["total"] / count, 3) if count else 0.0,
            "max": round(stats["max"], 3),
            "last": round(stats["last"], 3),
        }

    def uptime_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self.process_started_at).total_seconds()
