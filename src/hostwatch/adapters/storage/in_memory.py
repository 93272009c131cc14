"""In-memory storage adapters for readings, thresholds and alerts."""

import itertools
from collections import Counter
from dataclasses import replace

from hostwatch.core.models import (
    Alert,
    AlertCounts,
    AlertStatus,
    MetricReading,
    MetricSummary,
    MetricThreshold,
    MetricType,
)


def _newest_first(readings: list[MetricReading], limit: int) -> list[MetricReading]:
    ordered = sorted(reversed(readings), key=lambda r: r.timestamp, reverse=True)
    return ordered[:limit] if limit > 0 else ordered


class InMemoryMetricStorage:
    """In-memory implementation of MetricStoragePort.

    Stores readings in a list per metric type. Suitable for testing and
    short-lived runs where persistence is not required.
    """

    def __init__(self) -> None:
        self._readings: dict[MetricType, list[MetricReading]] = {}

    async def write(self, reading: MetricReading) -> None:
        """Append a reading to storage."""
        self._readings.setdefault(reading.type, []).append(reading)

    async def latest(self, metric_type: MetricType) -> MetricReading | None:
        """Return the most recent reading for a type."""
        readings = self._readings.get(metric_type)
        if not readings:
            return None
        # max() returns the first maximal element; prefer the last written
        return max(reversed(readings), key=lambda r: r.timestamp)

    async def history(
        self, metric_type: MetricType, limit: int = 0
    ) -> list[MetricReading]:
        """Return readings for a type, newest first."""
        return _newest_first(self._readings.get(metric_type, []), limit)

    async def summary(self, metric_type: MetricType, limit: int = 0) -> MetricSummary:
        """Aggregate the newest readings of a type."""
        values = [r.value for r in await self.history(metric_type, limit)]
        if not values:
            return MetricSummary(type=metric_type)
        return MetricSummary(
            type=metric_type,
            average=sum(values) / len(values),
            min=min(values),
            max=max(values),
            count=len(values),
        )


class InMemoryThresholdStorage:
    """In-memory implementation of ThresholdStoragePort."""

    def __init__(self, thresholds: list[MetricThreshold] | None = None) -> None:
        self._thresholds: dict[MetricType, MetricThreshold] = {
            t.type: t for t in thresholds or []
        }

    async def enabled_thresholds(self) -> list[MetricThreshold]:
        """Return all enabled thresholds."""
        return [t for t in self._thresholds.values() if t.enabled]

    async def all_thresholds(self) -> list[MetricThreshold]:
        """Return every configured threshold."""
        return list(self._thresholds.values())

    async def get(self, metric_type: MetricType) -> MetricThreshold | None:
        """Return the threshold for a type."""
        return self._thresholds.get(metric_type)

    async def upsert(self, threshold: MetricThreshold) -> None:
        """Create or replace the threshold for its type."""
        self._thresholds[threshold.type] = threshold


class InMemoryAlertStorage:
    """In-memory implementation of AlertStoragePort.

    Alerts are kept in insertion order keyed by a monotonically increasing
    id. Updates replace the frozen Alert in place.
    """

    def __init__(self) -> None:
        self._alerts: dict[int, Alert] = {}
        self._ids = itertools.count(1)

    async def find_active(self, metric_type: MetricType) -> Alert | None:
        """Return an active alert for the type, or None."""
        for alert in self._alerts.values():
            if alert.type == metric_type and alert.is_active:
                return alert
        return None

    async def create(self, alert: Alert) -> Alert:
        """Store a new alert and return it with its assigned id."""
        stored = replace(alert, id=next(self._ids))
        self._alerts[stored.id] = stored
        return stored

    async def resolve_active(self, metric_type: MetricType, now: float) -> int:
        """Resolve every active alert of a type."""
        active_ids = [
            alert_id
            for alert_id, alert in self._alerts.items()
            if alert.type == metric_type and alert.is_active
        ]
        for alert_id in active_ids:
            self._alerts[alert_id] = replace(
                self._alerts[alert_id], status=AlertStatus.RESOLVED, resolved_at=now
            )
        return len(active_ids)

    async def resolve(self, alert_id: int, now: float) -> bool:
        """Resolve one alert if it exists and is active."""
        alert = self._alerts.get(alert_id)
        if alert is None or not alert.is_active:
            return False
        self._alerts[alert_id] = replace(
            alert, status=AlertStatus.RESOLVED, resolved_at=now
        )
        return True

    async def list_alerts(
        self, status: AlertStatus | None = None, limit: int = 0
    ) -> list[Alert]:
        """Return alerts newest first, optionally filtered by status."""
        alerts = [a for a in self._alerts.values() if status is None or a.status == status]
        # Stable sort on reversed insertion order breaks timestamp ties by newest id
        alerts = sorted(reversed(alerts), key=lambda a: a.triggered_at, reverse=True)
        return alerts[:limit] if limit > 0 else alerts

    async def counts(self) -> AlertCounts:
        """Return totals by status, type and severity."""
        alerts = list(self._alerts.values())
        active = sum(1 for a in alerts if a.is_active)
        return AlertCounts(
            total=len(alerts),
            active=active,
            resolved=len(alerts) - active,
            by_type=dict(Counter(a.type for a in alerts)),
            by_severity=dict(Counter(a.severity for a in alerts)),
        )
