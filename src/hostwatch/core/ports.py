"""Port interfaces for sample sources and storage adapters.

These protocols define the contracts that adapters must implement.
The sampler and alert manager depend only on these interfaces, not
concrete implementations. Store failures surface as PersistenceError,
sample source failures as SampleSourceError.
"""

from typing import Protocol, runtime_checkable

from hostwatch.core.models import (
    Alert,
    AlertCounts,
    AlertStatus,
    MetricReading,
    MetricSummary,
    MetricThreshold,
    MetricType,
)


@runtime_checkable
class SampleSourcePort(Protocol):
    """Port for point-in-time host utilization readings.

    Examples: PsutilSampleSource.
    """

    async def cpu_percent(self) -> float:
        """Return CPU utilization in percent.

        May block for a sampling window to compute an average.
        """
        ...

    async def memory_percent(self) -> float:
        """Return memory utilization in percent."""
        ...


@runtime_checkable
class MetricStoragePort(Protocol):
    """Port for the append-only metric reading log.

    Examples: InMemoryMetricStorage, SQLiteMetricStorage.
    """

    async def write(self, reading: MetricReading) -> None:
        """Append a reading. Must be visible to latest() once this returns."""
        ...

    async def latest(self, metric_type: MetricType) -> MetricReading | None:
        """Return the most recent reading for a type, or None if there is none."""
        ...

    async def history(
        self, metric_type: MetricType, limit: int = 0
    ) -> list[MetricReading]:
        """Return readings for a type, newest first.

        Args:
            metric_type: Type to read.
            limit: Maximum number of readings. 0 or less returns all.
        """
        ...

    async def summary(self, metric_type: MetricType, limit: int = 0) -> MetricSummary:
        """Aggregate the newest ``limit`` readings (all when limit <= 0)."""
        ...


@runtime_checkable
class ThresholdStoragePort(Protocol):
    """Port for configured metric thresholds, one per type.

    Examples: InMemoryThresholdStorage, SQLiteThresholdStorage.
    """

    async def enabled_thresholds(self) -> list[MetricThreshold]:
        """Return all thresholds with enabled=True."""
        ...

    async def all_thresholds(self) -> list[MetricThreshold]:
        """Return every configured threshold."""
        ...

    async def get(self, metric_type: MetricType) -> MetricThreshold | None:
        """Return the threshold for a type, or None if not configured."""
        ...

    async def upsert(self, threshold: MetricThreshold) -> None:
        """Create or replace the threshold for ``threshold.type``."""
        ...


@runtime_checkable
class AlertStoragePort(Protocol):
    """Port for alert records.

    Examples: InMemoryAlertStorage, SQLiteAlertStorage.
    """

    async def find_active(self, metric_type: MetricType) -> Alert | None:
        """Return an active alert for the type, or None."""
        ...

    async def create(self, alert: Alert) -> Alert:
        """Persist a new alert and return it with its assigned id."""
        ...

    async def resolve_active(self, metric_type: MetricType, now: float) -> int:
        """Resolve every active alert of a type.

        Returns:
            Number of alerts resolved. 0 when none were active.
        """
        ...

    async def resolve(self, alert_id: int, now: float) -> bool:
        """Resolve one alert by id. Returns False if it was not active."""
        ...

    async def list_alerts(
        self, status: AlertStatus | None = None, limit: int = 0
    ) -> list[Alert]:
        """Return alerts newest first by triggered_at.

        Args:
            status: Only return alerts with this status. None returns all.
            limit: Maximum number of alerts. 0 or less returns all.
        """
        ...

    async def counts(self) -> AlertCounts:
        """Return totals by status, type and severity."""
        ...
