"""Sampler: pulls host utilization from a sample source into the metric store."""

import logging
import time

from hostwatch.core.exceptions import PersistenceError, SampleSourceError
from hostwatch.core.models import MetricReading, MetricSummary, MetricType, SystemMetrics
from hostwatch.core.ports import MetricStoragePort, SampleSourcePort

logger = logging.getLogger(__name__)


class Sampler:
    """Takes CPU and memory readings and appends them to a metric store.

    Args:
        source: Where readings come from.
        metric_storage: Where readings are appended.
    """

    def __init__(
        self, source: SampleSourcePort, metric_storage: MetricStoragePort
    ) -> None:
        self._source = source
        self._metric_storage = metric_storage

    async def sample(self) -> SystemMetrics:
        """Read CPU and memory utilization once.

        The CPU read may block for the source's sampling window.

        Raises:
            SampleSourceError: If either reading fails.
        """
        timestamp = time.time()
        cpu = await self._source.cpu_percent()
        memory = await self._source.memory_percent()
        return SystemMetrics(cpu_percent=cpu, memory_percent=memory, timestamp=timestamp)

    async def run_sampling_cycle(self) -> SystemMetrics | None:
        """Sample once and store one reading per metric type.

        A sample source failure skips the cycle. A failure storing one
        reading is logged and does not prevent storing the other.

        Returns:
            The stored snapshot, or None if the cycle was skipped.
        """
        try:
            snapshot = await self.sample()
        except SampleSourceError as err:
            logger.warning("Sampling cycle skipped: %s", err)
            return None

        for metric_type in MetricType:
            reading = MetricReading(
                type=metric_type,
                value=snapshot.value_for(metric_type),
                timestamp=snapshot.timestamp,
            )
            try:
                await self._metric_storage.write(reading)
            except PersistenceError as err:
                logger.error("Failed to save %s reading: %s", metric_type, err)

        logger.debug(
            "Collected metrics - CPU: %.2f%%, Memory: %.2f%%",
            snapshot.cpu_percent,
            snapshot.memory_percent,
        )
        return snapshot

    async def current_metrics(self) -> SystemMetrics:
        """Live snapshot from the sample source, not stored.

        Raises:
            SampleSourceError: If the source fails.
        """
        return await self.sample()

    async def history(
        self, metric_type: MetricType, limit: int = 0
    ) -> list[MetricReading]:
        """Stored readings for a type, newest first (all when limit <= 0)."""
        return await self._metric_storage.history(metric_type, limit)

    async def summary(self, metric_type: MetricType, limit: int = 0) -> MetricSummary:
        """Average, min, max and count over the newest stored readings."""
        return await self._metric_storage.summary(metric_type, limit)
