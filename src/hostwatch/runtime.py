"""Process wiring: builds the sampler and alert manager and runs them."""

import asyncio
import logging
import signal
from dataclasses import dataclass

from hostwatch.adapters.sources.psutil_source import PsutilSampleSource
from hostwatch.adapters.storage.in_memory import (
    InMemoryAlertStorage,
    InMemoryMetricStorage,
    InMemoryThresholdStorage,
)
from hostwatch.adapters.storage.sqlite_alerts import SQLiteAlertStorage
from hostwatch.adapters.storage.sqlite_metrics import SQLiteMetricStorage
from hostwatch.adapters.storage.sqlite_thresholds import SQLiteThresholdStorage
from hostwatch.config import HostwatchConfig
from hostwatch.core.models import MetricThreshold
from hostwatch.core.ports import (
    AlertStoragePort,
    MetricStoragePort,
    SampleSourcePort,
    ThresholdStoragePort,
)
from hostwatch.services.alerts import AlertManager
from hostwatch.services.sampler import Sampler
from hostwatch.services.scheduler import PeriodicTask

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """The three stores a monitor works against."""

    metrics: MetricStoragePort
    thresholds: ThresholdStoragePort
    alerts: AlertStoragePort

    @classmethod
    def sqlite(cls, db_path: str) -> "Stores":
        """SQLite stores sharing one database file."""
        return cls(
            metrics=SQLiteMetricStorage(db_path),
            thresholds=SQLiteThresholdStorage(db_path),
            alerts=SQLiteAlertStorage(db_path),
        )

    @classmethod
    def in_memory(cls) -> "Stores":
        return cls(
            metrics=InMemoryMetricStorage(),
            thresholds=InMemoryThresholdStorage(),
            alerts=InMemoryAlertStorage(),
        )

    async def close(self) -> None:
        """Close stores that hold connections."""
        for store in (self.metrics, self.thresholds, self.alerts):
            close = getattr(store, "close", None)
            if close is not None:
                await close()


async def seed_thresholds(
    threshold_storage: ThresholdStoragePort, defaults: list[MetricThreshold]
) -> list[MetricThreshold]:
    """Store each default threshold whose type has none configured yet.

    Returns:
        The thresholds that were added.
    """
    added = []
    for threshold in defaults:
        if await threshold_storage.get(threshold.type) is None:
            await threshold_storage.upsert(threshold)
            logger.info(
                "Created default threshold for %s: %.1f%%",
                threshold.type,
                threshold.threshold,
            )
            added.append(threshold)
    return added


class Monitor:
    """Runs the sampler and the alert manager as two periodic tasks.

    Both tasks share one shutdown event; ``stop()`` sets it and ``run()``
    returns once both loops have finished their current cycle.

    Args:
        config: Intervals and default thresholds.
        stores: Metric, threshold and alert stores.
        source: Sample source; defaults to psutil with the configured window.
    """

    def __init__(
        self,
        config: HostwatchConfig,
        stores: Stores,
        source: SampleSourcePort | None = None,
    ) -> None:
        self.config = config
        self.stores = stores
        self.source = (
            source
            if source is not None
            else PsutilSampleSource(cpu_window=config.cpu_sample_window)
        )
        self.sampler = Sampler(self.source, stores.metrics)
        self.alert_manager = AlertManager(stores.metrics, stores.thresholds, stores.alerts)
        self.shutdown = asyncio.Event()
        self.sampling_task = PeriodicTask(
            "metrics collection",
            self.sampler.run_sampling_cycle,
            config.sample_interval,
            self.shutdown,
        )
        self.evaluation_task = PeriodicTask(
            "alert monitoring",
            self.alert_manager.run_evaluation_cycle,
            config.evaluation_interval,
            self.shutdown,
        )

    @classmethod
    def from_config(
        cls, config: HostwatchConfig, source: SampleSourcePort | None = None
    ) -> "Monitor":
        """Monitor backed by SQLite at ``config.db_path``."""
        return cls(config, Stores.sqlite(config.db_path), source)

    async def start(self) -> None:
        """Prepare stores; seeds default thresholds."""
        await seed_thresholds(self.stores.thresholds, self.config.default_thresholds())

    async def run(self) -> None:
        """Run both periodic tasks until ``stop()`` is called."""
        await self.start()
        try:
            await asyncio.gather(self.sampling_task.run(), self.evaluation_task.run())
        finally:
            await self.stores.close()

    def stop(self) -> None:
        """Signal both tasks to stop after their current cycle."""
        self.shutdown.set()

    def install_signal_handlers(self) -> None:
        """Stop on SIGINT and SIGTERM. Must be called from the running loop."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.stop)
