"""Tests for the AlertManager lifecycle."""

import asyncio
import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hostwatch.adapters.storage.in_memory import (
    InMemoryAlertStorage,
    InMemoryMetricStorage,
    InMemoryThresholdStorage,
)
from hostwatch.core.exceptions import AlertNotFoundError
from hostwatch.core.models import (
    AlertSeverity,
    AlertStatus,
    MetricReading,
    MetricThreshold,
    MetricType,
)
from hostwatch.services.alerts import AlertManager
from tests.fakes import FailingAlertStorage, FailingThresholdStorage

pytestmark = pytest.mark.services


async def record(
    storage: InMemoryMetricStorage, metric_type: MetricType, value: float, ts: float
) -> None:
    await storage.write(MetricReading(type=metric_type, value=value, timestamp=ts))


class TestEvaluationCycle:
    """Tests for AlertManager.run_evaluation_cycle()."""

    async def test_breach_creates_alert(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 90.0, 1000.0)

        report = await manager.run_evaluation_cycle()

        [alert] = report.created
        assert alert.id is not None
        assert alert.type == MetricType.CPU
        assert alert.value == 90.0
        assert alert.threshold == 80.0
        assert alert.severity == AlertSeverity.MEDIUM
        assert alert.triggered_at == 1000.0
        assert alert.message == "High CPU usage detected: 90.00% (threshold: 80.00%)"
        assert await alert_storage.find_active(MetricType.CPU) == alert

    async def test_breach_then_recovery_resolves(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 90.0, 1000.0)
        await manager.run_evaluation_cycle()
        await record(metric_storage, MetricType.CPU, 70.0, 1030.0)

        report = await manager.run_evaluation_cycle()

        assert report.resolved == {MetricType.CPU: 1}
        [alert] = await alert_storage.list_alerts()
        assert alert.status == AlertStatus.RESOLVED
        assert alert.resolved_at is not None

        await record(metric_storage, MetricType.CPU, 60.0, 1060.0)
        report = await manager.run_evaluation_cycle()

        assert report.resolved == {}
        assert await alert_storage.list_alerts() == [alert]

    async def test_sustained_breach_creates_one_alert(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        for i, value in enumerate([90.0, 95.0, 130.0]):
            await record(metric_storage, MetricType.CPU, value, 1000.0 + i)
            await manager.run_evaluation_cycle()

        [alert] = await alert_storage.list_alerts()
        assert alert.value == 90.0
        assert alert.severity == AlertSeverity.MEDIUM

    async def test_value_equal_to_threshold_is_not_a_breach(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 80.0, 1000.0)

        report = await manager.run_evaluation_cycle()

        assert report.created == []

    async def test_no_readings_is_a_no_op(self, manager: AlertManager) -> None:
        report = await manager.run_evaluation_cycle()

        assert report.created == []
        assert report.resolved == {}
        assert report.errors == {}

    async def test_recovery_without_active_alert_resolves_nothing(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 10.0, 1000.0)

        report = await manager.run_evaluation_cycle()

        assert report.resolved == {}

    async def test_types_are_independent(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 90.0, 1000.0)
        await record(metric_storage, MetricType.MEMORY, 80.0, 1000.0)
        await manager.run_evaluation_cycle()
        await record(metric_storage, MetricType.CPU, 50.0, 1001.0)

        await manager.run_evaluation_cycle()

        assert await alert_storage.find_active(MetricType.CPU) is None
        memory_alert = await alert_storage.find_active(MetricType.MEMORY)
        assert memory_alert is not None
        assert memory_alert.message.startswith("High memory usage detected: 80.00%")

    async def test_disabled_threshold_is_skipped(
        self,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        thresholds = InMemoryThresholdStorage(
            [MetricThreshold(type=MetricType.CPU, threshold=80.0, enabled=False)]
        )
        manager = AlertManager(metric_storage, thresholds, alert_storage)
        await record(metric_storage, MetricType.CPU, 99.0, 1000.0)

        report = await manager.run_evaluation_cycle()

        assert report.created == []
        assert await alert_storage.list_alerts() == []

    async def test_disabling_leaves_active_alert_untouched(
        self,
        manager: AlertManager,
        metric_storage: InMemoryMetricStorage,
        threshold_storage: InMemoryThresholdStorage,
        alert_storage: InMemoryAlertStorage,
    ) -> None:
        await record(metric_storage, MetricType.CPU, 90.0, 1000.0)
        await manager.run_evaluation_cycle()
        await threshold_storage.upsert(
            MetricThreshold(type=MetricType.CPU, threshold=80.0, enabled=False)
        )
        await record(metric_storage, MetricType.CPU, 10.0, 1001.0)

        await manager.run_evaluation_cycle()

        assert await alert_storage.find_active(MetricType.CPU) is not None

    async def test_threshold_read_failure_skips_cycle(
        self,
        metric_storage: InMemoryMetricStorage,
        alert_storage: InMemoryAlertStorage,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        manager = AlertManager(metric_storage, FailingThresholdStorage(), alert_storage)
        await record(metric_storage, MetricType.CPU, 99.0, 1000.0)

        with caplog.at_level(logging.ERROR):
            report = await manager.run_evaluation_cycle()

        assert report.created == []
        assert "cannot read thresholds" in caplog.text

    async def test_store_failure_is_isolated_per_type(
        self,
        metric_storage: InMemoryMetricStorage,
        threshold_storage: InMemoryThresholdStorage,
    ) -> None:
        alerts = FailingAlertStorage({MetricType.CPU})
        manager = AlertManager(metric_storage, threshold_storage, alerts)
        await record(metric_storage, MetricType.CPU, 99.0, 1000.0)
        await record(metric_storage, MetricType.MEMORY, 99.0, 1000.0)

        report = await manager.run_evaluation_cycle()

        assert list(report.errors) == [MetricType.CPU]
        assert [a.type for a in report.created] == [MetricType.MEMORY]


class TestManualOperations:
    """Tests for manual create/resolve and read operations."""

    async def test_create_alert_bypasses_duplicate_check(
        self, manager: AlertManager, alert_storage: InMemoryAlertStorage
    ) -> None:
        first = await manager.create_alert(MetricType.CPU, 95.0, 80.0)
        second = await manager.create_alert(MetricType.CPU, 96.0, 80.0)

        assert first.id != second.id
        assert len(await alert_storage.list_alerts(AlertStatus.ACTIVE)) == 2

    async def test_create_alert_computes_severity(self, manager: AlertManager) -> None:
        alert = await manager.create_alert(MetricType.MEMORY, 150.0, 75.0)

        assert alert.severity == AlertSeverity.CRITICAL
        assert alert.status == AlertStatus.ACTIVE

    async def test_resolve_active_by_type(
        self, manager: AlertManager, alert_storage: InMemoryAlertStorage
    ) -> None:
        await manager.create_alert(MetricType.CPU, 95.0, 80.0)
        await manager.create_alert(MetricType.CPU, 96.0, 80.0)

        assert await manager.resolve_active(MetricType.CPU) == 2
        assert await manager.resolve_active(MetricType.CPU) == 0

    async def test_resolve_alert_by_id(
        self, manager: AlertManager, alert_storage: InMemoryAlertStorage
    ) -> None:
        alert = await manager.create_alert(MetricType.CPU, 95.0, 80.0)

        await manager.resolve_alert(alert.id)

        assert await alert_storage.find_active(MetricType.CPU) is None

    async def test_resolve_alert_twice_raises(self, manager: AlertManager) -> None:
        alert = await manager.create_alert(MetricType.CPU, 95.0, 80.0)
        await manager.resolve_alert(alert.id)

        with pytest.raises(AlertNotFoundError, match="already resolved"):
            await manager.resolve_alert(alert.id)

    async def test_resolve_unknown_alert_raises(self, manager: AlertManager) -> None:
        with pytest.raises(AlertNotFoundError):
            await manager.resolve_alert(404)

    async def test_list_alerts_filters_by_status(self, manager: AlertManager) -> None:
        resolved = await manager.create_alert(MetricType.CPU, 95.0, 80.0)
        await manager.create_alert(MetricType.MEMORY, 95.0, 75.0)
        await manager.resolve_alert(resolved.id)

        active = await manager.list_alerts(AlertStatus.ACTIVE)

        assert [a.type for a in active] == [MetricType.MEMORY]

    async def test_summary(self, manager: AlertManager) -> None:
        for value in (85.0, 95.0, 130.0):
            await manager.create_alert(MetricType.CPU, value, 80.0)
        await manager.resolve_alert(1)

        summary = await manager.summary(limit=2)

        assert (summary.total, summary.active, summary.resolved) == (3, 2, 1)
        assert summary.by_type == {MetricType.CPU: 3}
        assert summary.by_severity == {
            AlertSeverity.LOW: 1,
            AlertSeverity.MEDIUM: 1,
            AlertSeverity.CRITICAL: 1,
        }
        assert len(summary.recent) == 2


class TestLifecycleProperties:
    """Property tests over arbitrary reading sequences."""

    @pytest.mark.tier(0)
    @settings(max_examples=50, deadline=None)
    @given(values=st.lists(st.floats(min_value=0, max_value=100), max_size=20))
    def test_at_most_one_active_alert_per_type(self, values: list[float]) -> None:
        """Evaluation never leaves more than one active alert per type."""

        async def scenario() -> None:
            metrics = InMemoryMetricStorage()
            alerts = InMemoryAlertStorage()
            manager = AlertManager(
                metrics,
                InMemoryThresholdStorage(
                    [MetricThreshold(type=MetricType.CPU, threshold=80.0)]
                ),
                alerts,
            )
            for i, value in enumerate(values):
                await record(metrics, MetricType.CPU, value, 1000.0 + i)
                await manager.run_evaluation_cycle()

                active = await alerts.list_alerts(AlertStatus.ACTIVE)
                assert len(active) <= 1
                assert bool(active) == (value > 80.0)

        asyncio.run(scenario())
