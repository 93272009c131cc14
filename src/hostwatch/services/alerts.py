"""Alert lifecycle manager.

Each metric type moves independently between two states, no active alert
and one active alert. Every evaluation cycle reads the latest stored
reading per enabled threshold:

- reading > threshold and no active alert: create one
- reading > threshold with an active alert: leave it untouched
- reading <= threshold: resolve every active alert of that type

Disabled thresholds are skipped entirely, including any alert already
active for that type.
"""

import logging
import time
from dataclasses import dataclass, field

from hostwatch.core.alerts import build_alert
from hostwatch.core.exceptions import AlertNotFoundError, PersistenceError
from hostwatch.core.models import (
    Alert,
    AlertStatus,
    AlertSummary,
    MetricThreshold,
    MetricType,
)
from hostwatch.core.ports import (
    AlertStoragePort,
    MetricStoragePort,
    ThresholdStoragePort,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_ALERTS = 10


@dataclass
class CycleReport:
    """What one evaluation cycle did.

    Attributes:
        created: Alerts created this cycle.
        resolved: Number of alerts resolved, per metric type.
        errors: Persistence error text, per metric type that failed.
    """

    created: list[Alert] = field(default_factory=list)
    resolved: dict[MetricType, int] = field(default_factory=dict)
    errors: dict[MetricType, str] = field(default_factory=dict)


class AlertManager:
    """Creates and resolves alerts from stored readings and thresholds.

    Args:
        metric_storage: Source of the latest reading per type.
        threshold_storage: Source of enabled thresholds.
        alert_storage: Where alerts are created and resolved.
    """

    def __init__(
        self,
        metric_storage: MetricStoragePort,
        threshold_storage: ThresholdStoragePort,
        alert_storage: AlertStoragePort,
    ) -> None:
        self._metric_storage = metric_storage
        self._threshold_storage = threshold_storage
        self._alert_storage = alert_storage

    async def run_evaluation_cycle(self) -> CycleReport:
        """Evaluate every enabled threshold against its latest reading.

        Persistence failures are logged and isolated to the metric type
        they happened on.
        """
        report = CycleReport()
        try:
            thresholds = await self._threshold_storage.enabled_thresholds()
        except PersistenceError as err:
            logger.error("Evaluation cycle skipped, cannot read thresholds: %s", err)
            return report

        for threshold in thresholds:
            try:
                await self._evaluate(threshold, report)
            except PersistenceError as err:
                logger.error("Failed to evaluate %s alerts: %s", threshold.type, err)
                report.errors[threshold.type] = str(err)
        return report

    async def _evaluate(self, threshold: MetricThreshold, report: CycleReport) -> None:
        reading = await self._metric_storage.latest(threshold.type)
        if reading is None:
            return

        if reading.value > threshold.threshold:
            if await self._alert_storage.find_active(threshold.type) is not None:
                return
            alert = await self._alert_storage.create(
                build_alert(
                    threshold.type,
                    reading.value,
                    threshold.threshold,
                    triggered_at=reading.timestamp,
                )
            )
            report.created.append(alert)
            logger.warning(
                "Alert created: %s - %.2f%% > %.2f%% (%s)",
                alert.type,
                alert.value,
                alert.threshold,
                alert.severity,
            )
        else:
            resolved = await self.resolve_active(threshold.type)
            if resolved:
                report.resolved[threshold.type] = resolved

    async def resolve_active(self, metric_type: MetricType) -> int:
        """Resolve every active alert of a type.

        Returns:
            Number of alerts resolved; 0 when none were active.
        """
        resolved = await self._alert_storage.resolve_active(metric_type, time.time())
        if resolved:
            logger.info("Resolved %d alerts for %s", resolved, metric_type)
        return resolved

    async def create_alert(
        self, metric_type: MetricType, value: float, threshold: float
    ) -> Alert:
        """Manually create an active alert, triggered now.

        Unlike the evaluation cycle this does not check for an existing
        active alert.

        Raises:
            PersistenceError: If the alert cannot be stored.
        """
        alert = await self._alert_storage.create(build_alert(metric_type, value, threshold))
        logger.info("Alert created manually: %s (id=%s)", alert.message, alert.id)
        return alert

    async def resolve_alert(self, alert_id: int) -> None:
        """Manually resolve one alert.

        Raises:
            AlertNotFoundError: If no active alert has this id.
        """
        if not await self._alert_storage.resolve(alert_id, time.time()):
            raise AlertNotFoundError(f"alert {alert_id} not found or already resolved")
        logger.info("Alert %d resolved manually", alert_id)

    async def list_alerts(
        self, status: AlertStatus | None = None, limit: int = 0
    ) -> list[Alert]:
        """Alerts newest first, optionally filtered by status."""
        return await self._alert_storage.list_alerts(status, limit)

    async def summary(self, limit: int = DEFAULT_RECENT_ALERTS) -> AlertSummary:
        """Counts by status, type and severity plus the ``limit`` newest alerts."""
        counts = await self._alert_storage.counts()
        recent = await self._alert_storage.list_alerts(None, limit)
        return AlertSummary(
            total=counts.total,
            active=counts.active,
            resolved=counts.resolved,
            by_type=counts.by_type,
            by_severity=counts.by_severity,
            recent=recent,
        )
