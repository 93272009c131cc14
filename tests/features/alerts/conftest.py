"""BDD step definitions for the alert lifecycle feature."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from hostwatch.adapters.storage.in_memory import (
    InMemoryAlertStorage,
    InMemoryMetricStorage,
    InMemoryThresholdStorage,
)
from hostwatch.core.models import Alert, AlertStatus, MetricReading, MetricThreshold, MetricType
from hostwatch.services.alerts import AlertManager


def run_async(coro: Any) -> Any:
    """Run a coroutine synchronously."""
    return asyncio.run(coro)


@dataclass
class AlertScenarioContext:
    """Shared state between steps in an alert scenario."""

    metrics: InMemoryMetricStorage = field(default_factory=InMemoryMetricStorage)
    thresholds: InMemoryThresholdStorage = field(default_factory=InMemoryThresholdStorage)
    alerts: InMemoryAlertStorage = field(default_factory=InMemoryAlertStorage)
    clock: float = 1000.0

    @property
    def manager(self) -> AlertManager:
        return AlertManager(self.metrics, self.thresholds, self.alerts)

    def alerts_with(self, status: AlertStatus, metric_type: MetricType) -> list[Alert]:
        alerts = run_async(self.alerts.list_alerts(status))
        return [a for a in alerts if a.type == metric_type]


@pytest.fixture
def ctx() -> AlertScenarioContext:
    """Fresh scenario context for each test."""
    return AlertScenarioContext()


# === Given ===


@given(parsers.parse("a {metric_type} threshold of {value:g}"))
def given_threshold(ctx: AlertScenarioContext, metric_type: str, value: float) -> None:
    threshold = MetricThreshold(type=MetricType(metric_type), threshold=value)
    run_async(ctx.thresholds.upsert(threshold))


@given(parsers.parse("the {metric_type} threshold is disabled"))
def given_threshold_disabled(ctx: AlertScenarioContext, metric_type: str) -> None:
    current = run_async(ctx.thresholds.get(MetricType(metric_type)))
    disabled = MetricThreshold(type=current.type, threshold=current.threshold, enabled=False)
    run_async(ctx.thresholds.upsert(disabled))


# === When ===


@when(parsers.parse("a {metric_type} reading of {value:g} is recorded"))
def when_reading_recorded(ctx: AlertScenarioContext, metric_type: str, value: float) -> None:
    ctx.clock += 30.0
    reading = MetricReading(type=MetricType(metric_type), value=value, timestamp=ctx.clock)
    run_async(ctx.metrics.write(reading))


@when("the alert monitor runs")
def when_monitor_runs(ctx: AlertScenarioContext) -> None:
    run_async(ctx.manager.run_evaluation_cycle())


# === Then ===


@then(
    parsers.re(
        r"there (?:is|are) (?P<count>\d+) (?P<status>active|resolved) "
        r"(?P<metric_type>\w+) alerts?"
    )
)
def then_alert_count(
    ctx: AlertScenarioContext, count: str, status: str, metric_type: str
) -> None:
    alerts = ctx.alerts_with(AlertStatus(status), MetricType(metric_type))
    assert len(alerts) == int(count)


@then(parsers.parse('the active {metric_type} alert has severity "{severity}"'))
def then_alert_severity(ctx: AlertScenarioContext, metric_type: str, severity: str) -> None:
    [alert] = ctx.alerts_with(AlertStatus.ACTIVE, MetricType(metric_type))
    assert alert.severity == severity


@then(parsers.parse('the active {metric_type} alert message is "{message}"'))
def then_alert_message(ctx: AlertScenarioContext, metric_type: str, message: str) -> None:
    [alert] = ctx.alerts_with(AlertStatus.ACTIVE, MetricType(metric_type))
    assert alert.message == message
