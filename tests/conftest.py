"""Shared test fixtures for all test modules."""

import os
from pathlib import Path

import pytest

from hostwatch.adapters.storage.in_memory import (
    InMemoryAlertStorage,
    InMemoryMetricStorage,
    InMemoryThresholdStorage,
)
from hostwatch.core.models import MetricThreshold, MetricType
from hostwatch.services.alerts import AlertManager
from hostwatch.services.sampler import Sampler
from tests.fakes import FakeSampleSource


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for SQLite storage tests."""
    return str(tmp_path / "hostwatch.db")


@pytest.fixture(autouse=True)
def _clean_hostwatch_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep HOSTWATCH_* variables from the developer shell out of tests."""
    for name in list(os.environ):
        if name.startswith("HOSTWATCH_"):
            monkeypatch.delenv(name)


# === Store Fixtures ===


@pytest.fixture
def metric_storage() -> InMemoryMetricStorage:
    return InMemoryMetricStorage()


@pytest.fixture
def threshold_storage() -> InMemoryThresholdStorage:
    """Thresholds used throughout the alert tests: CPU 80, memory 75."""
    return InMemoryThresholdStorage(
        [
            MetricThreshold(type=MetricType.CPU, threshold=80.0),
            MetricThreshold(type=MetricType.MEMORY, threshold=75.0),
        ]
    )


@pytest.fixture
def alert_storage() -> InMemoryAlertStorage:
    return InMemoryAlertStorage()


# === Service Fixtures ===


@pytest.fixture
def source() -> FakeSampleSource:
    return FakeSampleSource()


@pytest.fixture
def sampler(source: FakeSampleSource, metric_storage: InMemoryMetricStorage) -> Sampler:
    return Sampler(source, metric_storage)


@pytest.fixture
def manager(
    metric_storage: InMemoryMetricStorage,
    threshold_storage: InMemoryThresholdStorage,
    alert_storage: InMemoryAlertStorage,
) -> AlertManager:
    return AlertManager(metric_storage, threshold_storage, alert_storage)
