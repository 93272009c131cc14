"""Storage adapters implementing core ports."""

from hostwatch.adapters.storage.async_utils import run_sync
from hostwatch.adapters.storage.in_memory import (
    InMemoryAlertStorage,
    InMemoryMetricStorage,
    InMemoryThresholdStorage,
)
from hostwatch.adapters.storage.sqlite_alerts import SQLiteAlertStorage
from hostwatch.adapters.storage.sqlite_metrics import SQLiteMetricStorage
from hostwatch.adapters.storage.sqlite_thresholds import SQLiteThresholdStorage

__all__ = [
    "InMemoryAlertStorage",
    "InMemoryMetricStorage",
    "InMemoryThresholdStorage",
    "SQLiteAlertStorage",
    "SQLiteMetricStorage",
    "SQLiteThresholdStorage",
    "run_sync",
]
