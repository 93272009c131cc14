"""hostwatch - host utilization sampling, threshold alerts and log analysis."""

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
from hostwatch.core.exceptions import (
    AlertNotFoundError,
    ConfigurationError,
    FileAccessError,
    HostwatchError,
    PersistenceError,
    SampleSourceError,
)
from hostwatch.core.logs import LogAnalyzer, format_stats, parse_line
from hostwatch.core.models import (
    Alert,
    AlertSeverity,
    AlertStatus,
    AlertSummary,
    LogEntry,
    LogLevel,
    LogStats,
    MetricReading,
    MetricSummary,
    MetricThreshold,
    MetricType,
    SystemMetrics,
)
from hostwatch.runtime import Monitor, Stores
from hostwatch.services.alerts import AlertManager, CycleReport
from hostwatch.services.sampler import Sampler
from hostwatch.services.scheduler import PeriodicTask

__all__ = [
    "Alert",
    "AlertManager",
    "AlertNotFoundError",
    "AlertSeverity",
    "AlertStatus",
    "AlertSummary",
    "ConfigurationError",
    "CycleReport",
    "FileAccessError",
    "HostwatchConfig",
    "HostwatchError",
    "InMemoryAlertStorage",
    "InMemoryMetricStorage",
    "InMemoryThresholdStorage",
    "LogAnalyzer",
    "LogEntry",
    "LogLevel",
    "LogStats",
    "MetricReading",
    "MetricSummary",
    "MetricThreshold",
    "MetricType",
    "Monitor",
    "PeriodicTask",
    "PersistenceError",
    "PsutilSampleSource",
    "SQLiteAlertStorage",
    "SQLiteMetricStorage",
    "SQLiteThresholdStorage",
    "SampleSourceError",
    "Sampler",
    "Stores",
    "SystemMetrics",
    "format_stats",
    "parse_line",
]
