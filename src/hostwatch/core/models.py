"""Core domain models for host metrics, alerts and log statistics."""

from dataclasses import dataclass, field
from enum import StrEnum


class MetricType(StrEnum):
    """Kind of host resource being sampled."""

    CPU = "cpu"
    MEMORY = "memory"


class AlertSeverity(StrEnum):
    """Severity tier derived from how far a reading exceeds its threshold."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertStatus(StrEnum):
    """Lifecycle status of an alert. Only ever moves active -> resolved."""

    ACTIVE = "active"
    RESOLVED = "resolved"


class LogLevel(StrEnum):
    """Level tags recognized by the log analyzer."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


@dataclass(frozen=True)
class MetricReading:
    """A single utilization reading.

    Attributes:
        type: Which resource was sampled.
        value: Utilization percentage.
        timestamp: Unix timestamp in seconds.
        unit: Unit of the value (always "%" for host utilization).
    """

    type: MetricType
    value: float
    timestamp: float
    unit: str = "%"


@dataclass(frozen=True)
class MetricThreshold:
    """Configured ceiling for one metric type.

    Attributes:
        type: Metric type the threshold applies to.
        threshold: Readings strictly above this value breach the threshold.
        enabled: Disabled thresholds are skipped during evaluation.
    """

    type: MetricType
    threshold: float
    enabled: bool = True


@dataclass(frozen=True)
class MetricSummary:
    """Aggregate over the most recent readings of one metric type."""

    type: MetricType
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class SystemMetrics:
    """Point-in-time CPU and memory snapshot."""

    cpu_percent: float
    memory_percent: float
    timestamp: float

    def value_for(self, metric_type: MetricType) -> float:
        """Return the snapshot value for the given metric type."""
        if metric_type == MetricType.CPU:
            return self.cpu_percent
        return self.memory_percent


@dataclass(frozen=True)
class Alert:
    """A threshold breach record.

    Attributes:
        type: Metric type that breached.
        message: Human-readable description including value and threshold.
        value: Reading that triggered the alert.
        threshold: Threshold in force when the alert was triggered.
        severity: Tier computed from the exceed percentage.
        triggered_at: Unix timestamp of the triggering reading.
        status: Active until resolved.
        resolved_at: Unix timestamp of resolution, None while active.
        id: Store-assigned identifier, None until persisted.
    """

    type: MetricType
    message: str
    value: float
    threshold: float
    severity: AlertSeverity
    triggered_at: float
    status: AlertStatus = AlertStatus.ACTIVE
    resolved_at: float | None = None
    id: int | None = None

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE


@dataclass(frozen=True)
class AlertCounts:
    """Alert totals as reported by an alert store."""

    total: int = 0
    active: int = 0
    resolved: int = 0
    by_type: dict[MetricType, int] = field(default_factory=dict)
    by_severity: dict[AlertSeverity, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AlertSummary:
    """Aggregated alert view with the most recent alerts attached."""

    total: int = 0
    active: int = 0
    resolved: int = 0
    by_type: dict[MetricType, int] = field(default_factory=dict)
    by_severity: dict[AlertSeverity, int] = field(default_factory=dict)
    recent: list[Alert] = field(default_factory=list)


@dataclass(frozen=True)
class LogEntry:
    """A leveled log line.

    Attributes:
        level: Level tag found on the line.
        message: Text after the level tag, or the whole line when empty.
    """

    level: LogLevel
    message: str


@dataclass(frozen=True)
class ErrorFrequency:
    """How many times an ERROR message occurred."""

    message: str
    count: int


@dataclass(frozen=True)
class LogStats:
    """Aggregate statistics for an analyzed log.

    Attributes:
        level_counts: Number of entries per recognized level.
        top_errors: Most frequent ERROR messages, descending by count.
        total_entries: Number of lines carrying a recognized level tag.
    """

    level_counts: dict[LogLevel, int] = field(default_factory=dict)
    top_errors: list[ErrorFrequency] = field(default_factory=list)
    total_entries: int = 0
