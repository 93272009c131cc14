"""Configuration via environment variables.

HostwatchConfig is built once by the entry point and passed explicitly to
the components that need it. Every field reads a ``HOSTWATCH_`` variable
at construction time and falls back to a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from hostwatch.core.exceptions import ConfigurationError
from hostwatch.core.models import MetricThreshold, MetricType


def _float_env(var: str, default: float) -> float:
    """Parse a float from an environment variable."""
    raw = os.environ.get(var)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ConfigurationError(f"{var}={raw!r} is not a valid number") from err


def _str_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    return raw if raw else default


@dataclass
class HostwatchConfig:
    """Settings for sampling, alerting and storage.

    Intervals and the CPU window are in seconds. Thresholds are the
    defaults seeded into an empty threshold store; once stored, the store
    is the source of truth.
    """

    db_path: str = field(
        default_factory=lambda: _str_env("HOSTWATCH_DB_PATH", "hostwatch.db")
    )
    sample_interval: float = field(
        default_factory=lambda: _float_env("HOSTWATCH_SAMPLE_INTERVAL", 30.0)
    )
    evaluation_interval: float = field(
        default_factory=lambda: _float_env("HOSTWATCH_EVALUATION_INTERVAL", 30.0)
    )
    cpu_sample_window: float = field(
        default_factory=lambda: _float_env("HOSTWATCH_CPU_SAMPLE_WINDOW", 1.0)
    )
    cpu_threshold: float = field(
        default_factory=lambda: _float_env("HOSTWATCH_CPU_THRESHOLD", 80.0)
    )
    memory_threshold: float = field(
        default_factory=lambda: _float_env("HOSTWATCH_MEMORY_THRESHOLD", 75.0)
    )
    log_level: str = field(
        default_factory=lambda: _str_env("HOSTWATCH_LOG_LEVEL", "INFO").upper()
    )

    def __post_init__(self) -> None:
        if self.sample_interval <= 0:
            raise ConfigurationError(
                f"sample_interval must be positive, got {self.sample_interval}"
            )
        if self.evaluation_interval <= 0:
            raise ConfigurationError(
                f"evaluation_interval must be positive, got {self.evaluation_interval}"
            )
        if self.cpu_sample_window < 0:
            raise ConfigurationError(
                f"cpu_sample_window must not be negative, got {self.cpu_sample_window}"
            )

    def default_thresholds(self) -> list[MetricThreshold]:
        """Thresholds to seed into a threshold store that has none."""
        return [
            MetricThreshold(type=MetricType.CPU, threshold=self.cpu_threshold),
            MetricThreshold(type=MetricType.MEMORY, threshold=self.memory_threshold),
        ]
