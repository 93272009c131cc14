"""Alert helper functions: severity policy, messages and Alert construction."""

import time

from hostwatch.core.models import Alert, AlertSeverity, MetricType

_MESSAGE_TEMPLATES = {
    MetricType.CPU: "High CPU usage detected: {value:.2f}% (threshold: {threshold:.2f}%)",
    MetricType.MEMORY: (
        "High memory usage detected: {value:.2f}% (threshold: {threshold:.2f}%)"
    ),
}

_FALLBACK_TEMPLATE = (
    "Threshold breached for {type}: {value:.2f}% (threshold: {threshold:.2f}%)"
)

# Lower bounds are inclusive: exactly 25% over is HIGH, not MEDIUM.
SEVERITY_TIERS: list[tuple[float, AlertSeverity]] = [
    (50.0, AlertSeverity.CRITICAL),
    (25.0, AlertSeverity.HIGH),
    (10.0, AlertSeverity.MEDIUM),
]


def exceed_percentage(value: float, threshold: float) -> float:
    """Return how far value is above threshold, as a percentage of threshold.

    Args:
        value: Observed reading.
        threshold: Configured ceiling. Must be positive.

    Returns:
        (value - threshold) / threshold * 100
    """
    return (value - threshold) / threshold * 100


def calculate_severity(value: float, threshold: float) -> AlertSeverity:
    """Map a reading and its threshold to a severity tier.

    Args:
        value: Observed reading.
        threshold: Configured ceiling.

    Returns:
        CRITICAL at >= 50% over, HIGH at >= 25%, MEDIUM at >= 10%, else LOW.
        A non-positive threshold has no meaningful ratio, so any reading
        above it is CRITICAL.
    """
    if threshold <= 0:
        return AlertSeverity.CRITICAL if value > threshold else AlertSeverity.LOW
    pct = exceed_percentage(value, threshold)
    for bound, severity in SEVERITY_TIERS:
        if pct >= bound:
            return severity
    return AlertSeverity.LOW


def alert_message(metric_type: MetricType | str, value: float, threshold: float) -> str:
    """Build the human-readable alert message.

    Value and threshold are always rendered with two decimals.
    """
    template = _MESSAGE_TEMPLATES.get(metric_type, _FALLBACK_TEMPLATE)
    return template.format(type=metric_type, value=value, threshold=threshold)


def build_alert(
    metric_type: MetricType,
    value: float,
    threshold: float,
    triggered_at: float | None = None,
) -> Alert:
    """Create an active, unpersisted Alert for a breach.

    Args:
        metric_type: Metric type that breached.
        value: Reading that breached.
        threshold: Threshold in force.
        triggered_at: Unix timestamp; defaults to now.

    Returns:
        Alert with computed message and severity and no id.
    """
    return Alert(
        type=metric_type,
        message=alert_message(metric_type, value, threshold),
        value=value,
        threshold=threshold,
        severity=calculate_severity(value, threshold),
        triggered_at=time.time() if triggered_at is None else triggered_at,
    )
