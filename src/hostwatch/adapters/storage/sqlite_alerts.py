"""SQLite storage adapter for alerts."""

from dataclasses import replace

from hostwatch.adapters.storage.sqlite_base import SQLiteStorageBase
from hostwatch.core.models import (
    Alert,
    AlertCounts,
    AlertSeverity,
    AlertStatus,
    MetricType,
)

_ALERTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS alerts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    metric_type TEXT NOT NULL,
    message TEXT NOT NULL,
    value REAL NOT NULL,
    threshold REAL NOT NULL,
    severity TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'active',
    triggered_at REAL NOT NULL,
    resolved_at REAL
);
CREATE INDEX IF NOT EXISTS idx_alerts_type_status ON alerts(metric_type, status);
CREATE INDEX IF NOT EXISTS idx_alerts_triggered_at ON alerts(triggered_at);
"""

_ALERT_COLUMNS = """
id, metric_type, message, value, threshold, severity, status, triggered_at, resolved_at
"""

_INSERT_ALERT = """
INSERT INTO alerts
    (metric_type, message, value, threshold, severity, status, triggered_at, resolved_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

_SELECT_ACTIVE = f"""
SELECT {_ALERT_COLUMNS} FROM alerts
WHERE metric_type = ? AND status = 'active'
ORDER BY triggered_at DESC, id DESC
LIMIT 1
"""

_RESOLVE_ACTIVE = """
UPDATE alerts SET status = 'resolved', resolved_at = ?
WHERE metric_type = ? AND status = 'active'
"""

_RESOLVE_BY_ID = """
UPDATE alerts SET status = 'resolved', resolved_at = ?
WHERE id = ? AND status = 'active'
"""

_SELECT_ALERTS = f"""
SELECT {_ALERT_COLUMNS} FROM alerts
ORDER BY triggered_at DESC, id DESC
LIMIT ?
"""

_SELECT_ALERTS_BY_STATUS = f"""
SELECT {_ALERT_COLUMNS} FROM alerts
WHERE status = ?
ORDER BY triggered_at DESC, id DESC
LIMIT ?
"""

_COUNT_BY_STATUS = """
SELECT status, COUNT(*) FROM alerts GROUP BY status
"""

_COUNT_BY_TYPE = """
SELECT metric_type, COUNT(*) FROM alerts GROUP BY metric_type
"""

_COUNT_BY_SEVERITY = """
SELECT severity, COUNT(*) FROM alerts GROUP BY severity
"""


class SQLiteAlertStorage(SQLiteStorageBase):
    """SQLite implementation of AlertStoragePort.

    Creating an alert is a single INSERT and resolving is a single UPDATE,
    so each write is atomic per row. The one-active-alert-per-type rule is
    enforced by the alert manager, not by the table.
    """

    _schema = _ALERTS_SCHEMA

    async def find_active(self, metric_type: MetricType) -> Alert | None:
        """Return an active alert for the type, or None."""
        row = await self._fetchone(_SELECT_ACTIVE, (str(metric_type),))
        return self._from_row(row) if row else None

    async def create(self, alert: Alert) -> Alert:
        """Insert a new alert and return it with its assigned id."""
        alert_id = await self._insert(
            _INSERT_ALERT,
            (
                str(alert.type),
                alert.message,
                alert.value,
                alert.threshold,
                str(alert.severity),
                str(alert.status),
                alert.triggered_at,
                alert.resolved_at,
            ),
        )
        return replace(alert, id=alert_id)

    async def resolve_active(self, metric_type: MetricType, now: float) -> int:
        """Resolve every active alert of a type."""
        return await self._execute(_RESOLVE_ACTIVE, (now, str(metric_type)))

    async def resolve(self, alert_id: int, now: float) -> bool:
        """Resolve one alert if it exists and is active."""
        return await self._execute(_RESOLVE_BY_ID, (now, alert_id)) > 0

    async def list_alerts(
        self, status: AlertStatus | None = None, limit: int = 0
    ) -> list[Alert]:
        """Return alerts newest first, optionally filtered by status."""
        sql_limit = limit if limit > 0 else -1
        if status is None:
            rows = await self._fetchall(_SELECT_ALERTS, (sql_limit,))
        else:
            rows = await self._fetchall(_SELECT_ALERTS_BY_STATUS, (str(status), sql_limit))
        return [self._from_row(row) for row in rows]

    async def counts(self) -> AlertCounts:
        """Return totals by status, type and severity."""
        by_status = dict(await self._fetchall(_COUNT_BY_STATUS))
        by_type = await self._fetchall(_COUNT_BY_TYPE)
        by_severity = await self._fetchall(_COUNT_BY_SEVERITY)
        active = by_status.get(str(AlertStatus.ACTIVE), 0)
        resolved = by_status.get(str(AlertStatus.RESOLVED), 0)
        return AlertCounts(
            total=active + resolved,
            active=active,
            resolved=resolved,
            by_type={MetricType(name): count for name, count in by_type},
            by_severity={AlertSeverity(name): count for name, count in by_severity},
        )

    @staticmethod
    def _from_row(row: tuple) -> Alert:
        return Alert(
            id=row[0],
            type=MetricType(row[1]),
            message=row[2],
            value=row[3],
            threshold=row[4],
            severity=AlertSeverity(row[5]),
            status=AlertStatus(row[6]),
            triggered_at=row[7],
            resolved_at=row[8],
        )
