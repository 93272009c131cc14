"""SQLite storage adapter for metric readings."""

from hostwatch.adapters.storage.sqlite_base import SQLiteStorageBase
from hostwatch.core.models import MetricReading, MetricSummary, MetricType

_METRICS_SCHEMA = """
CREATE TABLE IF NOT EXISTS metrics (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    metric_type TEXT NOT NULL,
    value REAL NOT NULL,
    unit TEXT NOT NULL DEFAULT '%',
    timestamp REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_metrics_type_timestamp ON metrics(metric_type, timestamp);
"""

_INSERT_METRIC = """
INSERT INTO metrics (metric_type, value, unit, timestamp) VALUES (?, ?, ?, ?)
"""

# id DESC breaks timestamp ties so the last written reading wins
_SELECT_HISTORY = """
SELECT metric_type, value, unit, timestamp FROM metrics
WHERE metric_type = ?
ORDER BY timestamp DESC, id DESC
LIMIT ?
"""

_SELECT_SUMMARY = """
SELECT AVG(value), MIN(value), MAX(value), COUNT(*) FROM (
    SELECT value FROM metrics
    WHERE metric_type = ?
    ORDER BY timestamp DESC, id DESC
    LIMIT ?
)
"""

def _sql_limit(limit: int) -> int:
    """SQLite treats a negative LIMIT as unbounded."""
    return limit if limit > 0 else -1


class SQLiteMetricStorage(SQLiteStorageBase):
    """SQLite implementation of MetricStoragePort.

    Stores readings in a SQLite database using aiosqlite for non-blocking
    async operations. Uses WAL mode for concurrent access. Every write is
    committed before ``write`` returns, so a later ``latest`` on any
    connection sees it.
    """

    _schema = _METRICS_SCHEMA

    async def write(self, reading: MetricReading) -> None:
        """Append a reading to storage."""
        await self._execute(
            _INSERT_METRIC,
            (str(reading.type), reading.value, reading.unit, reading.timestamp),
        )

    async def latest(self, metric_type: MetricType) -> MetricReading | None:
        """Return the most recent reading for a type."""
        row = await self._fetchone(_SELECT_HISTORY, (str(metric_type), 1))
        return self._from_row(row) if row else None

    async def history(
        self, metric_type: MetricType, limit: int = 0
    ) -> list[MetricReading]:
        """Return readings for a type, newest first."""
        rows = await self._fetchall(
            _SELECT_HISTORY, (str(metric_type), _sql_limit(limit))
        )
        return [self._from_row(row) for row in rows]

    async def summary(self, metric_type: MetricType, limit: int = 0) -> MetricSummary:
        """Aggregate the newest readings of a type."""
        row = await self._fetchone(
            _SELECT_SUMMARY, (str(metric_type), _sql_limit(limit))
        )
        if not row or not row[3]:
            return MetricSummary(type=metric_type)
        return MetricSummary(
            type=metric_type,
            average=row[0],
            min=row[1],
            max=row[2],
            count=row[3],
        )

    @staticmethod
    def _from_row(row: tuple) -> MetricReading:
        return MetricReading(
            type=MetricType(row[0]),
            value=row[1],
            unit=row[2],
            timestamp=row[3],
        )
