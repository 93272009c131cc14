"""SQLite storage adapter for metric thresholds."""

from hostwatch.adapters.storage.sqlite_base import SQLiteStorageBase
from hostwatch.core.models import MetricThreshold, MetricType

_THRESHOLDS_SCHEMA = """
CREATE TABLE IF NOT EXISTS metric_thresholds (
    metric_type TEXT PRIMARY KEY,
    threshold REAL NOT NULL,
    enabled INTEGER NOT NULL DEFAULT 1
);
"""

_UPSERT_THRESHOLD = """
INSERT INTO metric_thresholds (metric_type, threshold, enabled) VALUES (?, ?, ?)
ON CONFLICT(metric_type) DO UPDATE SET
    threshold = excluded.threshold,
    enabled = excluded.enabled
"""

_SELECT_THRESHOLDS = """
SELECT metric_type, threshold, enabled FROM metric_thresholds
ORDER BY metric_type
"""

_SELECT_ENABLED_THRESHOLDS = """
SELECT metric_type, threshold, enabled FROM metric_thresholds
WHERE enabled = 1
ORDER BY metric_type
"""

_SELECT_THRESHOLD = """
SELECT metric_type, threshold, enabled FROM metric_thresholds
WHERE metric_type = ?
"""


class SQLiteThresholdStorage(SQLiteStorageBase):
    """SQLite implementation of ThresholdStoragePort.

    One row per metric type; ``upsert`` replaces it in a single statement.
    """

    _schema = _THRESHOLDS_SCHEMA

    async def enabled_thresholds(self) -> list[MetricThreshold]:
        """Return all enabled thresholds."""
        rows = await self._fetchall(_SELECT_ENABLED_THRESHOLDS)
        return [self._from_row(row) for row in rows]

    async def all_thresholds(self) -> list[MetricThreshold]:
        """Return every configured threshold."""
        rows = await self._fetchall(_SELECT_THRESHOLDS)
        return [self._from_row(row) for row in rows]

    async def get(self, metric_type: MetricType) -> MetricThreshold | None:
        """Return the threshold for a type."""
        row = await self._fetchone(_SELECT_THRESHOLD, (str(metric_type),))
        return self._from_row(row) if row else None

    async def upsert(self, threshold: MetricThreshold) -> None:
        """Create or replace the threshold for its type."""
        await self._execute(
            _UPSERT_THRESHOLD,
            (str(threshold.type), threshold.threshold, int(threshold.enabled)),
        )

    @staticmethod
    def _from_row(row: tuple) -> MetricThreshold:
        return MetricThreshold(
            type=MetricType(row[0]),
            threshold=row[1],
            enabled=bool(row[2]),
        )
