"""Tests for the async-to-sync bridge."""

import pytest

from hostwatch.adapters.storage.async_utils import run_sync
from hostwatch.adapters.storage.in_memory import InMemoryMetricStorage
from hostwatch.core.exceptions import PersistenceError
from hostwatch.core.models import MetricReading, MetricType


class TestRunSync:
    """Tests for run_sync()."""

    @pytest.mark.core
    def test_returns_coroutine_result(self) -> None:
        async def answer() -> int:
            return 42

        assert run_sync(answer()) == 42

    @pytest.mark.core
    def test_exceptions_propagate(self) -> None:
        async def fail() -> None:
            raise PersistenceError("disk full")

        with pytest.raises(PersistenceError, match="disk full"):
            run_sync(fail())

    @pytest.mark.storage
    def test_drives_async_storage_from_sync_code(self) -> None:
        storage = InMemoryMetricStorage()
        reading = MetricReading(type=MetricType.CPU, value=1.0, timestamp=1.0)

        run_sync(storage.write(reading))

        assert run_sync(storage.latest(MetricType.CPU)) == reading
