"""Shared CLI helpers: config, store lifecycle and error reporting."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from hostwatch.adapters.logging import configure_logging
from hostwatch.adapters.sources.psutil_source import PsutilSampleSource
from hostwatch.adapters.storage.async_utils import run_sync
from hostwatch.config import HostwatchConfig
from hostwatch.core.exceptions import HostwatchError
from hostwatch.core.models import Alert, MetricType
from hostwatch.core.ports import SampleSourcePort
from hostwatch.runtime import Stores

T = TypeVar("T")

DB_OPTION = typer.Option(None, "--db", help="SQLite database path (overrides HOSTWATCH_DB_PATH).")
METRIC_TYPE_ARGUMENT = typer.Argument(..., help="Metric type: cpu or memory.")


def get_config(db: str | None = None) -> HostwatchConfig:
    """Build config from the environment, applying the --db override."""
    config = HostwatchConfig(db_path=db) if db else HostwatchConfig()
    configure_logging(config.log_level)
    return config


def build_source(config: HostwatchConfig) -> SampleSourcePort:
    """Sample source used by commands that read the host."""
    return PsutilSampleSource(cpu_window=config.cpu_sample_window)


def with_stores(config: HostwatchConfig, action: Callable[[Stores], Awaitable[T]]) -> T:
    """Open the configured SQLite stores, run ``action`` and close them."""

    async def _run() -> T:
        stores = Stores.sqlite(config.db_path)
        try:
            return await action(stores)
        finally:
            await stores.close()

    return run_sync(_run())


def parse_metric_type(value: str) -> MetricType:
    try:
        return MetricType(value.lower())
    except ValueError:
        choices = ", ".join(t.value for t in MetricType)
        raise typer.BadParameter(f"{value!r} is not one of: {choices}") from None


def handle_error(msg: str) -> None:
    """Print an error message and exit."""
    typer.echo(f"Error: {msg}", err=True)
    raise typer.Exit(1)


def reports_errors(f: Callable[..., Any]) -> Callable[..., Any]:
    """Turn HostwatchError into an error line and exit code 1."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except HostwatchError as err:
            handle_error(str(err))

    return wrapper


def format_alert(alert: Alert) -> str:
    resolved = f" resolved_at={alert.resolved_at:.0f}" if alert.resolved_at else ""
    return (
        f"#{alert.id:<5} {alert.status:<9} {alert.severity:<9} {alert.type:<7} "
        f"{alert.message}{resolved}"
    )
