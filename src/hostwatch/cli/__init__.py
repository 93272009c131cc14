"""hostwatch CLI -- typer-based command interface.

Commands:
    hostwatch run                      Sample and evaluate until interrupted
    hostwatch sample                   Run one sampling cycle
    hostwatch evaluate                 Run one alert evaluation cycle
    hostwatch analyze <path>           Level counts and top errors for a log file
    hostwatch metrics history/summary  Stored readings
    hostwatch alerts list/summary/create/resolve  Alert management
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from hostwatch.cli import alerts_cmd, metrics_cmd
from hostwatch.cli._common import (
    DB_OPTION,
    build_source,
    format_alert,
    get_config,
    reports_errors,
    with_stores,
)
from hostwatch.core.logs import DEFAULT_TOP_ERRORS, LogAnalyzer, format_stats
from hostwatch.runtime import Monitor, Stores, seed_thresholds
from hostwatch.services.alerts import AlertManager
from hostwatch.services.sampler import Sampler


app = typer.Typer(
    name="hostwatch",
    help="Sample host CPU and memory, manage threshold alerts, analyze log files.",
    no_args_is_help=True,
)

app.add_typer(alerts_cmd.app, name="alerts")
app.add_typer(metrics_cmd.app, name="metrics")


@app.command()
@reports_errors
def run(db: str = DB_OPTION) -> None:
    """Run the sampler and alert monitor until SIGINT or SIGTERM."""
    config = get_config(db)

    async def _main() -> None:
        monitor = Monitor.from_config(config, source=build_source(config))
        monitor.install_signal_handlers()
        await monitor.run()

    asyncio.run(_main())


@app.command()
@reports_errors
def sample(db: str = DB_OPTION) -> None:
    """Take one CPU and memory sample and store it."""
    config = get_config(db)
    source = build_source(config)
    snapshot = with_stores(config, lambda s: Sampler(source, s.metrics).run_sampling_cycle())
    if snapshot is None:
        typer.echo("Sampling failed; see log output.", err=True)
        raise typer.Exit(1)
    typer.echo(f"CPU:    {snapshot.cpu_percent:.2f}%")
    typer.echo(f"Memory: {snapshot.memory_percent:.2f}%")


@app.command()
@reports_errors
def evaluate(db: str = DB_OPTION) -> None:
    """Evaluate thresholds against the latest stored readings once."""
    config = get_config(db)

    async def _evaluate(stores: Stores):
        await seed_thresholds(stores.thresholds, config.default_thresholds())
        manager = AlertManager(stores.metrics, stores.thresholds, stores.alerts)
        return await manager.run_evaluation_cycle()

    report = with_stores(config, _evaluate)
    for alert in report.created:
        typer.echo(f"created  {format_alert(alert)}")
    for metric_type, count in report.resolved.items():
        typer.echo(f"resolved {count} {metric_type} alert(s)")
    for metric_type, error in report.errors.items():
        typer.echo(f"failed   {metric_type}: {error}", err=True)
    if not (report.created or report.resolved or report.errors):
        typer.echo("No alert changes.")


@app.command()
@reports_errors
def analyze(
    path: Path = typer.Argument(..., help="Log file to analyze"),
    top: int = typer.Option(DEFAULT_TOP_ERRORS, "--top", help="Error messages to rank"),
) -> None:
    """Count log levels and rank the most frequent error messages."""
    stats = LogAnalyzer(top_n=top).analyze(path)
    typer.echo(format_stats(stats), nl=False)
