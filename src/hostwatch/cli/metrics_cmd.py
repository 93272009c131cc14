"""CLI commands for reading stored metrics."""

from __future__ import annotations

import time

import typer

from hostwatch.cli._common import (
    DB_OPTION,
    METRIC_TYPE_ARGUMENT,
    get_config,
    parse_metric_type,
    reports_errors,
    with_stores,
)

app = typer.Typer(help="Read stored CPU and memory readings.")


@app.command()
@reports_errors
def history(
    metric_type: str = METRIC_TYPE_ARGUMENT,
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum readings (0 = all)"),
    db: str = DB_OPTION,
) -> None:
    """Show stored readings, newest first."""
    parsed = parse_metric_type(metric_type)
    config = get_config(db)
    readings = with_stores(config, lambda s: s.metrics.history(parsed, limit))
    if not readings:
        typer.echo(f"No {parsed} readings stored.")
        return
    for reading in readings:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(reading.timestamp))
        typer.echo(f"{stamp}  {reading.value:>6.2f}{reading.unit}")


@app.command()
@reports_errors
def summary(
    metric_type: str = METRIC_TYPE_ARGUMENT,
    limit: int = typer.Option(10, "--limit", "-n", help="Readings to aggregate (0 = all)"),
    db: str = DB_OPTION,
) -> None:
    """Show average, min and max over the newest readings."""
    parsed = parse_metric_type(metric_type)
    config = get_config(db)
    result = with_stores(config, lambda s: s.metrics.summary(parsed, limit))
    typer.echo(f"Type:    {result.type}")
    typer.echo(f"Count:   {result.count}")
    typer.echo(f"Average: {result.average:.2f}%")
    typer.echo(f"Min:     {result.min:.2f}%")
    typer.echo(f"Max:     {result.max:.2f}%")
