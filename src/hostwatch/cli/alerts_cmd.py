"""CLI commands for listing, creating and resolving alerts."""

from __future__ import annotations

import typer

from hostwatch.cli._common import (
    DB_OPTION,
    METRIC_TYPE_ARGUMENT,
    format_alert,
    get_config,
    parse_metric_type,
    reports_errors,
    with_stores,
)
from hostwatch.core.models import AlertStatus
from hostwatch.runtime import Stores
from hostwatch.services.alerts import DEFAULT_RECENT_ALERTS, AlertManager

app = typer.Typer(help="Inspect and manage alerts.")


def _manager(stores: Stores) -> AlertManager:
    return AlertManager(stores.metrics, stores.thresholds, stores.alerts)


@app.command("list")
@reports_errors
def list_alerts(
    status: str = typer.Option(None, "--status", "-s", help="active or resolved"),
    limit: int = typer.Option(0, "--limit", "-n", help="Maximum alerts (0 = all)"),
    db: str = DB_OPTION,
) -> None:
    """List alerts, newest first."""
    status_filter = None
    if status is not None:
        try:
            status_filter = AlertStatus(status.lower())
        except ValueError:
            raise typer.BadParameter(f"unknown status {status!r}") from None
    config = get_config(db)
    alerts = with_stores(config, lambda s: _manager(s).list_alerts(status_filter, limit))
    if not alerts:
        typer.echo("No alerts found.")
        return
    for alert in alerts:
        typer.echo(format_alert(alert))


@app.command()
@reports_errors
def summary(
    limit: int = typer.Option(
        DEFAULT_RECENT_ALERTS, "--limit", "-n", help="Recent alerts to include"
    ),
    db: str = DB_OPTION,
) -> None:
    """Show alert counts by status, type and severity."""
    config = get_config(db)
    result = with_stores(config, lambda s: _manager(s).summary(limit))

    typer.echo(f"Total:    {result.total}")
    typer.echo(f"Active:   {result.active}")
    typer.echo(f"Resolved: {result.resolved}")
    if result.by_type:
        typer.echo("By type:")
        for metric_type, count in sorted(result.by_type.items()):
            typer.echo(f"  {metric_type:<10} {count:>5}")
    if result.by_severity:
        typer.echo("By severity:")
        for severity, count in sorted(result.by_severity.items()):
            typer.echo(f"  {severity:<10} {count:>5}")
    if result.recent:
        typer.echo("Recent:")
        for alert in result.recent:
            typer.echo(f"  {format_alert(alert)}")


@app.command()
@reports_errors
def create(
    metric_type: str = METRIC_TYPE_ARGUMENT,
    value: float = typer.Argument(..., help="Observed value"),
    threshold: float = typer.Argument(..., help="Threshold in force"),
    db: str = DB_OPTION,
) -> None:
    """Create an active alert by hand (bypasses duplicate suppression)."""
    parsed = parse_metric_type(metric_type)
    config = get_config(db)
    alert = with_stores(config, lambda s: _manager(s).create_alert(parsed, value, threshold))
    typer.echo(format_alert(alert))


@app.command()
@reports_errors
def resolve(
    alert_id: int = typer.Argument(..., help="Alert id"),
    db: str = DB_OPTION,
) -> None:
    """Resolve one active alert."""
    config = get_config(db)
    with_stores(config, lambda s: _manager(s).resolve_alert(alert_id))
    typer.echo(f"Alert {alert_id} resolved.")
