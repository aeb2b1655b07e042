"""
Interface Monitor CLI - Command line interface for operating the service.

Usage:
    monitor --help              Show all commands
    monitor serve               Start the API server
    monitor migrate             Run database migrations
    monitor seed --count 500    Insert random sample runs
    monitor summary -p 7d       Print the dashboard summary
"""

import asyncio

import typer

app = typer.Typer(
    name="monitor",
    help="Interface Monitor CLI - run history for integration jobs",
    no_args_is_help=True,
)


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


@app.command()
def seed(
    count: int | None = typer.Option(None, "--count", "-c", help="Number of runs to insert"),
    days: int | None = typer.Option(None, "--days", "-d", help="Spread runs over the last N days"),
    clear: bool = typer.Option(False, "--clear", help="Delete existing logs first"),
):
    """Insert realistic random interface runs."""
    from interface_monitor.config import get_config
    from interface_monitor.core.database import AsyncSessionLocal
    from interface_monitor.core.errors import MonitorError
    from interface_monitor.core.logging import setup_logging
    from interface_monitor.services.seed import seed_logs

    setup_logging()
    config = get_config()
    total = count if count is not None else config.seed.count
    span = days if days is not None else config.seed.days

    async def run() -> int:
        async with AsyncSessionLocal() as session:
            return await seed_logs(
                session,
                count=total,
                days=span,
                batch_size=config.seed.batch_size,
                clear=clear,
            )

    try:
        inserted = asyncio.run(run())
    except MonitorError as e:
        _print_error(f"Seeding failed: {e.message}")
        raise typer.Exit(1) from e

    _print_success(f"Seeded {inserted} interface logs over the last {span} days")


@app.command()
def summary(
    period: str = typer.Option("24h", "--period", "-p", help="1h, 24h, 7d or 30d"),
):
    """Print the dashboard summary for a period."""
    from interface_monitor.config import get_config
    from interface_monitor.core.database import AsyncSessionLocal
    from interface_monitor.core.logging import setup_logging
    from interface_monitor.core.periods import Period
    from interface_monitor.services.dashboard import get_summary

    setup_logging()
    config = get_config()
    selected = Period.parse(period, default=config.dashboard.default_period)

    async def run():
        async with AsyncSessionLocal() as session:
            return await get_summary(
                session,
                selected,
                recent_failures_limit=config.dashboard.recent_failures_limit,
            )

    result = asyncio.run(run())

    typer.echo(f"\n📊 Summary for the last {result.period.value}")
    typer.echo(f"   Total runs:   {result.total_logs}")
    typer.echo(f"   Success rate: {result.success_rate}%")
    for item in result.summary:
        typer.echo(
            f"   {item.status.value:<8} {item.count:>6} runs, "
            f"avg {item.avg_duration}ms, {item.total_records} records"
        )

    if result.recent_failures:
        typer.echo("\n   Recent failures:")
        for failure in result.recent_failures:
            typer.echo(f"   - {failure.timestamp:%Y-%m-%d %H:%M} {failure.interface_name}: {failure.message}")
    typer.echo("")


@app.command()
def migrate():
    """Run database migrations (alembic upgrade head)."""
    import subprocess

    result = subprocess.run(["alembic", "upgrade", "head"], check=False)
    raise typer.Exit(result.returncode)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import uvicorn

    uvicorn.run("interface_monitor.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
