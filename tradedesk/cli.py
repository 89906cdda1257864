"""TradeDesk CLI.

Commands:
- trades list: Show every configured trade
- trades show: Job types, checklists and quick line items for one trade
- trades fields: Trade-specific job form fields
- stock: Classify a stock level against its reorder threshold
- jobs: Fetch and filter work orders from the backend
- web serve: Run the JSON API
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from tradedesk.classification.status import STOCK_LABELS, classify_stock, next_action, status_badge
from tradedesk.errors import CollaboratorError, UnknownTrade
from tradedesk.filters.records import ALL, JobCriteria, filter_jobs
from tradedesk.forms.fields import fields_for
from tradedesk.integration.api_client import PersistenceClient
from tradedesk.trades.registry import all_trades, lookup

app = typer.Typer(
    name="tradedesk",
    help="TradeDesk - Trade-aware back office for service businesses",
    no_args_is_help=True,
)
trades_cli = typer.Typer(help="Trade registry")
app.add_typer(trades_cli, name="trades")

web_cli = typer.Typer(help="Web API")
app.add_typer(web_cli, name="web")

console = Console()


def _lookup_or_exit(trade_id: str):
    try:
        return lookup(trade_id)
    except UnknownTrade as e:
        console.print(f"[red]✗[/red] {e}")
        known = ", ".join(config.id.value for config in all_trades())
        console.print(f"  Known trades: {known}", style="dim")
        raise typer.Exit(1)


@trades_cli.command("list")
def trades_list():
    """Show every configured trade."""
    table = Table(title="Trades")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Backend name", style="dim")
    table.add_column("Default duration", justify="right")
    table.add_column("Job types", justify="right", style="green")

    for config in all_trades():
        table.add_row(
            config.id.value,
            f"{config.icon} {config.name}",
            config.backend_name,
            f"{config.default_job_duration} min",
            str(len(config.job_types)),
        )
    console.print(table)


@trades_cli.command("show")
def trades_show(trade_id: str = typer.Argument(..., help="Trade ID, e.g. hvac")):
    """Show job types, checklists and quick line items for a trade."""
    config = _lookup_or_exit(trade_id)

    console.print(f"[bold]{config.icon} {config.name}[/bold] ({config.id.value})")
    console.print(f"  Default job duration: {config.default_job_duration} min")
    console.print(f"  Job types: {', '.join(config.job_types)}")
    console.print(f"  Inventory categories: {', '.join(config.inventory_categories)}")

    for template in config.checklist_templates:
        console.print(f"\n[bold]Checklist:[/bold] {template.name} [dim]({template.id})[/dim]")
        for index, item in enumerate(template.items, start=1):
            console.print(f"  {index}. {item}")

    if config.quick_line_items:
        table = Table(title="Quick line items")
        table.add_column("ID", style="cyan")
        table.add_column("Description")
        table.add_column("Category", style="dim")
        table.add_column("Price", justify="right", style="green")
        for quick in config.quick_line_items:
            table.add_row(
                quick.id, quick.description, quick.category, f"${quick.default_price} / {quick.unit}"
            )
        console.print(table)


@trades_cli.command("fields")
def trades_fields(trade_id: str = typer.Argument(..., help="Trade ID, e.g. hvac")):
    """Show the trade-specific job form fields."""
    config = _lookup_or_exit(trade_id)

    table = Table(title=f"{config.name} job fields")
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    table.add_column("Kind", style="dim")
    table.add_column("Options / hint")
    for descriptor in fields_for(config.id):
        hint = " | ".join(descriptor.options) if descriptor.options else descriptor.placeholder
        table.add_row(descriptor.key, descriptor.label, descriptor.kind.value, hint)
    console.print(table)


@app.command()
def stock(
    level: int = typer.Argument(..., min=0, help="Units in stock"),
    threshold: int = typer.Argument(..., min=0, help="Reorder threshold"),
):
    """Classify a stock level against its reorder threshold."""
    status = classify_stock(level, threshold)
    color = {"low": "red", "warning": "yellow", "good": "green"}[status.value]
    console.print(f"[{color}]{STOCK_LABELS[status]}[/{color}] ({status.value})")


@app.command()
def jobs(
    search: str = typer.Option("", "--search", "-s", help="Search job type, description, customer"),
    status: str = typer.Option(ALL, "--status", help="Job status or 'all'"),
    priority: str = typer.Option(ALL, "--priority", help="Priority or 'all'"),
):
    """Fetch work orders from the backend and list the matches."""
    try:
        criteria = JobCriteria(search=search, status=status, priority=priority)
    except ValueError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(2)

    async def _fetch():
        async with PersistenceClient() as client:
            return await asyncio.gather(client.list_work_orders(), client.list_customers())

    try:
        work_orders, customers = asyncio.run(_fetch())
    except CollaboratorError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)

    matches = filter_jobs(work_orders, criteria, customers)
    table = Table(title=f"Work orders ({len(matches)} of {len(work_orders)})")
    table.add_column("ID", style="cyan")
    table.add_column("Scheduled")
    table.add_column("Job type")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Next action", style="dim")
    for job in matches:
        table.add_row(
            job.id,
            job.scheduled_time.strftime("%Y-%m-%d %H:%M"),
            job.job_type,
            status_badge(job.status).label,
            job.priority.value,
            next_action(job.status),
        )
    console.print(table)


@web_cli.command("serve")
def web_serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind"),
    port: int = typer.Option(8001, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the FastAPI JSON API."""
    import uvicorn

    typer.echo(f"Starting TradeDesk API on http://{host}:{port}")
    uvicorn.run("tradedesk.web.app:app", host=host, port=port, reload=reload, workers=1)


if __name__ == "__main__":
    app()
