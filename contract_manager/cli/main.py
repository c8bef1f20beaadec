"""Main CLI application"""

import asyncio
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from contract_manager.models import CATEGORY_STYLES, EventCategory
from contract_manager.models.event import STATUS_LABELS, UrgencyStatus
from contract_manager.utils.config import get_settings

app = typer.Typer(
    name="contract-manager",
    help="Contract renewals, calendar events and team tasks",
    add_completion=False,
)

console = Console(force_terminal=True)

STATUS_STYLES = {
    UrgencyStatus.EXPIRED: "dim",
    UrgencyStatus.URGENT: "red",
    UrgencyStatus.UPCOMING: "yellow",
    UrgencyStatus.ACTIVE: "green",
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    """Configure logging once for every command"""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _parse_day(value: Optional[str], option: str) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid {option}: {value} (expected YYYY-MM-DD)[/red]")
        raise typer.Exit(1)


def _status_label(status: UrgencyStatus, language: str) -> str:
    es, en = STATUS_LABELS[status]
    label = es if language == "es" else en
    return f"[{STATUS_STYLES[status]}]{label}[/{STATUS_STYLES[status]}]"


@app.command("init")
def init():
    """Initialize the database schema"""
    from contract_manager.db.supabase import get_store

    settings = get_settings()
    try:
        get_store().init_db()
    except (RuntimeError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green][OK] Database ready ({settings.db_mode})[/green]")


@app.command("events")
def events(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID (all contracts if omitted)"),
    search: str = typer.Option("", "--search", "-s", help="Match file name or title"),
    event_type: str = typer.Option("all", "--type", "-t", help="Category filter"),
    status: str = typer.Option("all", "--status", help="expired, urgent, upcoming, active"),
    today: Optional[str] = typer.Option(None, "--today", help="Evaluate status at this date"),
):
    """List calendar events derived from contracts and tasks"""
    from contract_manager.services.calendar import CalendarService
    from contract_manager.services.status import event_status

    service = CalendarService()
    now = _parse_day(today, "--today")
    result = service.filtered_events(user, now, search, event_type, status)

    table = Table(title=f"Calendar events ({len(result)})")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("File", style="dim")
    table.add_column("Status")
    for event in result:
        style = CATEGORY_STYLES[event.event_type]
        table.add_row(
            event.date.isoformat(),
            f"{style.icon} {style.label(service.language)}",
            event.title,
            event.file_name,
            _status_label(
                event_status(event, now, service.settings.event_urgent_days, service.settings.event_upcoming_days),
                service.language,
            ),
        )
    console.print(table)


@app.command("stats")
def stats(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
    today: Optional[str] = typer.Option(None, "--today", help="Evaluate status at this date"),
):
    """Show urgency counts and event totals"""
    from contract_manager.services.calendar import CalendarService

    service = CalendarService()
    now = _parse_day(today, "--today")
    result = service.stats(user, now)
    dashboard = service.dashboard(user, now)

    table = Table(title="Contract statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Contracts", str(result.total))
    for status in (UrgencyStatus.URGENT, UrgencyStatus.UPCOMING, UrgencyStatus.ACTIVE, UrgencyStatus.EXPIRED):
        table.add_row(_status_label(status, service.language), str(getattr(result, status.value)))
    table.add_row("High risk", str(dashboard.high_risk))
    table.add_row("Expiring in 30 days", str(dashboard.expiring_soon))
    table.add_row("Events", str(result.total_events))
    for category, count in result.event_type_counts.items():
        style = CATEGORY_STYLES[EventCategory(category)]
        table.add_row(f"  {style.icon} {style.label(service.language)}", str(count))
    console.print(table)

    if dashboard.top_sectors:
        sectors = ", ".join(f"{s.sector} ({s.count})" for s in dashboard.top_sectors)
        console.print(f"[dim]Top sectors: {sectors}[/dim]")


@app.command("calendar")
def calendar_command(
    year: int = typer.Option(None, "--year", "-y", help="Year (default: current)"),
    month: int = typer.Option(None, "--month", "-m", min=1, max=12, help="Month (default: current)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
):
    """Print a month grid with event counts per day"""
    from contract_manager.services.calendar import CalendarService
    from contract_manager.services.calendar_grid import WEEKDAY_NAMES

    service = CalendarService()
    today = date.today()
    grid = service.month_grid(user, year or today.year, month or today.month, today)
    weekdays = WEEKDAY_NAMES.get(service.language, WEEKDAY_NAMES["en"])

    table = Table(title=f"{grid.year}-{grid.month:02d}", show_lines=True)
    for name in weekdays:
        table.add_column(name, justify="center")

    cells = [""] * grid.leading_padding
    for cell in grid.days:
        text = f"[bold]{cell.day}[/bold]" if cell.is_today else str(cell.day)
        if cell.events:
            icons = "".join(CATEGORY_STYLES[e.event_type].icon for e in cell.events[:3])
            text = f"{text}\n{icons}"
            if len(cell.events) > 3:
                text += f"+{len(cell.events) - 3}"
        cells.append(text)
    cells += [""] * (-len(cells) % 7)
    for start in range(0, len(cells), 7):
        table.add_row(*cells[start:start + 7])
    console.print(table)


@app.command("contracts")
def contracts(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
    search: str = typer.Option("", "--search", "-s", help="Match file name, type or sector"),
    sort: str = typer.Option("renewal_date", "--sort", help="Sort field"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
):
    """List contracts as a searchable, sortable table"""
    from contract_manager.services.contracts import ContractService
    from contract_manager.services.table import SortDirection

    service = ContractService()
    now = datetime.now()
    try:
        result = service.table(
            user_id=user,
            search=search,
            sort_field=sort,
            direction=SortDirection.DESC if desc else SortDirection.ASC,
            page=page,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Contracts (page {result.page}/{result.page_count}, {result.total} total)")
    table.add_column("ID", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Type")
    table.add_column("Renewal")
    table.add_column("Notice", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Badge")
    for document in result.items:
        table.add_row(
            document.id[:8],
            document.file_name,
            document.contract_type,
            document.renewal_date.isoformat() if document.renewal_date else "-",
            f"{document.notice_period_days}d",
            f"{document.risk_score:.1f}" if document.risk_score is not None else "-",
            service.badge(document, now) or "-",
        )
    console.print(table)


@app.command("export-ics")
def export_ics_command(
    output: str = typer.Option(None, "--output", "-o", help="Output file"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
    event_type: str = typer.Option("all", "--type", "-t", help="Category filter"),
    status: str = typer.Option("all", "--status", help="Status filter"),
):
    """Export calendar events to an .ics file"""
    from contract_manager.services.calendar import CalendarService
    from contract_manager.services.ics import EXPORT_FILENAME

    service = CalendarService()
    result = service.filtered_events(user, datetime.now(), "", event_type, status)
    if not result:
        console.print("[yellow]No events to export[/yellow]")
        raise typer.Exit(1)

    path = Path(output or EXPORT_FILENAME)
    path.write_text(service.export(result), encoding="utf-8")
    console.print(f"[green][OK] Exported {len(result)} events to {path}[/green]")


@app.command("alerts")
def alerts(
    today: Optional[str] = typer.Option(None, "--today", help="Run as if today were this date"),
):
    """Run the renewal alert check once"""
    from contract_manager.services.alerts import AlertService

    run = AlertService().run(_parse_day(today, "--today"))

    table = Table(title=f"Renewal alerts ({len(run.alerts)})")
    table.add_column("Contract", style="cyan")
    table.add_column("Renewal")
    table.add_column("Days", justify="right")
    table.add_column("User", style="dim")
    for alert in run.alerts:
        table.add_row(
            alert.file_name,
            alert.renewal_date.isoformat(),
            str(alert.days_until_renewal),
            alert.user_id or "-",
        )
    console.print(table)
    for error in run.errors:
        console.print(f"[red]{error}[/red]")
    if run.errors:
        raise typer.Exit(1)


@app.command("team")
def team(
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
):
    """List team members and the tasks visible to the user"""
    from contract_manager.models.team import status_label
    from contract_manager.services.team import TeamService

    service = TeamService()
    language = get_settings().language
    members = service.list_members(user)

    table = Table(title=f"Team members ({len(members)})")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Role")
    table.add_column("Status")
    for member in members:
        table.add_row(
            f"{member.avatar} {member.name}",
            member.email,
            member.role.value,
            status_label(member.status, language),
        )
    console.print(table)

    names = {m.id: m.name for m in members}
    tasks = service.list_tasks(user)
    table = Table(title=f"Tasks ({len(tasks)})")
    table.add_column("Title", style="cyan")
    table.add_column("Assignee")
    table.add_column("Due")
    table.add_column("Priority")
    table.add_column("Status")
    for task in tasks:
        table.add_row(
            task.title,
            names.get(task.assigned_to, task.assigned_to or "-"),
            task.due_date.isoformat() if task.due_date else "-",
            task.priority.value,
            status_label(task.status, language),
        )
    console.print(table)


@app.command("worker")
def worker_command(
    action: str = typer.Argument("start", help="Action: start, status, run-once"),
):
    """Run the daily renewal alert scheduler"""
    from contract_manager.services.worker import get_worker

    worker = get_worker()

    if action == "status":
        status = worker.get_status()
        console.print(f"Running: {status.is_running}")
        for job in status.jobs:
            console.print(f"  {job.name}: next run {job.next_run}")
        return

    if action == "run-once":
        run = asyncio.run(worker.run_once())
        if run is None:
            raise typer.Exit(1)
        console.print(f"[green]{len(run.alerts)} alerts, {len(run.errors)} errors[/green]")
        return

    if action != "start":
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Available actions: start, status, run-once")
        raise typer.Exit(1)

    async def run_forever():
        await worker.start()
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            worker.stop()

    console.print(f"[blue]Worker started, daily check at {worker.settings.alert_time}. Ctrl+C to stop.[/blue]")
    try:
        asyncio.run(run_forever())
    except KeyboardInterrupt:
        console.print("[yellow]Worker stopped[/yellow]")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Start the HTTP API"""
    import uvicorn

    uvicorn.run(
        "contract_manager.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command("db")
def db_command(
    action: str = typer.Argument(..., help="Action: migrate, status"),
):
    """Manage database connection and schema"""
    from contract_manager.db.supabase import get_store

    settings = get_settings()

    if action == "migrate":
        if settings.db_mode == "supabase":
            migration_path = Path(__file__).parent.parent / "db" / "migrations" / "001_supabase.sql"
            console.print(f"[blue]SQL migration file:[/blue] {migration_path}")
            console.print("\n[yellow]Run this SQL in Supabase SQL Editor to create tables.[/yellow]")
            console.print("Then run [cyan]python -m contract_manager db status[/cyan] to verify.")
        else:
            get_store().init_db()
            console.print("[green]SQLite database initialized.[/green]")

    elif action == "status":
        status = get_store().get_status()
        table = Table(title=f"Database Status ({status['mode']})")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")
        for k, v in status.items():
            table.add_row(str(k), str(v))
        console.print(table)

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Available actions: migrate, status")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
