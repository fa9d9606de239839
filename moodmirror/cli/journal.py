"""Journal commands for MoodMirror CLI.

One entry per day, stored in the configured journal backend.
"""

from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from moodmirror.cli.common import (
    console,
    fail,
    get_analysis_service,
    get_config,
    get_journal_store,
)
from moodmirror.errors import (
    AuthenticationError,
    ConnectivityError,
    NotFound,
    ValidationError,
)


def _open_view(config: dict):
    from moodmirror.journal import CalendarView

    return CalendarView(get_journal_store(config), config["journal"]["user_id"])


def _report(error: Exception) -> None:
    if isinstance(error, AuthenticationError):
        fail(f"{error}\n\n[dim]Set journal.token in the config or MOODMIRROR_TOKEN.[/dim]",
             title="Authentication Error")
    if isinstance(error, ValidationError):
        fail(str(error), title="Invalid Entry")
    fail(f"Failed to load journal: {error}", title="Connection Error")


@click.group()
def journal() -> None:
    """Write and read your daily journal."""


@journal.command("list")
def list_entries() -> None:
    """List all days that have an entry."""
    from moodmirror.cli.analyze import TONE_EMOJI

    config = get_config()
    view = _open_view(config)
    try:
        entries = view.open()
    except (ConnectivityError, AuthenticationError) as e:
        _report(e)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries yet.[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Journal", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Tone")
    table.add_column("Text", overflow="ellipsis", max_width=60)

    for day in sorted(entries, reverse=True):
        entry = entries[day]
        tone = entry.analysis.overall_tone if entry.analysis else None
        table.add_row(
            day.isoformat(),
            f"{TONE_EMOJI.get(tone, '')} {tone}" if tone else "[dim]-[/dim]",
            entry.text,
        )

    console.print(table)


@journal.command()
@click.argument("day")
def show(day: str) -> None:
    """Show the entry for DAY (YYYY-MM-DD, or "today")."""
    from moodmirror.cli.analyze import render_analysis

    config = get_config()
    store = get_journal_store(config)
    day = date.today().isoformat() if day == "today" else day

    try:
        entry = store.get(config["journal"]["user_id"], day)
    except NotFound:
        console.print(Panel(
            f"[dim]Nothing written on {day} yet.[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return
    except (ValidationError, ConnectivityError, AuthenticationError) as e:
        _report(e)

    console.print(Panel(
        entry.text or "[dim](empty)[/dim]",
        title=f"[bold]{entry.date.strftime('%B %d, %Y')}[/bold]",
        border_style="cyan",
    ))
    if entry.notes:
        console.print(Panel(entry.notes, title="[bold]Notes[/bold]", border_style="dim"))
    if entry.analysis:
        console.print(render_analysis(entry.analysis))


@journal.command()
@click.argument("day")
@click.option("-t", "--text", default=None, help="Entry text (prompted if omitted).")
@click.option("-n", "--notes", default=None, help="Private notes.")
@click.option("--no-analyze", is_flag=True, help="Save without emotion analysis.")
def write(day: str, text: Optional[str], notes: Optional[str], no_analyze: bool) -> None:
    """Write or replace the entry for DAY (YYYY-MM-DD, or "today").

    \b
    Examples:
      moodmirror journal write today -t "Long walk, felt good"
      moodmirror journal write 2024-03-01 -t "..." -n "private" --no-analyze
    """
    config = get_config()
    day = date.today().isoformat() if day == "today" else day

    if text is None:
        text = click.prompt("Entry", default="", show_default=False)

    view = _open_view(config)
    analyzer = None if no_analyze else get_analysis_service(config).analyze

    try:
        existing = view.open_day(day)
        # Reuse the stored analysis when the text has not changed
        analysis = existing.analysis if existing and existing.text == text else None
        entry = view.save_day(day, text, notes=notes, analysis=analysis, analyzer=analyzer)
    except (ValidationError, ConnectivityError, AuthenticationError) as e:
        _report(e)

    console.print(f"[green]✓[/green] Saved entry for {entry.date.isoformat()}")
    if entry.analysis:
        console.print(f"[dim]Tone: {entry.analysis.overall_tone}[/dim]")


@journal.command()
@click.option("-m", "--month", default=None, help="Month to show as YYYY-MM (default: current).")
def calendar(month: Optional[str]) -> None:
    """Show a month calendar with the days you wrote on."""
    config = get_config()
    today = date.today()

    if month:
        try:
            year_str, month_str = month.split("-")
            year, month_num = int(year_str), int(month_str)
            date(year, month_num, 1)
        except ValueError:
            fail(f"Invalid month: {month}. Use YYYY-MM.", title="Invalid Input")
    else:
        year, month_num = today.year, today.month

    view = _open_view(config)
    try:
        weeks = view.month_grid(year, month_num)
    except (ConnectivityError, AuthenticationError) as e:
        _report(e)

    table = Table(
        title=date(year, month_num, 1).strftime("%B %Y"),
        show_header=True,
        header_style="bold cyan",
    )
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, justify="center")

    for week in weeks:
        cells = []
        for day, has_entry in week:
            label = str(day.day)
            if day.month != month_num:
                label = f"[dim]{label}[/dim]"
            elif has_entry:
                label = f"[bold green]{label}•[/bold green]"
            if day == today:
                label = f"[reverse]{label}[/reverse]"
            cells.append(label)
        table.add_row(*cells)

    console.print(table)
