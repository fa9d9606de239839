"""History and streak commands for MoodMirror CLI."""

from datetime import date

import click
from rich.panel import Panel
from rich.table import Table

from moodmirror.cli.common import console, get_config, get_data_store


@click.command()
@click.option("--clear", "clear_history", is_flag=True, help="Delete all recent analyses.")
def history(clear_history: bool) -> None:
    """Show your most recent analyses (newest first).
    
    \b
    Examples:
      moodmirror history          # Recent analyses
      moodmirror history --clear  # Forget them
    """
    from moodmirror.cli.analyze import TONE_EMOJI
    from moodmirror.tracking import HistoryCache
    
    cache = HistoryCache(get_data_store(get_config()))
    
    if clear_history:
        cache.clear()
        console.print("[green]✓[/green] History cleared")
        return
    
    entries = cache.list()
    if not entries:
        console.print(Panel(
            "[dim]No analyses yet. Run [cyan]moodmirror analyze[/cyan] to get started.[/dim]",
            title="[bold]History[/bold]",
            border_style="dim",
        ))
        return
    
    table = Table(title="Recent Analyses", show_header=True, header_style="bold cyan")
    table.add_column("When", style="dim")
    table.add_column("Tone")
    table.add_column("Emotions")
    table.add_column("Text", overflow="ellipsis", max_width=50)
    
    for entry in entries:
        tone = entry.analysis.overall_tone
        emotions = ", ".join(
            f"{score.emotion} {score.percentage:.0f}%"
            for score in entry.analysis.primary_emotions
        )
        snippet = entry.text if len(entry.text) <= 80 else entry.text[:77] + "..."
        table.add_row(
            entry.created_at.strftime("%Y-%m-%d %H:%M"),
            f"{TONE_EMOJI.get(tone, '')} {tone}",
            emotions,
            snippet,
        )
    
    console.print(table)


@click.command()
@click.option("--reset", is_flag=True, help="Reset the streak counter.")
def streak(reset: bool) -> None:
    """Show your current day streak."""
    from moodmirror.tracking import StreakTracker
    
    tracker = StreakTracker(get_data_store(get_config()))
    
    if reset:
        tracker.reset()
        console.print("[green]✓[/green] Streak reset")
        return
    
    state = tracker.get()
    count = tracker.current(date.today())
    days = "day" if count == 1 else "days"
    last = state.last_date.isoformat() if state.last_date else "never"
    console.print(Panel(
        f"[bold orange1]🔥 {count} {days}[/bold orange1]\n[dim]Last analysis: {last}[/dim]",
        title="[bold]Mood Streak[/bold]",
        border_style="orange1",
    ))
