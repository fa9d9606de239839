"""Trends command for MoodMirror CLI.

Summarizes the recent history: mood distribution, mood over time,
streak and the most used words.
"""

from datetime import date

import click
from rich.panel import Panel
from rich.table import Table

from moodmirror.cli.common import console, get_config, get_data_store


def _bar(count: int, total: int, width: int = 20) -> str:
    filled = round(width * count / total) if total else 0
    return "█" * filled + "░" * (width - filled)


def display_streak(tracker, today: date, from_history: int) -> int:
    """Streak shown to the user.

    The durable tracker wins, including when its streak has lapsed to 0.
    History only covers the last few entries and is used only when no
    durable streak has ever been recorded.
    """
    if tracker.get().last_date is None:
        return from_history
    return tracker.current(today)


@click.command()
@click.option("-w", "--words", "word_limit", default=10, type=int, help="Number of top words to show (default: 10)")
def trends(word_limit: int) -> None:
    """Show mood trends from your recent analyses.
    
    \b
    Examples:
      moodmirror trends            # Full summary
      moodmirror trends --words 5  # Only the top 5 words
    """
    from moodmirror.cli.analyze import TONE_EMOJI
    from moodmirror.tracking import HistoryCache, StreakTracker
    from moodmirror.tracking.trends import summarize, top_words
    
    store = get_data_store(get_config())
    entries = HistoryCache(store).list()
    
    if not entries:
        console.print(Panel(
            "[dim]No mood data yet. Analyze some text to see your trends![/dim]",
            title="[bold]Mood Trends[/bold]",
            border_style="dim",
        ))
        return
    
    summary = summarize(entries)
    
    # Distribution
    dist_table = Table(title="Emotion Distribution", show_header=True, header_style="bold magenta")
    dist_table.add_column("Tone")
    dist_table.add_column("Count", justify="right")
    dist_table.add_column("Share")
    for tone, count in sorted(summary.distribution.items(), key=lambda item: -item[1]):
        dist_table.add_row(
            f"{TONE_EMOJI.get(tone, '')} {tone}",
            str(count),
            _bar(count, summary.total),
        )
    console.print(dist_table)
    
    # Mood over time
    series_table = Table(title="Mood Over Time", show_header=True, header_style="bold magenta")
    series_table.add_column("When", style="dim")
    series_table.add_column("Tone")
    for point in summary.series:
        series_table.add_row(
            point.created_at.strftime("%Y-%m-%d %H:%M"),
            f"{TONE_EMOJI.get(point.tone, '')} {point.tone}",
        )
    console.print(series_table)
    
    # Streak and most common mood
    streak_days = display_streak(StreakTracker(store), date.today(), summary.streak)
    lines = [f"[bold orange1]🔥 Current streak: {streak_days} days[/bold orange1]"]
    if summary.most_common:
        emoji = TONE_EMOJI.get(summary.most_common, "")
        lines.append(f"Most common mood: [bold]{emoji} {summary.most_common}[/bold]")
    console.print(Panel("\n".join(lines), border_style="orange1"))
    
    # Words
    words = top_words(entries, limit=word_limit)
    if words:
        words_table = Table(title="Top Words", show_header=True, header_style="bold blue")
        words_table.add_column("Word")
        words_table.add_column("Count", justify="right")
        for word, count in words:
            words_table.add_row(word, str(count))
        console.print(words_table)
