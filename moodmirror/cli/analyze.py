"""Analyze command for MoodMirror CLI.

Runs emotion analysis on a text, stores it in the recent history and
advances the day streak.
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
    get_data_store,
)
from moodmirror.errors import AuthenticationError, ConnectivityError, ValidationError
from moodmirror.models import EmotionAnalysis, StreakResult

TONE_EMOJI = {
    "Joyful": "😄",
    "Calm": "😌",
    "Anxious": "😰",
    "Angry": "😡",
    "Sad": "😢",
    "Frustrated": "😤",
    "Confused": "😕",
    "Grateful": "🙏",
    "Excited": "🤩",
    "Neutral": "😐",
    "Mixed": "🎭",
}


def render_analysis(analysis: EmotionAnalysis) -> Panel:
    """Build the panel showing one analysis."""
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Emotion", style="bold")
    table.add_column("Share", justify="right")
    for score in analysis.primary_emotions:
        table.add_row(score.emotion, f"{score.percentage:.0f}%")

    emoji = TONE_EMOJI.get(analysis.overall_tone, "")
    body = Table.grid(padding=(0, 0))
    body.add_row(f"[bold]Overall tone:[/bold] {emoji} {analysis.overall_tone}")
    body.add_row("")
    body.add_row(table)
    body.add_row("")
    body.add_row(f"[bold]Why:[/bold] {analysis.cause_explanation}")
    body.add_row(f"[bold]Try:[/bold] {analysis.suggestion}")
    return Panel(body, title="[bold]Emotion Analysis[/bold]", border_style="magenta")


def streak_message(result: StreakResult) -> str:
    """One-line streak summary after an analysis."""
    days = "day" if result.streak == 1 else "days"
    if result.is_new_streak:
        return f"🔥 New streak started: {result.streak} {days}"
    return f"🔥 Streak: {result.streak} {days}"


@click.command()
@click.argument("text", required=False)
@click.option("--no-save", is_flag=True, help="Do not add the result to history.")
def analyze(text: Optional[str], no_save: bool) -> None:
    """Analyze the emotional tone of TEXT.
    
    Reads from stdin when TEXT is omitted.
    
    \b
    Examples:
      moodmirror analyze "I finally finished the project!"
      cat note.txt | moodmirror analyze
    """
    from moodmirror.models import HistoryEntry
    from moodmirror.tracking import HistoryCache, StreakTracker
    
    if text is None:
        text = click.get_text_stream("stdin").read()
    
    config = get_config()
    service = get_analysis_service(config)
    
    console.print("[dim]Analyzing...[/dim]")
    try:
        analysis = service.analyze(text)
    except ValidationError as e:
        fail(str(e), title="Invalid Input")
    except AuthenticationError as e:
        fail(str(e), title="Authentication Error")
    except ConnectivityError as e:
        fail(f"{e}\n\nPlease try again.", title="Connection Error")
    
    console.print(render_analysis(analysis))
    
    if no_save:
        return
    
    store = get_data_store(config)
    HistoryCache(store).save(HistoryEntry.create(text, analysis))
    result = StreakTracker(store).update(date.today())
    console.print(f"[bold orange1]{streak_message(result)}[/bold orange1]")
