"""Shared helpers for CLI commands."""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


def get_config(ctx: Optional[click.Context] = None) -> dict:
    """Get the config loaded by the root command, or load it now."""
    from moodmirror.config import load_config

    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        obj = ctx.find_object(dict)
        if obj is not None and "config" in obj:
            return obj["config"]
    return load_config()


def get_data_store(config: dict):
    """Get the data store instance."""
    from moodmirror.config import get_db_path
    from moodmirror.db.store import DataStore

    return DataStore(get_db_path(config))


def get_journal_store(config: dict):
    """Get a journal store for the configured backend."""
    from moodmirror.config import get_journal_token
    from moodmirror.journal import JournalStore

    journal_config = config["journal"]
    if journal_config.get("mode") == "remote":
        from moodmirror.journal.remote import RemoteJournalBackend

        backend = RemoteJournalBackend(
            api_url=journal_config["api_url"],
            token_provider=lambda: get_journal_token(config),
        )
    else:
        from moodmirror.journal.local import LocalJournalBackend

        backend = LocalJournalBackend(get_data_store(config))
    return JournalStore(backend)


def get_analysis_service(config: dict):
    """Get the emotion analysis service."""
    from moodmirror.agents.analyst import AnalysisService

    openai_config = config.get("openai", {})
    return AnalysisService(
        api_key=openai_config.get("api_key") or None,
        model=openai_config.get("model") or None,
    )


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
