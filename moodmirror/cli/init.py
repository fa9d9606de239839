"""Init command for MoodMirror CLI.

Creates the configuration file and local database.
"""

import click
from rich.panel import Panel

from moodmirror.cli.common import console, get_config, get_data_store


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a config file and the local database.
    
    \b
    Examples:
      moodmirror init          # Create ~/.config/moodmirror/config.toml
      moodmirror init --force  # Start over with a fresh template
    """
    from moodmirror.config import (
        create_template_config,
        get_config_path,
        load_config,
        validate_config,
    )
    
    config_path = get_config_path()
    
    if config_path.exists() and not force:
        config = get_config()
        problems = validate_config(config)
        if problems:
            console.print(Panel(
                "[yellow]Config has problems:[/yellow]\n\n"
                + "\n".join(f"  • {problem}" for problem in problems)
                + f"\n\n[dim]Edit {config_path} to fix them.[/dim]",
                title="[bold yellow]Config[/bold yellow]",
                border_style="yellow",
            ))
            raise SystemExit(1)
        console.print(f"[dim]Config already exists at {config_path}[/dim]")
    else:
        create_template_config(config_path)
        config = load_config(config_path)
        console.print(f"[green]✓[/green] Created config at [cyan]{config_path}[/cyan]")
    
    store = get_data_store(config)
    console.print(f"[green]✓[/green] Database ready at [cyan]{store.db_path}[/cyan]")
    stats = store.get_stats()
    console.print(
        f"[dim]{stats['journal']} journal entries, {stats['kv']} stored values[/dim]"
    )
