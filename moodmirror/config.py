"""Configuration and logging setup for MoodMirror.

Settings live in ``~/.config/moodmirror/config.toml``. Set the
MOODMIRROR_CONFIG environment variable to use another file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "moodmirror"
DEFAULT_DB_PATH = CONFIG_DIR / "moodmirror.db"

DEFAULT_CONFIG = {
    "openai": {
        "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
        "model": "gpt-4o-mini",
    },
    "journal": {
        "mode": "local",  # local or remote
        "api_url": "http://localhost:3001/api",
        "user_id": "me",
        "token": "",  # Leave empty to use MOODMIRROR_TOKEN env var
    },
    "storage": {
        "db_path": str(DEFAULT_DB_PATH),
    },
}

JOURNAL_MODES = ("local", "remote")


def get_config_path() -> Path:
    """Get the path of the config file."""
    override = os.environ.get("MOODMIRROR_CONFIG")
    return Path(override).expanduser() if override else CONFIG_DIR / "config.toml"


def _merge(defaults: dict, overrides: dict) -> dict:
    merged = {}
    for key, value in defaults.items():
        if isinstance(value, dict):
            merged[key] = _merge(value, overrides.get(key) or {})
        else:
            merged[key] = overrides.get(key, value)
    for key, value in overrides.items():
        merged.setdefault(key, value)
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    A missing or unreadable file yields the defaults.

    Args:
        config_path: Optional explicit config file.

    Returns:
        Config dict.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return _merge(DEFAULT_CONFIG, {})

    try:
        loaded = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        loaded = {}
    return _merge(DEFAULT_CONFIG, loaded)


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return path


def get_db_path(config: dict) -> Path:
    """Get the local database path from config."""
    return Path(config["storage"]["db_path"]).expanduser()


def get_journal_token(config: dict) -> Optional[str]:
    """Get the journal API bearer token.

    The MOODMIRROR_TOKEN environment variable takes precedence.
    """
    return os.environ.get("MOODMIRROR_TOKEN") or config["journal"].get("token") or None


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return a list of problems."""
    problems = []
    journal = config.get("journal", {})
    mode = journal.get("mode")
    if mode not in JOURNAL_MODES:
        problems.append(f"journal.mode must be one of {', '.join(JOURNAL_MODES)}")
    if mode == "remote" and not journal.get("api_url"):
        problems.append("journal.api_url is required in remote mode")
    if not journal.get("user_id"):
        problems.append("journal.user_id is required")
    return problems


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
