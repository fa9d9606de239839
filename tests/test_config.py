"""Tests for configuration loading."""

from pathlib import Path

import toml

from moodmirror.config import (
    DEFAULT_CONFIG,
    create_template_config,
    get_config_path,
    get_db_path,
    get_journal_token,
    load_config,
    validate_config,
)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, temp_dir: Path):
        config = load_config(temp_dir / "absent.toml")
        assert config == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text('[journal]\nmode = "remote"\napi_url = "https://example.test/api"\n')

        config = load_config(path)
        assert config["journal"]["mode"] == "remote"
        assert config["journal"]["user_id"] == DEFAULT_CONFIG["journal"]["user_id"]
        assert config["openai"] == DEFAULT_CONFIG["openai"]

    def test_unreadable_file_gives_defaults(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text("this is [not toml")
        assert load_config(path) == DEFAULT_CONFIG

    def test_template_round_trip(self, temp_dir: Path):
        path = create_template_config(temp_dir / "sub" / "config.toml")
        assert toml.load(path)["journal"]["mode"] == "local"
        assert load_config(path) == DEFAULT_CONFIG

    def test_env_config_path(self, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("MOODMIRROR_CONFIG", str(temp_dir / "alt.toml"))
        assert get_config_path() == temp_dir / "alt.toml"

    def test_db_path(self, temp_dir: Path):
        config = load_config(temp_dir / "absent.toml")
        config["storage"]["db_path"] = str(temp_dir / "x.db")
        assert get_db_path(config) == temp_dir / "x.db"


class TestTokenAndValidation:
    def test_env_token_wins(self, monkeypatch):
        config = load_config(Path("/nonexistent/config.toml"))
        config["journal"]["token"] = "from-file"
        monkeypatch.setenv("MOODMIRROR_TOKEN", "from-env")
        assert get_journal_token(config) == "from-env"

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.delenv("MOODMIRROR_TOKEN", raising=False)
        config = load_config(Path("/nonexistent/config.toml"))
        assert get_journal_token(config) is None

    def test_defaults_are_valid(self):
        assert validate_config(load_config(Path("/nonexistent/config.toml"))) == []

    def test_bad_mode(self):
        config = load_config(Path("/nonexistent/config.toml"))
        config["journal"]["mode"] = "cloud"
        assert validate_config(config)
