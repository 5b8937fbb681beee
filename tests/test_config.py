"""Tests for advisor config loading."""

from pathlib import Path

import pytest

from kyushoku.advisor.config import (
    DEFAULT_DB_PATH,
    DEFAULT_SEED_PATH,
    AdvisorConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("KYUSHOKU_SEED_PATH", "KYUSHOKU_DB_PATH", "KYUSHOKU_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, AdvisorConfig)
    assert config.data.seed_path == DEFAULT_SEED_PATH
    assert config.database.enabled is False
    assert config.database.path == DEFAULT_DB_PATH
    assert config.logging.level == "INFO"


def test_default_seed_is_packaged():
    assert Path(DEFAULT_SEED_PATH).exists()


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.database.enabled is False


def test_load_config_from_toml(tmp_path):
    """Loading a valid TOML file populates config."""
    path = tmp_path / "advisor.toml"
    path.write_text(
        """\
[data]
seed_path = "/srv/kyushoku/2025-01.json"

[database]
enabled = true
path = "/var/lib/kyushoku/menus.db"

[logging]
level = "debug"
""",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.data.seed_path == "/srv/kyushoku/2025-01.json"
    assert config.database.enabled is True
    assert config.database.path == "/var/lib/kyushoku/menus.db"
    assert config.logging.level == "DEBUG"


def test_load_config_partial_toml(tmp_path):
    """Missing sections fall back to defaults."""
    path = tmp_path / "advisor.toml"
    path.write_text('[logging]\nlevel = "WARNING"\n', encoding="utf-8")
    config = load_config(path)
    assert config.logging.level == "WARNING"
    assert config.data.seed_path == DEFAULT_SEED_PATH
    assert config.database.enabled is False


def test_env_seed_path_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "advisor.toml"
    path.write_text('[data]\nseed_path = "from-file.json"\n', encoding="utf-8")
    monkeypatch.setenv("KYUSHOKU_SEED_PATH", "from-env.json")
    assert load_config(path).data.seed_path == "from-env.json"


def test_env_db_path_enables_database(monkeypatch):
    monkeypatch.setenv("KYUSHOKU_DB_PATH", "/tmp/k.db")
    config = load_config()
    assert config.database.enabled is True
    assert config.database.path == "/tmp/k.db"


def test_env_log_level(monkeypatch):
    monkeypatch.setenv("KYUSHOKU_LOG_LEVEL", "error")
    assert load_config().logging.level == "ERROR"
