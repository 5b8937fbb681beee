"""TOML configuration loader for the menu advisor."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_SEED_PATH = str(Path(__file__).parent / "data" / "school_lunch_sample.json")
DEFAULT_DB_PATH = "~/.config/kyushoku/menus.db"


@dataclass
class DataConfig:
    seed_path: str = DEFAULT_SEED_PATH


@dataclass
class DatabaseConfig:
    enabled: bool = False
    path: str = DEFAULT_DB_PATH


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AdvisorConfig:
    data: DataConfig = field(default_factory=DataConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> AdvisorConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    KYUSHOKU_SEED_PATH, KYUSHOKU_DB_PATH and KYUSHOKU_LOG_LEVEL override
    the file; setting KYUSHOKU_DB_PATH also enables the database.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dat = raw.get("data", {})
    dbs = raw.get("database", {})
    lgg = raw.get("logging", {})

    seed_path = os.environ.get("KYUSHOKU_SEED_PATH", "") or dat.get(
        "seed_path", DEFAULT_SEED_PATH
    )

    db_enabled = dbs.get("enabled", False)
    db_path = dbs.get("path", DEFAULT_DB_PATH)
    env_db_path = os.environ.get("KYUSHOKU_DB_PATH", "")
    if env_db_path:
        db_path = env_db_path
        db_enabled = True

    level = os.environ.get("KYUSHOKU_LOG_LEVEL", "") or lgg.get("level", "INFO")

    return AdvisorConfig(
        data=DataConfig(seed_path=seed_path),
        database=DatabaseConfig(enabled=db_enabled, path=db_path),
        logging=LoggingConfig(level=level.upper()),
    )
