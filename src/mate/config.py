"""Configuration management for mate."""

import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

LEDGER_FILE_NAME = ".mate.csv"
DEFAULT_WORK_DAY_MINUTES = 7 * 60 + 30


def _home_dir() -> Path:
    home = os.environ.get("HOME")
    if home:
        return Path(home)
    return Path.home()


def _config_file_path() -> Path:
    """Path to the TOML config file: MATE_CONFIG env or ~/.config/mate/config.toml."""
    env_path = os.environ.get("MATE_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return _home_dir() / ".config" / "mate" / "config.toml"


def _load_config_data(config_file: Path) -> Optional[dict]:
    """Load config data from a TOML file if it exists."""
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # If config file is malformed, ignore it
        logger.warning(f"Ignoring unreadable config file {config_file}: {e}")
        return None


def _as_minutes(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid config: {name} must be a number of minutes")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str) and value.strip().isdigit():
        minutes = int(value.strip())
    else:
        raise ValueError(f"Invalid config: {name} must be a number of minutes")
    if minutes <= 0:
        raise ValueError(f"Invalid config: {name} must be positive")
    return minutes


def resolve_ledger_path(cli_ledger_path: Optional[str] = None, config_data: Optional[dict] = None) -> Path:
    """Resolve the ledger file location with the following precedence:

    1. CLI --ledger option (if provided)
    2. MATE_LEDGER environment variable
    3. ledger_path in the TOML config file
    4. ~/.mate.csv

    Args:
        cli_ledger_path: Ledger path from CLI --ledger option
        config_data: Parsed TOML config, if any

    Returns:
        Absolute path to the ledger file
    """
    if cli_ledger_path:
        return Path(cli_ledger_path).expanduser().resolve()

    env_ledger = os.environ.get("MATE_LEDGER")
    if env_ledger:
        return Path(env_ledger).expanduser().resolve()

    file_ledger = (config_data or {}).get("ledger_path")
    if isinstance(file_ledger, str) and file_ledger:
        return Path(file_ledger).expanduser().resolve()

    return _home_dir() / LEDGER_FILE_NAME


def resolve_work_day(config_data: Optional[dict] = None) -> timedelta:
    """Resolve the daily target: MATE_WORK_DAY_MINUTES env, then config file, then 7h30m."""
    env_minutes = os.environ.get("MATE_WORK_DAY_MINUTES")
    if env_minutes:
        return timedelta(minutes=_as_minutes(env_minutes, name="MATE_WORK_DAY_MINUTES"))

    file_minutes = (config_data or {}).get("work_day_minutes")
    if file_minutes is not None:
        return timedelta(minutes=_as_minutes(file_minutes, name="work_day_minutes"))

    return timedelta(minutes=DEFAULT_WORK_DAY_MINUTES)


class MateConfig(BaseModel):
    """Configuration for the ledger location and the daily target."""

    ledger_path: Path = Field(default_factory=lambda: _home_dir() / LEDGER_FILE_NAME)
    work_day: timedelta = Field(default=timedelta(minutes=DEFAULT_WORK_DAY_MINUTES))

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, cli_ledger_path: Optional[str] = None) -> "MateConfig":
        """Load configuration from CLI options, environment, config file or defaults.

        Args:
            cli_ledger_path: Ledger path from CLI --ledger option (highest precedence)
        """
        config_data = _load_config_data(_config_file_path())
        config = cls(
            ledger_path=resolve_ledger_path(cli_ledger_path, config_data),
            work_day=resolve_work_day(config_data),
        )
        logger.debug(f"Using ledger {config.ledger_path}, work day {config.work_day}")
        return config
