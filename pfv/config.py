"""Configuration file management for pfv."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from pfv.domain.report import BUCKET_ORDERS, ORDER_FIRST_SEEN
from pfv.store.schema import get_db_path
from pfv.store.transaction_store import DEFAULT_KEY

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {
        "key": DEFAULT_KEY,
    },
    "report": {
        "order": ORDER_FIRST_SEEN,
        "currency": "$",
        "bar_width": 30,
    },
    "logging": {
        "level": "WARNING",
    },
}


@dataclass(frozen=True)
class Settings:
    """Resolved settings with defaults applied."""

    db_path: Path
    ledger_key: str
    report_order: str
    currency: str
    bar_width: int
    log_level: str


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "pfv" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with owner-only permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(DEFAULT_CONFIG, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"Config section [{name}] must be a table")
    return {**DEFAULT_CONFIG[name], **section}


def resolve_settings(config: dict[str, Any]) -> Settings:
    """Apply defaults to a loaded config and validate it.

    Args:
        config: Configuration dictionary (may be partial or empty).

    Returns:
        Resolved Settings.

    Raises:
        ValueError: If a value has the wrong type or an unknown report order.
    """
    storage = _section(config, "storage")
    report = _section(config, "report")
    logging_cfg = _section(config, "logging")

    db_path_raw = storage.get("db_path")
    db_path = Path(db_path_raw).expanduser() if db_path_raw else get_db_path()

    order = report["order"]
    if order not in BUCKET_ORDERS:
        raise ValueError(f"Unknown report order '{order}' (expected one of: {', '.join(BUCKET_ORDERS)})")

    bar_width = report["bar_width"]
    if isinstance(bar_width, bool) or not isinstance(bar_width, int) or bar_width < 0:
        raise ValueError(f"report.bar_width must be a non-negative integer, got {bar_width!r}")

    key = storage["key"]
    if not isinstance(key, str) or not key:
        raise ValueError("storage.key must be a non-empty string")

    return Settings(
        db_path=db_path,
        ledger_key=key,
        report_order=order,
        currency=str(report["currency"]),
        bar_width=bar_width,
        log_level=str(logging_cfg["level"]),
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
        ValueError: If the config has invalid values.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return resolve_settings(config)
