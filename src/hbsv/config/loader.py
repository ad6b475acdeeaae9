"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from hbsv.config.models import ServiceConfig
from hbsv.config.paths import get_config_path

logger = logging.getLogger(__name__)

# Environment variables honoured when the config file leaves the key unset
ENV_OVERRIDES: dict[str, str] = {
    "storage_path": "UIX_STORAGE_PATH",
    "rebuild_path": "UIX_BASE_PATH",
}


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("hbsv.toml"),  # Current directory
        get_config_path(),  # ~/.hbsv/config.toml (or HBSV_HOME)
        Path("/etc/hbsv/config.toml"),  # System-wide
    ]


def _resolve_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Fill unset keys from their environment variables."""
    for key, env_var in ENV_OVERRIDES.items():
        if config.get(key) is None:
            value = os.environ.get(env_var)
            if value:
                config[key] = value
    return config


def load_config(path: Path | None = None) -> ServiceConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to defaults when none exists.

    Returns:
        Validated ServiceConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        pydantic.ValidationError: If the config content is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)

    raw_config = _resolve_env_overrides(raw_config)

    return ServiceConfig.model_validate(raw_config)
