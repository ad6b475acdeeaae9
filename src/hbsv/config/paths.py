"""Centralized path management for hbsv.

Installer state (config, lock file) is stored under a single base directory.
The base directory can be overridden with the HBSV_HOME environment variable.

Default location: ~/.hbsv
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "HBSV_HOME"


@lru_cache(maxsize=1)
def get_hbsv_home() -> Path:
    """Get the base directory for all hbsv data.

    Resolution order:
    1. HBSV_HOME environment variable (if set)
    2. Platform default (~/.hbsv)

    Returns:
        Path to the hbsv home directory.
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".hbsv"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_hbsv_home() / "config.toml"


def get_run_path() -> Path:
    """Get the runtime directory path (lock files)."""
    return get_hbsv_home() / "run"


def get_lock_path() -> Path:
    """Get the lock file that serializes install and uninstall."""
    return get_run_path() / "service.lock"

