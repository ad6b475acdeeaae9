"""Configuration module."""

from hbsv.config.loader import load_config
from hbsv.config.models import ServiceConfig
from hbsv.config.paths import (
    get_config_path,
    get_hbsv_home,
    get_lock_path,
    get_run_path,
)

__all__ = [
    "ServiceConfig",
    "get_config_path",
    "get_hbsv_home",
    "get_lock_path",
    "get_run_path",
    "load_config",
]
