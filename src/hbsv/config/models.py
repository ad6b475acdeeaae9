"""Configuration models using Pydantic."""

import getpass
import shutil
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

APP_EXECUTABLE = "hb-service"


def _default_self_path() -> str:
    """Locate the managed application's executable."""
    return shutil.which(APP_EXECUTABLE) or APP_EXECUTABLE


def _default_storage_path() -> Path:
    return Path.home() / ".homebridge"


class ServiceConfig(BaseModel):
    """Configuration for the supervised service.

    ``self_path`` and ``storage_path`` form the run script's command, the
    ``log_*`` fields form the log script. The remaining fields select the
    supervision backend and feed the pass-through commands.
    """

    service_name: str = "Homebridge"
    as_user: str = Field(default_factory=getpass.getuser)
    self_path: str = Field(default_factory=_default_self_path)
    storage_path: Path = Field(default_factory=_default_storage_path)

    # Supervision backend: None = auto-detect
    backend: Literal["termux", "runit"] | None = None
    # Directory holding one sub-directory per service; None = backend default
    supervisor_root: Path | None = None

    # svlogd target directory; None = <storage_path>/log
    log_path: Path | None = None
    # Account svlogd runs as; None = as_user
    log_user: str | None = None

    rebuild_command: list[str] = Field(
        default_factory=lambda: ["npm", "rebuild", "--unsafe-perm"]
    )
    # None = storage_path
    rebuild_path: Path | None = None
    global_rebuild_path: Path | None = None

    @field_validator(
        "storage_path",
        "supervisor_root",
        "log_path",
        "rebuild_path",
        "global_rebuild_path",
    )
    @classmethod
    def _expand_path(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser()

    @field_validator("service_name", "as_user")
    @classmethod
    def _require_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def resolved_log_path(self) -> Path:
        """Directory svlogd writes into."""
        return self.log_path or self.storage_path / "log"

    @property
    def resolved_log_user(self) -> str:
        """Account the log-rotation process runs as."""
        return self.log_user or self.as_user

    @property
    def resolved_rebuild_path(self) -> Path:
        """Directory the rebuild command runs in."""
        return self.rebuild_path or self.storage_path

    @property
    def config_json_path(self) -> Path:
        """The managed application's own config file."""
        return self.storage_path / "config.json"
