"""Errors raised by the service installer."""

from collections.abc import Sequence
from pathlib import Path


class ServiceError(Exception):
    """Base class for service installer errors."""


class UserNotFoundError(ServiceError):
    """The account the service should run as does not exist."""

    def __init__(self, username: str):
        super().__init__(f"User does not exist: {username}")
        self.username = username


class ServiceNotInstalledError(ServiceError):
    """The service directory is absent."""

    def __init__(self, name: str):
        super().__init__(f"Service is not installed: {name}")
        self.name = name


class CommandExecutionError(ServiceError):
    """An external command failed to launch or exited non-zero."""

    def __init__(self, args: Sequence[str], returncode: int | None, detail: str = ""):
        command = " ".join(args)
        if returncode is None:
            message = f'Failed to run "{command}"'
        else:
            message = f'"{command}" exited with status {returncode}'
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode


class FileWriteError(ServiceError):
    """Creating a service directory or script failed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
