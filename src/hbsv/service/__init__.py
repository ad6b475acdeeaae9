"""Supervised service installation for hbsv.

Manages one service directory for a runit-style supervisor:
- termux-services on Android/Termux
- stock runit elsewhere

Example:
    from hbsv.config import load_config
    from hbsv.service import SupervisedServiceInstaller

    installer = SupervisedServiceInstaller(load_config())
    installer.install()
    installer.logs()
"""

from hbsv.service.base import InstallationState, ServiceDescriptor, SupervisorBackend
from hbsv.service.commands import CommandResult, CommandRunner
from hbsv.service.directory import ServiceDirectoryManager, installation_state
from hbsv.service.errors import (
    CommandExecutionError,
    FileWriteError,
    ServiceError,
    ServiceNotInstalledError,
    UserNotFoundError,
)
from hbsv.service.installer import (
    StatusLevel,
    StatusReporter,
    SupervisedServiceInstaller,
)
from hbsv.service.users import OwnerIds, ensure_user_exists, resolve_owner_ids

__all__ = [
    "CommandExecutionError",
    "CommandResult",
    "CommandRunner",
    "FileWriteError",
    "InstallationState",
    "OwnerIds",
    "ServiceDescriptor",
    "ServiceDirectoryManager",
    "ServiceError",
    "ServiceNotInstalledError",
    "StatusLevel",
    "StatusReporter",
    "SupervisedServiceInstaller",
    "SupervisorBackend",
    "UserNotFoundError",
    "ensure_user_exists",
    "installation_state",
    "resolve_owner_ids",
]
