"""Service descriptor and the abstract supervision backend."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hbsv.service.commands import CommandRunner


class InstallationState(Enum):
    """Whether the service directory exists."""

    ABSENT = "absent"
    PRESENT = "present"


@dataclass(frozen=True)
class ServiceDescriptor:
    """On-disk identity of a supervised service.

    Everything is derived from the display name and the supervisor root;
    use from_display_name() rather than building one by hand.
    """

    name: str
    root_path: Path

    @classmethod
    def from_display_name(
        cls, display_name: str, supervisor_root: Path
    ) -> "ServiceDescriptor":
        """Derive a descriptor from a display name such as "Homebridge".

        Raises:
            ValueError: If the name cannot be used as a directory name.
        """
        name = display_name.strip().lower()
        if not name or name in (".", "..") or "/" in name or "\0" in name:
            raise ValueError(f"Invalid service name: {display_name!r}")
        return cls(name=name, root_path=Path(supervisor_root) / name)

    @property
    def run_script_path(self) -> Path:
        return self.root_path / "run"

    @property
    def log_dir_path(self) -> Path:
        return self.root_path / "log"

    @property
    def log_run_script_path(self) -> Path:
        return self.log_dir_path / "run"


class SupervisorBackend(ABC):
    """Translates lifecycle verbs into a supervision backend's commands.

    Backends are stateless apart from their command runner. Every verb is a
    synchronous subprocess with inherited standard streams and raises
    CommandExecutionError on failure; deciding whether a failure matters is
    left to the caller.
    """

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (e.g., 'termux', 'runit')."""
        ...

    @property
    @abstractmethod
    def default_root(self) -> Path:
        """Directory holding one sub-directory per service."""
        ...

    @property
    @abstractmethod
    def shell(self) -> str:
        """Interpreter used in the generated scripts' shebang."""
        ...

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend is available on the current system."""
        ...

    @abstractmethod
    def enable(self, descriptor: ServiceDescriptor) -> None:
        """Mark the service for automatic start."""
        ...

    def start(self, descriptor: ServiceDescriptor) -> None:
        """Bring the service up."""
        self.runner.run(["sv", "up", descriptor.name])

    def stop(self, descriptor: ServiceDescriptor) -> None:
        """Bring the service down."""
        self.runner.run(["sv", "down", descriptor.name])

    def restart(self, descriptor: ServiceDescriptor) -> None:
        """Restart the service in place."""
        self.runner.run(["sv", "restart", descriptor.name])

    def status(self, descriptor: ServiceDescriptor) -> None:
        """Print the supervisor's view of the service."""
        self.runner.run(["sv", "status", descriptor.name])

    def tail(self, log_dir: Path) -> None:
        """Follow the live log; blocks until interrupted."""
        self.runner.run(["tail", "-f", str(log_dir / "current")])
