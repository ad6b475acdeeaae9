"""Stock runit backend for Linux distributions that boot with runit."""

import shutil
from pathlib import Path

from hbsv.service.base import ServiceDescriptor, SupervisorBackend
from hbsv.service.commands import CommandRunner

DEFAULT_SCAN_DIR = Path("/var/service")


class RunitBackend(SupervisorBackend):
    """runit with service definitions in /etc/sv.

    A service is enabled by linking its directory into the directory
    runsvdir scans.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        scan_dir: Path = DEFAULT_SCAN_DIR,
    ):
        super().__init__(runner)
        self.scan_dir = scan_dir

    @property
    def name(self) -> str:
        return "runit"

    @property
    def default_root(self) -> Path:
        return Path("/etc/sv")

    @property
    def shell(self) -> str:
        return "/bin/sh"

    @property
    def is_available(self) -> bool:
        return shutil.which("sv") is not None

    def enable(self, descriptor: ServiceDescriptor) -> None:
        self.runner.run(
            [
                "ln",
                "-sfn",
                str(descriptor.root_path),
                str(self.scan_dir / descriptor.name),
            ]
        )
