"""termux-services backend for Android/Termux."""

import os
from pathlib import Path

from hbsv.service.base import ServiceDescriptor, SupervisorBackend

TERMUX_PREFIX = Path("/data/data/com.termux/files/usr")


class TermuxBackend(SupervisorBackend):
    """runit as packaged by termux-services.

    Service directories live in $PREFIX/etc/sv and are enabled for
    autostart with sv-enable.
    """

    @property
    def name(self) -> str:
        return "termux"

    @property
    def prefix(self) -> Path:
        """Termux install prefix, honouring a relocated $PREFIX."""
        env_prefix = os.environ.get("PREFIX", "")
        if "com.termux" in env_prefix:
            return Path(env_prefix)
        return TERMUX_PREFIX

    @property
    def default_root(self) -> Path:
        return self.prefix / "etc" / "sv"

    @property
    def shell(self) -> str:
        return str(self.prefix / "bin" / "sh")

    @property
    def is_available(self) -> bool:
        return self.prefix.is_dir()

    def enable(self, descriptor: ServiceDescriptor) -> None:
        self.runner.run(["sv-enable", descriptor.name])
