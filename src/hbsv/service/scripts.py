"""Generation of the run and log/run scripts of a service directory.

Rendering is pure so script content can be checked without a filesystem.
Writing stages the content in a temporary file next to the target, marks it
executable and renames it into place, so the target path never holds a
partially written script.
"""

import logging
import os
import shlex
import tempfile
from dataclasses import dataclass
from pathlib import Path

from hbsv.service.base import ServiceDescriptor
from hbsv.service.errors import FileWriteError

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o755


@dataclass(frozen=True)
class RunScriptSpec:
    """The single command the supervised process executes."""

    shell: str
    command: list[str]


@dataclass(frozen=True)
class LogRunScriptSpec:
    """svlogd invocation collecting the service's output."""

    shell: str
    log_dir: Path
    owner: str


def build_run_command(self_path: str, storage_path: Path) -> list[str]:
    """Argument vector that runs the application against its storage."""
    return [self_path, "run", "-U", str(storage_path)]


def render_run_script(spec: RunScriptSpec) -> str:
    lines = [
        f"#!{spec.shell}",
        "exec 2>&1",
        f"exec setsid {shlex.join(spec.command)}",
    ]
    return "\n".join(lines) + "\n"


def render_log_run_script(spec: LogRunScriptSpec) -> str:
    log_dir = shlex.quote(str(spec.log_dir))
    owner = shlex.quote(spec.owner)
    lines = [
        f"#!{spec.shell}",
        f"mkdir -p {log_dir}",
        f"exec chpst -u {owner} svlogd -tt {log_dir}",
    ]
    return "\n".join(lines) + "\n"


def write_script(path: Path, content: str) -> None:
    """Write an executable script with mode 0755.

    Raises:
        FileWriteError: If the script cannot be written.
    """
    tmp: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp, SCRIPT_MODE)
        os.replace(tmp, path)
    except OSError as e:
        if tmp is not None:
            Path(tmp).unlink(missing_ok=True)
        raise FileWriteError(path, e.strerror or str(e)) from e
    logger.debug("Wrote %s", path)


class ScriptGenerator:
    """Writes both scripts of a service directory."""

    def write_run_script(
        self, descriptor: ServiceDescriptor, spec: RunScriptSpec
    ) -> None:
        write_script(descriptor.run_script_path, render_run_script(spec))

    def write_log_run_script(
        self, descriptor: ServiceDescriptor, spec: LogRunScriptSpec
    ) -> None:
        write_script(descriptor.log_run_script_path, render_log_run_script(spec))
