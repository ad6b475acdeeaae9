"""Structured subprocess invocation for supervisor and pass-through commands."""

import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from hbsv.service.errors import CommandExecutionError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a finished command.

    ``stdout`` and ``stderr`` are only populated when output was captured.
    """

    args: list[str]
    returncode: int
    stdout: str | None = None
    stderr: str | None = None


class CommandRunner:
    """Runs external commands synchronously.

    Standard streams are inherited by default so operator-facing output
    passes through live. Every failure, whether the executable is missing or
    it exits non-zero, surfaces as CommandExecutionError.
    """

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            args: Argument vector; never passed through a shell.
            cwd: Working directory for the command.
            env: Full environment for the command, or None to inherit.
            capture: Capture stdout/stderr as text instead of inheriting.

        Returns:
            CommandResult for a zero exit status.

        Raises:
            CommandExecutionError: If the command cannot be started or exits
                non-zero.
        """
        argv = [str(arg) for arg in args]
        logger.debug("Running %s", argv)
        try:
            proc = subprocess.run(
                argv,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                capture_output=capture,
                text=True,
            )
        except OSError as e:
            raise CommandExecutionError(argv, None, str(e)) from e

        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() if capture else ""
            raise CommandExecutionError(argv, proc.returncode, detail)

        return CommandResult(
            args=argv,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
