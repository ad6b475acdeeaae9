"""High-level lifecycle management of the supervised service."""

import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Literal

from filelock import FileLock

from hbsv.config.models import ServiceConfig
from hbsv.config.paths import get_lock_path
from hbsv.service.backends import get_backend
from hbsv.service.base import InstallationState, ServiceDescriptor, SupervisorBackend
from hbsv.service.commands import CommandRunner
from hbsv.service.directory import ServiceDirectoryManager, installation_state
from hbsv.service.errors import (
    CommandExecutionError,
    FileWriteError,
    UserNotFoundError,
)
from hbsv.service.scripts import (
    LogRunScriptSpec,
    RunScriptSpec,
    ScriptGenerator,
    build_run_command,
)
from hbsv.service.users import OwnerIds, ensure_user_exists, resolve_owner_ids

logger = logging.getLogger(__name__)

StatusLevel = Literal["info", "succeed", "fail", "warn"]
StatusReporter = Callable[[str, StatusLevel], None]

PLUGIN_KINDS = ("accessory", "plugin")

# Quiets npm during rebuilds; the caller's environment takes precedence
NPM_QUIET_ENV: dict[str, str] = {
    "npm_config_loglevel": "silent",
    "npm_update_notifier": "false",
}

_LOG_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "succeed": logging.INFO,
    "warn": logging.WARNING,
    "fail": logging.ERROR,
}


def log_status(message: str, level: StatusLevel = "info") -> None:
    """Default reporter: route status lines to the module logger."""
    logger.log(_LOG_LEVELS.get(level, logging.INFO), message)


class SupervisedServiceInstaller:
    """Installs, removes and drives one supervised service.

    The service directory is the source of truth for "installed". Supervisor
    commands run after that state is established are best effort: their
    failures are reported, never raised.

    Example:
        installer = SupervisedServiceInstaller(load_config())
        installer.install()
        installer.restart()
    """

    def __init__(
        self,
        config: ServiceConfig,
        backend: SupervisorBackend | None = None,
        reporter: StatusReporter | None = None,
        runner: CommandRunner | None = None,
        post_install: Callable[["SupervisedServiceInstaller"], None] | None = None,
        lock_path: Path | None = None,
    ):
        """Initialize the installer.

        Args:
            config: Service configuration.
            backend: Supervision backend, or None to use config.backend.
            reporter: Sink for operator-facing status lines.
            runner: Command runner for pass-through commands.
            post_install: Called after a successful install to print guidance.
            lock_path: Lock file serializing install and uninstall.
        """
        self.config = config
        self.runner = runner or CommandRunner()
        self.backend = backend or get_backend(config.backend, self.runner)
        self._report = reporter or log_status
        self._post_install = post_install
        self._lock_path = lock_path or get_lock_path()
        self.directories = ServiceDirectoryManager()
        self.scripts = ScriptGenerator()
        self.descriptor = ServiceDescriptor.from_display_name(
            config.service_name,
            config.supervisor_root or self.backend.default_root,
        )

    @property
    def service_name(self) -> str:
        return self.descriptor.name

    @property
    def state(self) -> InstallationState:
        return installation_state(self.descriptor)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(str(self._lock_path)):
            yield

    def run_script_spec(self) -> RunScriptSpec:
        return RunScriptSpec(
            shell=self.backend.shell,
            command=build_run_command(self.config.self_path, self.config.storage_path),
        )

    def log_run_script_spec(self) -> LogRunScriptSpec:
        return LogRunScriptSpec(
            shell=self.backend.shell,
            log_dir=self.config.resolved_log_path,
            owner=self.config.resolved_log_user,
        )

    # ------------------------------------------------------------------
    # Install / Uninstall
    # ------------------------------------------------------------------

    def install(self) -> bool:
        """Install, enable and start the service.

        Re-running on an installed service rewrites the scripts in place.
        Steps already completed are not rolled back when a later one fails.

        Returns:
            True if the service definition was written.

        Raises:
            UserNotFoundError: If the configured account does not exist.
                Nothing has been created at that point.
        """
        with self._locked():
            try:
                ensure_user_exists(self.config.as_user)
            except UserNotFoundError:
                self._report(
                    f"ERROR: User {self.config.as_user} does not exist.", "fail"
                )
                raise

            try:
                self.directories.ensure(self.descriptor)
                self.scripts.write_run_script(self.descriptor, self.run_script_spec())
                self.scripts.write_log_run_script(
                    self.descriptor, self.log_run_script_spec()
                )
            except FileWriteError as e:
                logger.debug("Install failed", exc_info=True)
                self._report(f"ERROR: Failed Operation ({e})", "fail")
                return False

            self._enable()

        self.start()
        if self._post_install is not None:
            self._post_install(self)
        return True

    def uninstall(self) -> bool:
        """Remove the service directory.

        Returns:
            False only if removal started and failed part way.
        """
        with self._locked():
            if self.state is InstallationState.ABSENT:
                self._report(
                    f"Could not find installed {self.service_name} Service.", "fail"
                )
                return True

            try:
                self.directories.remove(self.descriptor)
            except OSError as e:
                logger.debug("Uninstall failed", exc_info=True)
                self._report(f"ERROR: Failed Operation ({e})", "fail")
                return False

        self._report(f"Removed {self.service_name} Service", "succeed")
        return True

    def _enable(self) -> None:
        try:
            self.backend.enable(self.descriptor)
        except CommandExecutionError as e:
            logger.debug("Enable failed: %s", e)
            self._report(
                f"WARNING: failed to enable {self.service_name} for autostart ({e})",
                "warn",
            )

    # ------------------------------------------------------------------
    # Supervisor verbs
    # ------------------------------------------------------------------

    def _supervise(
        self,
        action: Callable[[ServiceDescriptor], None],
        before: str,
        after: str,
        failure: str,
    ) -> bool:
        self._report(before, "info")
        try:
            action(self.descriptor)
        except CommandExecutionError as e:
            logger.debug("%s: %s", failure, e)
            self._report(failure, "fail")
            return False
        self._report(after, "succeed")
        return True

    def start(self) -> bool:
        """Bring the service up. Failures are reported, not raised."""
        if self.state is InstallationState.ABSENT:
            self._report(f"{self.service_name} Service is not installed.", "warn")
        return self._supervise(
            self.backend.start,
            f"Starting {self.service_name} Service...",
            f"{self.service_name} Started",
            f"Failed to start {self.service_name}",
        )

    def stop(self) -> bool:
        """Bring the service down. Failures are reported, not raised."""
        return self._supervise(
            self.backend.stop,
            f"Stopping {self.service_name} Service...",
            f"{self.service_name} Stopped",
            f"Failed to stop {self.service_name}",
        )

    def restart(self) -> bool:
        """Restart the service. Failures are reported, not raised."""
        return self._supervise(
            self.backend.restart,
            f"Restarting {self.service_name} Service...",
            f"{self.service_name} Restarted",
            f"Failed to restart {self.service_name}",
        )

    def logs(self) -> bool:
        """Print supervisor status, then follow the log until interrupted."""
        self._report(f"Displaying logs for {self.service_name}...", "info")
        try:
            self.backend.status(self.descriptor)
            self.backend.tail(self.config.resolved_log_path)
        except CommandExecutionError as e:
            logger.debug("Log display failed: %s", e)
            self._report("ERROR: Failed to display logs", "fail")
            return False
        return True

    # ------------------------------------------------------------------
    # Pass-throughs to the managed application
    # ------------------------------------------------------------------

    def run(self) -> bool:
        """Run the application in the foreground."""
        self._report(f"Running {self.service_name}...", "info")
        try:
            self.runner.run(
                build_run_command(self.config.self_path, self.config.storage_path)
            )
        except CommandExecutionError as e:
            logger.debug("Run failed: %s", e)
            self._report(f"ERROR: Failed to run {self.config.service_name}", "fail")
            return False
        return True

    def view(self) -> str | None:
        """Return the application's config.json, if present."""
        config_path = self.config.config_json_path
        if not config_path.exists():
            self._report(f"Config file not found at {config_path}.", "fail")
            return None
        try:
            return config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Could not read %s", config_path, exc_info=True)
            self._report(f"ERROR: Failed to view configuration ({e})", "fail")
            return None

    def _plugin_command(self, verb: str, kind: str, name: str) -> list[str]:
        if kind == "accessory":
            return [self.config.self_path, f"{verb}-accessory", "-N", name]
        return [self.config.self_path, f"{verb}-plugin", name]

    def add(self, kind: str, name: str) -> bool:
        """Add an accessory or plugin through the application's own CLI."""
        return self._manage_plugin("add", kind, name, "Adding", "added")

    def remove(self, kind: str, name: str) -> bool:
        """Remove an accessory or plugin through the application's own CLI."""
        return self._manage_plugin("remove", kind, name, "Removing", "removed")

    def _manage_plugin(
        self, verb: str, kind: str, name: str, progress: str, done: str
    ) -> bool:
        if kind not in PLUGIN_KINDS:
            self._report('Invalid type. Use "accessory" or "plugin".', "fail")
            return False

        self._report(f"{progress} {kind} {name}...", "info")
        try:
            self.runner.run(self._plugin_command(verb, kind, name))
        except CommandExecutionError as e:
            logger.debug("%s %s failed: %s", verb, kind, e)
            self._report(f"ERROR: Failed to {verb} {kind} {name}", "fail")
            return False
        self._report(f"{kind.capitalize()} {name} {done} successfully.", "succeed")
        return True

    def rebuild(self, all_modules: bool = False) -> bool:
        """Re-run the module build in the rebuild directory.

        Args:
            all_modules: Also rebuild the global modules directory; a failure
                there is only a warning.
        """
        rebuild_path = self.config.resolved_rebuild_path
        env = {**NPM_QUIET_ENV, **os.environ}
        try:
            self.runner.run(self.config.rebuild_command, cwd=rebuild_path, env=env)
        except CommandExecutionError as e:
            logger.debug("Rebuild failed: %s", e)
            self._report("ERROR: Failed Operation", "fail")
            return False

        if all_modules:
            global_path = self.config.global_rebuild_path
            if global_path is None:
                self._report(
                    "No global modules directory configured, skipping.", "warn"
                )
            else:
                try:
                    self.runner.run(
                        self.config.rebuild_command, cwd=global_path, env=env
                    )
                except CommandExecutionError as e:
                    logger.debug("Global rebuild failed: %s", e)
                    self._report(
                        "Could not rebuild all modules - check the service logs.",
                        "warn",
                    )

        self._report(f"Rebuilt modules in {rebuild_path}.", "succeed")
        return True

    def resolve_owner_ids(self) -> OwnerIds:
        """Numeric uid/gid of the service account, for chown by callers.

        Raises:
            UserNotFoundError: If the account does not exist.
        """
        return resolve_owner_ids(self.config.as_user)

    get_id = resolve_owner_ids
