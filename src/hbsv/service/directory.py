"""Existence and removal of a service directory."""

import logging
import shutil

from hbsv.service.base import InstallationState, ServiceDescriptor
from hbsv.service.errors import FileWriteError, ServiceNotInstalledError

logger = logging.getLogger(__name__)

# Runtime entries runsv creates inside a service directory
SUPERVISE_DIR = "supervise"
DOWN_FILE = "down"


def installation_state(descriptor: ServiceDescriptor) -> InstallationState:
    """The service counts as installed exactly when its root directory exists."""
    if descriptor.root_path.exists():
        return InstallationState.PRESENT
    return InstallationState.ABSENT


class ServiceDirectoryManager:
    """Creates and removes <supervisor-root>/<name>/{run, log/run}."""

    def exists(self, descriptor: ServiceDescriptor) -> bool:
        return installation_state(descriptor) is InstallationState.PRESENT

    def ensure(self, descriptor: ServiceDescriptor) -> None:
        """Create the service and log directories unless already installed.

        Raises:
            FileWriteError: If a directory cannot be created.
        """
        if self.exists(descriptor):
            return
        for path in (descriptor.root_path, descriptor.log_dir_path):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileWriteError(path, e.strerror or str(e)) from e
        logger.debug("Created %s", descriptor.root_path)

    def remove(self, descriptor: ServiceDescriptor) -> None:
        """Tear down the service directory.

        The run script goes first so the supervisor stops treating the
        directory as runnable. Files already missing are skipped; a failure
        on any other step propagates and leaves the rest in place for a retry.

        Raises:
            ServiceNotInstalledError: If the service directory is absent.
            OSError: If a removal step fails.
        """
        if not self.exists(descriptor):
            raise ServiceNotInstalledError(descriptor.name)

        descriptor.run_script_path.unlink(missing_ok=True)
        descriptor.log_run_script_path.unlink(missing_ok=True)

        for supervise in (
            descriptor.root_path / SUPERVISE_DIR,
            descriptor.log_dir_path / SUPERVISE_DIR,
        ):
            if supervise.is_symlink():
                supervise.unlink()
            elif supervise.exists():
                shutil.rmtree(supervise)
        for service_dir in (descriptor.root_path, descriptor.log_dir_path):
            (service_dir / DOWN_FILE).unlink(missing_ok=True)

        if descriptor.log_dir_path.exists():
            descriptor.log_dir_path.rmdir()
        descriptor.root_path.rmdir()
        logger.debug("Removed %s", descriptor.root_path)
