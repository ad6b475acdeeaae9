"""Shared test fixtures and factories."""

import os
import pwd
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

from hbsv.config.models import ServiceConfig
from hbsv.config.paths import ENV_VAR, get_hbsv_home
from hbsv.service.backends.termux import TermuxBackend
from hbsv.service.commands import CommandResult, CommandRunner
from hbsv.service.errors import CommandExecutionError
from hbsv.service.installer import SupervisedServiceInstaller

# =============================================================================
# Command Runner Fakes
# =============================================================================


class RecordingRunner(CommandRunner):
    """Records commands instead of running them.

    Commands whose argument vector starts with a prefix in ``failing`` raise
    CommandExecutionError, as a non-zero exit would.
    """

    def __init__(self, failing: Sequence[Sequence[str]] = ()):
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.envs: list[Mapping[str, str] | None] = []
        self.failing = [list(prefix) for prefix in failing]

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        argv = [str(arg) for arg in args]
        self.calls.append(argv)
        self.cwds.append(cwd)
        self.envs.append(env)
        for prefix in self.failing:
            if argv[: len(prefix)] == prefix:
                raise CommandExecutionError(argv, 1)
        return CommandResult(args=argv, returncode=0)


class RecordingReporter:
    """Collects (message, level) status lines."""

    def __init__(self):
        self.lines: list[tuple[str, str]] = []

    def __call__(self, message: str, level: str = "info") -> None:
        self.lines.append((message, level))

    def levels(self) -> list[str]:
        return [level for _, level in self.lines]

    def messages(self, level: str | None = None) -> list[str]:
        return [m for m, lvl in self.lines if level is None or lvl == level]


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HBSV_HOME at a temporary directory for every test."""
    home = tmp_path / "hbsv-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("UIX_STORAGE_PATH", raising=False)
    monkeypatch.delenv("UIX_BASE_PATH", raising=False)
    get_hbsv_home.cache_clear()
    yield home
    get_hbsv_home.cache_clear()


@pytest.fixture
def current_user() -> str:
    """Login name of the account running the tests."""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def missing_user() -> str:
    """An account name that does not exist."""
    name = "hbsv-no-such-user"
    with pytest.raises(KeyError):
        pwd.getpwnam(name)
    return name


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def sv_root(tmp_path: Path) -> Path:
    return tmp_path / "sv"


@pytest.fixture
def service_config(tmp_path: Path, sv_root: Path, current_user: str) -> ServiceConfig:
    """Config for a Homebridge service under a temporary supervisor root."""
    return ServiceConfig(
        service_name="Homebridge",
        as_user=current_user,
        self_path="/usr/bin/hb-service",
        storage_path=tmp_path / "storage",
        backend="termux",
        supervisor_root=sv_root,
    )


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_installer(service_config, reporter, tmp_path: Path):
    """Factory for installers wired to a recording runner."""

    def _make(
        runner: RecordingRunner | None = None,
        config: ServiceConfig | None = None,
        **kwargs,
    ) -> SupervisedServiceInstaller:
        runner = runner or RecordingRunner()
        return SupervisedServiceInstaller(
            config or service_config,
            backend=TermuxBackend(runner),
            reporter=reporter,
            runner=runner,
            lock_path=tmp_path / "locks" / "service.lock",
            **kwargs,
        )

    return _make


@pytest.fixture
def installer(make_installer, runner) -> SupervisedServiceInstaller:
    return make_installer(runner)
