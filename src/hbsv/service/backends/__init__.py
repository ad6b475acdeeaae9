"""Supervision backend detection and factory."""

import importlib

from hbsv.service.base import SupervisorBackend
from hbsv.service.commands import CommandRunner

BACKENDS = {
    "termux": "hbsv.service.backends.termux.TermuxBackend",
    "runit": "hbsv.service.backends.runit.RunitBackend",
}


def detect_backend(runner: CommandRunner | None = None) -> SupervisorBackend:
    """Detect the supervision backend for the current system.

    Detection order:
    1. Termux: termux-services
    2. Fallback: stock runit

    Returns:
        The best available SupervisorBackend for this system.
    """
    from hbsv.service.backends.termux import TermuxBackend

    backend = TermuxBackend(runner)
    if backend.is_available:
        return backend

    from hbsv.service.backends.runit import RunitBackend

    return RunitBackend(runner)


def get_backend(
    name: str | None = None, runner: CommandRunner | None = None
) -> SupervisorBackend:
    """Get a specific backend by name, or auto-detect.

    Args:
        name: Backend name ('termux', 'runit') or None for auto.
        runner: Command runner handed to the backend.

    Returns:
        The requested SupervisorBackend.

    Raises:
        ValueError: If the named backend doesn't exist.
    """
    if name is None:
        return detect_backend(runner)

    if name not in BACKENDS:
        raise ValueError(f"Unknown backend: {name}. Available: {list(BACKENDS)}")

    # Import dynamically to avoid loading unnecessary backends
    module_path, class_name = BACKENDS[name].rsplit(".", 1)
    module = importlib.import_module(module_path)
    backend_class = getattr(module, class_name)
    return backend_class(runner)


__all__ = ["BACKENDS", "detect_backend", "get_backend"]
