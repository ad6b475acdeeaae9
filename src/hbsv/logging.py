"""Centralized logging configuration for hbsv.

This module provides a single point of truth for logging setup.
The CLI calls configure_logging() before running any command.

Logging Levels:
- DEBUG: Commands executed, files written, swallowed supervisor failures
- INFO: Status lines when no console reporter is attached
- WARNING: Recoverable issues (autostart enable failed)
- ERROR: Failures that affect operation

Operator-facing status lines are printed by the CLI console, not through
logging; logging carries the diagnostic detail behind them.
"""

import logging
import os

ENV_VAR = "HBSV_LOG_LEVEL"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - hbsv.service.installer -> service
    - hbsv.config.loader -> config
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "hbsv":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> int:
    """Resolve a level name, falling back to HBSV_LOG_LEVEL, then WARNING."""
    if level is None:
        level = os.environ.get(ENV_VAR, "WARNING")
    level = level.upper()
    if level not in LEVELS:
        level = "WARNING"
    return getattr(logging, level)


def configure_logging(level: str | None = None, use_rich: bool = True) -> None:
    """Configure logging for hbsv.

    Call this once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses HBSV_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output.
    """
    log_level = resolve_level(level)

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )

    # filelock logs every acquire/release at DEBUG
    logging.getLogger("filelock").setLevel(logging.WARNING)
