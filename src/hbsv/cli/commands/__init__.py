"""CLI command modules."""

from hbsv.cli.commands import application, service

__all__ = [
    "application",
    "service",
]
