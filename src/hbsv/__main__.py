"""Allow running as ``python -m hbsv``."""

from hbsv.cli.app import app

app()
