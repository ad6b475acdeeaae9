"""hbsv - Supervised service installer for Homebridge."""

__version__ = "0.1.0"
