"""Courtroom hearing scheduling and availability."""

__version__ = "0.1.0"
