"""Command line interface for the courtroom hearing scheduler."""

from docket import __version__

__all__ = ["__version__"]
