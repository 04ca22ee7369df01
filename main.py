#!/usr/bin/env python
"""Main entry point for the courtroom hearing scheduler.

This file provides the primary entry point for the project.
It invokes the CLI which provides all scheduler operations.
"""

from docket_cli.main import main

if __name__ == "__main__":
    main()
