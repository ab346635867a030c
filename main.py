#!/usr/bin/env python

"""
Timesheet Exporter - Main Entry Point

Exports a week of Clockify time entries into an Excel timesheet.

Usage:
    python main.py

Requirements:
    - Python 3.12+
    - See pyproject.toml for dependencies
"""

import sys
import logging
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))

from timesheet_exporter.infra.config import get_settings
from timesheet_exporter.ui.app import TimesheetApp


def main():
    """Main entry point"""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = TimesheetApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
