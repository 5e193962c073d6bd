"""Centralized path definitions for the Courier application.

Single source of truth for everything Courier writes to disk.
"""

from pathlib import Path

# Base application directory
COURIER_DIR = Path.home() / ".courier"

# Subdirectories
LOGS_DIR = COURIER_DIR / "logs"

# Specific files
CONFIG_PATH = COURIER_DIR / "config.json"
