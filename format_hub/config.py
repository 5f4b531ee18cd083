"""Configuration constants and .env loading.

WHY: The default XCC metadata block, the archive size guard and the log
level are the only knobs in the project. Keeping them in one module
makes them easy to find and override without touching handler code.

HOW: python-dotenv loads the .env file on import. Each setting is a
module-level constant read from the environment with a fallback.

RULES:
- XCC_NAMESPACE is fixed by the format and is not configurable
- All other defaults can be overridden via FORMAT_HUB_* variables
- Handlers read these constants at call time through this module
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# XCC output defaults
# ---------------------------------------------------------------------------

XCC_NAMESPACE = "https://www.mihaipopa.com/2025/xcc"
"""Namespace of the XCC root element."""

GENERATOR_NAME = os.getenv("FORMAT_HUB_GENERATOR", "universal-file-converter")
DEFAULT_SOURCE = os.getenv("FORMAT_HUB_DEFAULT_SOURCE", "converted")
DEFAULT_LANGUAGE = os.getenv("FORMAT_HUB_DEFAULT_LANGUAGE", "en")

# ---------------------------------------------------------------------------
# Handler limits
# ---------------------------------------------------------------------------

MAX_ARCHIVE_INPUT_BYTES = int(
    os.getenv("FORMAT_HUB_MAX_ARCHIVE_BYTES", str(10 * 1024 * 1024))
)
"""Largest text file the txt → hra handler accepts (bytes)."""

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("FORMAT_HUB_LOG_LEVEL", "WARNING").upper()
