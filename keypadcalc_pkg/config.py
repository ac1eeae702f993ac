"""Centralized configuration for Keypadcalc.

This module defines:
- The operator set recognized by the engine and the evaluator
- Display sentinels (zero and error text)
- Input limits for the command-line front end
- Logging defaults

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KEYPADCALC_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("keypadcalc")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

OPERATORS = ("+", "-", "*", "/")

# Display sentinels
ZERO_DISPLAY = "0"
# Not configurable: the error text must never parse as a number
ERROR_DISPLAY = "Error"

PERCENT_DIVISOR = 100.0

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("KEYPADCALC_MAX_INPUT_LENGTH", "10000"))  # characters

# Logging
LOG_LEVEL = os.getenv("KEYPADCALC_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("KEYPADCALC_LOG_FILE") or None
