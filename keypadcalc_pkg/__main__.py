"""Main entry point for running keypadcalc_pkg as a module.

This allows running Keypadcalc with:
    python -m keypadcalc_pkg
    python -m keypadcalc_pkg -e "5+3="
    python -m keypadcalc_pkg --version

This is equivalent to running:
    python -m keypadcalc_pkg.cli
    python keypadcalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
