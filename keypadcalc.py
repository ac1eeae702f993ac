#!/usr/bin/env python3
"""
Keypadcalc - Single-display keypad calculator

Main entry point for the Keypadcalc application.
This file serves as a thin wrapper that delegates all functionality
to the keypadcalc_pkg package.

Usage:
    python keypadcalc.py                    # Interactive REPL
    python keypadcalc.py -e "5+3="          # Press keys and print the display
    python keypadcalc.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Keypadcalc.

    Delegates all functionality to the keypadcalc_pkg.cli module,
    which handles argument parsing, key dispatch, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from keypadcalc_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import keypadcalc_pkg: {e}")
        print("Please ensure the package is installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
