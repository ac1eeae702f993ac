"""Command-line front end: one-shot key sequences and an interactive keypad REPL."""

from __future__ import annotations

import argparse
import json
import sys

from .api import press_keys
from .config import LOG_FILE, LOG_LEVEL, MAX_INPUT_LENGTH, VERSION
from .engine import CalculatorEngine
from .keys import HELP_ROWS
from .logging_config import get_logger, setup_logging
from .types import DisplayResult

logger = get_logger("cli")

QUIT_COMMANDS = {"quit", "exit"}


def print_result(result: DisplayResult, output_format: str = "human") -> None:
    """Print a DisplayResult as JSON or as the bare display text."""
    if output_format == "json":
        print(json.dumps(result.to_dict()))
        return
    if not result.ok:
        print(f"Error: {result.error}")
    print(result.display)


def print_help_text() -> None:
    """Print the key table for the REPL."""
    print("Type keys and press return; the display is shown after each line.")
    print("Named keys go in brackets, e.g. 12+3[Enter].")
    print()
    width = max(len(key) for key, _ in HELP_ROWS)
    for key, meaning in HELP_ROWS:
        print(f"  {key.ljust(width)}  {meaning}")
    print()
    print("  help    show this text")
    print("  quit    leave")


def _check_length(line: str) -> str | None:
    if len(line) > MAX_INPUT_LENGTH:
        return f"Input too long ({len(line)} > {MAX_INPUT_LENGTH} characters)"
    return None


def repl_loop(output_format: str = "human") -> None:
    """Interactive loop driving a single engine until EOF or quit."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    engine = CalculatorEngine()
    print("Keypadcalc - type 'help' for keys, 'quit' to exit.")
    print(engine.get_display())
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if raw.lower() in QUIT_COMMANDS:
            break
        if raw.lower() == "help":
            print_help_text()
            continue
        error = _check_length(raw)
        if error:
            print(f"Error: {error}")
            continue
        print_result(press_keys(raw, engine=engine), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Keypadcalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="keypadcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Press one key sequence on a fresh calculator and exit, e.g. '5+3='",
        dest="eval_keys",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (display text)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, default=LOG_FILE, help="Write logs to file")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    if args.eval_keys is not None:
        keys = args.eval_keys.strip()
        if not keys:
            print("Error: Empty input. Please enter at least one key.")
            return 1
        error = _check_length(keys)
        if error:
            print(f"Error: {error}")
            return 1
        logger.debug(f"Evaluating key sequence: {keys[:100]}")
        result = press_keys(keys)
        print_result(result, args.format)
        return 0 if result.ok else 1

    repl_loop(args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
