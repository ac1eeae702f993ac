"""Public API for Keypadcalc - returns structured objects instead of raising."""

from __future__ import annotations

from typing import Iterable, Union

from .engine import CalculatorEngine
from .keys import dispatch_key, tokenize_keys
from .logging_config import get_logger
from .types import DisplayResult, UnknownKeyError

logger = get_logger("api")

COMMANDS = frozenset(
    {
        "reset",
        "append_digit",
        "append_operator",
        "append_decimal",
        "toggle_sign",
        "percent",
        "delete_last",
        "evaluate",
    }
)

Command = Union[str, tuple[str, str]]


def _snapshot(engine: CalculatorEngine) -> DisplayResult:
    return DisplayResult(
        ok=True, display=engine.get_display(), result_shown=engine.result_shown
    )


def press_keys(
    keys: str | Iterable[str], engine: CalculatorEngine | None = None
) -> DisplayResult:
    """Feed key presses to an engine and report the display.

    Args:
        keys: A typed line (see keys.tokenize_keys) or an iterable of key names
        engine: Engine to drive; a fresh one is created if omitted

    Returns:
        DisplayResult; on an unknown key, ok=False and the display as it was
        before that key

    Example:
        >>> from keypadcalc_pkg.api import press_keys
        >>> press_keys("5+3=").display
        '8'
        >>> press_keys(["1", "/", "0", "Enter"]).display
        'Error'
    """
    engine = engine if engine is not None else CalculatorEngine()
    key_list = tokenize_keys(keys) if isinstance(keys, str) else list(keys)
    for key in key_list:
        try:
            dispatch_key(engine, key)
        except UnknownKeyError as e:
            logger.info(f"Rejected key: {e.key!r}")
            result = _snapshot(engine)
            result.ok = False
            result.error = e.message
            result.code = e.code
            return result
    return _snapshot(engine)


def run_commands(
    commands: Iterable[Command], engine: CalculatorEngine | None = None
) -> DisplayResult:
    """Run engine commands by name.

    Args:
        commands: Command names, or (name, argument) pairs for append_digit
            and append_operator
        engine: Engine to drive; a fresh one is created if omitted

    Returns:
        DisplayResult; ok=False with code UNKNOWN_COMMAND or INVALID_ARGUMENT
        if a command cannot be run

    Example:
        >>> from keypadcalc_pkg.api import run_commands
        >>> run_commands([("append_digit", "4"), ("append_operator", "+"), "evaluate"]).display
        '4'
    """
    engine = engine if engine is not None else CalculatorEngine()
    for command in commands:
        if isinstance(command, tuple):
            name, args = command[0], command[1:]
        else:
            name, args = command, ()
        if name not in COMMANDS:
            result = _snapshot(engine)
            result.ok = False
            result.error = f"Unknown command: {name!r}"
            result.code = "UNKNOWN_COMMAND"
            return result
        try:
            getattr(engine, name)(*args)
        except (TypeError, ValueError) as e:
            result = _snapshot(engine)
            result.ok = False
            result.error = f"Invalid argument for {name}: {e}"
            result.code = "INVALID_ARGUMENT"
            return result
    return _snapshot(engine)
