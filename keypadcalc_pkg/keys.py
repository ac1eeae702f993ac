"""Keyboard and keypad input dispatch.

Maps key names (as reported by a keyboard) and button labels (as printed on
a keypad) onto engine commands. The engine itself knows nothing about keys.
"""

from __future__ import annotations

import re
from typing import Callable

from .config import OPERATORS
from .engine import CalculatorEngine
from .logging_config import get_logger
from .types import UnknownKeyError

logger = get_logger("keys")

# Key name -> engine method name. Digits and operators are handled separately
# because they carry the key itself as the command argument.
KEY_BINDINGS = {
    ".": "append_decimal",
    "=": "evaluate",
    "enter": "evaluate",
    "backspace": "delete_last",
    "del": "delete_last",
    "escape": "reset",
    "esc": "reset",
    "ac": "reset",
    "%": "percent",
    "±": "toggle_sign",
    "plusminus": "toggle_sign",
    "negate": "toggle_sign",
}

KEY_TOKEN_REGEX = re.compile(r"\[([^\[\]]+)\]|(\S)")

HELP_ROWS = [
    ("0-9", "type a digit"),
    (".", "decimal point"),
    ("+ - * /", "operator"),
    ("= or [Enter]", "evaluate"),
    ("[Backspace] or [DEL]", "delete last character"),
    ("[Escape] or [AC]", "clear"),
    ("%", "percent of the last number"),
    ("± or [negate]", "toggle sign of the last number"),
]


def resolve_key(key: str) -> tuple[str, str | None]:
    """Return the (method name, argument) pair a key is bound to.

    Raises:
        UnknownKeyError: if the key has no binding
    """
    if len(key) == 1 and key in "0123456789":
        return "append_digit", key
    if key in OPERATORS:
        return "append_operator", key
    command = KEY_BINDINGS.get(key.lower())
    if command is None:
        raise UnknownKeyError(key)
    return command, None


def dispatch_key(engine: CalculatorEngine, key: str) -> None:
    """Apply one key press to ``engine``.

    Raises:
        UnknownKeyError: if the key has no binding
    """
    command, argument = resolve_key(key)
    method: Callable[..., None] = getattr(engine, command)
    logger.debug("key %r -> %s(%s)", key, command, argument or "")
    if argument is None:
        method()
    else:
        method(argument)


def tokenize_keys(line: str) -> list[str]:
    """Split a typed line into key names.

    Named keys are written in brackets ("[Enter]", "[AC]"); every other
    non-space character is a key of its own.

    Example:
        >>> tokenize_keys("12+3 [Enter]")
        ['1', '2', '+', '3', 'Enter']
    """
    return [named or char for named, char in KEY_TOKEN_REGEX.findall(line)]
