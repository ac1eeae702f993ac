"""Type definitions, result dataclasses and error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NumberToken:
    """The rightmost number in the display buffer.

    ``value`` holds the matched text (sign, digits, decimal point) and
    ``start_index`` its offset in the buffer. A closing parenthesis that
    follows the number is never part of ``value``.
    """

    value: str
    start_index: int

    @property
    def has_decimal_point(self) -> bool:
        return "." in self.value


@dataclass
class DisplayResult:
    """Display state after feeding keys or commands to an engine."""

    ok: bool
    display: str
    result_shown: bool = False
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "display": self.display,
            "result_shown": self.result_shown,
        }
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"DisplayResult(ok=False, display={self.display!r}, error={self.error!r})"
        return (
            f"DisplayResult(ok=True, display={self.display!r}, "
            f"result_shown={self.result_shown!r})"
        )


class CalculatorError(Exception):
    """Base class for errors carrying a machine-readable code."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class MalformedExpression(CalculatorError):
    """Raised when the buffer is not a valid arithmetic expression."""

    default_code = "MALFORMED_EXPRESSION"

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(message)


class NonFiniteResult(CalculatorError):
    """Raised when evaluation yields infinity or NaN."""

    default_code = "NON_FINITE_RESULT"

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Result is not finite: {value!r}")


class UnknownKeyError(CalculatorError):
    """Raised when a key or command name has no engine binding."""

    default_code = "UNKNOWN_KEY"

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown key: {key!r}")
