"""Expression scanning, evaluation and number formatting.

This module handles:
- Locating the trailing number of the display buffer (sign toggle, percent)
- Reading the leading numeric value of a buffer
- Tokenizing and evaluating the four-operator infix expressions the engine builds
- Formatting results back into display text

Everything here is stateless; the engine owns the buffer.
"""

from __future__ import annotations

import math
import re

from .config import OPERATORS
from .types import MalformedExpression, NonFiniteResult, NumberToken

_DIGITS = "0123456789"

NUMBER_REGEX = re.compile(
    r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)
LEADING_NUMBER_REGEX = re.compile(
    r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)

_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}


def is_operator(char: str) -> bool:
    """Return True if ``char`` is one of + - * /."""
    return char in OPERATORS


def find_last_number(text: str) -> NumberToken | None:
    """Locate the rightmost number at the end of ``text``.

    Scans backwards over an optional closing parenthesis, fractional digits,
    one decimal point, integer digits and one leading minus sign. Returns
    None when the text does not end in a number.

    Examples:
        "12+3.5" -> NumberToken("3.5", 3)
        "5*-2"   -> NumberToken("-2", 2)
        "(-7)"   -> NumberToken("-7", 1)
        "5+"     -> None
    """
    end = len(text)
    if end and text[end - 1] == ")":
        end -= 1

    pos = end
    while pos > 0 and text[pos - 1] in _DIGITS:
        pos -= 1

    if pos > 0 and text[pos - 1] == ".":
        int_end = pos - 1
        start = int_end
        while start > 0 and text[start - 1] in _DIGITS:
            start -= 1
        if start == int_end:
            # ".5": the digits after the point stand on their own
            if pos == end:
                return None
            start = pos
    else:
        if pos == end:
            return None
        start = pos

    if start > 0 and text[start - 1] == "-":
        start -= 1

    return NumberToken(value=text[start:end], start_index=start)


def parse_leading_number(text: str) -> float | None:
    """Parse the longest numeric prefix of ``text``, or None if there is none.

    Trailing garbage is ignored, so "5*" reads as 5.0 and "Error" as None.
    """
    match = LEADING_NUMBER_REGEX.match(text)
    if match is None:
        return None
    return float(match.group(0))


def format_number(value: float) -> str:
    """Format a float as display text.

    Uses the shortest round-tripping representation, drops a trailing
    ".0" and renders negative zero as "0".

    Examples:
        8.0   -> "8"
        0.5   -> "0.5"
        -0.0  -> "0"
        1e16  -> "1e+16"
    """
    if value == 0:
        return "0"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def strip_trailing_operators(text: str) -> str:
    """Remove operator characters from the end of ``text``."""
    while text and is_operator(text[-1]):
        text = text[:-1]
    return text


def tokenize(expression: str) -> list[tuple[str, int]]:
    """Split an expression into (token, position) pairs.

    Tokens are numeric literals and single operator characters. Whitespace
    is skipped.

    Raises:
        MalformedExpression: on any other character
    """
    tokens: list[tuple[str, int]] = []
    pos = 0
    length = len(expression)
    while pos < length:
        char = expression[pos]
        if char.isspace():
            pos += 1
            continue
        if is_operator(char):
            tokens.append((char, pos))
            pos += 1
            continue
        match = NUMBER_REGEX.match(expression, pos)
        if match is None:
            raise MalformedExpression(
                f"Unexpected character {char!r} at position {pos}", position=pos
            )
        tokens.append((match.group(0), pos))
        pos = match.end()
    return tokens


def divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: x/0 gives a signed infinity, 0/0 gives NaN."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    return divide(left, right)


class _Parser:
    """Precedence-climbing parser over the token list."""

    def __init__(self, tokens: list[tuple[str, int]], source: str):
        self.tokens = tokens
        self.source = source
        self.index = 0

    def _peek(self) -> str | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index][0]
        return None

    def _position(self) -> int:
        if self.index < len(self.tokens):
            return self.tokens[self.index][1]
        return len(self.source)

    def parse(self) -> float:
        if not self.tokens:
            raise MalformedExpression("Empty expression", position=0)
        value = self._binary(1)
        if self.index != len(self.tokens):
            token = self._peek()
            raise MalformedExpression(
                f"Unexpected token {token!r} at position {self._position()}",
                position=self._position(),
            )
        return value

    def _binary(self, min_precedence: int) -> float:
        left = self._unary()
        while True:
            op = self._peek()
            if op is None or op not in _PRECEDENCE:
                return left
            precedence = _PRECEDENCE[op]
            if precedence < min_precedence:
                return left
            self.index += 1
            # Left associativity: the right operand binds only tighter operators
            right = self._binary(precedence + 1)
            left = _apply(op, left, right)

    def _unary(self) -> float:
        token = self._peek()
        if token is None:
            raise MalformedExpression(
                "Expression ends where an operand was expected",
                position=len(self.source),
            )
        if token in ("+", "-"):
            self.index += 1
            operand = self._unary()
            return -operand if token == "-" else operand
        if is_operator(token):
            raise MalformedExpression(
                f"Operator {token!r} at position {self._position()} has no left operand",
                position=self._position(),
            )
        self.index += 1
        return float(token)


def parse_expression(expression: str) -> float:
    """Evaluate an infix expression with IEEE-754 semantics.

    ``*`` and ``/`` bind tighter than ``+`` and ``-``; operators of equal
    precedence associate to the left. The result may be infinite or NaN.

    Raises:
        MalformedExpression: if the expression is not well formed
    """
    return _Parser(tokenize(expression), expression).parse()


def evaluate_expression(expression: str) -> float:
    """Evaluate ``expression`` and require a finite result.

    Raises:
        MalformedExpression: if the expression is not well formed
        NonFiniteResult: if the result is infinite or NaN
    """
    result = parse_expression(expression)
    if not math.isfinite(result):
        raise NonFiniteResult(result)
    return result
