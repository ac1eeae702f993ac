"""Expression engine: the display buffer and its editing commands.

The engine owns two pieces of state: the buffer (the text on the display)
and the result-shown flag, which is set while the buffer holds the output of
the last evaluation. Every command mutates that pair in place; nothing else
is touched.
"""

from __future__ import annotations

from .config import ERROR_DISPLAY, PERCENT_DIVISOR, ZERO_DISPLAY
from .logging_config import get_logger
from .parser import (
    evaluate_expression,
    find_last_number,
    format_number,
    is_operator,
    parse_leading_number,
    strip_trailing_operators,
)
from .types import MalformedExpression, NonFiniteResult, NumberToken

logger = get_logger("engine")


class CalculatorEngine:
    """Single-display calculator state machine.

    Example:
        >>> engine = CalculatorEngine()
        >>> for d in "50":
        ...     engine.append_digit(d)
        >>> engine.percent()
        >>> engine.get_display()
        '0.5'
    """

    def __init__(self):
        self._buffer = ZERO_DISPLAY
        self._result_shown = False

    def __repr__(self) -> str:
        return (
            f"CalculatorEngine(display={self.get_display()!r}, "
            f"result_shown={self._result_shown!r})"
        )

    # Queries

    def get_display(self) -> str:
        """Return the buffer, or "0" if it is empty."""
        return self._buffer or ZERO_DISPLAY

    @property
    def display(self) -> str:
        return self.get_display()

    @property
    def result_shown(self) -> bool:
        return self._result_shown

    def _set(self, buffer: str, result_shown: bool | None = None) -> None:
        self._buffer = buffer
        if result_shown is not None:
            self._result_shown = result_shown
        logger.debug(
            "display updated",
            extra={"buffer": self._buffer, "result_shown": self._result_shown},
        )

    # Commands

    def reset(self) -> None:
        """Clear the display to "0"."""
        self._set(ZERO_DISPLAY, False)

    def append_digit(self, digit: str) -> None:
        """Type one digit.

        A lone "0" is replaced rather than extended, and a digit typed over
        a shown result starts a new expression.
        """
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Not a digit: {digit!r}")
        current = self.get_display()
        if current == ZERO_DISPLAY or self._result_shown:
            self._set(digit, False)
            return
        self._set(current + digit)

    def append_operator(self, op: str) -> None:
        """Type one of + - * /.

        Repeated operators collapse to the latest one, except that a minus
        typed after another operator is kept as the sign of the next operand.
        An operator typed over a shown result continues from that result.
        """
        if not is_operator(op):
            raise ValueError(f"Not an operator: {op!r}")
        current = self.get_display()
        last = current[-1]
        if is_operator(last):
            if op == "-" and last != "-":
                self._set(current + op, False)
            else:
                self._set(current[:-1] + op, False)
            return
        self._set(current + op, False)

    def append_decimal(self) -> None:
        """Type a decimal point into the trailing number.

        Starts a "0." operand when the buffer does not end in a number and
        does nothing if the trailing number already has a point. Over a
        shown result (including "Error") a fresh "0." is started.
        """
        current = self.get_display()
        token = find_last_number(current)
        if token is None:
            if self._result_shown:
                self._set("0.", False)
            else:
                self._set(current + "0.", False)
            return
        if token.has_decimal_point:
            return
        if self._result_shown:
            self._set("0.", False)
            return
        self._set(current + ".")

    def toggle_sign(self) -> None:
        """Negate the trailing number.

        Without a trailing number the leading value of the whole buffer is
        negated instead; "0" and buffers with no numeric value (such as
        "Error") are left alone.
        """
        current = self.get_display()
        token = find_last_number(current)
        if token is None:
            if current == ZERO_DISPLAY:
                return
            value = parse_leading_number(current)
            if value is None:
                logger.debug("toggle_sign ignored on %r", current)
                return
            self._set(format_number(-value))
            return
        self._replace_token(current, token, -float(token.value))

    def percent(self) -> None:
        """Divide the trailing number by 100."""
        current = self.get_display()
        token = find_last_number(current)
        if token is None:
            return
        self._replace_token(current, token, float(token.value) / PERCENT_DIVISOR)

    def _replace_token(self, current: str, token: NumberToken, value: float) -> None:
        # Anything after the token (a closing parenthesis) is dropped
        buffer = current[: token.start_index] + format_number(value)
        # "0-5" negated reads as "0" + "5"; the lone zero must not lead
        if len(buffer) > 1 and buffer[0] == "0" and buffer[1] in "0123456789":
            buffer = buffer[1:]
        self._set(buffer)

    def delete_last(self) -> None:
        """Remove the last character, falling back to "0".

        Editing a shown result turns it back into an expression being typed.
        """
        current = self.get_display()
        if len(current) <= 1:
            self.reset()
            return
        self._set(current[:-1], False)

    def evaluate(self) -> None:
        """Evaluate the buffer and show the result.

        Trailing operators are ignored. Malformed expressions and infinite or
        NaN results show "Error". The result-shown flag is set in every case
        except when nothing but operators was left to evaluate.
        """
        expression = strip_trailing_operators(self.get_display())
        if not expression:
            self._set(ZERO_DISPLAY)
            return
        try:
            result = evaluate_expression(expression)
        except (MalformedExpression, NonFiniteResult) as e:
            logger.debug("Evaluation failed: %s - %s", e.code, e.message)
            self._set(ERROR_DISPLAY, True)
            return
        self._set(format_number(result), True)
