"""Unit tests for the calculator engine state machine."""

import pytest

from keypadcalc_pkg.engine import CalculatorEngine


def _engine_after(*commands):
    """Build an engine and run commands given as method names or (name, arg)."""
    engine = CalculatorEngine()
    for command in commands:
        if isinstance(command, tuple):
            getattr(engine, command[0])(command[1])
        elif command in "0123456789":
            engine.append_digit(command)
        elif command in "+-*/":
            engine.append_operator(command)
        else:
            getattr(engine, command)()
    return engine


class TestInitialState:
    def test_fresh_engine_shows_zero(self):
        engine = CalculatorEngine()
        assert engine.get_display() == "0"
        assert engine.display == "0"
        assert engine.result_shown is False

    def test_reset(self):
        engine = _engine_after("1", "2", "+", "3", "evaluate")
        engine.reset()
        assert engine.get_display() == "0"
        assert engine.result_shown is False

    def test_instances_are_independent(self):
        first = _engine_after("7")
        second = CalculatorEngine()
        assert first.get_display() == "7"
        assert second.get_display() == "0"

    def test_repr(self):
        assert "display='0'" in repr(CalculatorEngine())


class TestAppendDigit:
    @pytest.mark.parametrize("digit", list("0123456789"))
    def test_digit_on_fresh_engine(self, digit):
        assert _engine_after(digit).get_display() == digit

    def test_digits_accumulate(self):
        assert _engine_after("1", "2", "3").get_display() == "123"

    def test_zero_does_not_lead(self):
        assert _engine_after("0", "0", "5").get_display() == "5"

    def test_digit_after_result_starts_new_expression(self):
        engine = _engine_after("5", "+", "3", "evaluate")
        engine.append_digit("2")
        assert engine.get_display() == "2"
        assert engine.result_shown is False

    def test_digit_after_error_starts_new_expression(self):
        engine = _engine_after("1", "/", "0", "evaluate")
        engine.append_digit("7")
        assert engine.get_display() == "7"

    @pytest.mark.parametrize("bad", ["", "12", "a", "+", "."])
    def test_rejects_non_digits(self, bad):
        with pytest.raises(ValueError):
            CalculatorEngine().append_digit(bad)


class TestAppendOperator:
    def test_operator_appends(self):
        assert _engine_after("5", "+").get_display() == "5+"

    def test_operator_on_zero(self):
        assert _engine_after("*").get_display() == "0*"

    @pytest.mark.parametrize("op", ["+", "*", "/"])
    def test_repeated_operator_is_idempotent(self, op):
        once = _engine_after("5", op).get_display()
        twice = _engine_after("5", op, op).get_display()
        assert once == twice == f"5{op}"

    def test_repeated_minus_is_idempotent(self):
        assert _engine_after("5", "-", "-").get_display() == "5-"

    def test_operator_replaces_trailing_operator(self):
        assert _engine_after("5", "+", "*").get_display() == "5*"

    def test_minus_after_operator_is_kept_as_sign(self):
        engine = _engine_after("5", "*", "-")
        assert engine.get_display() == "5*-"

    def test_operator_replaces_unary_minus(self):
        assert _engine_after("5", "*", "-", "+").get_display() == "5*+"
        assert _engine_after("5", "*", "-", "-").get_display() == "5*-"

    def test_operator_continues_from_result(self):
        engine = _engine_after("5", "+", "3", "evaluate")
        engine.append_operator("*")
        assert engine.get_display() == "8*"
        assert engine.result_shown is False
        engine.append_digit("2")
        engine.evaluate()
        assert engine.get_display() == "16"

    def test_operator_after_error_extends_it(self):
        engine = _engine_after("1", "/", "0", "evaluate")
        engine.append_operator("+")
        assert engine.get_display() == "Error+"
        engine.append_digit("1")
        engine.evaluate()
        assert engine.get_display() == "Error"

    def test_rejects_unknown_operator(self):
        with pytest.raises(ValueError):
            CalculatorEngine().append_operator("^")


class TestAppendDecimal:
    def test_decimal_on_fresh_engine(self):
        assert _engine_after("append_decimal").get_display() == "0."

    def test_second_decimal_is_noop(self):
        engine = _engine_after("1", "append_decimal")
        before = engine.get_display()
        engine.append_decimal()
        assert engine.get_display() == before == "1."

    def test_decimal_guard_after_fraction_digits(self):
        engine = _engine_after("1", "append_decimal", "5", "append_decimal")
        assert engine.get_display() == "1.5"

    def test_decimal_after_operator_starts_zero_point(self):
        assert _engine_after("5", "+", "append_decimal").get_display() == "5+0."

    def test_decimal_in_second_operand(self):
        engine = _engine_after("1", "append_decimal", "5", "+", "2", "append_decimal")
        assert engine.get_display() == "1.5+2."

    def test_decimal_after_result_starts_new_number(self):
        engine = _engine_after("5", "+", "3", "evaluate")
        engine.append_decimal()
        assert engine.get_display() == "0."
        assert engine.result_shown is False

    def test_decimal_after_fractional_result_is_noop(self):
        engine = _engine_after("1", "/", "4", "evaluate")
        engine.append_decimal()
        assert engine.get_display() == "0.25"
        assert engine.result_shown is True

    def test_decimal_after_error_starts_new_number(self):
        engine = _engine_after("1", "/", "0", "evaluate")
        engine.append_decimal()
        assert engine.get_display() == "0."
        assert engine.result_shown is False

    def test_zero_point_then_digit(self):
        assert _engine_after("append_decimal", "5").get_display() == "0.5"


class TestToggleSign:
    def test_zero_is_noop(self):
        assert _engine_after("toggle_sign").get_display() == "0"

    def test_minus_after_zero_does_not_leave_leading_zero(self):
        engine = _engine_after("-", "5", "toggle_sign")
        assert engine.get_display() == "5"
        engine.append_digit("3")
        assert engine.get_display() == "53"

    def test_fraction_after_zero_minus(self):
        engine = _engine_after("-", "append_decimal", "5", "toggle_sign")
        assert engine.get_display() == "0.5"

    def test_negates_single_number(self):
        assert _engine_after("5", "toggle_sign").get_display() == "-5"

    def test_double_toggle_restores(self):
        assert _engine_after("5", "toggle_sign", "toggle_sign").get_display() == "5"

    def test_negates_trailing_operand(self):
        assert _engine_after("5", "+", "3", "toggle_sign").get_display() == "5+-3"

    def test_removes_unary_minus(self):
        assert _engine_after("5", "*", "-", "3", "toggle_sign").get_display() == "5*3"

    def test_binary_minus_is_read_as_sign(self):
        assert _engine_after("5", "-", "3", "toggle_sign").get_display() == "53"

    def test_decimal_operand(self):
        engine = _engine_after("2", "append_decimal", "5", "toggle_sign")
        assert engine.get_display() == "-2.5"

    def test_trailing_point_is_dropped(self):
        assert _engine_after("5", "append_decimal", "toggle_sign").get_display() == "-5"

    def test_without_trailing_number_negates_leading_value(self):
        assert _engine_after("5", "+", "toggle_sign").get_display() == "-5"

    def test_noop_on_error(self):
        engine = _engine_after("1", "/", "0", "evaluate")
        engine.toggle_sign()
        assert engine.get_display() == "Error"

    def test_keeps_result_shown(self):
        engine = _engine_after("5", "+", "3", "evaluate", "toggle_sign")
        assert engine.get_display() == "-8"
        assert engine.result_shown is True


class TestPercent:
    def test_fifty_percent(self):
        assert _engine_after("5", "0", "percent").get_display() == "0.5"

    def test_percent_of_trailing_operand(self):
        assert _engine_after("2", "0", "0", "+", "5", "percent").get_display() == "200+0.05"

    def test_percent_of_zero(self):
        assert _engine_after("percent").get_display() == "0"

    def test_noop_after_operator(self):
        assert _engine_after("5", "+", "percent").get_display() == "5+"

    def test_noop_on_error(self):
        engine = _engine_after("1", "/", "0", "evaluate", "percent")
        assert engine.get_display() == "Error"

    def test_percent_then_evaluate(self):
        engine = _engine_after("2", "0", "0", "*", "5", "percent", "evaluate")
        assert engine.get_display() == "10"


class TestDeleteLast:
    def test_removes_last_character(self):
        assert _engine_after("1", "2", "+", "delete_last").get_display() == "12"

    def test_single_character_resets(self):
        engine = _engine_after("7", "delete_last")
        assert engine.get_display() == "0"
        assert engine.result_shown is False

    def test_repeated_delete_terminates_at_zero(self):
        engine = _engine_after("1", "2", "+", "3", "append_decimal", "4")
        for _ in range(20):
            engine.delete_last()
            assert engine.get_display() != ""
        assert engine.get_display() == "0"

    def test_delete_returns_result_to_editing(self):
        engine = _engine_after("1", "2", "+", "4", "evaluate")
        engine.delete_last()
        assert engine.get_display() == "1"
        assert engine.result_shown is False
        engine.append_digit("5")
        assert engine.get_display() == "15"


class TestEvaluate:
    def test_addition(self):
        engine = _engine_after("5", "+", "3", "evaluate")
        assert engine.get_display() == "8"
        assert engine.result_shown is True

    def test_trailing_operator_is_ignored(self):
        assert _engine_after("4", "+", "evaluate").get_display() == "4"

    def test_trailing_unary_minus_is_ignored(self):
        assert _engine_after("4", "*", "-", "evaluate").get_display() == "4"

    def test_division_by_zero_is_error(self):
        engine = _engine_after("1", "/", "0", "evaluate")
        assert engine.get_display() == "Error"
        assert engine.result_shown is True

    def test_negative_infinity_is_error(self):
        assert _engine_after("0", "-", "1", "/", "0", "evaluate").get_display() == "Error"

    def test_zero_over_zero_is_error(self):
        assert _engine_after("0", "/", "0", "evaluate").get_display() == "Error"

    def test_precedence(self):
        assert _engine_after("2", "+", "3", "*", "4", "evaluate").get_display() == "14"

    def test_left_associativity(self):
        assert _engine_after("8", "-", "3", "-", "2", "evaluate").get_display() == "3"
        assert _engine_after("8", "/", "4", "/", "2", "evaluate").get_display() == "1"

    def test_fractional_result(self):
        assert _engine_after("7", "/", "2", "evaluate").get_display() == "3.5"

    def test_float_rounding_is_shown(self):
        engine = _engine_after(
            "append_decimal", "1", "+", "append_decimal", "2", "evaluate"
        )
        assert engine.get_display() == "0.30000000000000004"

    def test_negative_operand(self):
        assert _engine_after("5", "*", "-", "3", "evaluate").get_display() == "-15"

    def test_evaluate_result_again(self):
        engine = _engine_after("5", "+", "3", "evaluate", "evaluate")
        assert engine.get_display() == "8"

    def test_large_result_uses_exponent(self):
        engine = CalculatorEngine()
        for digit in "10000000000000000":
            engine.append_digit(digit)
        engine.append_operator("*")
        engine.append_digit("1")
        engine.evaluate()
        assert engine.get_display() == "1e+16"
        engine.append_operator("+")
        engine.append_digit("2")
        engine.evaluate()
        assert engine.get_display() == "1.0000000000000002e+16"

    def test_only_operators_left_shows_zero_without_result_flag(self):
        engine = _engine_after("5", "toggle_sign", "delete_last")
        assert engine.get_display() == "-"
        engine.evaluate()
        assert engine.get_display() == "0"
        assert engine.result_shown is False

    def test_malformed_buffer_shows_error(self):
        engine = _engine_after("1", "/", "0", "evaluate", "delete_last", "5")
        assert engine.get_display() == "Erro5"
        engine.evaluate()
        assert engine.get_display() == "Error"
