"""Keypadcalc package: a single-display calculator engine with keypad dispatch and CLI."""

__all__ = [
    "config",
    "parser",
    "engine",
    "keys",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "press_keys",
    "run_commands",
    "CalculatorEngine",
]
