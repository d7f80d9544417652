"""Neumann package: lexer, token classifier, shunting-yard engine and decimal arithmetic."""

__all__ = [
    "config",
    "registry",
    "lexer",
    "tokens",
    "engine",
    "arithmetic",
    "evaluator",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "evaluate_expression",
    "validate_expression",
    "tokenize_expression",
]
