from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config
from .api import evaluate
from .logging_config import get_logger, setup_logging
from .registry import CLOSE_BRACKETS, CONSTANTS, FUNCTIONS, OPEN_BRACKETS, OPERATORS

logger = get_logger("cli")

EXIT_COMMANDS = {"quit", "exit"}


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Neumann health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Basic arithmetic", "1+2*1*2/2", "3"),
        ("Variadic functions", "avg(2, 4)", "3"),
        ("Transcendental functions", "round(sin(pi/2))", "1"),
    ]
    for label, expression, expected in checks:
        try:
            result = evaluate(expression)
            if result.ok and result.result == expected:
                print(f"[OK] {label} works")
                checks_passed += 1
            else:
                print(f"[FAIL] {label}: expected {expected}, got {result}")
                checks_failed += 1
        except Exception as e:
            print(f"[FAIL] {label} check failed: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    print(res.get("result"))


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""Neumann version {config.VERSION}

Expressions:
  2+3*4, (2+3)*4, 2^3^2, -3+4, 10 % 4
  sqrt(abs(-9)), max(1, 5, 3), avg(2, 4), log(e)

Operators:  {"  ".join(OPERATORS)}   (unary minus: leading '-' or '!')
Functions:  {", ".join(FUNCTIONS)}
Constants:  {", ".join(CONSTANTS)}
Brackets:   {"  ".join(o + c for o, c in zip(OPEN_BRACKETS, CLOSE_BRACKETS))}

Precision: {config.PRECISION} significant digits (set with --precision or NEUMANN_PRECISION)

Commands: help, quit, exit"""
    print(help_text)


def repl_loop(output_format: str = "human", precision: int | None = None) -> None:
    """Interactive REPL loop."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("Neumann: type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        command = raw.lower()
        if command in EXIT_COMMANDS:
            print("Goodbye.")
            break
        if command == "help":
            print_help_text()
            continue
        print_result_pretty(evaluate(raw, precision).to_dict(), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Neumann CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="neumann")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set working precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--max-input-length",
        type=int,
        help=f"Set maximum expression length (default: {config.MAX_INPUT_LENGTH})",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.max_input_length and args.max_input_length > 0:
        config.MAX_INPUT_LENGTH = int(args.max_input_length)

    if args.version:
        print(config.VERSION)
        return 0
    if args.health_check:
        return _health_check()

    if args.eval_expr is not None:
        logger.debug("Evaluating %r from the command line", args.eval_expr)
        result = evaluate(args.eval_expr, args.precision)
        print_result_pretty(result.to_dict(), args.format)
        return 0 if result.ok else 1

    repl_loop(output_format=args.format, precision=args.precision)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
