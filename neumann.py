#!/usr/bin/env python3
"""
Neumann - High-precision arithmetic expression evaluator

Main entry point for the Neumann evaluator. This file serves as a thin
wrapper that delegates all functionality to the neumann_pkg package.

Usage:
    python neumann.py                       # Interactive REPL
    python neumann.py -e "2+2"              # Evaluate expression
    python neumann.py --help                # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Neumann.

    Delegates all functionality to the neumann_pkg.cli module,
    which handles argument parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from neumann_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import neumann_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
