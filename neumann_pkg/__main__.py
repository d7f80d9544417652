"""Main entry point for running neumann_pkg as a module.

This allows running Neumann with:
    python -m neumann_pkg
    python -m neumann_pkg --health-check
    python -m neumann_pkg -e "2+2"

This is equivalent to running:
    python -m neumann_pkg.cli
    python neumann.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
