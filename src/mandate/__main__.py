"""
Run the MANDATE command-line tools.

Usage:
    python -m mandate simulate --seed 7
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
