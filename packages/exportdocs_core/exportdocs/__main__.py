"""
Entry point for running exportdocs as a module.

Usage:
    python -m exportdocs render record.json --kind vgm --output vgm.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
