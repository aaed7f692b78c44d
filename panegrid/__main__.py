"""
Main entry point for running panegrid as a module.

Usage:
    python -m panegrid < commands.jsonl
"""

from .console import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
