"""
Main entry point for running swallow as a module.

Usage:
    python -m swallow LAYOUT_FILE DIRECTION [DIRECTION ...] [--aggressive]
"""

from .swallow_controller import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
