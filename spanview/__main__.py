"""
spanview.__main__ - Entry point for running spanview as a module.

Usage:
    python -m spanview <trace_path> <resource_pattern> [options]
"""

import sys

from spanview.cli import main

if __name__ == "__main__":
    sys.exit(main())
