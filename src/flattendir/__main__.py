"""Module entry point for running with python -m flattendir."""

import sys

from flattendir.cli import main

if __name__ == "__main__":
    sys.exit(main())
