"""CLI: python -m elparser <command> ..."""

import sys

from elparser.cli import main

if __name__ == "__main__":
    sys.exit(main())
