"""Main entry point for kbchat."""

import sys

from kbchat.cli import main

if __name__ == "__main__":
    sys.exit(main())
