#!/usr/bin/env python3
"""
Console script entry point for the ai-tagger CLI.
"""

import sys

from loguru import logger

from .main import main

# conventional exit status for SIGINT
INTERRUPTED_EXIT_CODE = 130


def console_main(argv=None):
    """Run the CLI; Ctrl-C during a batch or prompt exits without a traceback."""
    try:
        code = main(argv)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⛔ Interrupted.")
        code = INTERRUPTED_EXIT_CODE
    sys.exit(code)


if __name__ == '__main__':
    console_main()
