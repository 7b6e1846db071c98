"""
Net Worth - Main Entry Point
============================
Run this file to start the net worth CLI.
Usage: python main.py [path/to/networth.db]

Set NETWORTH_LOG_LEVEL=DEBUG to see how each figure was resolved.
"""

import logging
import os
import sys

from rich.logging import RichHandler

from networth.cli import main as run_cli


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("NETWORTH_LOG_LEVEL", "WARNING").upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main():
    configure_logging()
    run_cli(sys.argv[1] if len(sys.argv) > 1 else None)


if __name__ == "__main__":
    main()
