#!/usr/bin/env python3
"""
Tally - a chat-style assistant that keeps track of your tasks

Three kinds of tasks are supported: plain to-dos, deadlines and events.
The list is saved to a text file after every change.

Usage:
    python tally.py                       - Start chatting
    python tally.py chat                  - Same as above
    python tally.py send todo buy milk    - Run a single command
    python tally.py --data-file my.txt    - Use another task file
"""

import sys
from config import Config
from core.cli_interface import cli


def main():
    """Main entry point"""
    try:
        Config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)

    try:
        cli()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        sys.exit(0)


if __name__ == '__main__':
    main()
