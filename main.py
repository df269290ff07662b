#!/usr/bin/env python3
"""
Main script to turn one recording into a week of social content.
Runs the CLI in src/one_take_studio from the project root without installing:
  python main.py transcribe talk.mp3
  python main.py serve
"""

import sys
from pathlib import Path

# Make the src layout importable when running from a checkout
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


def main():
    from one_take_studio.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
