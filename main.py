#!/usr/bin/env python3
"""Animated genetic-algorithm string evolution in the terminal.

Usage:
  python main.py                        # evolve "hey" with the default parameters
  python main.py --target "hello world" --pop 120 --keep 12
  python main.py --config config/default.yaml --headless --seed 7
"""

import sys

from evolution_lab.cli import main

if __name__ == "__main__":
    sys.exit(main())
