#!/usr/bin/env python3
"""
Entry point for running tickers_generator as a module.

This allows the package to be executed with:
    python -m tickers_generator --output ./tickers.html
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
