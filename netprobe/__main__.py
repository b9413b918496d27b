"""
Entry point for running netprobe as a module.

This allows the package to be executed with: python -m netprobe
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
