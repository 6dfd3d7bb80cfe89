"""
Module execution entry point.

Allows running with: python -m autotrace_cli
"""

import sys
from autotrace_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
