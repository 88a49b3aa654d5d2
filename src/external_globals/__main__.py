"""
Entry point for module execution (``python -m external_globals``).

This module delegates execution to the CLI handler in ``external_globals.cli.__main__``.
"""

import sys
from external_globals.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
