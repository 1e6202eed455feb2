"""
Entry point for module execution (``python -m remove_async_await``).

This module delegates execution to the CLI handler in ``remove_async_await.cli.__main__``.
"""

import sys
from remove_async_await.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
