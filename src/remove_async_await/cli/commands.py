"""
CLI Command Handlers Facade.

Re-exports the handlers from `remove_async_await.cli.handlers` so the dispatcher
(and test patches) target a single module.
"""

from remove_async_await.cli.handlers.fold import handle_fold
from remove_async_await.cli.handlers.convert import (
  handle_convert,
  _convert_single_file,
  _print_batch_summary,
)

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
  "handle_fold",
]
