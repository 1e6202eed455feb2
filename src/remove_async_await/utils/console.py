"""
Console and Logging.

All user-facing output goes through one rich `Console`:

- CLI status lines, written with the standard `logging` module through a
  `RichHandler` (`log_info`, `log_success`, `log_warning`, `log_error`),
- debug dumps of the fold stages (`print_stage`),
- the batch report table of the ``convert`` command.

The console writes to stderr; stdout is left to generated code, so
``remove-async-await fold x.py > out.py`` captures only source.

Modules import the `console` proxy rather than a concrete Console, so the
destination can be replaced with `set_console` (tests use a recording console)
without re-importing anything.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards attribute access to the active rich Console.

  Swapping the backend also moves the root logger's RichHandler to it, so
  `logging` output and direct prints always land in the same place.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._attach_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._attach_logging()

  def reset(self) -> None:
    """Returns to a fresh stderr console."""
    self.set_backend(Console(theme=_THEME, stderr=True))

  def _attach_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if isinstance(h, RichHandler)]:
      root_logger.removeHandler(handler)

    root_logger.addHandler(
      RichHandler(
        console=self._backend,
        show_time=False,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
      )
    )
    root_logger.setLevel(logging.INFO)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Routes all output to ``new_console``.

  Args:
      new_console (Console): e.g. ``Console(record=True)`` to capture output.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def get_console() -> Console:
  return console.backend


def print_stage(label: str, text: str) -> None:
  """
  Prints one debug stage (input, parsed tree, output) as raw text.

  Markup and highlighting are disabled so source code and node reprs containing
  brackets are printed verbatim.

  Args:
      label (str): Stage name, printed before a colon.
      text (str): Stage content.
  """
  console.print()
  console.print(f"{label}: {text}", markup=False, highlight=False, soft_wrap=True)


def _log(level: int, icon: str, msg: str) -> None:
  logging.log(level, f"{icon} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message. Rich markup such as ``[path]...[/path]`` is allowed.
  """
  _log(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  _log(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  _log(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  _log(logging.ERROR, "❌", msg)
