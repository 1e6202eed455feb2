"""
Fold Command Handler.

Implements ``remove-async-await fold``: one declaration in, its synchronous
version out. The input file (or stdin, given as ``-``) must hold exactly one
function or one indented method declaration, unless ``--string`` selects the
literal strategy, which accepts any source.
"""

import sys
from pathlib import Path
from typing import Optional

from remove_async_await.config import RuntimeConfig
from remove_async_await.core.engine import FoldEngine
from remove_async_await.core.literal import LiteralSubstitutionError
from remove_async_await.enums import Strategy
from remove_async_await.utils.console import log_error, log_success

STDIN_MARKER = "-"


def handle_fold(
  input_path: Path,
  output_path: Optional[Path],
  use_string: bool,
  debug: Optional[bool],
) -> int:
  """
  Handles the 'fold' command execution.

  Args:
      input_path: Source file, or ``-`` to read stdin.
      output_path: Where to write the folded code. Printed to stdout if None.
      use_string: If True, forces the literal substitution strategy.
      debug: Override for the debug trace flag.

  Returns:
      int: Exit code (0 for success, 1 for failure or diagnostic output).
  """
  if str(input_path) == STDIN_MARKER:
    code = sys.stdin.read()
    search_path = None
  elif not input_path.is_file():
    log_error(f"Input not found: {input_path}")
    return 1
  else:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    search_path = input_path.parent

  config = RuntimeConfig.load(
    strategy=Strategy.LITERAL if use_string else None,
    debug=debug,
    search_path=search_path,
  )

  try:
    result = FoldEngine(config).run(code)
  except LiteralSubstitutionError as e:
    log_error(str(e))
    return 1

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
    if result.success:
      log_success(f"Folded: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    sys.stdout.write(result.code)

  for error in result.errors:
    log_error(error)

  return 0 if result.success else 1
