"""
Convert Command Handler.

This module implements ``remove-async-await convert``, the whole-module mode.
Every function declaration and every class method of each module is folded;
other module-level statements are copied unchanged. Directories are processed
recursively and mirrored under the output directory.
"""

from pathlib import Path
from typing import Dict, Optional

from rich.table import Table

from remove_async_await.config import RuntimeConfig
from remove_async_await.core.conversion_result import ConversionResult
from remove_async_await.core.engine import FoldEngine
from remove_async_await.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_convert(input_path: Path, output_path: Optional[Path], debug: Optional[bool]) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Path where generated code should be saved.
      debug: Override for the debug trace flag.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  config = RuntimeConfig.load(
    debug=debug,
    search_path=input_path if input_path.is_dir() else input_path.parent,
  )
  engine = FoldEngine(config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine)
    batch_results[input_path.name] = result
    if not result.success:
      return 1

  else:
    if not output_path:
      log_error("Directory conversion requires --out destination directory.")
      return 1

    py_files = sorted(input_path.rglob("*.py"))
    if not py_files:
      log_warning(f"No .py files found in {input_path}")
      return 0

    log_info(f"Processing {len(py_files)} files from {input_path}...")

    for src_file in py_files:
      rel_path = src_file.relative_to(input_path)
      result = _convert_single_file(src_file, output_path / rel_path, engine)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _convert_single_file(input_path: Path, output_path: Optional[Path], engine: FoldEngine) -> ConversionResult:
  """
  Helper to fold a single module file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Printed to stdout if None.
      engine: The configured engine.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run_module(code)
  if not result.success:
    log_error(f"Failed to convert {input_path}: {'; '.join(result.errors)}")
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
    log_success(f"Converted: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success and not r.has_errors)
  failures = total - successes

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files converted.")
    return

  table = Table(title="Conversion Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.has_errors:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(filename, status, issues)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} with Issues.")
