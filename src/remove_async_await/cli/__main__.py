"""
Main Entry Point for the remove-async-await CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `remove_async_await.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from remove_async_await.cli import commands
from remove_async_await import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="remove-async-await: Generate blocking code from async declarations")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: FOLD ---
  cmd_fold = subparsers.add_parser("fold", help="Fold a single function or method declaration")
  cmd_fold.add_argument("path", type=Path, help="Input file holding one declaration ('-' for stdin)")
  cmd_fold.add_argument("--out", type=Path, help="Output file (default: stdout)")
  cmd_fold.add_argument(
    "--string",
    action="store_true",
    help="Use literal substitution instead of the tree fold. Corrupts identifiers containing 'async '/'await '",
  )
  cmd_fold.add_argument(
    "--debug",
    action="store_true",
    default=None,
    help="Dump the input, parsed tree and output (Overrides config)",
  )

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Fold every declaration of a module file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--debug",
    action="store_true",
    default=None,
    help="Dump the input and output of each module (Overrides config)",
  )

  args = parser.parse_args(argv)

  if args.command == "fold":
    return commands.handle_fold(args.path, args.out, args.string, args.debug)

  elif args.command == "convert":
    return commands.handle_convert(args.path, args.out, args.debug)

  return 0


if __name__ == "__main__":
  sys.exit(main())
