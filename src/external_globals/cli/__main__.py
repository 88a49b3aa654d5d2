"""
Main Entry Point for external-globals CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `external_globals.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from external_globals import __version__
from external_globals.cli import commands
from external_globals.config import parse_cli_globals
from external_globals.exceptions import ConfigError
from external_globals.utils.console import configure_logging, log_error


def _add_globals_argument(parser: argparse.ArgumentParser) -> None:
  parser.add_argument(
    "--global",
    dest="globals",
    action="append",
    default=[],
    metavar="MODULE=PATH",
    help="Globalize a module: 'react=window.React' or 'react=[Vendor,React]' (repeatable, overrides toml)",
  )


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="external-globals: Rewrite ES module imports into global accesses")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Rewrite a module file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input module file or directory")
  _add_globals_argument(cmd_conv)
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--const-bindings",
    action="store_true",
    default=None,
    help="Declare synthetic re-export bindings with 'const' (Overrides config)",
  )
  cmd_conv.add_argument("--include", nargs="+", default=None, help="Glob patterns of files to process")
  cmd_conv.add_argument("--exclude", nargs="+", default=None, help="Glob patterns of files to skip")
  cmd_conv.add_argument(
    "--dynamic-wrapper",
    default=None,
    help="Replacement template for import(), e.g. 'Promise.resolve({path})'",
  )
  cmd_conv.add_argument("--source-map", action="store_true", help="Write a .map file next to each output file")
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (phases, edits) to a JSON file."
  )

  # --- Command: INSPECT ---
  cmd_insp = subparsers.add_parser("inspect", help="Show the normalized globals mapping")
  _add_globals_argument(cmd_insp)
  cmd_insp.add_argument("--path", type=Path, default=None, help="Directory to search for pyproject.toml")
  cmd_insp.add_argument("--json", action="store_true", help="Print the mapping as JSON")

  args = parser.parse_args(argv)
  configure_logging(args.verbose)

  try:
    globals_override = parse_cli_globals(args.globals)
  except ConfigError as e:
    log_error(escape(str(e)))
    return 1

  if args.command == "convert":
    return commands.handle_convert(
      args.path,
      args.out,
      globals_override,
      const_bindings=args.const_bindings,
      include=args.include,
      exclude=args.exclude,
      dynamic_wrapper=args.dynamic_wrapper,
      source_map=args.source_map,
      json_trace_path=args.json_trace,
    )

  elif args.command == "inspect":
    return commands.handle_inspect(globals_override, search_path=args.path, as_json=args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
