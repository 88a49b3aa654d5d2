"""
Convert Command Handler.

This module implements the logic for the `external-globals convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. File discovery and include/exclude filtering.
3. Module rewriting via the Engine.
4. Output, source map and trace writing.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from external_globals.config import Patterns, RuntimeConfig
from external_globals.core.engine import RewriteEngine
from external_globals.core.transform_result import TransformResult
from external_globals.exceptions import ExternalGlobalsError
from external_globals.utils.console import console, log_error, log_info, log_success, log_warning
from external_globals.utils.filters import create_filter

MODULE_SUFFIXES = (".js", ".mjs")


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  globals_override: Dict[str, object],
  const_bindings: Optional[bool] = None,
  include: Patterns = None,
  exclude: Patterns = None,
  dynamic_wrapper: Optional[str] = None,
  source_map: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Module file or directory of modules to rewrite.
      output_path: Destination file (or directory for directory input). Stdout if None.
      globals_override: Globals from ``--global`` flags, merged over pyproject.toml.
      const_bindings: Override for ``const`` temp bindings.
      include: Override for include patterns.
      exclude: Override for exclude patterns.
      dynamic_wrapper: Override for the dynamic import template.
      source_map: Write ``<output>.map`` next to each written file.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      globals_override=globals_override,
      include=include,
      exclude=exclude,
      const_bindings=const_bindings,
      dynamic_wrapper=dynamic_wrapper,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
    engine = RewriteEngine(config)
  except ExternalGlobalsError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  if not config.globals:
    log_warning("No globals configured; modules will be copied unchanged.")

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine, source_map, json_trace_path)
    return 0 if result is not None else 1

  if not output_path:
    log_error("Directory conversion requires --out destination directory.")
    return 1

  accepts = create_filter(config.include, config.exclude)
  modules = [
    path
    for path in sorted(input_path.rglob("*"))
    if path.is_file() and path.suffix in MODULE_SUFFIXES and accepts(path.relative_to(input_path).as_posix())
  ]
  if not modules:
    log_warning(f"No module files found in {input_path}")
    return 0

  log_info(f"Processing {len(modules)} files from {input_path}...")

  batch_results: Dict[str, Optional[TransformResult]] = {}
  for src_file in modules:
    rel_path = src_file.relative_to(input_path)
    batch_trace = (output_path / rel_path).with_suffix(".trace.json") if json_trace_path else None
    batch_results[rel_path.as_posix()] = _convert_single_file(
      src_file, output_path / rel_path, engine, source_map, batch_trace
    )

  _print_batch_summary(batch_results)
  return 0 if all(res is not None for res in batch_results.values()) else 1


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: RewriteEngine,
  source_map: bool = False,
  json_trace_path: Optional[Path] = None,
) -> Optional[TransformResult]:
  """
  Helper to execute the rewrite on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path (stdout if None).
      engine: Configured engine.
      source_map: Whether to write a ``.map`` file next to the output.
      json_trace_path: Path to save trace event logs.

  Returns:
      Optional[TransformResult]: The result, or None if the file could not be processed.
  """
  try:
    code = input_path.read_text(encoding="utf-8")
    result = engine.run(code, file_id=input_path.name)
  except (OSError, ExternalGlobalsError) as e:
    log_error(f"Failed to convert {input_path}: {e}")
    return None

  if json_trace_path and result.trace_events:
    json_trace_path.parent.mkdir(parents=True, exist_ok=True)
    json_trace_path.write_text(json.dumps(result.trace_events, indent=2), encoding="utf-8")
    log_info(f"Trace saved to [path]{json_trace_path}[/path]")

  if not output_path:
    print(result.code)
    return result

  output_path.parent.mkdir(parents=True, exist_ok=True)
  output_code = result.code
  if source_map and result.map is not None:
    map_path = output_path.with_name(f"{output_path.name}.map")
    result.map.file = output_path.name
    map_path.write_text(result.map.to_json(), encoding="utf-8")
    output_code = f"{output_code}\n//# sourceMappingURL={map_path.name}\n"
  output_path.write_text(output_code, encoding="utf-8")

  if result.edited:
    log_success(f"Rewrote: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    log_info(f"Unchanged: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  return result


def _print_batch_summary(results: Dict[str, Optional[TransformResult]]) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping relative filenames to results (None for failures).
  """
  total = len(results)
  failed: List[str] = [name for name, res in results.items() if res is None]
  edited = sum(1 for res in results.values() if res is not None and res.edited)

  if not failed:
    log_success(f"Batch Complete: {edited}/{total} files rewritten, {total - edited} unchanged.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")

  for filename in failed:
    table.add_row(filename, "❌ Failed")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - len(failed)} Passed, {len(failed)} Failed.")
