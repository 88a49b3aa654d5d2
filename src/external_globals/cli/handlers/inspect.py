"""
Inspect Command Handler.

Shows how the effective configuration resolves: every globalized module with
its normalized global path and the root identifier a local declaration would
collide with. ``--json`` prints the same rows as structured data.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from external_globals.config import RuntimeConfig
from external_globals.core.normalizer import normalize_globals
from external_globals.core.rewriter.context import global_root_of
from external_globals.exceptions import ConfigError
from external_globals.utils.console import console, log_error, log_warning


def build_rows(config: RuntimeConfig) -> List[Dict[str, str]]:
  """
  Resolves the configured globals into display rows.

  Args:
      config: The loaded configuration.

  Returns:
      List[Dict[str, str]]: ``module``, ``global_path`` and ``root`` per module.

  Raises:
      ConfigError: If the globals mapping is invalid.
  """
  table = normalize_globals(config.globals)
  return [
    {"module": module, "global_path": path, "root": global_root_of(path) or ""} for module, path in table.items()
  ]


def handle_inspect(
  globals_override: Dict[str, object],
  search_path: Optional[Path] = None,
  as_json: bool = False,
) -> int:
  """Handles 'inspect' command."""
  try:
    config = RuntimeConfig.load(globals_override=globals_override, search_path=search_path)
    rows = build_rows(config)
  except ConfigError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  if as_json:
    print(json.dumps(rows, indent=2))
    return 0

  if not rows:
    log_warning("No globals configured.")
    return 0

  table = Table(title="Globalized Modules")
  table.add_column("Module", style="module")
  table.add_column("Global Path", style="global")
  table.add_column("Root", style="dim")
  for row in rows:
    table.add_row(row["module"], row["global_path"], row["root"])

  console.print(table)
  return 0
