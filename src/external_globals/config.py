"""
Runtime Configuration Store.

Settings are read from the ``[tool.external_globals]`` table of the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments:

.. code-block:: toml

    [tool.external_globals]
    const_bindings = true
    include = ["src/**/*.js"]
    dynamic_wrapper = "Promise.resolve({path})"

    [tool.external_globals.globals]
    react = ["Vendor", "React"]
    jquery = "window.jQuery"
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from external_globals.core.rewriter import DynamicWrapper, default_dynamic_wrapper
from external_globals.exceptions import ConfigError

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

PATH_PLACEHOLDER = "{path}"

Patterns = Optional[Union[str, List[str]]]


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  # Values stay loosely typed; the normalizer owns their validation and error messages.
  globals: Dict[str, Any] = Field(default_factory=dict, description="Module name -> global path or path segments.")
  include: Patterns = Field(None, description="Glob pattern(s) of files to process. None means every file.")
  exclude: Patterns = Field(None, description="Glob pattern(s) of files to skip.")
  const_bindings: bool = Field(False, description="Declare synthetic re-export bindings with 'const' instead of 'var'.")
  dynamic_wrapper: Optional[str] = Field(
    None, description="Replacement template for dynamic imports; '{path}' is substituted with the global path."
  )

  def make_dynamic_wrapper(self) -> DynamicWrapper:
    """
    Builds the dynamic import wrapper described by `dynamic_wrapper`.

    Returns:
        DynamicWrapper: The default ``Promise.resolve(<path>)`` wrapper when no template is set.

    Raises:
        ConfigError: If the template does not contain the ``{path}`` placeholder.
    """
    template = self.dynamic_wrapper
    if template is None:
      return default_dynamic_wrapper
    if PATH_PLACEHOLDER not in template:
      raise ConfigError(f"dynamic_wrapper template must contain '{PATH_PLACEHOLDER}', got '{template}'")
    return lambda global_path: template.replace(PATH_PLACEHOLDER, global_path)

  @classmethod
  def load(
    cls,
    globals_override: Optional[Dict[str, Any]] = None,
    include: Patterns = None,
    exclude: Patterns = None,
    const_bindings: Optional[bool] = None,
    dynamic_wrapper: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        globals_override (Optional[Dict]): Globals merged over the TOML table, key by key.
        include (Patterns): Override for include patterns.
        exclude (Patterns): Override for exclude patterns.
        const_bindings (Optional[bool]): Override for the temp binding keyword.
        dynamic_wrapper (Optional[str]): Override for the dynamic import template.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    # 1. Globals
    final_globals = {**toml_config.get("globals", {}), **(globals_override or {})}

    # 2. Filters
    final_include = include if include is not None else toml_config.get("include")
    final_exclude = exclude if exclude is not None else toml_config.get("exclude")

    # 3. Temp bindings
    if const_bindings is not None:
      final_const = const_bindings
    else:
      final_const = toml_config.get("const_bindings", False)

    # 4. Dynamic import wrapper
    final_wrapper = dynamic_wrapper or toml_config.get("dynamic_wrapper")

    return cls(
      globals=final_globals,
      include=final_include,
      exclude=final_exclude,
      const_bindings=final_const,
      dynamic_wrapper=final_wrapper,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.

  Raises:
      ConfigError: If the nearest pyproject.toml is not valid TOML.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

      tool_section = data.get("tool", {})
      return tool_section.get("external_globals", {}), parent

  return {}, None


def parse_cli_globals(items: Optional[List[str]]) -> Dict[str, Union[str, List[str]]]:
  """
  Parses '--global' CLI items into a globals mapping.

  ``name=path`` yields a string value; ``name=[a,b]`` yields the segment list
  ``["a", "b"]`` (empty brackets yield an empty list, which the normalizer rejects).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Union[str, List[str]]]: Parsed mapping.

  Raises:
      ConfigError: If an item has no '=' or an empty module name.
  """
  if not items:
    return {}

  config: Dict[str, Union[str, List[str]]] = {}
  for item in items:
    if "=" not in item:
      raise ConfigError(f"Invalid global '{item}'. Expected 'module=path' or 'module=[seg,seg]'.")

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()
    if not key:
      raise ConfigError(f"Invalid global '{item}': missing module name.")

    if val_str.startswith("[") and val_str.endswith("]"):
      inner = val_str[1:-1].strip()
      config[key] = [seg.strip() for seg in inner.split(",")] if inner else []
    else:
      config[key] = val_str

  return config
