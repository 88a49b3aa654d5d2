"""
Build Host Adapter.

`ExternalGlobalsPlugin` exposes the rewrite engine through the hook shape used
by Rollup-style bundlers:

.. code-block:: python

    plugin = ExternalGlobalsPlugin({"react": ["Vendor", "React"]}, include="src/**/*.js")
    plugin.resolve_id("react")               # False: keep the import external
    result = plugin.transform(code, "/project/src/app.js")
    if result is not None:
      write(result.code, result.map.to_json())

The host marks globalized modules external via `resolve_id` and sends every
module through `transform`, which returns None whenever the text is left as is.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from external_globals.config import Patterns, RuntimeConfig
from external_globals.core.engine import RewriteEngine
from external_globals.core.normalizer import GlobalsConfig
from external_globals.core.transform_result import TransformResult
from external_globals.exceptions import ConfigError, ModuleParseError
from external_globals.utils.filters import create_filter

logger = logging.getLogger(__name__)

PLUGIN_NAME = "external-globals-chain"
RESOLVER_NAME = f"{PLUGIN_NAME}--resolver"
VIRTUAL_PREFIX = "\0"


def is_virtual_module(file_id: str) -> bool:
  """Ids generated by other plugins start with a NUL byte and are never real files."""
  return file_id.startswith(VIRTUAL_PREFIX)


class ExternalGlobalsPlugin:
  """
  Rewrites imports of configured modules into accesses of global variables.

  Attributes:
      name (str): Plugin name reported to the host.
      engine (RewriteEngine): Per-configuration engine shared by all files.
  """

  name = PLUGIN_NAME

  def __init__(
    self,
    globals: Optional[GlobalsConfig],
    include: Patterns = None,
    exclude: Patterns = None,
    dynamic_wrapper: Optional[Callable[[str], str]] = None,
    const_bindings: bool = False,
  ):
    """
    Validates the options and normalizes the globals mapping.

    Args:
        globals: Module name -> global path string or list of path segments.
        include: Glob pattern(s) of module ids to process.
        exclude: Glob pattern(s) of module ids to skip.
        dynamic_wrapper: Global path -> expression replacing ``import("mod")``.
        const_bindings: Declare re-export temps with ``const`` instead of ``var``.

    Raises:
        ConfigError: If `globals` is missing or invalid, or `dynamic_wrapper` is not callable.
    """
    if globals is None:
      raise ConfigError("Missing mandatory option 'globals'")
    if dynamic_wrapper is not None and not callable(dynamic_wrapper):
      raise ConfigError(f"Unexpected type of 'dynamic_wrapper', got '{type(dynamic_wrapper).__name__}'")

    self.config = RuntimeConfig(
      globals=dict(globals),
      include=include,
      exclude=exclude,
      const_bindings=const_bindings,
    )
    self.engine = RewriteEngine(self.config, dynamic_wrapper=dynamic_wrapper)
    self._filter = create_filter(include, exclude)

  @classmethod
  def from_config(cls, config: RuntimeConfig) -> "ExternalGlobalsPlugin":
    """Builds a plugin from a loaded `RuntimeConfig` (template wrapper included)."""
    return cls(
      config.globals,
      include=config.include,
      exclude=config.exclude,
      dynamic_wrapper=config.make_dynamic_wrapper(),
      const_bindings=config.const_bindings,
    )

  def options(self, raw_options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Registers the resolver ahead of every other plugin of the host.

    Args:
        raw_options: The host's input options; ``plugins`` may be a list, a single plugin, or absent.

    Returns:
        Dict[str, Any]: A copy of the options with the resolver prepended.
    """
    plugins = raw_options.get("plugins")
    if isinstance(plugins, list):
      plugin_list: List[Any] = list(plugins)
    elif plugins:
      plugin_list = [plugins]
    else:
      plugin_list = []

    plugin_list.insert(0, {"name": RESOLVER_NAME, "resolve_id": self.resolve_id})
    return {**raw_options, "plugins": plugin_list}

  def resolve_id(self, importee: str, importer: Optional[str] = None, is_entry: bool = False) -> Optional[bool]:
    """
    Marks globalized modules external.

    Args:
        importee: The imported module specifier.
        importer: The importing module id (unused).
        is_entry: True when the host resolves an entry point.

    Returns:
        Optional[bool]: False for globalized modules, None to defer to other resolvers.
    """
    if is_virtual_module(importee) or is_entry:
      return None
    return False if self.engine.get_name(importee) else None

  def transform(self, code: str, file_id: str) -> Optional[TransformResult]:
    """
    Rewrites one module.

    Args:
        code: The module source.
        file_id: The module id (path) used for filtering and the source map.

    Returns:
        Optional[TransformResult]: None when the module is filtered out, mentions no
        globalized module, cannot be parsed, or is left unchanged.

    Raises:
        UnsupportedExportError: On ``export * from`` a globalized module.
    """
    if not is_virtual_module(file_id) and not self._filter(file_id):
      return None

    if not self.engine.should_process(code):
      return None

    try:
      result = self.engine.run(code, file_id=file_id)
    except ModuleParseError as e:
      logger.debug("Failed to parse code, skip %s: %s", file_id, e)
      return None

    return result if result.edited else None
