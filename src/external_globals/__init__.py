"""
external-globals Package.

Rewrites ECMAScript modules so that imports of configured modules become
direct accesses to global variables that the host page already provides.

Usage
-----

Simple String Rewrite
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import external_globals as eg
    code = 'import R from "react"; console.log(R.version);'
    print(eg.rewrite_source(code, {"react": ["Vendor", "React"]}))
    #  console.log(window.Vendor.React.version);

Build Host Integration
^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from external_globals import ExternalGlobalsPlugin

    plugin = ExternalGlobalsPlugin({"react": ["Vendor", "React"]}, const_bindings=True)
    result = plugin.transform(code, "src/app.js")
    if result is not None:
      print(result.code, result.map.to_json())
"""

from typing import Callable, Optional

from external_globals.config import RuntimeConfig
from external_globals.core.engine import RewriteEngine
from external_globals.core.normalizer import GlobalsConfig, normalize_globals
from external_globals.core.transform_result import TransformResult
from external_globals.exceptions import (
  ConfigError,
  EditConflictError,
  ExternalGlobalsError,
  ModuleParseError,
  UnsupportedExportError,
)
from external_globals.plugin import ExternalGlobalsPlugin

__version__ = "0.1.0"


def rewrite_source(
  code: str,
  globals: GlobalsConfig,
  dynamic_wrapper: Optional[Callable[[str], str]] = None,
  const_bindings: bool = False,
) -> str:
  """
  Rewrites a module source string.

  This is a high-level convenience wrapper around the `RewriteEngine`. For
  bundler integration use `ExternalGlobalsPlugin`.

  Args:
      code (str): The module source.
      globals (GlobalsConfig): Module name -> global path or path segments.
      dynamic_wrapper (Callable, optional): Global path -> ``import()`` replacement.
      const_bindings (bool): Declare synthetic temps with ``const``.

  Returns:
      str: The rewritten source (the input itself when nothing applied).

  Raises:
      ConfigError: If `globals` is invalid.
      ModuleParseError: If the code mentions a globalized module but does not parse.
      UnsupportedExportError: On ``export * from`` a globalized module.
  """
  config = RuntimeConfig(globals=dict(globals), const_bindings=const_bindings)
  engine = RewriteEngine(config, dynamic_wrapper=dynamic_wrapper)
  return engine.run(code).code


__all__ = [
  "ConfigError",
  "EditConflictError",
  "ExternalGlobalsError",
  "ExternalGlobalsPlugin",
  "ModuleParseError",
  "RewriteEngine",
  "RuntimeConfig",
  "TransformResult",
  "UnsupportedExportError",
  "normalize_globals",
  "rewrite_source",
  "__version__",
]
