"""
Error hierarchy for external-globals-chain.

All failures raised by the library derive from `ExternalGlobalsError` so that
hosts can treat a file as unprocessable with a single ``except`` clause.
"""


class ExternalGlobalsError(Exception):
  """Base class for every error raised by the rewriter and its collaborators."""


class ConfigError(ExternalGlobalsError, ValueError):
  """
  Raised when the globals configuration or plugin options are invalid.

  Detected eagerly, before any syntax tree is touched.
  """


class UnsupportedExportError(ExternalGlobalsError):
  """
  Raised for ``export * from "mod"`` when ``mod`` is globalized.

  The properties of a global value cannot be enumerated statically, so the
  whole module is rejected rather than partially rewritten.
  """

  def __init__(self, module_name: str):
    super().__init__(f"Cannot export all properties from an external variable ('{module_name}')")
    self.module_name = module_name


class EditConflictError(ExternalGlobalsError):
  """Raised when pending text edits overlap or fall outside the original text."""


class ModuleParseError(ExternalGlobalsError):
  """Raised when module source text cannot be parsed into a syntax tree."""
