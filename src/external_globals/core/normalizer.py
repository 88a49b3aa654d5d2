"""
Globals Configuration Normalizer.

Maps the user-facing globals configuration, where each module name points
either at a global path expression or at an ordered list of path segments,
onto a flat ``module name -> global path`` table:

.. code-block:: python

    normalize_globals({"react": ["ralWindows", "React"], "jquery": "window.jQuery"})
    # {"react": "window.ralWindows.React", "jquery": "window.jQuery"}

Segment lists are joined with ``.`` under the `GLOBAL_ROOT` token. Strings pass
through untouched; they are assumed to already be complete expressions.
"""

from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from external_globals.exceptions import ConfigError

GLOBAL_ROOT = "window"

ExternalValue = Union[str, Sequence[str]]
GlobalsConfig = Mapping[str, ExternalValue]
NameLookup = Callable[[str], Optional[str]]


def normalize_globals(config: Optional[GlobalsConfig]) -> Dict[str, str]:
  """
  Normalizes a globals configuration into module name -> global path.

  Args:
      config: Mapping of module name to a path string or a list of segments.

  Returns:
      Dict[str, str]: The flattened mapping, in input order.

  Raises:
      ConfigError: If `config` is missing, a segment list is empty, a segment is
          not a string, or a value is neither a string nor a list.
  """
  if config is None:
    raise ConfigError("Missing mandatory option 'globals'")

  result: Dict[str, str] = {}
  for module_name, value in config.items():
    if isinstance(value, str):
      result[module_name] = value
      continue

    if not isinstance(value, (list, tuple)):
      raise ConfigError(f'External value for "{module_name}" must be a string or an array of strings')

    if len(value) == 0:
      raise ConfigError(f'External value array for "{module_name}" cannot be empty')

    if not all(isinstance(item, str) for item in value):
      raise ConfigError(f'All array elements for "{module_name}" must be strings')

    result[module_name] = f"{GLOBAL_ROOT}.{'.'.join(value)}"

  return result


class GlobalNameLookup:
  """
  Callable view over a normalized globals table.

  Instances are passed to the rewriter as its ``get_name`` lookup.
  """

  def __init__(self, table: Mapping[str, str]):
    self.table: Dict[str, str] = dict(table)

  def __call__(self, module_name: str) -> Optional[str]:
    return self.table.get(module_name)

  @property
  def module_names(self) -> List[str]:
    return list(self.table)

  def mentioned_in(self, code: str) -> bool:
    """
    Cheap containment pre-check: does `code` mention any globalized module name?

    A False result guarantees the rewriter would leave the text unchanged.
    """
    return any(name in code for name in self.table)


def create_name_lookup(config: Optional[GlobalsConfig]) -> GlobalNameLookup:
  """
  Normalizes `config` once and returns a lookup over the result.

  Args:
      config: The raw globals configuration.

  Returns:
      GlobalNameLookup: ``get_name(module) -> global path or None``.
  """
  return GlobalNameLookup(normalize_globals(config))
