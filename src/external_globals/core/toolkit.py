"""
Process-wide Walk Toolkit.

The rewriter needs three helper routines for every module: the child-key
table, scope attachment and reference classification. They are assembled and
checked once per process by `load_walk_toolkit`. Concurrent first callers
block on the same lock and all receive the single instance.
"""

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from external_globals.core.estree import VISITOR_KEYS, Node
from external_globals.core.references import is_reference
from external_globals.core.scopes import AttachedScopes, attach_scopes
from external_globals.enums import NodeKind


@dataclass(frozen=True)
class WalkToolkit:
  """Immutable bundle of the tree-walking helpers."""

  visitor_keys: Mapping[NodeKind, Tuple[str, ...]]
  attach_scopes: Callable[[Node], AttachedScopes]
  is_reference: Callable[[Node, Optional[Node]], bool]


_TOOLKIT: Optional[WalkToolkit] = None
_TOOLKIT_LOCK = threading.Lock()


def _build_toolkit() -> WalkToolkit:
  missing = [kind.value for kind in NodeKind if kind not in VISITOR_KEYS]
  if missing:
    raise RuntimeError(f"Visitor keys missing for node kinds: {missing}")

  return WalkToolkit(
    visitor_keys=MappingProxyType(dict(VISITOR_KEYS)),
    attach_scopes=attach_scopes,
    is_reference=is_reference,
  )


def load_walk_toolkit() -> WalkToolkit:
  """
  Returns the shared toolkit, building it on first use.

  Returns:
      WalkToolkit: The process-wide instance.

  Raises:
      RuntimeError: If the node-kind table is not exhaustive.
  """
  global _TOOLKIT
  if _TOOLKIT is None:
    with _TOOLKIT_LOCK:
      if _TOOLKIT is None:
        _TOOLKIT = _build_toolkit()
  return _TOOLKIT
