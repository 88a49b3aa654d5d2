"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A one-call rewrite fixture running parser, rewriter and edit buffer.
- Console isolation so CLI tests cannot leak handlers into each other.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Tuple

import pytest

# Add src to path so we can import 'external_globals' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from external_globals.core.edit_buffer import EditBuffer  # noqa: E402
from external_globals.core.normalizer import create_name_lookup  # noqa: E402
from external_globals.core.parser import parse_module  # noqa: E402
from external_globals.core.rewriter import rewrite  # noqa: E402
from external_globals.utils.console import reset_console  # noqa: E402


class RewriteRunner:
  """
  Parses `code`, rewrites it against `globals` and returns the edited text.
  """

  def __call__(self, code: str, globals: Dict[str, Any], **kwargs: Any) -> Tuple[str, bool]:
    buffer = EditBuffer(code)
    edited = rewrite(parse_module(code), buffer, create_name_lookup(globals), **kwargs)
    return buffer.to_string(), edited

  def tree(self, tree: Dict[str, Any], code: str, globals: Dict[str, Any], **kwargs: Any) -> Tuple[str, bool]:
    """Same as calling the runner, for a hand-built tree over `code`."""
    buffer = EditBuffer(code)
    edited = rewrite(tree, buffer, create_name_lookup(globals), **kwargs)
    return buffer.to_string(), edited


@pytest.fixture
def run_rewrite() -> RewriteRunner:
  """Fixture returning ``(output, edited)`` for a module source."""
  return RewriteRunner()


def node(type_: str, start: int, end: int, **fields: Any) -> Dict[str, Any]:
  """Builds an ESTree dict for hand-made trees."""
  return {"type": type_, "start": start, "end": end, **fields}


@pytest.fixture
def make_node():
  return node


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the default console backend after each test."""
  yield
  reset_console()
