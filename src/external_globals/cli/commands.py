"""
Handlers the dispatcher calls.

``__main__`` looks handlers up here at call time, so tests patch
``external_globals.cli.commands.handle_convert`` rather than the handler module.
"""

from external_globals.cli.handlers.convert import handle_convert
from external_globals.cli.handlers.inspect import build_rows, handle_inspect

__all__ = ["build_rows", "handle_convert", "handle_inspect"]
