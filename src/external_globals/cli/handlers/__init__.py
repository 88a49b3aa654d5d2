from .convert import handle_convert
from .inspect import build_rows, handle_inspect

__all__ = ["build_rows", "handle_convert", "handle_inspect"]
