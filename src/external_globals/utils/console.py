"""
Console Output and Logging Setup.

Library modules only log through ``logging.getLogger(__name__)``. The CLI calls
`configure_logging` once, which routes the root logger into a ``rich``
console. `console` is a stable proxy to that console; tests and embedding
hosts redirect all output with `set_console` (e.g. to a ``record=True``
console) without re-importing anything.

The ``log_*`` helpers add an icon and allow rich markup such as
``[path]src/app.js[/path]``.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO and WARNING: a file was rewritten, a batch finished
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "module": "cyan",
    "global": "bold magenta",
  }
)

_ICONS = {
  logging.INFO: "ℹ️ ",
  SUCCESS_LEVEL_NUM: "✅",
  logging.WARNING: "⚠️ ",
  logging.ERROR: "❌",
}


def _new_console() -> Console:
  return Console(theme=_THEME)


class _ConsoleProxy:
  """
  Stable handle on the active `rich.console.Console`.

  Attribute access falls through to the backend, so ``console.print`` and
  ``console.width`` behave like the real console. The proxy also owns the
  root `RichHandler` it installed and re-points it when the backend changes.
  """

  def __init__(self) -> None:
    self._backend = _new_console()
    self._handler: Optional[RichHandler] = None
    self._level: Optional[int] = None

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """Swaps the backend, giving it the package styles (``path``, ``module``, ...)."""
    new_console.push_theme(_THEME)
    self._backend = new_console
    if self._level is not None:
      self.configure_logging(self._level)

  def reset(self) -> None:
    """Switches back to a fresh stdout console."""
    self.set_backend(Console())

  def configure_logging(self, level: int) -> None:
    """
    Installs (or replaces) the root handler writing to the current backend.

    Args:
        level (int): Root logger level.
    """
    root = logging.getLogger()
    if self._handler is not None:
      root.removeHandler(self._handler)

    self._handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    root.addHandler(self._handler)
    root.setLevel(level)
    self._level = level

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects all console and log output to `new_console`.

  Args:
      new_console (Console): e.g. ``Console(record=True, file=io.StringIO())``.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def configure_logging(verbose: bool = False) -> None:
  """
  Enables console logging for CLI runs.

  Args:
      verbose (bool): Also emit DEBUG records (skipped files, edit counts).
  """
  console.configure_logging(logging.DEBUG if verbose else logging.INFO)


def _emit(level: int, msg: str) -> None:
  logging.log(level, f"{_ICONS[level]} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): Message text; may contain rich markup.
  """
  _emit(logging.INFO, msg)


def log_success(msg: str) -> None:
  _emit(SUCCESS_LEVEL_NUM, msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, msg)


def log_error(msg: str) -> None:
  _emit(logging.ERROR, msg)
