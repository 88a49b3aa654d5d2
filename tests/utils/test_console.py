"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Singleton Proxy correctness.
2. Injection capabilities (`set_console`).
3. Standard logging wrappers and the root handler they rely on.
"""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from external_globals.utils.console import (
  configure_logging,
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


def _capture() -> Console:
  capture_console = Console(record=True, file=io.StringIO(), width=120)
  set_console(capture_console)
  return capture_console


def test_console_singleton_proxy():
  assert callable(console.print)
  assert hasattr(console, "export_text")
  assert isinstance(console.backend, Console)


def test_custom_console_injection():
  """
  Logs emitted after injection land in the injected console.
  """
  capture_console = _capture()
  configure_logging()

  log_info("Captured Log")
  log_success("Done")

  output = capture_console.export_text()
  assert "Captured Log" in output
  assert "ℹ️" in output
  assert "✅ Done" in output


def test_handler_follows_backend_swap():
  configure_logging()
  capture_console = _capture()

  log_warning("after swap")
  assert "after swap" in capture_console.export_text()


def test_single_rich_handler():
  configure_logging()
  configure_logging(verbose=True)
  handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
  assert len(handlers) == 1
  assert logging.getLogger().level == logging.DEBUG


def test_quiet_mode_hides_debug():
  capture_console = _capture()
  configure_logging(verbose=False)

  logging.getLogger("external_globals.test").debug("hidden detail")
  log_error("visible")

  output = capture_console.export_text()
  assert "hidden detail" not in output
  assert "❌ visible" in output


def test_reset_functionality():
  temp = Console()
  set_console(temp)
  assert console.backend is temp

  reset_console()
  assert console.backend is not temp
  assert isinstance(console.backend, Console)


def test_proxy_getattr_delegation():
  # 'width' is a property of Rich Console, not defined on _ConsoleProxy
  assert isinstance(console.width, int)
  assert console.width > 0


def test_injected_console_gets_package_styles():
  capture_console = _capture()
  console.print("[module]react[/module] -> [global]window.Vendor.React[/global] in [path]app.js[/path]")
  assert "react -> window.Vendor.React in app.js" in capture_console.export_text()
