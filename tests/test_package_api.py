"""
Tests for the top-level convenience API.
"""

import pytest

import external_globals as eg


def test_rewrite_source():
  code = 'import R from "react"; console.log(R.version);'
  assert eg.rewrite_source(code, {"react": ["Vendor", "React"]}) == " console.log(window.Vendor.React.version);"


def test_rewrite_source_untouched():
  code = "export const a = 1;"
  assert eg.rewrite_source(code, {"react": "React"}) == code


def test_rewrite_source_const_bindings():
  output = eg.rewrite_source('export { a } from "g";', {"g": "G"}, const_bindings=True)
  assert output.startswith("const _global_G_a")


def test_rewrite_source_invalid_config():
  with pytest.raises(eg.ConfigError):
    eg.rewrite_source("", {"g": []})


def test_errors_share_base_class():
  for error in (eg.ConfigError, eg.ModuleParseError, eg.UnsupportedExportError, eg.EditConflictError):
    assert issubclass(error, eg.ExternalGlobalsError)


def test_normalize_globals_exported():
  assert eg.normalize_globals({"a": ["B", "C"], "d": "e.f"}) == {"a": "window.B.C", "d": "e.f"}
