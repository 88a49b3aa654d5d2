"""
Tests for the CLI 'convert' command.

Verifies:
1. Argument dispatch from `main` to the handler.
2. Single file conversion to stdout and to a file (with source map and trace).
3. Directory conversion with include/exclude filtering.
4. Failure exit codes for bad configuration and unsupported modules.
"""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from external_globals.cli.__main__ import main
from external_globals.utils.console import set_console

APP = 'import React from "react";\nReact.render();\n'
EXPECTED = "\nwindow.Vendor.React.render();\n"
REACT_FLAG = ["--global", "react=[Vendor,React]"]


@pytest.fixture
def log_console():
  capture_console = Console(record=True, file=io.StringIO(), width=200)
  set_console(capture_console)
  return capture_console


@pytest.fixture
def app_file(tmp_path):
  path = tmp_path / "app.js"
  path.write_text(APP, encoding="utf-8")
  return path


def test_dispatch_arguments(tmp_path):
  with patch("external_globals.cli.commands.handle_convert", return_value=0) as mock_convert:
    exit_code = main(
      [
        "convert",
        str(tmp_path / "in.js"),
        "--global",
        "react=[Vendor,React]",
        "--global",
        "jquery=window.jQuery",
        "--out",
        str(tmp_path / "out.js"),
        "--const-bindings",
        "--exclude",
        "*.min.js",
        "--source-map",
      ]
    )

  assert exit_code == 0
  args, kwargs = mock_convert.call_args
  assert args[0] == tmp_path / "in.js"
  assert args[1] == tmp_path / "out.js"
  assert args[2] == {"react": ["Vendor", "React"], "jquery": "window.jQuery"}
  assert kwargs["const_bindings"] is True
  assert kwargs["include"] is None
  assert kwargs["exclude"] == ["*.min.js"]
  assert kwargs["dynamic_wrapper"] is None
  assert kwargs["source_map"] is True
  assert kwargs["json_trace_path"] is None


def test_const_bindings_defaults_to_config(tmp_path):
  with patch("external_globals.cli.commands.handle_convert", return_value=0) as mock_convert:
    main(["convert", str(tmp_path)])
  assert mock_convert.call_args.kwargs["const_bindings"] is None


def test_malformed_global_flag(tmp_path, log_console):
  with patch("external_globals.cli.commands.handle_convert") as mock_convert:
    exit_code = main(["convert", str(tmp_path), "--global", "react"])

  assert exit_code == 1
  mock_convert.assert_not_called()
  assert "Invalid global" in log_console.export_text()


def test_convert_to_stdout(app_file, capsys, log_console):
  exit_code = main(["convert", str(app_file), *REACT_FLAG])

  assert exit_code == 0
  assert capsys.readouterr().out == EXPECTED + "\n"


def test_convert_to_file_with_map_and_trace(app_file, tmp_path, log_console):
  out_file = tmp_path / "dist" / "app.js"
  trace_file = tmp_path / "trace.json"

  exit_code = main(
    ["convert", str(app_file), *REACT_FLAG, "--out", str(out_file), "--source-map", "--json-trace", str(trace_file)]
  )

  assert exit_code == 0
  assert out_file.read_text(encoding="utf-8") == f"{EXPECTED}\n//# sourceMappingURL=app.js.map\n"

  source_map = json.loads((tmp_path / "dist" / "app.js.map").read_text(encoding="utf-8"))
  assert source_map["version"] == 3
  assert source_map["file"] == "app.js"
  assert source_map["sources"] == ["app.js"]
  assert source_map["sourcesContent"] == [APP]

  events = json.loads(trace_file.read_text(encoding="utf-8"))
  assert events[0]["label"] == "Rewrite Pipeline"
  assert "Rewrote" in log_console.export_text()


def test_globals_from_pyproject(app_file, tmp_path, capsys, log_console):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.external_globals.globals]\nreact = "window.R"\n',
    encoding="utf-8",
  )
  assert main(["convert", str(app_file)]) == 0
  assert capsys.readouterr().out == "\nwindow.R.render();\n\n"


def test_directory_conversion(tmp_path, log_console):
  src = tmp_path / "src"
  (src / "nested").mkdir(parents=True)
  (src / "vendor").mkdir()
  (src / "app.js").write_text(APP, encoding="utf-8")
  (src / "nested" / "util.mjs").write_text("export const one = 1;\n", encoding="utf-8")
  (src / "vendor" / "lib.js").write_text(APP, encoding="utf-8")
  (src / "notes.txt").write_text(APP, encoding="utf-8")
  out = tmp_path / "out"

  exit_code = main(["convert", str(src), *REACT_FLAG, "--out", str(out), "--exclude", "vendor/*", "--json-trace", "x"])

  assert exit_code == 0
  assert (out / "app.js").read_text(encoding="utf-8") == EXPECTED
  assert (out / "nested" / "util.mjs").read_text(encoding="utf-8") == "export const one = 1;\n"
  assert (out / "app.trace.json").exists()
  assert not (out / "vendor").exists()
  assert not (out / "notes.txt").exists()
  assert "Batch Complete: 1/2 files rewritten" in log_console.export_text()


def test_directory_requires_out(tmp_path, log_console):
  assert main(["convert", str(tmp_path), *REACT_FLAG]) == 1
  assert "requires --out" in log_console.export_text()


def test_directory_reports_failures(tmp_path, log_console):
  src = tmp_path / "src"
  src.mkdir()
  (src / "ok.js").write_text(APP, encoding="utf-8")
  (src / "star.js").write_text('export * from "react";\n', encoding="utf-8")

  exit_code = main(["convert", str(src), *REACT_FLAG, "--out", str(tmp_path / "out")])

  assert exit_code == 1
  output = log_console.export_text()
  assert "Cannot export all properties" in output
  assert "star.js" in output
  assert "1 Passed, 1 Failed" in output


def test_missing_input(tmp_path, log_console):
  assert main(["convert", str(tmp_path / "missing.js"), *REACT_FLAG]) == 1
  assert "Input not found" in log_console.export_text()


def test_invalid_globals_value(app_file, log_console):
  assert main(["convert", str(app_file), "--global", "react=[]"]) == 1
  assert "Invalid configuration" in log_console.export_text()


def test_invalid_wrapper_template(app_file, log_console):
  assert main(["convert", str(app_file), *REACT_FLAG, "--dynamic-wrapper", "load()"]) == 1
  assert "{path}" in log_console.export_text()


def test_parse_error_is_reported(tmp_path, log_console):
  broken = tmp_path / "broken.js"
  broken.write_text('import R from "react"; const = ;', encoding="utf-8")
  assert main(["convert", str(broken), *REACT_FLAG]) == 1
  assert "Failed to convert" in log_console.export_text()


def test_paths_are_path_objects(tmp_path):
  with patch("external_globals.cli.commands.handle_convert", return_value=0) as mock_convert:
    main(["convert", "rel/app.js", "--json-trace", "t.json"])
  assert isinstance(mock_convert.call_args.args[0], Path)
  assert mock_convert.call_args.kwargs["json_trace_path"] == Path("t.json")
