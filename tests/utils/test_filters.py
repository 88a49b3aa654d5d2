"""
Tests for include/exclude id filters.
"""

import pytest

from external_globals.utils.filters import create_filter, glob_to_regex


def test_no_patterns_accepts_everything():
  accepts = create_filter()
  assert accepts("/project/src/app.js")
  assert accepts("anything")


def test_include_single_string():
  accepts = create_filter(include="src/*.js")
  assert accepts("src/app.js")
  assert accepts("/project/src/app.js")
  assert not accepts("/project/lib/app.js")
  assert not accepts("src/app.ts")


def test_single_star_stays_in_directory():
  accepts = create_filter(include="src/*.js")
  assert not accepts("src/a/b.js")
  assert not accepts("/project/src/deep/x.js")


def test_double_star_matches_zero_or_more_directories():
  accepts = create_filter(include="src/**/*.js")
  assert accepts("src/app.js")
  assert accepts("/project/src/app.js")
  assert accepts("/project/src/ui/forms/input.js")
  assert not accepts("/project/lib/app.js")


def test_include_list():
  accepts = create_filter(include=["*.mjs", "lib/*.js"])
  assert accepts("/a/b/c.mjs")
  assert accepts("lib/x.js")
  assert not accepts("src/x.js")


def test_exclude_wins_over_include():
  accepts = create_filter(include="**/*.js", exclude="**/vendor/**")
  assert accepts("/project/src/app.js")
  assert not accepts("/project/vendor/lib.js")


def test_exclude_only():
  accepts = create_filter(exclude=["node_modules/**"])
  assert not accepts("/project/node_modules/react/index.js")
  assert accepts("/project/src/index.js")


def test_absolute_pattern_is_anchored():
  accepts = create_filter(include="/project/src/*.js")
  assert accepts("/project/src/app.js")
  assert not accepts("/other/project/src/app.js")


def test_character_classes_and_question_mark():
  accepts = create_filter(include=["v?.js", "[!_]*.mjs"])
  assert accepts("/lib/v1.js")
  assert not accepts("/lib/v10.js")
  assert accepts("/lib/entry.mjs")
  assert not accepts("/lib/_private.mjs")


def test_windows_separators_normalized():
  accepts = create_filter(include="src/*.js")
  assert accepts("C:\\project\\src\\app.js")


@pytest.mark.parametrize(
  "pattern, expected",
  [
    ("*.js", r"(?:.*/)?[^/]*\.js"),
    ("./src/**/*.js", r"(?:.*/)?src/(?:.*/)?[^/]*\.js"),
    ("/abs/**", r"/abs/.*"),
  ],
)
def test_glob_to_regex(pattern, expected):
  assert glob_to_regex(pattern) == expected
