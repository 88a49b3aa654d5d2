"""
Include/Exclude File Filters.

`create_filter` builds the predicate the plugin uses to decide which module
ids are rewritten. Patterns are path globs matched against the whole id with
forward slashes:

  - ``*`` and ``?`` never cross a ``/``.
  - ``**/`` matches zero or more directories, a trailing ``**`` matches anything.
  - ``[abc]`` / ``[!abc]`` are character classes.

Relative patterns also match below any directory, so ``src/**/*.js`` accepts
``src/app.js``, ``/project/src/app.js`` and ``/project/src/ui/button.js``.

Exclusion wins over inclusion; a missing include list accepts every id.
"""

import re
from typing import Callable, List, Optional, Pattern, Sequence, Union

PatternInput = Optional[Union[str, Sequence[str]]]

_GLOB_TOKEN = re.compile(r"\*\*/|\*\*|\*|\?|\[[^\]/]+\]")
_ABSOLUTE = re.compile(r"^(?:/|[A-Za-z]:/)")
_ANY_DIRS = "(?:.*/)?"


def _as_list(patterns: PatternInput) -> List[str]:
  if patterns is None:
    return []
  if isinstance(patterns, str):
    return [patterns]
  return list(patterns)


def _char_class(token: str) -> str:
  body = token[1:-1].replace("\\", "\\\\")
  if body.startswith("!"):
    body = "^" + body[1:] + "/"
  return f"[{body}]"


def glob_to_regex(pattern: str) -> str:
  """
  Translates a path glob into a regular expression for `re.fullmatch`.

  Args:
      pattern (str): e.g. ``src/**/*.js``.

  Returns:
      str: e.g. ``(?:.*/)?src/(?:.*/)?[^/]*\\.js``.
  """
  pattern = pattern.replace("\\", "/")
  if pattern.startswith("./"):
    pattern = pattern[2:]

  parts: List[str] = [] if _ABSOLUTE.match(pattern) else [_ANY_DIRS]
  position = 0
  for match in _GLOB_TOKEN.finditer(pattern):
    parts.append(re.escape(pattern[position : match.start()]))
    token = match.group()
    if token == "**/":
      parts.append(_ANY_DIRS)
    elif token == "**":
      parts.append(".*")
    elif token == "*":
      parts.append("[^/]*")
    elif token == "?":
      parts.append("[^/]")
    else:
      parts.append(_char_class(token))
    position = match.end()
  parts.append(re.escape(pattern[position:]))
  return "".join(parts)


def _compile(patterns: PatternInput) -> List[Pattern[str]]:
  return [re.compile(glob_to_regex(pattern)) for pattern in _as_list(patterns)]


def create_filter(include: PatternInput = None, exclude: PatternInput = None) -> Callable[[str], bool]:
  """
  Builds an id predicate from glob patterns.

  Args:
      include: Pattern or patterns an id must match. None accepts everything.
      exclude: Pattern or patterns that reject an id.

  Returns:
      Callable[[str], bool]: True if the id should be processed.
  """
  included = _compile(include)
  excluded = _compile(exclude)
  include_all = not _as_list(include)

  def accepts(file_id: str) -> bool:
    normalized = file_id.replace("\\", "/")
    if any(regex.fullmatch(normalized) for regex in excluded):
      return False
    return include_all or any(regex.fullmatch(normalized) for regex in included)

  return accepts
