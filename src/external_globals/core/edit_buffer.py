"""
Edit Buffer for Text-Splice Rewriting.

`EditBuffer` records pending edits over an immutable original text and only
materialises them on flush (`to_string` / `generate_map`). Every offset refers
to the original text, never to a partially edited result, so edits issued by
independent passes compose without shifting each other.

Ordering rules at a single offset:
  1. insertions anchored LEFT (``append_left``), in call order;
  2. insertions anchored RIGHT (``append_right``), in call order;
  3. replacement text of a range starting there.
Insertions at the end offset of a replaced range follow its replacement text.

Flush-time validation rejects overlapping replacements, insertions strictly
inside a replaced range, and offsets outside the text.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from external_globals.core.source_map import MappingsBuilder, SourceMap
from external_globals.enums import InsertSide
from external_globals.exceptions import EditConflictError

logger = logging.getLogger(__name__)

_ORIGINAL = "original"
_EDIT = "edit"
_INSERT = "insert"


def _utf16_len(text: str) -> int:
  """Length in UTF-16 code units, the unit source map columns are counted in."""
  return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


@dataclass(frozen=True)
class Replacement:
  """Replaces ``original[start:end]`` with `content` (empty for removals)."""

  start: int
  end: int
  content: str


@dataclass(frozen=True)
class Insertion:
  """Inserts `content` at `position`, anchored to `side`."""

  position: int
  content: str
  side: InsertSide


@dataclass(frozen=True)
class _Piece:
  kind: str
  text: str
  offset: Optional[int]


class EditBuffer:
  """
  Append-only collection of range edits over an original text.
  """

  def __init__(self, original: str):
    """
    Initializes an empty buffer.

    Args:
        original: The unedited source text.
    """
    self._original = original
    self._replacements: List[Replacement] = []
    self._insertions: List[Insertion] = []

  @property
  def original(self) -> str:
    return self._original

  @property
  def replacements(self) -> Tuple[Replacement, ...]:
    return tuple(self._replacements)

  @property
  def insertions(self) -> Tuple[Insertion, ...]:
    return tuple(self._insertions)

  def has_changed(self) -> bool:
    """True if any edit has been recorded."""
    return bool(self._replacements or self._insertions)

  # --- Recording ---

  def append_left(self, position: int, content: str) -> "EditBuffer":
    """
    Inserts `content` at `position`, attached to the text that ends there.

    Args:
        position: Offset in the original text.
        content: Text to insert.

    Returns:
        EditBuffer: self, for chaining.
    """
    if content:
      self._insertions.append(Insertion(position, content, InsertSide.LEFT))
    return self

  def append_right(self, position: int, content: str) -> "EditBuffer":
    """
    Inserts `content` at `position`, attached to the text that starts there.

    Args:
        position: Offset in the original text.
        content: Text to insert.

    Returns:
        EditBuffer: self, for chaining.
    """
    if content:
      self._insertions.append(Insertion(position, content, InsertSide.RIGHT))
    return self

  def overwrite(self, start: int, end: int, content: str) -> "EditBuffer":
    """
    Replaces ``original[start:end]`` with `content`.

    Args:
        start: Range start (inclusive).
        end: Range end (exclusive).
        content: Replacement text.

    Returns:
        EditBuffer: self, for chaining.

    Raises:
        EditConflictError: If the range is empty or inverted.
    """
    if start >= end:
      raise EditConflictError(f"Cannot overwrite an empty range [{start}, {end}); insert instead")
    self._replacements.append(Replacement(start, end, content))
    return self

  def remove(self, start: int, end: int) -> "EditBuffer":
    """
    Deletes ``original[start:end]``. Empty ranges are ignored.

    Returns:
        EditBuffer: self, for chaining.
    """
    if start < end:
      self._replacements.append(Replacement(start, end, ""))
    return self

  # --- Flushing ---

  def _validate(self) -> List[Replacement]:
    """Checks bounds and overlaps; returns replacements sorted by start."""
    length = len(self._original)
    ordered = sorted(self._replacements, key=lambda r: (r.start, r.end))

    for rep in ordered:
      if rep.start < 0 or rep.end > length:
        raise EditConflictError(f"Range [{rep.start}, {rep.end}) is outside the text (length {length})")

    for prev, current in zip(ordered, ordered[1:]):
      if current.start < prev.end:
        raise EditConflictError(
          f"Overlapping edits: [{prev.start}, {prev.end}) and [{current.start}, {current.end})"
        )

    starts = [rep.start for rep in ordered]
    for ins in self._insertions:
      if ins.position < 0 or ins.position > length:
        raise EditConflictError(f"Insertion at {ins.position} is outside the text (length {length})")
      idx = bisect.bisect_left(starts, ins.position) - 1
      if idx >= 0 and ordered[idx].start < ins.position < ordered[idx].end:
        rep = ordered[idx]
        raise EditConflictError(f"Insertion at {ins.position} falls inside replaced range [{rep.start}, {rep.end})")

    return ordered

  def _pieces(self) -> List[_Piece]:
    ordered = self._validate()

    by_position: Dict[int, List[Insertion]] = {}
    for ins in self._insertions:
      by_position.setdefault(ins.position, []).append(ins)

    starting_at = {rep.start: rep for rep in ordered}
    boundaries = sorted(set(by_position) | set(starting_at) | {rep.end for rep in ordered})

    pieces: List[_Piece] = []
    cursor = 0

    def emit_insertions(position: int) -> None:
      group = by_position.get(position, [])
      for side in (InsertSide.LEFT, InsertSide.RIGHT):
        for ins in group:
          if ins.side == side:
            pieces.append(_Piece(_INSERT, ins.content, None))

    for position in boundaries:
      if position < cursor:
        continue
      if cursor < position:
        pieces.append(_Piece(_ORIGINAL, self._original[cursor:position], cursor))
      emit_insertions(position)
      cursor = position

      rep = starting_at.get(position)
      if rep is not None:
        if rep.content:
          pieces.append(_Piece(_EDIT, rep.content, rep.start))
        cursor = rep.end

    if cursor < len(self._original):
      pieces.append(_Piece(_ORIGINAL, self._original[cursor:], cursor))

    return pieces

  def to_string(self) -> str:
    """
    Materialises the edited text.

    Returns:
        str: The final text.

    Raises:
        EditConflictError: If the recorded edits are inconsistent.
    """
    return "".join(piece.text for piece in self._pieces())

  def __str__(self) -> str:
    return self.to_string()

  def generate_map(
    self,
    source: Optional[str] = None,
    file: Optional[str] = None,
    include_content: bool = True,
  ) -> SourceMap:
    """
    Builds a Source Map v3 document from the edited text back to the original.

    Unedited text gets one segment per chunk start and per generated line.
    Replacement text maps its first character to the replaced range's start;
    inserted text is unmapped.
    Columns count UTF-16 code units, so astral characters take two.

    Args:
        source: Identifier of the original file (defaults to ``""``).
        file: Name of the generated file.
        include_content: Inline the original text as ``sourcesContent``.

    Returns:
        SourceMap: The map document.
    """
    line_starts = [0]
    for idx, char in enumerate(self._original):
      if char == "\n":
        line_starts.append(idx + 1)

    def locate(offset: int) -> Tuple[int, int]:
      line = bisect.bisect_right(line_starts, offset) - 1
      return line, _utf16_len(self._original[line_starts[line] : offset])

    builder = MappingsBuilder()
    gen_column = 0

    for piece in self._pieces():
      if piece.kind == _ORIGINAL:
        line, column = locate(piece.offset)
        first = True
        for char in piece.text:
          if char == "\n":
            builder.next_line()
            line += 1
            column = 0
            gen_column = 0
            first = True
            continue
          if first:
            builder.add_segment(gen_column, 0, line, column)
            first = False
          width = _utf16_len(char)
          gen_column += width
          column += width
        continue

      if piece.kind == _EDIT:
        line, column = locate(piece.offset)
        builder.add_segment(gen_column, 0, line, column)

      for segment_idx, chunk in enumerate(piece.text.split("\n")):
        if segment_idx > 0:
          builder.next_line()
          gen_column = 0
        gen_column += _utf16_len(chunk)

    logger.debug("Generated source map with %d segments", builder.segment_count)

    return SourceMap(
      file=file,
      sources=[source or ""],
      sources_content=[self._original] if include_content else None,
      mappings=builder.encode(),
    )
