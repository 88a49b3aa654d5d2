"""
Source Map (Revision 3) Model and Mapping Encoder.

`SourceMap` is the serialisable document handed back to build hosts.
`MappingsBuilder` accumulates generated-to-original segments line by line and
encodes them with the Base64 VLQ scheme of the Source Map v3 format.
"""

import base64
import json
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

_BASE64_DIGITS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

Segment = Tuple[int, int, int, int]


def encode_vlq(value: int) -> str:
  """
  Encodes one signed integer as Base64 VLQ.

  Args:
      value (int): The number to encode.

  Returns:
      str: e.g. ``0 -> "A"``, ``-1 -> "D"``, ``16 -> "gB"``.
  """
  vlq = ((-value) << 1) | 1 if value < 0 else value << 1
  digits = []
  while True:
    digit = vlq & 0b11111
    vlq >>= 5
    if vlq:
      digit |= 0b100000
    digits.append(_BASE64_DIGITS[digit])
    if not vlq:
      return "".join(digits)


class MappingsBuilder:
  """
  Collects mapping segments grouped by generated line.

  A segment is ``(generated_column, source_index, original_line, original_column)``,
  with all values zero-based and absolute; `encode` turns them into the
  relative VLQ form.
  """

  def __init__(self) -> None:
    self._lines: List[List[Segment]] = [[]]

  def add_segment(self, generated_column: int, source_index: int, original_line: int, original_column: int) -> None:
    """Adds a segment to the current generated line."""
    self._lines[-1].append((generated_column, source_index, original_line, original_column))

  def next_line(self) -> None:
    """Starts a new generated line."""
    self._lines.append([])

  @property
  def segment_count(self) -> int:
    return sum(len(line) for line in self._lines)

  def encode(self) -> str:
    """
    Serialises the segments to a ``mappings`` string.

    Returns:
        str: Lines separated by ``;``, segments by ``,``.
    """
    prev_source = 0
    prev_line = 0
    prev_column = 0
    encoded_lines = []

    for line in self._lines:
      prev_generated = 0
      encoded_segments = []
      for generated_column, source_index, original_line, original_column in line:
        encoded_segments.append(
          encode_vlq(generated_column - prev_generated)
          + encode_vlq(source_index - prev_source)
          + encode_vlq(original_line - prev_line)
          + encode_vlq(original_column - prev_column)
        )
        prev_generated = generated_column
        prev_source = source_index
        prev_line = original_line
        prev_column = original_column
      encoded_lines.append(",".join(encoded_segments))

    return ";".join(encoded_lines)


class SourceMap(BaseModel):
  """
  A Source Map v3 document.
  """

  model_config = ConfigDict(populate_by_name=True)

  version: int = Field(3, description="Format revision, always 3.")
  file: Optional[str] = Field(None, description="Name of the generated file.")
  sources: List[str] = Field(default_factory=list, description="Original source identifiers.")
  sources_content: Optional[List[Optional[str]]] = Field(
    None, alias="sourcesContent", description="Inlined original sources, parallel to `sources`."
  )
  names: List[str] = Field(default_factory=list, description="Symbol names referenced by segments.")
  mappings: str = Field("", description="VLQ encoded segments.")

  def to_dict(self) -> dict:
    """Returns the JSON-ready dict using the standard camelCase keys."""
    return self.model_dump(by_alias=True, exclude_none=True)

  def to_json(self) -> str:
    """Serialises the map to a compact JSON string."""
    return json.dumps(self.to_dict(), separators=(",", ":"))

  def to_url(self) -> str:
    """Returns the map as a base64 ``data:`` URL suitable for an inline sourceMappingURL comment."""
    payload = base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")
    return f"data:application/json;charset=utf-8;base64,{payload}"
