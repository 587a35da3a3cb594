"""Offset <-> (line, column) conversion.

Columns are counted in UTF-16 code units so positions line up with editors
that address text that way: a character outside the Basic Multilingual Plane
(most emoji) occupies two columns. Offsets are Python string indices.
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and UTF-16 column."""
    line: int
    column: int

    def to_dict(self) -> dict:
        return {'line': self.line, 'column': self.column}


def utf16_length(text: str) -> int:
    """Number of UTF-16 code units needed to encode text."""
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


class PositionIndex:
    """
    Line-start table for one text buffer.

    Build once per buffer and reuse it for every span found in that buffer;
    conversions are then a binary search instead of a rescan.
    """

    def __init__(self, text: str):
        self.text = text
        self._line_starts: List[int] = [0]
        for i, ch in enumerate(text):
            if ch == '\n':
                self._line_starts.append(i + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_to_position(self, offset: int) -> Position:
        """
        Convert a string offset to a Position.

        Raises:
            ValueError: If offset is outside ``[0, len(text)]``
        """
        if offset < 0 or offset > len(self.text):
            raise ValueError(f"Offset {offset} outside text of length {len(self.text)}")

        line = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[line]
        column = utf16_length(self.text[line_start:offset])
        return Position(line, column)

    def position_to_offset(self, position: Position) -> int:
        """
        Convert a Position back to a string offset.

        Lines past the end clamp to the end of the text and columns past the
        end of a line clamp to the line end. A column that falls in the middle
        of a surrogate pair resolves to the offset of that character.
        """
        if position.line < 0 or position.column < 0:
            raise ValueError(f"Negative position: {position}")
        if position.line >= len(self._line_starts):
            return len(self.text)

        line_start = self._line_starts[position.line]
        if position.line + 1 < len(self._line_starts):
            line_end = self._line_starts[position.line + 1] - 1
        else:
            line_end = len(self.text)

        units = 0
        offset = line_start
        while offset < line_end:
            width = 2 if ord(self.text[offset]) > 0xFFFF else 1
            if units + width > position.column:
                break
            units += width
            offset += 1
        return offset


def offset_to_position(text: str, offset: int) -> Position:
    """One-shot conversion of an offset in text to a Position."""
    return PositionIndex(text).offset_to_position(offset)


def position_to_offset(text: str, position: Position) -> int:
    """One-shot conversion of a Position in text to an offset."""
    return PositionIndex(text).position_to_offset(position)
