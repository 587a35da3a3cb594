"""Base scanner interface and the span types scanners produce."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from ..core.positions import Position
from ..core.regions import DocumentKind, RegionKind


class TextKind(str, Enum):
    """What kind of literal text a span holds."""
    PLAIN_MARKUP_TEXT = 'plain_markup_text'
    MARKUP_ATTRIBUTE_VALUE = 'markup_attribute_value'
    SCRIPT_STRING_LITERAL = 'script_string_literal'


@dataclass
class Candidate:
    """
    A literal text candidate found by a scanner, in region-local offsets.

    ``start``/``end`` address ``text`` exactly. ``token_start``/``token_end``
    address the whole source token a localized call would replace: the
    attribute (``name="value"``) for attribute values, the quoted literal for
    script strings and the text itself for markup text.
    """
    text: str
    start: int
    end: int
    kind: TextKind
    token_start: int
    token_end: int
    attribute_name: Optional[str] = None
    quote: Optional[str] = None


@dataclass
class TextSpan:
    """A located run of hardcoded text in a parent document."""
    id: int
    text: str
    start: Position
    end: Position
    kind: TextKind
    start_offset: int
    end_offset: int
    token_start_offset: int
    token_end_offset: int
    attribute_name: Optional[str] = None
    quote: Optional[str] = None
    region_kind: RegionKind = RegionKind.WHOLE

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset

    def intersects(self, start: Position, end: Position) -> bool:
        """True when the span touches the closed range [start, end]."""
        return not (self.end < start or end < self.start)

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'text': self.text,
            'kind': self.kind.value,
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'region': self.region_kind.value,
        }
        if self.attribute_name:
            data['attribute_name'] = self.attribute_name
        return data


RESERVED_LITERALS = frozenset({'true', 'false', 'null', 'undefined'})

_DIGITS_ONLY = re.compile(r'^\d+$')


def is_rejected_text(text: str) -> bool:
    """
    Filters shared by every scanner.

    Rejects text that is at most one character once trimmed, whitespace only,
    digits only, or a reserved literal (true, false, null, undefined).
    """
    trimmed = text.strip()
    if len(trimmed) <= 1:
        return True
    if _DIGITS_ONLY.match(trimmed):
        return True
    return trimmed in RESERVED_LITERALS


class BaseScanner(ABC):
    """
    Scanner for one region syntax.

    ``scan`` is called once per region and starts with an empty set of seen
    texts: a text value is reported only at its first occurrence in a region.
    """

    syntax: DocumentKind = DocumentKind.GENERIC

    def __init__(self, attribute_names: Optional[List[str]] = None):
        self.attribute_names: List[str] = list(attribute_names or [])

    @abstractmethod
    def scan(self, content: str) -> List[Candidate]:
        """
        Find hardcoded text candidates in region content.

        Args:
            content: Region text

        Returns:
            Candidates in region-local offsets, first occurrences only
        """
        pass

    @staticmethod
    def accept(text: str, seen: Set[str]) -> bool:
        """Apply the shared filters and per-scan de-duplication."""
        if is_rejected_text(text) or text in seen:
            return False
        seen.add(text)
        return True


@dataclass
class StringLiteral:
    """A quoted string token found by a script tokenizer."""
    quote: str
    start: int  # offset of the opening quote
    end: int  # offset after the closing quote
    value: str
    has_interpolation: bool = False
