"""Span replacement without disturbing surrounding text."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..scanners.base import TextSpan
from .errors import OverlappingEditError
from .positions import Position, PositionIndex


@dataclass(frozen=True)
class Edit:
    """Replace ``text[start:end]`` with ``replacement``."""
    start: int
    end: int
    replacement: str
    span_id: Optional[int] = None

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid edit range [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @classmethod
    def replace_text(cls, span: TextSpan, replacement: str) -> 'Edit':
        """Edit replacing exactly the span's text."""
        return cls(span.start_offset, span.end_offset, replacement, span.id)

    @classmethod
    def replace_token(cls, span: TextSpan, replacement: str) -> 'Edit':
        """Edit replacing the whole token around the span (quotes, attribute name)."""
        return cls(span.token_start_offset, span.token_end_offset, replacement, span.id)

    @classmethod
    def from_positions(
        cls,
        text: str,
        start: Position,
        end: Position,
        replacement: str,
    ) -> 'Edit':
        """Edit addressed by line/column positions in text."""
        index = PositionIndex(text)
        return cls(index.position_to_offset(start), index.position_to_offset(end), replacement)


def check_overlaps(edits: Iterable[Edit]) -> None:
    """
    Raise OverlappingEditError if two edits overlap.

    Adjacent edits (one ends where the next starts) are fine. Two edits with
    the same range, including two insertions at one offset, count as
    overlapping because their order would be undefined.
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    for previous, current in zip(ordered, ordered[1:]):
        same_range = (previous.start, previous.end) == (current.start, current.end)
        if same_range or previous.end > current.start:
            raise OverlappingEditError(
                f"Edits [{previous.start}, {previous.end}) and "
                f"[{current.start}, {current.end}) overlap"
            )


def rewrite(text: str, edits: Iterable[Edit]) -> str:
    """
    Apply edits to text.

    Edits are applied from the highest start offset down, so offsets of the
    edits still pending are never shifted by the ones already applied.

    Raises:
        OverlappingEditError: If any two edits overlap
        ValueError: If an edit reaches past the end of text
    """
    edits = list(edits)
    if not edits:
        return text

    check_overlaps(edits)
    for edit in edits:
        if edit.end > len(text):
            raise ValueError(f"Edit [{edit.start}, {edit.end}) past end of text ({len(text)})")

    result = text
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        result = result[:edit.start] + edit.replacement + result[edit.end:]
    return result


def edits_for_spans(
    spans: Iterable[TextSpan],
    replacements: Dict[int, str],
    whole_token: bool = True,
) -> List[Edit]:
    """
    Build edits for spans correlated by span id.

    Args:
        spans: Spans from one scan
        replacements: span id -> replacement text; spans without an entry are left alone
        whole_token: Replace the span's whole token instead of its text only

    Raises:
        KeyError: If a replacement refers to an id that is not among the spans
    """
    by_id = {span.id: span for span in spans}
    unknown = set(replacements) - set(by_id)
    if unknown:
        raise KeyError(f"Unknown span ids: {sorted(unknown)}")

    make = Edit.replace_token if whole_token else Edit.replace_text
    return [make(by_id[span_id], replacement) for span_id, replacement in replacements.items()]
