"""Markup (template / HTML) scanner."""

import re
from typing import List, Set, Tuple

from ..core.regions import DocumentKind
from .base import BaseScanner, Candidate, TextKind

# Text between the end of one tag and the start of the next
TEXT_NODE = re.compile(r'>([^<>]*)<')

# Blocks whose inner text is not markup text
OPAQUE_BLOCKS = re.compile(
    r'<!--[\s\S]*?-->'
    r'|<script\b[^>]*>[\s\S]*?</script\s*>'
    r'|<style\b[^>]*>[\s\S]*?</style\s*>',
    re.IGNORECASE
)

EXPRESSION_DELIMITERS = ('{', '}')

# Attribute values that are already bound or translated
BOUND_VALUE_PREFIXES = ('{{', '{', '$t(', 't(')


class MarkupScanner(BaseScanner):
    """
    Finds free text between tags and values of allow-listed attributes.

    Text nodes that contain an interpolation delimiter are skipped as a whole.
    Attributes only match as plain attributes: ``:title``, ``v-bind:title``
    and ``data-title`` are not ``title``.
    """

    syntax = DocumentKind.MARKUP

    def scan(self, content: str) -> List[Candidate]:
        seen: Set[str] = set()
        opaque = self._opaque_ranges(content)
        candidates = self._scan_text_nodes(content, opaque, seen)
        candidates.extend(self._scan_attributes(content, opaque, seen))
        return candidates

    @staticmethod
    def _opaque_ranges(content: str) -> List[Tuple[int, int]]:
        return [(m.start(), m.end()) for m in OPAQUE_BLOCKS.finditer(content)]

    @staticmethod
    def _inside(offset: int, ranges: List[Tuple[int, int]]) -> bool:
        return any(start <= offset < end for start, end in ranges)

    def _scan_text_nodes(
        self,
        content: str,
        opaque: List[Tuple[int, int]],
        seen: Set[str],
    ) -> List[Candidate]:
        candidates = []

        for match in TEXT_NODE.finditer(content):
            raw = match.group(1)
            if any(delimiter in raw for delimiter in EXPRESSION_DELIMITERS):
                continue

            text = raw.strip()
            start = match.start(1) + (len(raw) - len(raw.lstrip()))
            if self._inside(start, opaque):
                continue
            if not self.accept(text, seen):
                continue

            end = start + len(text)
            candidates.append(Candidate(
                text=text,
                start=start,
                end=end,
                kind=TextKind.PLAIN_MARKUP_TEXT,
                token_start=start,
                token_end=end,
            ))

        return candidates

    def _scan_attributes(
        self,
        content: str,
        opaque: List[Tuple[int, int]],
        seen: Set[str],
    ) -> List[Candidate]:
        candidates = []

        for name in self.attribute_names:
            pattern = re.compile(
                r'(?<![\w:@.\-])' + re.escape(name) + r'\s*=\s*(["\'])(.*?)\1',
                re.DOTALL
            )
            for match in pattern.finditer(content):
                raw = match.group(2)
                if raw.lstrip().startswith(BOUND_VALUE_PREFIXES):
                    continue
                if self._inside(match.start(), opaque):
                    continue

                text = raw.strip()
                if not self.accept(text, seen):
                    continue

                start = match.start(2) + (len(raw) - len(raw.lstrip()))
                candidates.append(Candidate(
                    text=text,
                    start=start,
                    end=start + len(text),
                    kind=TextKind.MARKUP_ATTRIBUTE_VALUE,
                    token_start=match.start(),
                    token_end=match.end(),
                    attribute_name=name,
                    quote=match.group(1),
                ))

        return candidates
