"""Fallback scanner for files of unrecognized kinds."""

import re
from typing import List, Set

from ..core.regions import DocumentKind
from .base import BaseScanner, Candidate, TextKind

DOUBLE_QUOTED = re.compile(r'"([^"\\]*(?:\\.[^"\\]*)*)"')
SINGLE_QUOTED = re.compile(r"'([^'\\]*(?:\\.[^'\\]*)*)'")

TRANSLATION_TOKEN = '$t('


class GenericScanner(BaseScanner):
    """Reports double- then single-quoted strings that are not translation calls."""

    syntax = DocumentKind.GENERIC

    def scan(self, content: str) -> List[Candidate]:
        seen: Set[str] = set()
        candidates = []

        for pattern in (DOUBLE_QUOTED, SINGLE_QUOTED):
            for match in pattern.finditer(content):
                raw = match.group(1)
                if TRANSLATION_TOKEN in raw:
                    continue

                text = raw.strip()
                if not self.accept(text, seen):
                    continue

                start = match.start(1) + (len(raw) - len(raw.lstrip()))
                candidates.append(Candidate(
                    text=text,
                    start=start,
                    end=start + len(text),
                    kind=TextKind.SCRIPT_STRING_LITERAL,
                    token_start=match.start(),
                    token_end=match.end(),
                    quote=match.group(0)[0],
                ))

        candidates.sort(key=lambda c: c.start)
        return candidates
