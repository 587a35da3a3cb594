"""Stylesheet scanner."""

from typing import List

from ..core.regions import DocumentKind
from .base import BaseScanner, Candidate


class StyleScanner(BaseScanner):
    """Stylesheet text is never reported."""

    syntax = DocumentKind.STYLE

    def scan(self, content: str) -> List[Candidate]:
        return []
