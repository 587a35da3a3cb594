"""Hardcoded text scanning across the regions of a document."""

from pathlib import Path
from typing import List, Optional, Union

from ..scanners.base import TextSpan
from ..scanners.registry import get_scanner
from ..utils.config import Config
from ..utils.logging import get_logger
from .positions import Position, PositionIndex
from .regions import DocumentKind, classify_document, file_extension, segment

logger = get_logger('scanner')

Source = Union[str, Path, DocumentKind]


class HardcodedScanner:
    """
    Finds hardcoded text in a document.

    The document is segmented into regions, each region is scanned by the
    scanner for its syntax and the results are mapped back to positions in
    the parent document. Every span of one scan gets a sequential ``id`` so
    downstream edits can refer to it without re-matching on text.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    @property
    def attribute_names(self) -> List[str]:
        return self.config.hardcoded.attribute_names

    def is_enabled_for(self, source: Source) -> bool:
        """True when files of this kind are configured for scanning."""
        if isinstance(source, DocumentKind):
            return True
        ext = file_extension(source) if _looks_like_path(source) else str(source).lower()
        enabled = {kind.lower().lstrip('.') for kind in self.config.hardcoded.file_kinds}
        return ext in enabled

    def scan(self, text: str, source: Source) -> List[TextSpan]:
        """
        Scan a whole document.

        Args:
            text: Document text
            source: File path, bare extension (``'vue'``) or DocumentKind

        Returns:
            Spans ordered by start offset; empty when the file kind is not enabled
        """
        if not self.is_enabled_for(source):
            logger.debug(f"Skipping {source}: file kind not enabled")
            return []

        kind = source if isinstance(source, DocumentKind) else classify_document(source)
        index = PositionIndex(text)
        found = []

        for region in segment(text, kind):
            scanner = get_scanner(region.syntax, self.attribute_names)
            try:
                candidates = scanner.scan(region.content)
            except Exception as e:
                logger.warning(f"Skipping {region.kind.value} region of {source}: {e}")
                continue

            logger.debug(f"{region.kind.value} region of {source}: {len(candidates)} candidates")

            base = region.offset_in_parent
            for candidate in candidates:
                start = base + candidate.start
                end = base + candidate.end
                found.append(TextSpan(
                    id=0,
                    text=candidate.text,
                    start=index.offset_to_position(start),
                    end=index.offset_to_position(end),
                    kind=candidate.kind,
                    start_offset=start,
                    end_offset=end,
                    token_start_offset=base + candidate.token_start,
                    token_end_offset=base + candidate.token_end,
                    attribute_name=candidate.attribute_name,
                    quote=candidate.quote,
                    region_kind=region.kind,
                ))

        found.sort(key=lambda span: span.start_offset)
        for span_id, span in enumerate(found):
            span.id = span_id
        return found

    def scan_file(self, file_path: Path) -> List[TextSpan]:
        """Read and scan a file. Unreadable files yield no spans."""
        file_path = Path(file_path)
        if not self.is_enabled_for(file_path):
            return []

        try:
            text = file_path.read_text(encoding='utf-8')
        except (IOError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {file_path}: {e}")
            return []

        return self.scan(text, file_path)

    def scan_range(
        self,
        text: str,
        source: Source,
        start: Position,
        end: Position,
    ) -> List[TextSpan]:
        """Scan a document and keep the spans that touch ``[start, end]``."""
        return [span for span in self.scan(text, source) if span.intersects(start, end)]


def _looks_like_path(source) -> bool:
    value = str(source)
    return isinstance(source, Path) or '.' in value or '/' in value or '\\' in value
