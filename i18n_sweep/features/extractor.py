"""Extraction of hardcoded text into locale keys."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..core.errors import NotFoundError
from ..core.file_manager import LocaleFileManager
from ..core.key_store import KEY_SEPARATOR, LocaleStore, split_key
from ..core.positions import Position
from ..core.rewriter import edits_for_spans, rewrite
from ..core.scanner import HardcodedScanner
from ..scanners.base import TextKind, TextSpan
from ..utils.colors import Colors
from ..utils.logging import get_logger
from ..utils.validators import escape_single_quoted, suggest_key, unescape_script_string

logger = get_logger('extractor')


@dataclass
class TransformResult:
    """How one span is turned into a translation call."""
    span_id: int
    key: str
    text: str
    replacement: str
    line: int = 0

    def to_dict(self) -> Dict:
        return {
            'span_id': self.span_id,
            'key': self.key,
            'text': self.text,
            'replacement': self.replacement,
            'line': self.line,
        }


@dataclass
class ExtractionResult:
    """Outcome of extracting the hardcoded text of one document."""
    source: str
    locale: Optional[str]
    original_text: str
    text: str
    transforms: List[TransformResult] = field(default_factory=list)
    locale_saved: bool = False
    source_saved: bool = False

    @property
    def changed(self) -> bool:
        return self.text != self.original_text


def replacement_for(span: TextSpan, key: str) -> str:
    """
    Code that replaces a span's token.

    Markup text becomes an interpolation, an attribute becomes a bound
    attribute and a script literal becomes a call.
    """
    quoted_key = escape_single_quoted(key)
    if span.kind == TextKind.PLAIN_MARKUP_TEXT:
        return f"{{{{ $t('{quoted_key}') }}}}"
    if span.kind == TextKind.MARKUP_ATTRIBUTE_VALUE:
        return f":{span.attribute_name}=\"$t('{quoted_key.replace(chr(34), '&quot;')}')\""
    return f"t('{quoted_key}')"


def translation_text(span: TextSpan) -> str:
    """The text a span stands for at runtime (script escapes decoded), trimmed."""
    if span.kind == TextKind.SCRIPT_STRING_LITERAL:
        return unescape_script_string(span.text).strip()
    return span.text.strip()


class HardcodedExtractor:
    """
    Moves hardcoded text into the default locale and rewrites the source.

    The default locale is the first discovered locale. Keys are derived
    from the text; when a derived key already holds a different value a
    numeric suffix is appended.
    """

    def __init__(
        self,
        file_manager: LocaleFileManager,
        scanner: Optional[HardcodedScanner] = None,
        dry_run: bool = False,
    ):
        """
        Initialize extractor.

        Args:
            file_manager: Locale file manager
            scanner: Hardcoded text scanner
            dry_run: Plan and report without writing any file
        """
        self.file_manager = file_manager
        self.scanner = scanner or HardcodedScanner()
        self.dry_run = dry_run

    @staticmethod
    def _value_parent(
        store: LocaleStore,
        locale: str,
        key: str,
        planned: Dict[str, str],
    ) -> Optional[str]:
        """Shortest parent path of ``key`` that already holds a value instead of an object."""
        segments = split_key(key)
        for depth in range(1, len(segments)):
            parent = KEY_SEPARATOR.join(segments[:depth])
            if parent in planned or store.holds_value(locale, parent):
                return parent
        return None

    @classmethod
    def _free_parents(
        cls,
        store: LocaleStore,
        locale: str,
        key: str,
        planned: Dict[str, str],
    ) -> str:
        """Move ``key`` below a sibling when a parent holds a value: ``home.x`` -> ``home_2.x``."""
        parent = cls._value_parent(store, locale, key, planned)
        while parent is not None:
            suffix = 2
            while f"{parent}_{suffix}" in planned or store.holds_value(locale, f"{parent}_{suffix}"):
                suffix += 1
            moved = f"{parent}_{suffix}{key[len(parent):]}"
            logger.info(f"'{parent}' holds a value; using '{moved}' instead of '{key}'")
            key = moved
            parent = cls._value_parent(store, locale, key, planned)
        return key

    @classmethod
    def _unique_key(
        cls,
        store: LocaleStore,
        locale: str,
        key: str,
        text: str,
        planned: Dict[str, str],
    ) -> str:
        key = cls._free_parents(store, locale, key, planned)
        candidate = key
        suffix = 2
        while True:
            if candidate in planned:
                free = planned[candidate] == text
            elif any(other.startswith(candidate + KEY_SEPARATOR) for other in planned):
                free = False
            elif store.has_node(locale, candidate):
                free = store.get_value(locale, candidate) == text
            else:
                free = True
            if free:
                return candidate
            candidate = f"{key}_{suffix}"
            suffix += 1

    def plan(
        self,
        spans: Iterable[TextSpan],
        store: LocaleStore,
        prefix: Optional[str] = None,
        keys: Optional[Dict[int, str]] = None,
    ) -> List[TransformResult]:
        """
        Choose a key and replacement for every span.

        Args:
            spans: Spans to extract
            store: Locale store the keys will be written to
            prefix: Optional dotted prefix for derived keys
            keys: Explicit keys by span id (derived for the others)

        Raises:
            NotFoundError: If the store has no locale
        """
        locale = store.default_locale
        if locale is None:
            raise NotFoundError("No locale to extract into")

        keys = keys or {}
        planned: Dict[str, str] = {}  # key -> text
        results = []

        for span in spans:
            text = translation_text(span)
            key = keys.get(span.id) or self._unique_key(
                store, locale, suggest_key(text, prefix), text, planned
            )
            planned[key] = text
            results.append(TransformResult(
                span_id=span.id,
                key=key,
                text=text,
                replacement=replacement_for(span, key),
                line=span.start.line + 1,
            ))

        return results

    def extract_document(
        self,
        text: str,
        source,
        store: LocaleStore,
        span_ids: Optional[Iterable[int]] = None,
        prefix: Optional[str] = None,
        keys: Optional[Dict[int, str]] = None,
    ) -> ExtractionResult:
        """
        Extract spans of a document in memory.

        The default locale of ``store`` receives ``key -> text`` for every
        transform and the returned result holds the rewritten text. Edits are
        matched to spans by span id.

        Args:
            text: Document text
            source: File path, extension or DocumentKind
            store: Locale store (mutated)
            span_ids: Only extract these spans (all when omitted)
            prefix: Optional dotted prefix for derived keys
            keys: Explicit keys by span id
        """
        spans = self.scanner.scan(text, source)
        if span_ids is not None:
            wanted = set(span_ids)
            spans = [span for span in spans if span.id in wanted]

        transforms = self.plan(spans, store, prefix, keys)
        locale = store.default_locale
        for transform in transforms:
            store.set_value(locale, transform.key, transform.text)

        edits = edits_for_spans(spans, {t.span_id: t.replacement for t in transforms})
        return ExtractionResult(
            source=str(source),
            locale=locale,
            original_text=text,
            text=rewrite(text, edits),
            transforms=transforms,
        )

    def extract_file(
        self,
        file_path: Path,
        start: Optional[Position] = None,
        end: Optional[Position] = None,
        prefix: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract the hardcoded text of a file, optionally within a range.

        The default locale is saved first; the source file is only rewritten
        when the locale was saved, so keys never go missing.

        Raises:
            NotFoundError: If no locale file exists (nothing is modified)
        """
        file_path = Path(file_path)
        store = self.file_manager.load()
        text = file_path.read_text(encoding='utf-8')

        span_ids = None
        if start is not None and end is not None:
            span_ids = [span.id for span in self.scanner.scan_range(text, file_path, start, end)]

        result = self.extract_document(text, file_path, store, span_ids, prefix)
        if not result.transforms:
            logger.info(f"No hardcoded text to extract in {file_path}")
            return result

        if self.dry_run:
            return result

        result.locale_saved = self.file_manager.save(result.locale, store.mapping(result.locale))
        if not result.locale_saved:
            logger.error(f"Locale '{result.locale}' not saved; leaving {file_path} unchanged")
            return result

        try:
            file_path.write_text(result.text, encoding='utf-8')
            result.source_saved = True
        except (IOError, OSError) as e:
            logger.error(f"Cannot write {file_path}: {e}")
        return result

    def print_result(self, result: ExtractionResult):
        """Print the transforms of one extraction."""
        if not result.transforms:
            print(f"  {Colors.info('ℹ')} {result.source}: nothing to extract")
            return

        label = Colors.info('[DRY RUN]') if self.dry_run else Colors.success('✓')
        print(f"\n  {label} {result.source} -> {result.locale}")
        for transform in result.transforms:
            print(f"    {Colors.dim(str(transform.line) + ':')} "
                  f"{Colors.FAIL}\"{transform.text}\"{Colors.ENDC} -> "
                  f"{Colors.OKGREEN}{transform.replacement}{Colors.ENDC}")
