"""Translation key usage analysis and reference rewriting."""

import json
import re
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..scanners.base import TextSpan
from ..scanners.script import skip_balanced
from ..utils.backup import BACKUP_PREFIX
from ..utils.colors import Colors
from ..utils.config import Config
from ..utils.logging import get_logger
from ..utils.validators import escape_double_quoted, escape_single_quoted
from .errors import BatchResult
from .health_calculator import HealthCalculator, HealthScore
from .key_store import LocaleStore, iter_leaf_keys
from .positions import PositionIndex
from .regions import (
    DocumentKind,
    RegionKind,
    classify_document,
    is_component_expression_file,
    region_at,
    segment,
)
from .rewriter import Edit, rewrite
from .scanner import HardcodedScanner

logger = get_logger('analyzer')

# $t('key'), t("key", {...}), i18n.t(`key`), i18n.global.t(...), useTranslation().t(...)
TRANSLATION_CALL = re.compile(r'''(?<![\w$])\$?t\(\s*(['"`])(.+?)\1\s*[,)]''')

# Component-local messages: <i18n>{"en": {...}}</i18n>
I18N_BLOCK = re.compile(r'<i18n[^>]*>([\s\S]*?)</i18n>', re.IGNORECASE)

# Receivers a call-style reference may start with
CALL_RECEIVER = (
    r'(?:\bi18n\.global\.|\bi18n\.|\bthis\.|\buseTranslation\(\)\s*\.\s*|(?<![\w$.]))'
)

PathLike = Union[str, Path]


def iter_translation_calls(text: str) -> Iterator[re.Match]:
    """Translation calls with a static key (group 2); template keys with ``${`` are skipped."""
    for match in TRANSLATION_CALL.finditer(text):
        if '${' not in match.group(2):
            yield match


def extract_keys(text: str) -> List[str]:
    """Keys of every translation call in text, first occurrence order."""
    return list(dict.fromkeys(match.group(2) for match in iter_translation_calls(text)))


def keys_declared_in_i18n_blocks(text: str) -> List[str]:
    """Leaf keys of the JSON ``<i18n>`` blocks of a single-file component."""
    keys: List[str] = []
    for block in I18N_BLOCK.finditer(text):
        try:
            data = json.loads(block.group(1).strip())
        except json.JSONDecodeError as e:
            logger.debug(f"Ignoring <i18n> block that is not JSON: {e}")
            continue
        if not isinstance(data, dict):
            continue
        for messages in data.values():
            if isinstance(messages, dict):
                keys.extend(key for key, _ in iter_leaf_keys(messages))
    return keys


def keys_used_in_content(text: str, is_composite: bool = False) -> List[str]:
    """Keys referenced by a document, including ``<i18n>`` blocks for components."""
    keys = extract_keys(text)
    if is_composite:
        keys.extend(keys_declared_in_i18n_blocks(text))
    return list(dict.fromkeys(keys))


def find_source_files(
    root: Path,
    extensions: Iterable[str],
    exclude: Iterable[str] = (),
) -> List[Path]:
    """
    Source files under root with one of the extensions.

    Files inside a directory whose name is in ``exclude``, or inside a
    backup directory, are skipped.
    """
    root = Path(root)
    excluded = set(exclude)
    found = set()

    for ext in extensions:
        for file_path in root.rglob(f'*{ext}'):
            relative = file_path.relative_to(root)
            if any(part in excluded or part.startswith(BACKUP_PREFIX)
                   for part in relative.parts[:-1]):
                continue
            if file_path.is_file():
                found.add(file_path)

    return sorted(found)


def _reference_pattern(key: str) -> re.Pattern:
    """Any quoted occurrence of a key."""
    return re.compile(r'([\'"`])' + re.escape(key) + r'\1')


def _call_pattern(key: str) -> re.Pattern:
    """The head of a call-style reference to a key, up to the quoted key."""
    return re.compile(
        r'(?P<open>\{\{?\s*)?'
        r'(?P<call>' + CALL_RECEIVER + r'\$?t\(\s*(?P<quote>[\'"`])' + re.escape(key)
        + r'(?P=quote))'
    )


ARGUMENTS_FOLLOW = re.compile(r'\s*[,)]')
CLOSING_BRACES = re.compile(r'\s*\}\}?')


@dataclass(frozen=True)
class CallReference:
    """A translation call for one key, with the braces wrapping it (if any)."""
    start: int
    end: int
    call_start: int
    call_end: int
    opened: str
    closed: str


def iter_call_references(text: str, key: str) -> Iterator[CallReference]:
    """
    Call-style references to a key, in document order.

    Further arguments are skipped up to the matching ``)`` (nested calls and
    string literals included). Calls nested inside an earlier reference are
    not reported.
    """
    consumed = 0
    for m in _call_pattern(key).finditer(text):
        if m.start() < consumed or not ARGUMENTS_FOLLOW.match(text, m.end()):
            continue
        call_end = skip_balanced(text, m.end(), '(', ')')
        if call_end is None:
            continue
        close = CLOSING_BRACES.match(text, call_end)
        end = close.end() if close else call_end
        consumed = end
        yield CallReference(
            start=m.start(),
            end=end,
            call_start=m.start('call'),
            call_end=call_end,
            opened=(m.group('open') or '').strip(),
            closed=close.group().strip() if close else '',
        )


@dataclass
class DocumentUsage:
    """Key usage of a single document."""
    used_keys: List[str] = field(default_factory=list)
    missing_keys: List[str] = field(default_factory=list)
    unused_keys: List[str] = field(default_factory=list)
    hardcoded: List[TextSpan] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'used_keys': self.used_keys,
            'missing_keys': self.missing_keys,
            'unused_keys': self.unused_keys,
            'hardcoded': [span.to_dict() for span in self.hardcoded],
        }


@dataclass(frozen=True)
class UsageLocation:
    """Where a key is used: project-relative path, zero-based line and column."""
    file_path: str
    line: int
    column: int

    def to_dict(self) -> Dict:
        return {'file_path': self.file_path, 'line': self.line, 'column': self.column}


@dataclass
class KeyUsage:
    """A defined key and every place it is used."""
    key: str
    used_by: List[UsageLocation] = field(default_factory=list)
    locales: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'key': self.key,
            'locales': self.locales,
            'used_by': [location.to_dict() for location in self.used_by],
        }


@dataclass
class CorpusUsage:
    """
    Key usage across a set of files.

    ``used`` only lists keys some locale defines. Calls to keys no locale
    defines are collected separately in ``undefined`` (key -> files).
    """
    used: List[KeyUsage] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)
    undefined: Dict[str, List[str]] = field(default_factory=dict)
    translation_calls: int = 0
    files_scanned: int = 0

    @property
    def used_keys(self) -> List[str]:
        return [usage.key for usage in self.used]

    def to_dict(self) -> Dict:
        return {
            'files_scanned': self.files_scanned,
            'translation_calls': self.translation_calls,
            'used': [usage.to_dict() for usage in self.used],
            'unused': self.unused,
            'undefined': self.undefined,
        }


@dataclass
class ProjectAnalysis:
    """Corpus usage, hardcoded text and the resulting health score."""
    health: HealthScore
    usage: CorpusUsage
    hardcoded: Dict[str, List[TextSpan]] = field(default_factory=dict)  # file -> spans
    repeated_texts: Dict[str, List[str]] = field(default_factory=dict)  # text -> files

    @property
    def hardcoded_count(self) -> int:
        return sum(len(spans) for spans in self.hardcoded.values())

    @property
    def missing_keys(self) -> Dict[str, List[str]]:
        return self.usage.undefined


class UsageAnalyzer:
    """
    Correlates translation calls in source files with the locale store.

    All paths reported by corpus operations are relative to ``project_dir``.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        project_dir: Optional[Path] = None,
        scanner: Optional[HardcodedScanner] = None,
    ):
        """
        Initialize analyzer.

        Args:
            config: Project configuration
            project_dir: Corpus root (defaults to ``config.paths.source``)
            scanner: Hardcoded text scanner (built from config when omitted)
        """
        self.config = config or Config()
        self.project_dir = Path(project_dir) if project_dir else self.config.source_dir
        self.scanner = scanner or HardcodedScanner(self.config)

    def relative_path(self, file_path: Path) -> str:
        try:
            return Path(file_path).relative_to(self.project_dir).as_posix()
        except ValueError:
            return Path(file_path).as_posix()

    def find_source_files(self, extensions: Optional[Iterable[str]] = None) -> List[Path]:
        """Files the usage analysis walks (``usage.extensions`` by default)."""
        return find_source_files(
            self.project_dir,
            extensions or self.config.usage.extensions,
            self.config.paths.exclude,
        )

    def find_scannable_files(self) -> List[Path]:
        """Files of the kinds enabled for hardcoded text scanning."""
        extensions = [f".{kind.lower().lstrip('.')}" for kind in self.config.hardcoded.file_kinds]
        return self.find_source_files(extensions)

    @staticmethod
    def _read(file_path: Path) -> Optional[str]:
        try:
            return Path(file_path).read_text(encoding='utf-8')
        except (IOError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {file_path}: {e}")
            return None

    def analyze_document(
        self,
        text: str,
        source: Union[PathLike, DocumentKind],
        store: LocaleStore,
    ) -> DocumentUsage:
        """
        Usage of a single document.

        ``missing_keys`` is exactly the used keys no locale defines and
        ``unused_keys`` the defined keys this document does not use.
        """
        used = extract_keys(text)
        defined = store.all_defined_keys()
        defined_set = set(defined)
        used_set = set(used)

        return DocumentUsage(
            used_keys=used,
            missing_keys=[key for key in used if key not in defined_set],
            unused_keys=[key for key in defined if key not in used_set],
            hardcoded=self.scanner.scan(text, source),
        )

    def analyze_corpus(
        self,
        store: LocaleStore,
        files: Optional[Iterable[Path]] = None,
    ) -> CorpusUsage:
        """
        Usage of every defined key across files.

        Args:
            store: Locale store
            files: Files to scan (``find_source_files()`` when omitted)

        Returns:
            CorpusUsage; identical (key, file, line, column) usages are recorded once
        """
        files = list(files) if files is not None else self.find_source_files()
        locale_map = store.locale_map()

        usages: Dict[str, KeyUsage] = {}
        seen = set()
        undefined: Dict[str, List[str]] = defaultdict(list)
        calls = 0
        scanned = 0

        for file_path in files:
            text = self._read(file_path)
            if text is None:
                continue
            scanned += 1

            relative = self.relative_path(file_path)
            index = PositionIndex(text)

            for match in iter_translation_calls(text):
                calls += 1
                key = match.group(2)
                if key not in locale_map:
                    if relative not in undefined[key]:
                        undefined[key].append(relative)
                    continue

                position = index.offset_to_position(match.start())
                location = UsageLocation(relative, position.line, position.column)
                if (key, location) in seen:
                    continue
                seen.add((key, location))

                usage = usages.setdefault(key, KeyUsage(key, locales=list(locale_map[key])))
                usage.used_by.append(location)

        unused = [key for key in locale_map if key not in usages]
        logger.debug(
            f"Corpus: {scanned} files, {calls} calls, {len(usages)} used, {len(unused)} unused"
        )

        return CorpusUsage(
            used=list(usages.values()),
            unused=unused,
            undefined=dict(undefined),
            translation_calls=calls,
            files_scanned=scanned,
        )

    def scan_hardcoded(self, files: Optional[Iterable[Path]] = None) -> Dict[str, List[TextSpan]]:
        """Hardcoded spans per project-relative file (files without spans omitted)."""
        files = list(files) if files is not None else self.find_scannable_files()
        result = {}
        for file_path in files:
            spans = self.scanner.scan_file(file_path)
            if spans:
                result[self.relative_path(file_path)] = spans
        return result

    def analyze_project(self, store: LocaleStore, verbose: bool = False) -> ProjectAnalysis:
        """
        Run the full analysis: key usage, hardcoded text and health score.

        Args:
            store: Locale store
            verbose: Print progress messages
        """
        if verbose:
            print(f"\n🔍 Analyzing key usage in {self.project_dir}...")
        usage = self.analyze_corpus(store)
        if verbose:
            print(f"   {Colors.success('✓')} {usage.files_scanned} files, "
                  f"{usage.translation_calls} translation calls")

        if verbose:
            print(f"\n📝 Scanning for hardcoded text...")
        hardcoded = self.scan_hardcoded()

        texts: Dict[str, List[str]] = defaultdict(list)
        for file_name, spans in hardcoded.items():
            for span in spans:
                if file_name not in texts[span.text]:
                    texts[span.text].append(file_name)
        repeated = {text: names for text, names in texts.items() if len(names) >= 2}

        analysis = ProjectAnalysis(
            health=HealthCalculator.calculate(
                translation_calls=usage.translation_calls,
                hardcoded_count=sum(len(spans) for spans in hardcoded.values()),
                missing_keys=list(usage.undefined),
                unused_keys=usage.unused,
                repeated_texts=repeated,
            ),
            usage=usage,
            hardcoded=hardcoded,
            repeated_texts=repeated,
        )

        if verbose:
            print(f"   {Colors.success('✓')} {analysis.hardcoded_count} hardcoded texts "
                  f"in {len(hardcoded)} files")
        return analysis

    def find_key_references(self, key: str, files: Optional[Iterable[Path]] = None) -> List[Path]:
        """Files that reference a key."""
        files = list(files) if files is not None else self.find_source_files()
        references = []
        for file_path in files:
            text = self._read(file_path)
            if text is None:
                continue
            is_composite = classify_document(file_path) == DocumentKind.COMPOSITE
            if key in keys_used_in_content(text, is_composite):
                references.append(Path(file_path))
        return references

    def _update_files(self, files: Iterable[Path], make_edits) -> BatchResult:
        """Apply ``make_edits(path, text)`` to each file; unchanged files are not counted."""
        result = BatchResult()
        for file_path in files:
            file_path = Path(file_path)
            text = self._read(file_path)
            if text is None:
                result.add_failure(self.relative_path(file_path), 'unreadable')
                continue

            edits = make_edits(file_path, text)
            if not edits:
                continue

            try:
                file_path.write_text(rewrite(text, edits), encoding='utf-8')
            except (IOError, OSError) as e:
                logger.error(f"Cannot write {file_path}: {e}")
                result.add_failure(self.relative_path(file_path), str(e))
                continue

            logger.info(f"Updated {len(edits)} reference(s) in {self.relative_path(file_path)}")
            result.add_success(self.relative_path(file_path))
        return result

    def rename_references(
        self,
        old_key: str,
        new_key: str,
        files: Optional[Iterable[Path]] = None,
    ) -> BatchResult:
        """
        Replace every quoted occurrence of ``old_key`` with ``new_key``.

        The quote character of each occurrence is kept.

        Args:
            old_key: Current key
            new_key: Replacement key
            files: Files to update (``find_key_references(old_key)`` when omitted)

        Returns:
            BatchResult whose ``succeeded`` lists the updated files
        """
        if files is None:
            files = self.find_key_references(old_key)
        pattern = _reference_pattern(old_key)

        def make_edits(file_path, text):
            return [
                Edit(m.start(), m.end(), f"{m.group(1)}{new_key}{m.group(1)}")
                for m in pattern.finditer(text)
            ]

        return self._update_files(files, make_edits)

    def replace_references_with_literal(
        self,
        key: str,
        literal: str,
        files: Optional[Iterable[Path]] = None,
    ) -> BatchResult:
        """
        Replace call-style references to a key with a literal string.

        In a component template, ``{{ $t('key') }}`` becomes ``{{ "text" }}``
        and a call inside a larger expression becomes ``'text'``. In JSX/TSX,
        ``{t('key')}`` becomes ``{"text"}``. Anywhere else the call becomes
        ``"text"``.

        Returns:
            BatchResult whose ``succeeded`` lists the updated files
        """
        if files is None:
            files = self.find_key_references(key)
        def make_edits(file_path, text):
            kind = classify_document(file_path)
            regions = segment(text, kind) if kind == DocumentKind.COMPOSITE else []
            jsx = is_component_expression_file(file_path)
            edits = []

            for ref in iter_call_references(text, key):
                region = region_at(regions, ref.call_start)

                if region is not None and region.kind == RegionKind.TEMPLATE:
                    if ref.opened == '{{' and ref.closed == '}}':
                        edits.append(Edit(ref.start, ref.end,
                                          f'{{{{ "{escape_double_quoted(literal)}" }}}}'))
                    else:
                        edits.append(Edit(ref.call_start, ref.call_end,
                                          f"'{escape_single_quoted(literal)}'"))
                elif jsx and ref.opened == '{' and ref.closed == '}':
                    edits.append(Edit(ref.start, ref.end, f'{{"{escape_double_quoted(literal)}"}}'))
                else:
                    edits.append(Edit(ref.call_start, ref.call_end,
                                      f'"{escape_double_quoted(literal)}"'))
            return edits

        return self._update_files(files, make_edits)
