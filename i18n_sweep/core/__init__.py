"""Core modules: positions, regions, scanning, rewriting, locale data and usage analysis."""

from .errors import (
    BatchResult,
    I18nSweepError,
    MalformedInputError,
    NotFoundError,
    OverlappingEditError,
)
from .positions import Position, PositionIndex, offset_to_position, position_to_offset
from .regions import DocumentKind, Region, RegionKind, classify_document, segment
from .scanner import HardcodedScanner
from .rewriter import Edit, edits_for_spans, rewrite
from .key_store import LocaleStore
from .file_manager import LocaleFileManager
from .analyzer import (
    CorpusUsage,
    DocumentUsage,
    KeyUsage,
    ProjectAnalysis,
    UsageAnalyzer,
    UsageLocation,
    extract_keys,
    keys_used_in_content,
)
from .health_calculator import HealthCalculator, HealthScore

__all__ = [
    'BatchResult',
    'I18nSweepError',
    'MalformedInputError',
    'NotFoundError',
    'OverlappingEditError',
    'Position',
    'PositionIndex',
    'offset_to_position',
    'position_to_offset',
    'DocumentKind',
    'Region',
    'RegionKind',
    'classify_document',
    'segment',
    'HardcodedScanner',
    'Edit',
    'edits_for_spans',
    'rewrite',
    'LocaleStore',
    'LocaleFileManager',
    'CorpusUsage',
    'DocumentUsage',
    'KeyUsage',
    'ProjectAnalysis',
    'UsageAnalyzer',
    'UsageLocation',
    'extract_keys',
    'keys_used_in_content',
    'HealthCalculator',
    'HealthScore',
]
