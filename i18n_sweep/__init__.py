"""
i18n-sweep
==========

Finds hardcoded user-facing text in web projects and manages the
translation keys stored in per-locale JSON files.

Usage:
    from i18n_sweep import HardcodedScanner, LocaleFileManager, UsageAnalyzer

    spans = HardcodedScanner().scan(text, 'App.vue')
    store = LocaleFileManager('./locales').load()
    usage = UsageAnalyzer(project_dir='.').analyze_corpus(store)

CLI:
    i18n-sweep scan
    i18n-sweep extract src/App.vue --dry-run
    i18n-sweep rename home.title home.heading
"""

from .__version__ import __version__, __author__, __description__

# Core exports (imported before the scanners, which depend on core submodules)
from .core import (
    BatchResult,
    NotFoundError,
    MalformedInputError,
    OverlappingEditError,
    Position,
    DocumentKind,
    HardcodedScanner,
    Edit,
    rewrite,
    LocaleStore,
    LocaleFileManager,
    UsageAnalyzer,
    HealthCalculator,
)

# Scanners
from .scanners import TextKind, TextSpan

# Features
from .features import HardcodedExtractor, KeyManager, StatsCalculator

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'BatchResult',
    'NotFoundError',
    'MalformedInputError',
    'OverlappingEditError',
    'Position',
    'DocumentKind',
    'HardcodedScanner',
    'Edit',
    'rewrite',
    'LocaleStore',
    'LocaleFileManager',
    'UsageAnalyzer',
    'HealthCalculator',
    'TextKind',
    'TextSpan',
    'HardcodedExtractor',
    'KeyManager',
    'StatsCalculator',
]
