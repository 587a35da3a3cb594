"""Feature modules."""

from .extractor import HardcodedExtractor, ExtractionResult, TransformResult, replacement_for
from .key_manager import KeyManager, KeyChange
from .stats import StatsCalculator, TranslationStats, LocaleProgress

__all__ = [
    'HardcodedExtractor',
    'ExtractionResult',
    'TransformResult',
    'replacement_for',
    'KeyManager',
    'KeyChange',
    'StatsCalculator',
    'TranslationStats',
    'LocaleProgress',
]
