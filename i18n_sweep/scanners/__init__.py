"""Per-syntax text scanners."""

from .base import (
    BaseScanner,
    Candidate,
    StringLiteral,
    TextKind,
    TextSpan,
    is_rejected_text,
)
from .generic import GenericScanner
from .markup import MarkupScanner
from .script import ScriptScanner, tokenize_strings
from .style import StyleScanner
from .registry import SCANNERS, get_scanner

__all__ = [
    'BaseScanner',
    'Candidate',
    'StringLiteral',
    'TextKind',
    'TextSpan',
    'is_rejected_text',
    'GenericScanner',
    'MarkupScanner',
    'ScriptScanner',
    'StyleScanner',
    'tokenize_strings',
    'SCANNERS',
    'get_scanner',
]
