"""Scanner lookup by region syntax."""

from typing import Dict, List, Optional, Type

from ..core.regions import DocumentKind
from .base import BaseScanner
from .generic import GenericScanner
from .markup import MarkupScanner
from .script import ScriptScanner
from .style import StyleScanner

SCANNERS: Dict[DocumentKind, Type[BaseScanner]] = {
    DocumentKind.MARKUP: MarkupScanner,
    DocumentKind.SCRIPT: ScriptScanner,
    DocumentKind.STYLE: StyleScanner,
    DocumentKind.GENERIC: GenericScanner,
}


def get_scanner(syntax: DocumentKind, attribute_names: Optional[List[str]] = None) -> BaseScanner:
    """Return the scanner for a region syntax (generic when unknown)."""
    scanner_cls = SCANNERS.get(syntax, GenericScanner)
    return scanner_cls(attribute_names)
