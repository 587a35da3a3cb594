"""Document classification and region segmentation."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union


class DocumentKind(str, Enum):
    """Lexical family of a whole document."""
    COMPOSITE = 'composite'  # single-file components (template + script + style)
    SCRIPT = 'script'
    MARKUP = 'markup'
    STYLE = 'style'
    GENERIC = 'generic'


class RegionKind(str, Enum):
    """Role of a region inside its document."""
    TEMPLATE = 'template'
    SCRIPT = 'script'
    STYLE = 'style'
    WHOLE = 'whole'


EXTENSION_KINDS = {
    'vue': DocumentKind.COMPOSITE,
    'js': DocumentKind.SCRIPT,
    'ts': DocumentKind.SCRIPT,
    'jsx': DocumentKind.SCRIPT,
    'tsx': DocumentKind.SCRIPT,
    'mjs': DocumentKind.SCRIPT,
    'cjs': DocumentKind.SCRIPT,
    'html': DocumentKind.MARKUP,
    'htm': DocumentKind.MARKUP,
    'css': DocumentKind.STYLE,
    'scss': DocumentKind.STYLE,
    'less': DocumentKind.STYLE,
}

# Script files whose markup lives in curly-brace expressions
COMPONENT_EXPRESSION_EXTENSIONS = {'jsx', 'tsx'}

TEMPLATE_BLOCK = re.compile(r'<template>([\s\S]*?)</template>', re.IGNORECASE)
SCRIPT_BLOCK = re.compile(r'<script[^>]*?>([\s\S]*?)</script>', re.IGNORECASE)
STYLE_BLOCK = re.compile(r'<style[^>]*?>([\s\S]*?)</style>', re.IGNORECASE)


def file_extension(path: Union[str, Path]) -> str:
    """Lower-case extension without the dot ('' when there is none)."""
    return Path(path).suffix.lower().lstrip('.')


def classify_document(path_or_extension: Union[str, Path]) -> DocumentKind:
    """
    Map a file path (or a bare extension such as ``'vue'``) to a DocumentKind.

    Unrecognized extensions are GENERIC.
    """
    value = str(path_or_extension)
    if '.' in value or '/' in value or '\\' in value:
        ext = file_extension(value)
    else:
        ext = value.lower()
    return EXTENSION_KINDS.get(ext, DocumentKind.GENERIC)


def is_component_expression_file(path: Union[str, Path]) -> bool:
    return file_extension(path) in COMPONENT_EXPRESSION_EXTENSIONS


@dataclass
class Region:
    """
    A typed slice of a document.

    ``content`` is a copy of the slice (tag delimiters excluded) and
    ``offset_in_parent`` is the offset of its first character in the parent
    buffer, so ``offset_in_parent + local_offset`` is a parent offset.
    ``syntax`` selects the scanner: MARKUP for templates, SCRIPT for script
    blocks, STYLE for style blocks, the document kind for WHOLE regions.
    """
    kind: RegionKind
    content: str
    offset_in_parent: int
    syntax: DocumentKind

    @property
    def end_offset(self) -> int:
        return self.offset_in_parent + len(self.content)

    def contains_offset(self, offset: int) -> bool:
        return self.offset_in_parent <= offset < self.end_offset


def _region_from_match(match: re.Match, kind: RegionKind, syntax: DocumentKind) -> Region:
    return Region(
        kind=kind,
        content=match.group(1),
        offset_in_parent=match.start(1),
        syntax=syntax,
    )


def segment(document: str, kind: DocumentKind) -> List[Region]:
    """
    Split a document into regions.

    Composite documents yield the first ``<template>`` block, the first
    ``<script>`` block and every ``<style>`` block, in that order. Missing
    or unterminated blocks simply produce no region. Any other kind yields a
    single WHOLE region covering the buffer.
    """
    if kind != DocumentKind.COMPOSITE:
        return [Region(RegionKind.WHOLE, document, 0, kind)]

    regions: List[Region] = []

    template_match = TEMPLATE_BLOCK.search(document)
    if template_match:
        regions.append(_region_from_match(template_match, RegionKind.TEMPLATE, DocumentKind.MARKUP))

    script_match = SCRIPT_BLOCK.search(document)
    if script_match:
        regions.append(_region_from_match(script_match, RegionKind.SCRIPT, DocumentKind.SCRIPT))

    for style_match in STYLE_BLOCK.finditer(document):
        regions.append(_region_from_match(style_match, RegionKind.STYLE, DocumentKind.STYLE))

    return regions


def region_at(regions: List[Region], offset: int) -> Optional[Region]:
    """Return the region containing a parent offset, if any."""
    for region in regions:
        if region.contains_offset(offset):
            return region
    return None
