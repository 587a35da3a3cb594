"""Script scanner and string-literal tokenizer."""

import re
from typing import Iterator, List, Optional, Set

from ..core.regions import DocumentKind
from .base import BaseScanner, Candidate, StringLiteral, TextKind

# `t(`, `$t(` or a member call such as `i18n.t(` right before a literal
TRANSLATION_CALL_PREFIX = re.compile(r'(?:(?<![\w$])\$?t|\.t)\s*\(\s*$')

# `)` followed by `,` or a backtick right after a literal
CALL_CLOSE_SUFFIX = re.compile(r'\)\s*[,`]')

# Module specifiers: import ... from 'x', import 'x', require('x'), import('x')
MODULE_SPECIFIER_PREFIX = re.compile(r'(?:\bfrom|\bimport|\brequire\s*\(|\bimport\s*\()\s*$')

IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
PATH_OR_URL = re.compile(r'^[/.]|\.([a-z]{2,4})$|^https?://|^www\.|^ftp://')

LOOKBEHIND_WINDOW = 64


def tokenize_strings(content: str) -> Iterator[StringLiteral]:
    """
    Yield the string literals of a script, skipping comments.

    Single- and double-quoted strings end at the matching unescaped quote and
    are dropped when a line break comes first. Template literals may span
    lines; ``${...}`` expressions (with nested braces and strings) are stepped
    over and flagged through ``has_interpolation``. An unterminated literal
    ends tokenization.
    """
    i = 0
    length = len(content)

    while i < length:
        ch = content[i]

        if ch == '/' and i + 1 < length:
            nxt = content[i + 1]
            if nxt == '/':
                newline = content.find('\n', i + 2)
                i = length if newline == -1 else newline + 1
                continue
            if nxt == '*':
                close = content.find('*/', i + 2)
                i = length if close == -1 else close + 2
                continue

        if ch in ('"', "'"):
            end = _scan_quoted(content, i, ch)
            if end is None:
                i += 1
                continue
            yield StringLiteral(ch, i, end, content[i + 1:end - 1])
            i = end
            continue

        if ch == '`':
            result = _scan_template(content, i)
            if result is None:
                return
            end, has_interpolation = result
            yield StringLiteral('`', i, end, content[i + 1:end - 1], has_interpolation)
            i = end
            continue

        i += 1


def _scan_quoted(content: str, start: int, quote: str):
    i = start + 1
    while i < len(content):
        ch = content[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '\n':
            return None
        if ch == quote:
            return i + 1
        i += 1
    return None


def _scan_template(content: str, start: int):
    i = start + 1
    has_interpolation = False
    while i < len(content):
        ch = content[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '`':
            return i + 1, has_interpolation
        if ch == '$' and i + 1 < len(content) and content[i + 1] == '{':
            has_interpolation = True
            i = _skip_expression(content, i + 2)
            if i is None:
                return None
            continue
        i += 1
    return None


def _skip_expression(content: str, i: int):
    """Return the offset after the `}` closing a `${` expression."""
    return skip_balanced(content, i, '{', '}')


def skip_balanced(content: str, i: int, opening: str, closing: str) -> Optional[int]:
    """
    Return the offset after the ``closing`` bracket matching an already open one.

    ``i`` is the first offset inside the brackets. String and template
    literals are skipped whole, so brackets inside them do not count.
    None when the bracket is never closed.
    """
    depth = 1
    while i < len(content):
        ch = content[i]
        if ch in ('"', "'"):
            end = _scan_quoted(content, i, ch)
            i = i + 1 if end is None else end
            continue
        if ch == '`':
            result = _scan_template(content, i)
            if result is None:
                return None
            i = result[0]
            continue
        if ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def is_translation_argument(content: str, literal: StringLiteral) -> bool:
    """True when the literal is the first argument of a translation call."""
    window_start = max(0, literal.start - LOOKBEHIND_WINDOW)
    return TRANSLATION_CALL_PREFIX.search(content, window_start, literal.start) is not None


def is_call_closing(content: str, literal: StringLiteral) -> bool:
    return CALL_CLOSE_SUFFIX.match(content, literal.end) is not None


def is_module_specifier(content: str, literal: StringLiteral) -> bool:
    window_start = max(0, literal.start - LOOKBEHIND_WINDOW)
    return MODULE_SPECIFIER_PREFIX.search(content, window_start, literal.start) is not None


def is_non_linguistic(value: str) -> bool:
    """Identifiers, paths and URLs are not human-readable text."""
    stripped = value.strip()
    return bool(IDENTIFIER.match(stripped) or PATH_OR_URL.search(stripped))


class ScriptScanner(BaseScanner):
    """Finds quoted string literals that are not already translated."""

    syntax = DocumentKind.SCRIPT

    def scan(self, content: str) -> List[Candidate]:
        seen: Set[str] = set()
        candidates = []

        for literal in tokenize_strings(content):
            if literal.has_interpolation:
                continue
            if is_translation_argument(content, literal) or is_call_closing(content, literal):
                continue
            if is_module_specifier(content, literal):
                continue

            value = literal.value
            if is_non_linguistic(value):
                continue
            if not self.accept(value, seen):
                continue

            quote_len = len(literal.quote)
            candidates.append(Candidate(
                text=value,
                start=literal.start + quote_len,
                end=literal.end - quote_len,
                kind=TextKind.SCRIPT_STRING_LITERAL,
                token_start=literal.start,
                token_end=literal.end,
                quote=literal.quote,
            ))

        return candidates
