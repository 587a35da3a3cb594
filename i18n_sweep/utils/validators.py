"""Validation and key-naming utilities."""

import re
from typing import Optional


def is_valid_key_name(key: str) -> bool:
    """
    Validate a dotted translation key.

    Valid formats:
        - save
        - common.save
        - error.network.timeout

    Segments may contain any characters except '.', but none may be empty
    or consist of whitespace only.
    """
    if not key or not isinstance(key, str):
        return False

    return all(part.strip() for part in key.split('.'))


def suggest_key(text: str, prefix: Optional[str] = None, max_length: int = 50) -> str:
    """
    Derive a translation key from hardcoded text.

    Periods would create nesting levels, so they are dropped; runs of
    whitespace collapse to a single space and markup tags are stripped.

    Args:
        text: Original text
        prefix: Optional dotted prefix (e.g. 'home')
        max_length: Maximum length of the generated segment

    Returns:
        Key name
    """
    clean_text = re.sub(r'<[^>]*>', '', text)
    clean_text = re.sub(r'\s+', ' ', clean_text).replace('.', '').strip()
    clean_text = clean_text[:max_length].strip()

    if not clean_text:
        clean_text = 'unnamed'

    if prefix:
        return f"{prefix.rstrip('.')}.{clean_text}"
    return clean_text


# \u{1F600}, \u00e9, \x41, a line continuation, or any single escaped character
_SCRIPT_ESCAPE = re.compile(r'\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])')

_SINGLE_CHAR_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
    '0': '\0',
}

_LINE_CONTINUATIONS = ('\n', '\r', '\r\n', '\u2028', '\u2029')


def _decode_escape(match: re.Match) -> str:
    sequence = match.group(1)
    if len(sequence) > 1 and sequence[0] in 'ux':
        code = int(sequence.strip('ux{}'), 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    if sequence in _LINE_CONTINUATIONS:
        return ''
    return _SINGLE_CHAR_ESCAPES.get(sequence, sequence)


def unescape_script_string(text: str) -> str:
    """
    Decode the escape sequences of a JS/TS string literal body.

    ``\\'``, ``\\"`` and ``\\\\`` yield the bare character, ``\\n`` and friends
    their control character and ``\\uXXXX`` / ``\\u{...}`` / ``\\xXX`` the code
    point (surrogate pairs are joined). Unknown escapes drop the backslash.
    """
    if '\\' not in text:
        return text
    decoded = _SCRIPT_ESCAPE.sub(_decode_escape, text)
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in decoded):
        decoded = decoded.encode('utf-16', 'surrogatepass').decode('utf-16', 'replace')
    return decoded


def escape_double_quoted(text: str) -> str:
    """Escape text for use inside a double-quoted script string."""
    return (
        text.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
    )


def escape_single_quoted(text: str) -> str:
    """Escape text for use inside a single-quoted script string."""
    return (
        text.replace('\\', '\\\\')
        .replace("'", "\\'")
        .replace('\n', '\\n')
    )
