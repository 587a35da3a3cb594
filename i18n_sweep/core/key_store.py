"""In-memory locale store: one nested string mapping per locale."""

import copy
from typing import Any, Dict, Iterator, List, Optional, Tuple

KEY_SEPARATOR = '.'

LocaleMapping = Dict[str, Any]


def split_key(key: str) -> List[str]:
    return key.split(KEY_SEPARATOR)


def iter_leaf_keys(mapping: LocaleMapping, prefix: str = '') -> Iterator[Tuple[str, str]]:
    """
    Yield ``(dotted_key, value)`` for every string leaf of a nested mapping.

    Non-string leaves (numbers, lists, null) are not translation values and
    are skipped.
    """
    for segment, value in mapping.items():
        key = f"{prefix}{KEY_SEPARATOR}{segment}" if prefix else segment
        if isinstance(value, dict):
            yield from iter_leaf_keys(value, key)
        elif isinstance(value, str):
            yield key, value


def get_value(mapping: LocaleMapping, key: str) -> Optional[str]:
    """Walk a dotted key; return the string leaf or None."""
    node: Any = mapping
    for segment in split_key(key):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node if isinstance(node, str) else None


def has_node(mapping: LocaleMapping, key: str) -> bool:
    """
    True when writing ``key`` would replace existing data.

    That is the case when any node (leaf or object) sits at the key's path,
    or when a non-object value sits at one of its parent segments.
    """
    node: Any = mapping
    for segment in split_key(key):
        if not isinstance(node, dict):
            return True
        if segment not in node:
            return False
        node = node[segment]
    return True


def holds_value(mapping: LocaleMapping, key: str) -> bool:
    """True when a non-object value (string, number, list, null) sits at the key's path."""
    node: Any = mapping
    for segment in split_key(key):
        if not isinstance(node, dict) or segment not in node:
            return False
        node = node[segment]
    return not isinstance(node, dict)


def set_value(mapping: LocaleMapping, key: str, value: str) -> None:
    """Set a dotted key, creating (or replacing non-object) intermediate nodes."""
    segments = split_key(key)
    node = mapping
    for segment in segments[:-1]:
        if not isinstance(node.get(segment), dict):
            node[segment] = {}
        node = node[segment]
    node[segments[-1]] = value


def delete_key(mapping: LocaleMapping, key: str) -> bool:
    """
    Delete a dotted key and prune parents left empty.

    Returns:
        True if the key existed
    """
    segments = split_key(key)
    path = [mapping]
    node: Any = mapping
    for segment in segments[:-1]:
        node = node.get(segment) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            return False
        path.append(node)

    if segments[-1] not in node:
        return False
    del node[segments[-1]]

    for depth in range(len(path) - 1, 0, -1):
        if path[depth]:
            break
        del path[depth - 1][segments[depth - 1]]
    return True


class LocaleStore:
    """
    Translation data for every locale.

    Keys are dotted paths; a key is defined in a locale only when its path
    ends at a string leaf. Locale order is discovery order and the first
    locale is the default one.
    """

    def __init__(self, data: Optional[Dict[str, LocaleMapping]] = None):
        self._data: Dict[str, LocaleMapping] = {
            locale: mapping for locale, mapping in (data or {}).items()
        }

    @property
    def locales(self) -> List[str]:
        return list(self._data)

    @property
    def default_locale(self) -> Optional[str]:
        return self.locales[0] if self._data else None

    def __contains__(self, locale: str) -> bool:
        return locale in self._data

    def __len__(self) -> int:
        return len(self._data)

    def mapping(self, locale: str) -> LocaleMapping:
        """The live mapping of a locale (created empty when missing)."""
        return self._data.setdefault(locale, {})

    def add_locale(self, locale: str, mapping: Optional[LocaleMapping] = None) -> None:
        self._data[locale] = mapping if mapping is not None else {}

    def keys(self, locale: str) -> List[str]:
        return [key for key, _ in iter_leaf_keys(self._data.get(locale, {}))]

    def all_defined_keys(self) -> List[str]:
        """Union of the leaf keys of every locale, in first-seen order."""
        seen: Dict[str, None] = {}
        for mapping in self._data.values():
            for key, _ in iter_leaf_keys(mapping):
                seen.setdefault(key, None)
        return list(seen)

    def locale_map(self) -> Dict[str, List[str]]:
        """key -> locales defining it."""
        result: Dict[str, List[str]] = {}
        for locale, mapping in self._data.items():
            for key, _ in iter_leaf_keys(mapping):
                result.setdefault(key, []).append(locale)
        return result

    def get_value(self, locale: str, key: str) -> Optional[str]:
        return get_value(self._data.get(locale, {}), key)

    def is_defined(self, key: str, locale: Optional[str] = None) -> bool:
        """Defined in the given locale, or in any locale when none is given."""
        locales = [locale] if locale else self.locales
        return any(self.get_value(name, key) is not None for name in locales)

    def has_node(self, locale: str, key: str) -> bool:
        return has_node(self._data.get(locale, {}), key)

    def holds_value(self, locale: str, key: str) -> bool:
        return holds_value(self._data.get(locale, {}), key)

    def set_value(self, locale: str, key: str, value: str) -> None:
        set_value(self.mapping(locale), key, value)

    def delete_key(self, locale: str, key: str) -> bool:
        if locale not in self._data:
            return False
        return delete_key(self._data[locale], key)

    def rename_key(self, old_key: str, new_key: str) -> List[str]:
        """
        Move a key's value to a new key in every locale that defines it.

        Returns:
            Locales that were changed
        """
        changed = []
        for locale in self.locales:
            value = self.get_value(locale, old_key)
            if value is None:
                continue
            self.delete_key(locale, old_key)
            self.set_value(locale, new_key, value)
            changed.append(locale)
        return changed

    def translations_for(self, key: str) -> Dict[str, str]:
        """locale -> value for a key, ``''`` where it is not defined."""
        return {locale: self.get_value(locale, key) or '' for locale in self.locales}

    def value_for(self, key: str, locale: Optional[str] = None) -> Optional[str]:
        """Value in the given locale, falling back to the default locale."""
        locale = locale or self.default_locale
        if locale is None:
            return None
        return self.get_value(locale, key)

    def to_dict(self) -> Dict[str, LocaleMapping]:
        return copy.deepcopy(self._data)

    def copy(self) -> 'LocaleStore':
        return LocaleStore(self.to_dict())
