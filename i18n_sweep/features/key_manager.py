"""Key management across locale files and source references."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.analyzer import UsageAnalyzer
from ..core.errors import BatchResult, NotFoundError
from ..core.file_manager import LocaleFileManager
from ..core.key_store import LocaleStore
from ..utils.colors import Colors
from ..utils.logging import get_logger
from ..utils.validators import is_valid_key_name

logger = get_logger('key_manager')


@dataclass
class KeyChange:
    """Outcome of a key operation: locale writes plus source rewrites."""
    key: str
    locales: BatchResult = field(default_factory=BatchResult)
    references: BatchResult = field(default_factory=BatchResult)
    reference_files: List[str] = field(default_factory=list)  # files found (dry run)
    removed_keys: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.locales.ok and self.references.ok

    @property
    def updated_file_count(self) -> int:
        return self.references.success_count


class KeyManager:
    """
    Set, rename, delete and inline translation keys.

    Every operation loads the locale store in full, changes it in memory and
    writes back only the locales it changed.
    """

    def __init__(
        self,
        file_manager: LocaleFileManager,
        analyzer: Optional[UsageAnalyzer] = None,
        dry_run: bool = False,
    ):
        """
        Initialize key manager.

        Args:
            file_manager: Locale file manager
            analyzer: Usage analyzer used for source references
            dry_run: Report what would change without writing
        """
        self.file_manager = file_manager
        self.analyzer = analyzer or UsageAnalyzer()
        self.dry_run = dry_run

    @staticmethod
    def _check_key(key: str):
        if not is_valid_key_name(key):
            raise ValueError(f"Invalid key name: '{key}'")

    def _save(self, store: LocaleStore, locales: List[str]) -> BatchResult:
        if self.dry_run:
            return BatchResult(succeeded=list(locales))
        return self.file_manager.save_all(store, locales)

    def set_value(self, key: str, value: str, locale: Optional[str] = None) -> bool:
        """
        Set one translation, creating the key (and its parents) if needed.

        Args:
            key: Dotted key
            value: Translation
            locale: Target locale (default locale when omitted)

        Raises:
            NotFoundError: If no locale exists
            ValueError: If the key name is invalid
        """
        self._check_key(key)
        store = self.file_manager.load()
        locale = locale or store.default_locale
        store.set_value(locale, key, value)
        return self._save(store, [locale]).ok

    def rename_key(self, old_key: str, new_key: str, update_references: bool = True) -> KeyChange:
        """
        Rename a key in every locale and, optionally, in the source files.

        Raises:
            NotFoundError: If no locale exists or no locale defines ``old_key``
            ValueError: If the new key name is invalid, or writing it would
                replace another key or object
        """
        self._check_key(new_key)
        store = self.file_manager.load()
        if not store.is_defined(old_key):
            raise NotFoundError(f"Key not defined in any locale: {old_key}")

        remaining = store.copy()
        for locale in remaining.locales:
            remaining.delete_key(locale, old_key)
        taken = [locale for locale in remaining.locales if remaining.has_node(locale, new_key)]
        if taken:
            raise ValueError(f"Key '{new_key}' already exists in: {', '.join(taken)}")

        change = KeyChange(new_key)
        change.locales = self._save(store, store.rename_key(old_key, new_key))

        if update_references:
            if self.dry_run:
                change.reference_files = [
                    self.analyzer.relative_path(path)
                    for path in self.analyzer.find_key_references(old_key)
                ]
            else:
                change.references = self.analyzer.rename_references(old_key, new_key)

        logger.info(f"Renamed '{old_key}' -> '{new_key}'")
        return change

    def delete_key(self, key: str) -> KeyChange:
        """
        Delete a key from every locale; empty parent objects are removed too.

        A locale that fails to save is reported without stopping the others.
        """
        store = self.file_manager.load()
        touched = [locale for locale in store.locales if store.delete_key(locale, key)]
        change = KeyChange(key)
        change.locales = self._save(store, touched)
        if not touched:
            logger.info(f"Key '{key}' is not defined in any locale")
        return change

    def delete_unused(self) -> KeyChange:
        """
        Delete every key no source file uses.

        The removed keys are listed in ``removed_keys``.
        """
        store = self.file_manager.load()
        unused = self.analyzer.analyze_corpus(store).unused

        touched = []
        for key in unused:
            for locale in store.locales:
                if store.delete_key(locale, key) and locale not in touched:
                    touched.append(locale)

        change = KeyChange('*', removed_keys=list(unused))
        change.locales = self._save(store, touched)
        logger.info(f"Removed {len(unused)} unused keys")
        return change

    def inline_key(
        self,
        key: str,
        locale: Optional[str] = None,
        delete: bool = False,
    ) -> KeyChange:
        """
        Replace references to a key with its text in one locale.

        Args:
            key: Key to inline
            locale: Locale providing the text (default locale when omitted)
            delete: Also delete the key from every locale

        Raises:
            NotFoundError: If the key has no value in the locale
        """
        store = self.file_manager.load()
        value = store.value_for(key, locale)
        if value is None:
            raise NotFoundError(f"Key '{key}' has no value in locale '{locale or store.default_locale}'")

        change = KeyChange(key)
        if self.dry_run:
            change.reference_files = [
                self.analyzer.relative_path(path)
                for path in self.analyzer.find_key_references(key)
            ]
        else:
            change.references = self.analyzer.replace_references_with_literal(key, value)

        if delete:
            touched = [name for name in store.locales if store.delete_key(name, key)]
            change.locales = self._save(store, touched)
        return change

    def print_change(self, action: str, change: KeyChange):
        """Print the result of a key operation."""
        prefix = f"{Colors.info('[DRY RUN]')} " if self.dry_run else ""
        print(f"\n{prefix}{Colors.bold(action)}: {change.key}")

        for key in change.removed_keys:
            print(f"  {Colors.dim('-')} {key}")

        for locale in change.locales.succeeded:
            print(f"  {Colors.success('✓')} locale {locale}")
        for locale, reason in change.locales.failed.items():
            print(f"  {Colors.error('✗')} locale {locale}: {reason}")

        for file_name in change.reference_files:
            print(f"  {Colors.info('→')} would update {file_name}")
        for file_name in change.references.succeeded:
            print(f"  {Colors.success('✓')} {file_name}")
        for file_name, reason in change.references.failed.items():
            print(f"  {Colors.error('✗')} {file_name}: {reason}")

        if change.references.success_count:
            print(f"  Updated {change.updated_file_count} file(s)")

