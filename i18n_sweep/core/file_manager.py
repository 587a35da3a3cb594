"""Locale file discovery and JSON persistence."""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..utils.logging import get_logger
from .errors import BatchResult, MalformedInputError, NotFoundError
from .key_store import LocaleMapping, LocaleStore

logger = get_logger('file_manager')

DEFAULT_LOCALE_FILE_PATTERN = r'(\w+)\.json'


class LocaleFileManager:
    """
    Manages one JSON file per locale in a locales directory.

    Locale names come from group 1 of ``pattern`` matched against each file
    name. Files are considered in sorted name order, so the default locale
    (the first one discovered) is stable across runs.
    """

    def __init__(
        self,
        locales_dir: Path,
        pattern: Union[str, re.Pattern] = DEFAULT_LOCALE_FILE_PATTERN,
    ):
        """
        Initialize file manager.

        Args:
            locales_dir: Directory containing locale files
            pattern: Regex capturing the locale name from a file name
        """
        self.locales_dir = Path(locales_dir)
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.files: Dict[str, Path] = {}  # locale -> file path
        self.load_errors: List[MalformedInputError] = []

    def discover(self) -> Dict[str, Path]:
        """
        Find locale files.

        Returns:
            locale -> path, in discovery order (empty when the directory is missing)
        """
        self.files = {}
        if not self.locales_dir.is_dir():
            logger.warning(f"Locales directory not found: {self.locales_dir}")
            return {}

        for file_path in sorted(self.locales_dir.iterdir()):
            if not file_path.is_file():
                continue
            match = self.pattern.search(file_path.name)
            if not match:
                continue

            locale = match.group(1)
            if locale in self.files:
                logger.warning(
                    f"Ignoring {file_path.name}: locale '{locale}' already read from "
                    f"{self.files[locale].name}"
                )
                continue
            self.files[locale] = file_path

        logger.debug(f"Discovered {len(self.files)} locales in {self.locales_dir}")
        return dict(self.files)

    @property
    def locales(self) -> List[str]:
        return list(self.files)

    @property
    def default_locale(self) -> Optional[str]:
        return self.locales[0] if self.files else None

    def require_locales(self) -> None:
        """Raise NotFoundError unless at least one locale was discovered."""
        if not self.files:
            self.discover()
        if not self.files:
            raise NotFoundError(
                f"No locale files matching '{self.pattern.pattern}' in {self.locales_dir}",
                path=self.locales_dir,
            )

    def read_locale(self, locale: str) -> LocaleMapping:
        """
        Read one locale file.

        Raises:
            MalformedInputError: If the file is not a JSON object
        """
        path = self.files[locale]
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInputError(locale, path, f"invalid JSON: {e}") from e
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise MalformedInputError(locale, path, str(e)) from e

        if not isinstance(data, dict):
            raise MalformedInputError(locale, path, f"expected an object, got {type(data).__name__}")
        return data

    def load(self) -> LocaleStore:
        """
        Load every discovered locale.

        A malformed locale is loaded as an empty mapping and recorded in
        ``load_errors``; the other locales are unaffected.

        Raises:
            NotFoundError: If no locale file exists
        """
        self.require_locales()
        self.load_errors = []
        store = LocaleStore()

        for locale in self.files:
            try:
                store.add_locale(locale, self.read_locale(locale))
            except MalformedInputError as e:
                logger.warning(str(e))
                self.load_errors.append(e)
                store.add_locale(locale, {})

        return store

    def path_for(self, locale: str) -> Path:
        """Existing file for a locale, or the file a new locale would use."""
        if locale in self.files:
            return self.files[locale]
        return self.locales_dir / f"{locale}.json"

    def save(self, locale: str, mapping: LocaleMapping) -> bool:
        """
        Replace a locale file with a mapping.

        The JSON is written to a temporary file in the same directory and
        moved over the target, so readers never see a partial file.

        Returns:
            True on success, False if the file could not be written
        """
        path = self.path_for(locale)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix='.tmp',
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(mapping, f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.replace(tmp_name, path)
        except (IOError, OSError) as e:
            logger.error(f"Cannot write locale '{locale}' to {path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False

        self.files.setdefault(locale, path)
        logger.debug(f"Saved locale '{locale}' to {path}")
        return True

    def save_all(self, store: LocaleStore, locales: Optional[List[str]] = None) -> BatchResult:
        """Save several locales (all by default); one failure does not stop the rest."""
        result = BatchResult()
        for locale in (store.locales if locales is None else locales):
            if self.save(locale, store.mapping(locale)):
                result.add_success(locale)
            else:
                result.add_failure(locale, f"could not write {self.path_for(locale)}")
        return result
