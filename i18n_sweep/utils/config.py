"""Configuration management for i18n-sweep."""

import re
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

CONFIG_FILE_NAME = '.i18n-sweep.yml'

KNOWN_FILE_KINDS = [
    'vue', 'js', 'ts', 'jsx', 'tsx', 'html', 'htm', 'css', 'scss', 'less',
]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class PathsConfig:
    """Where sources and locale files live."""
    source: str = "."
    locales_dir: str = "./locales"
    # Group 1 captures the locale name from a file name
    locale_file_pattern: str = r"(\w+)\.json"
    exclude: List[str] = field(default_factory=lambda: [
        'node_modules', '.git', 'dist', 'build', 'vendor', 'coverage',
    ])


@dataclass
class HardcodedConfig:
    """Hardcoded text detection settings."""
    file_kinds: List[str] = field(default_factory=lambda: list(KNOWN_FILE_KINDS))
    attribute_names: List[str] = field(default_factory=lambda: [
        'title', 'alt', 'content', 'description',
    ])


@dataclass
class UsageConfig:
    """Key usage analysis settings."""
    extensions: List[str] = field(default_factory=lambda: [
        '.vue', '.ts', '.js', '.jsx', '.tsx',
    ])


@dataclass
class EditorConfig:
    """Editor-facing toggles (display only)."""
    inline_translation_enabled: bool = False


@dataclass
class ReportsConfig:
    """Reports configuration."""
    output: str = "./i18n_reports/"


# camelCase option names accepted in the config file
_ALIASES = {
    'paths': {
        'localesDir': 'locales_dir',
        'localeFileNamePattern': 'locale_file_pattern',
        'localeFileRegex': 'locale_file_pattern',
    },
    'hardcoded': {
        'hardcodedFileKinds': 'file_kinds',
        'hardcodedFileTypes': 'file_kinds',
        'hardcodedAttributeNames': 'attribute_names',
        'hardcodedAttributes': 'attribute_names',
    },
    'editor': {
        'inlineTranslationEnabled': 'inline_translation_enabled',
        'enableInlineTranslation': 'inline_translation_enabled',
    },
}

# Top-level camelCase keys and the section they belong to
_TOP_LEVEL_ALIASES = {
    alias: section
    for section, aliases in _ALIASES.items()
    for alias in aliases
}


def _normalize_section(section: str, data: Dict[str, Any]) -> Dict[str, Any]:
    aliases = _ALIASES.get(section, {})
    return {aliases.get(key, key): value for key, value in (data or {}).items()}


@dataclass
class Config:
    """Main configuration class."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    hardcoded: HardcodedConfig = field(default_factory=HardcodedConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build a config from a parsed YAML mapping."""
        data = dict(data or {})
        sections: Dict[str, Dict[str, Any]] = {
            name: _normalize_section(name, data.get(name, {}))
            for name in ('paths', 'hardcoded', 'usage', 'editor', 'reports')
        }

        # Flat camelCase options (as in editor settings) land in their section
        for alias, section in _TOP_LEVEL_ALIASES.items():
            if alias in data:
                sections[section][_ALIASES[section][alias]] = data[alias]

        return cls(
            paths=PathsConfig(**sections['paths']),
            hardcoded=HardcodedConfig(**sections['hardcoded']),
            usage=UsageConfig(**sections['usage']),
            editor=EditorConfig(**sections['editor']),
            reports=ReportsConfig(**sections['reports']),
        )

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'paths': {
                'source': self.paths.source,
                'locales_dir': self.paths.locales_dir,
                'locale_file_pattern': self.paths.locale_file_pattern,
                'exclude': self.paths.exclude,
            },
            'hardcoded': {
                'file_kinds': self.hardcoded.file_kinds,
                'attribute_names': self.hardcoded.attribute_names,
            },
            'usage': {
                'extensions': self.usage.extensions,
            },
            'editor': {
                'inline_translation_enabled': self.editor.inline_translation_enabled,
            },
            'reports': {
                'output': self.reports.output,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @property
    def source_dir(self) -> Path:
        return Path(self.paths.source)

    @property
    def locales_path(self) -> Path:
        """Locale directory resolved against the source root."""
        locales = Path(self.paths.locales_dir)
        if locales.is_absolute():
            return locales
        return self.source_dir / locales

    def locale_file_regex(self) -> re.Pattern:
        return re.compile(self.paths.locale_file_pattern)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        try:
            pattern = re.compile(self.paths.locale_file_pattern)
            if pattern.groups < 1:
                errors.append(
                    f"locale_file_pattern must capture the locale name in a group: "
                    f"'{self.paths.locale_file_pattern}'"
                )
        except re.error as e:
            errors.append(f"Invalid locale_file_pattern '{self.paths.locale_file_pattern}': {e}")

        for kind in self.hardcoded.file_kinds:
            if kind.lower().lstrip('.') not in KNOWN_FILE_KINDS:
                warnings.append(ConfigValidationWarning(
                    f"Unknown file kind '{kind}' will be scanned with the generic scanner"
                ))

        for name in self.hardcoded.attribute_names:
            if not name or not re.match(r'^[A-Za-z_:][\w:.-]*$', name):
                errors.append(f"Invalid attribute name: '{name}'")

        for ext in self.usage.extensions:
            if not ext.startswith('.'):
                errors.append(f"usage.extensions entries must start with '.', got '{ext}'")

        if not self.source_dir.exists():
            warnings.append(ConfigValidationWarning(
                f"Source path does not exist: {self.paths.source}"
            ))
        elif not self.locales_path.exists():
            warnings.append(ConfigValidationWarning(
                f"Locales directory does not exist: {self.locales_path}"
            ))

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config(locales_dir: Optional[str] = None) -> Config:
    """Create default configuration, optionally pointing at a locales directory."""
    config = Config()
    if locales_dir:
        config.paths.locales_dir = locales_dir
    return config
