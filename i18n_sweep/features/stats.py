"""Per-locale translation progress."""

import json
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict
from datetime import datetime

from ..core.key_store import LocaleStore
from ..utils.colors import Colors


@dataclass
class LocaleProgress:
    """Translation progress of one locale."""
    locale: str
    total: int = 0
    translated: int = 0
    untranslated: int = 0
    progress: int = 100  # whole percent
    untranslated_keys: List[str] = field(default_factory=list)


@dataclass
class TranslationStats:
    """Progress of every locale against the union of defined keys."""
    generated_at: str = ""
    default_locale: Optional[str] = None
    total_keys: int = 0
    locales: List[LocaleProgress] = field(default_factory=list)

    @property
    def overall_progress(self) -> float:
        if not self.locales:
            return 100.0
        return sum(item.progress for item in self.locales) / len(self.locales)

    def for_locale(self, locale: str) -> Optional[LocaleProgress]:
        for item in self.locales:
            if item.locale == locale:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generated_at': self.generated_at,
            'default_locale': self.default_locale,
            'summary': {
                'total_locales': len(self.locales),
                'total_keys': self.total_keys,
                'overall_progress': round(self.overall_progress, 2),
            },
            'locales': [asdict(item) for item in self.locales],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class StatsCalculator:
    """
    Translation progress calculator.

    A key counts as translated in a locale when the locale defines it with a
    non-empty string. Every locale is measured against all keys defined in
    any locale, so a key present only in one locale shows up as untranslated
    everywhere else.
    """

    def calculate(self, store: LocaleStore) -> TranslationStats:
        all_keys = store.all_defined_keys()
        stats = TranslationStats(
            generated_at=datetime.now().isoformat(),
            default_locale=store.default_locale,
            total_keys=len(all_keys),
        )

        for locale in store.locales:
            untranslated = [key for key in all_keys if not store.get_value(locale, key)]
            translated = len(all_keys) - len(untranslated)
            progress = round(translated / len(all_keys) * 100) if all_keys else 100

            stats.locales.append(LocaleProgress(
                locale=locale,
                total=len(all_keys),
                translated=translated,
                untranslated=len(untranslated),
                progress=progress,
                untranslated_keys=untranslated,
            ))

        return stats

    def print_summary(self, stats: TranslationStats, show_keys: bool = False):
        """Print progress per locale."""
        print(f"\n{Colors.bold('📊 TRANSLATION PROGRESS')}")
        print("=" * 70)
        print(f"Generated: {stats.generated_at}")
        if stats.default_locale:
            print(f"Default locale: {stats.default_locale}")
        print(f"Total keys: {stats.total_keys}")
        print()

        for item in stats.locales:
            status = Colors.success('✓') if item.progress >= 100 else (
                Colors.warning('◐') if item.progress >= 80 else Colors.error('○')
            )
            print(f"  {status} {Colors.bold(item.locale)} ({item.translated}/{item.total})")
            print(f"     {self._completion_bar(item.progress)}")

            if show_keys and item.untranslated_keys:
                for key in item.untranslated_keys[:20]:
                    print(f"       - {key}")
                if len(item.untranslated_keys) > 20:
                    print(f"       ... and {len(item.untranslated_keys) - 20} more")
        print()

    def _completion_bar(self, percent: float, width: int = 20) -> str:
        filled = int(width * percent / 100)
        empty = width - filled

        if percent >= 100:
            color = Colors.success
        elif percent >= 80:
            color = Colors.warning
        else:
            color = Colors.error

        bar = color('█' * filled) + '░' * empty
        return f"[{bar}] {percent:.0f}%"

    def export_json(self, stats: TranslationStats, output_path: Path):
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(stats.to_json())

        print(f"{Colors.success('✓')} Stats exported to: {output_path}")

    def export_markdown(self, stats: TranslationStats, output_path: Path):
        output_path.parent.mkdir(parents=True, exist_ok=True)

        lines = [
            "# Translation Progress",
            "",
            f"**Generated:** {stats.generated_at}",
            f"**Default Locale:** {stats.default_locale or '-'}",
            f"**Total Keys:** {stats.total_keys}",
            "",
            "| Locale | Translated | Untranslated | Progress |",
            "|--------|------------|--------------|----------|",
        ]

        for item in stats.locales:
            status = "✅" if item.progress >= 100 else ("🔶" if item.progress >= 80 else "❌")
            lines.append(
                f"| {status} {item.locale} | {item.translated} | "
                f"{item.untranslated} | {item.progress}% |"
            )

        pending = [item for item in stats.locales if item.untranslated_keys]
        if pending:
            lines.extend(["", "## Untranslated Keys", ""])
            for item in pending:
                lines.append(f"### {item.locale} - {item.untranslated} untranslated")
                lines.append("")
                for key in item.untranslated_keys[:20]:
                    lines.append(f"- `{key}`")
                if len(item.untranslated_keys) > 20:
                    lines.append(f"- ... and {len(item.untranslated_keys) - 20} more")
                lines.append("")

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

        print(f"{Colors.success('✓')} Stats exported to: {output_path}")
