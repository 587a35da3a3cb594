"""Console report generator."""

from typing import Dict, List, Optional

from ..core.analyzer import ProjectAnalysis
from ..core.health_calculator import HealthCalculator, HealthScore
from ..features.stats import TranslationStats
from ..scanners.base import TextSpan
from ..utils.colors import Colors


class ConsoleReporter:
    """Print analysis results to the terminal."""

    @staticmethod
    def print_full_report(
        analysis: ProjectAnalysis,
        stats: Optional[TranslationStats] = None,
        show_details: bool = False
    ):
        """
        Print the project report.

        Args:
            analysis: Project analysis
            stats: Translation progress per locale
            show_details: Also list hardcoded texts and keys
        """
        ConsoleReporter._print_header()
        ConsoleReporter._print_health_score(analysis.health)
        if stats is not None:
            ConsoleReporter._print_locale_progress(stats)

        if show_details:
            ConsoleReporter.print_hardcoded(analysis.hardcoded, limit=10)
            ConsoleReporter._print_missing_keys(analysis.missing_keys, limit=10)
            ConsoleReporter._print_unused_keys(analysis.usage.unused, limit=10)
            ConsoleReporter._print_repeated_texts(analysis.repeated_texts, limit=5)

        ConsoleReporter._print_recommendations(analysis.health)

    @staticmethod
    def _print_header():
        print("\n" + "=" * 70)
        print(f"{Colors.bold('📊 I18N SWEEP REPORT')}")
        print("=" * 70)

    @staticmethod
    def _print_health_score(health: HealthScore):
        print(f"\n{Colors.bold('🏥 HEALTH SCORE')}")
        print("-" * 70)

        grade_color = HealthCalculator.get_grade_color(health.grade)
        print(f"Overall Score: {grade_color}{health.score}/100 ({health.grade}){Colors.ENDC}")
        print(f"Coverage: {health.coverage}%")
        print()
        print(f"✅ Translation Calls: {health.translation_calls:,}")
        print(f"⚠️  Hardcoded Texts: {health.hardcoded_count}")
        print(f"🔴 Missing Keys: {health.missing_keys_count}")
        print(f"🟡 Unused Keys: {health.unused_keys_count}")
        print(f"📦 Repeated Texts: {health.repeated_texts_count}")

    @staticmethod
    def _print_locale_progress(stats: TranslationStats):
        print(f"\n{Colors.bold('🌍 LOCALES')}")
        print("-" * 70)

        if not stats.locales:
            print("No locales found")
            return

        print(f"{'Locale':<15} {'Translated':<12} {'Missing':<10} {'Progress':<15}")
        print("-" * 70)

        for item in stats.locales:
            bar = ConsoleReporter._create_progress_bar(item.progress)
            print(f"{item.locale:<15} {item.translated:<12} {item.untranslated:<10} {bar}")

    @staticmethod
    def print_hardcoded(hardcoded: Dict[str, List[TextSpan]], limit: Optional[int] = None):
        """Print hardcoded spans grouped by file (1-based line numbers)."""
        if not hardcoded:
            return

        total = sum(len(spans) for spans in hardcoded.values())
        print(f"\n{Colors.bold('⚠️  HARDCODED TEXT')} ({total})")
        print("-" * 70)

        shown = 0
        for file_name, spans in hardcoded.items():
            if limit is not None and shown >= limit:
                break
            print(f"{Colors.info(file_name)}")
            for span in spans:
                if limit is not None and shown >= limit:
                    break
                text = span.text if len(span.text) <= 50 else span.text[:50] + '...'
                label = span.attribute_name or span.kind.value
                print(f"   {span.start.line + 1}:{span.start.column + 1} "
                      f"[{Colors.dim(label)}] \"{text}\"")
                shown += 1

        if limit is not None and total > limit:
            print(f"\n... and {total - limit} more")

    @staticmethod
    def _print_missing_keys(missing: Dict[str, List[str]], limit: int = 10):
        if not missing:
            return

        print(f"\n{Colors.bold('🔴 MISSING KEYS (used in code, defined in no locale)')}")
        print("-" * 70)

        for i, (key, files) in enumerate(list(missing.items())[:limit], 1):
            print(f"{i}. {Colors.warning(key)}")
            print(f"   Used in {len(files)} file(s): {', '.join(files[:3])}")
            if len(files) > 3:
                print(f"   ... and {len(files) - 3} more")

        if len(missing) > limit:
            print(f"\n... and {len(missing) - limit} more")

    @staticmethod
    def _print_unused_keys(unused: List[str], limit: int = 10):
        if not unused:
            return

        print(f"\n{Colors.bold('🟡 UNUSED KEYS (defined but never used)')}")
        print("-" * 70)

        for i, key in enumerate(unused[:limit], 1):
            print(f"{i}. {key}")

        if len(unused) > limit:
            print(f"\n... and {len(unused) - limit} more")

    @staticmethod
    def _print_repeated_texts(repeated: Dict[str, List[str]], limit: int = 5):
        if not repeated:
            return

        print(f"\n{Colors.bold('📦 REPEATED HARDCODED TEXT')}")
        print("-" * 70)

        ordered = sorted(repeated.items(), key=lambda x: len(x[1]), reverse=True)
        for i, (text, files) in enumerate(ordered[:limit], 1):
            print(f"{i}. \"{text[:50]}\" ({len(files)} files)")
            for file_name in files[:3]:
                print(f"   - {file_name}")
            if len(files) > 3:
                print(f"   ... and {len(files) - 3} more")

    @staticmethod
    def _print_recommendations(health: HealthScore):
        recommendations = HealthCalculator.get_recommendations(health)

        if not recommendations:
            return

        print(f"\n{Colors.bold('💡 RECOMMENDATIONS')}")
        print("-" * 70)

        for rec in recommendations:
            print(f"   {rec}")

        print()

    @staticmethod
    def _create_progress_bar(percent: float, width: int = 20) -> str:
        filled = int(width * percent / 100)
        bar = '█' * filled + '░' * (width - filled)

        if percent >= 90:
            color = Colors.OKGREEN
        elif percent >= 70:
            color = Colors.OKCYAN
        else:
            color = Colors.WARNING

        return f"{color}{bar}{Colors.ENDC} {percent:.0f}%"
