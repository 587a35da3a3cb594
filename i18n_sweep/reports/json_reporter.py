"""JSON report generator."""

import json
from pathlib import Path
from datetime import datetime
from typing import Optional

from ..__version__ import __version__
from ..core.analyzer import ProjectAnalysis
from ..features.stats import TranslationStats
from ..utils.colors import Colors


class JSONReporter:
    """Write analysis results as JSON."""

    @staticmethod
    def build(analysis: ProjectAnalysis, stats: Optional[TranslationStats] = None) -> dict:
        """Report structure (also used by ``scan --json``)."""
        report = {
            'metadata': {
                'generated_at': datetime.now().isoformat(),
                'version': __version__,
            },
            'health_score': analysis.health.to_dict(),
            'usage': analysis.usage.to_dict(),
            'hardcoded': {
                file_name: [span.to_dict() for span in spans]
                for file_name, spans in analysis.hardcoded.items()
            },
            'repeated_texts': analysis.repeated_texts,
        }
        if stats is not None:
            report['locales'] = stats.to_dict()
        return report

    @staticmethod
    def generate(
        analysis: ProjectAnalysis,
        stats: Optional[TranslationStats] = None,
        output_path: Optional[Path] = None,
        pretty: bool = True
    ) -> Path:
        """
        Generate JSON report.

        Args:
            analysis: Project analysis
            stats: Translation progress per locale
            output_path: Output file path
            pretty: Pretty print JSON

        Returns:
            Path to generated report
        """
        if output_path is None:
            output_path = Path.cwd() / 'i18n_report.json'

        report = JSONReporter.build(analysis, stats)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(report, f, indent=2, ensure_ascii=False)
            else:
                json.dump(report, f, ensure_ascii=False)

        print(f"\n{Colors.success('✓')} JSON report: {output_path}")

        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
