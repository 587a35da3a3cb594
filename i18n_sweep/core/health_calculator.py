"""Localization coverage health score."""

from typing import Dict, List
from dataclasses import dataclass


@dataclass
class HealthScore:
    """Coverage score and the counts it was computed from."""
    score: float  # 0-100
    grade: str  # A+, A, B, C, D, F
    translation_calls: int
    hardcoded_count: int
    total_texts: int
    coverage: float  # percentage of texts going through a translation call
    missing_keys_count: int
    unused_keys_count: int
    repeated_texts_count: int

    def to_dict(self) -> Dict:
        return {
            'score': self.score,
            'grade': self.grade,
            'translation_calls': self.translation_calls,
            'hardcoded_count': self.hardcoded_count,
            'total_texts': self.total_texts,
            'coverage': self.coverage,
            'missing_keys': self.missing_keys_count,
            'unused_keys': self.unused_keys_count,
            'repeated_texts': self.repeated_texts_count,
        }


class HealthCalculator:
    """Turns corpus counts into a score and letter grade."""

    GRADE_THRESHOLDS = {
        'A+': 95,
        'A': 90,
        'B': 80,
        'C': 70,
        'D': 60,
        'F': 0,
    }

    MISSING_KEY_PENALTY = 0.5
    UNUSED_KEY_PENALTY = 0.1
    REPEATED_TEXT_PENALTY = 0.2

    # Caps, in percentage points
    MAX_PENALTY_MISSING = 10
    MAX_PENALTY_UNUSED = 5
    MAX_PENALTY_REPEATED = 5

    @classmethod
    def calculate(
        cls,
        translation_calls: int,
        hardcoded_count: int,
        missing_keys: List[str],
        unused_keys: List[str],
        repeated_texts: Dict[str, List[str]],
    ) -> HealthScore:
        """
        Calculate health score.

        Args:
            translation_calls: Number of translation calls found in sources
            hardcoded_count: Number of hardcoded text spans
            missing_keys: Keys used in sources but defined in no locale
            unused_keys: Keys defined in a locale but never used
            repeated_texts: Hardcoded text -> files it appears in (two or more)

        Returns:
            HealthScore object
        """
        total = translation_calls + hardcoded_count
        coverage = (translation_calls / total) * 100 if total else 100.0

        score = coverage
        score -= min(len(missing_keys) * cls.MISSING_KEY_PENALTY, cls.MAX_PENALTY_MISSING)
        score -= min(len(unused_keys) * cls.UNUSED_KEY_PENALTY, cls.MAX_PENALTY_UNUSED)
        score -= min(len(repeated_texts) * cls.REPEATED_TEXT_PENALTY, cls.MAX_PENALTY_REPEATED)
        score = max(0.0, min(100.0, score))

        return HealthScore(
            score=round(score, 1),
            grade=cls.grade_for(score),
            translation_calls=translation_calls,
            hardcoded_count=hardcoded_count,
            total_texts=total,
            coverage=round(coverage, 1),
            missing_keys_count=len(missing_keys),
            unused_keys_count=len(unused_keys),
            repeated_texts_count=len(repeated_texts),
        )

    @classmethod
    def grade_for(cls, score: float) -> str:
        for grade, threshold in cls.GRADE_THRESHOLDS.items():
            if score >= threshold:
                return grade
        return 'F'

    @classmethod
    def get_grade_color(cls, grade: str) -> str:
        from ..utils.colors import Colors

        grade_colors = {
            'A+': Colors.OKGREEN,
            'A': Colors.OKGREEN,
            'B': Colors.OKCYAN,
            'C': Colors.WARNING,
            'D': Colors.WARNING,
            'F': Colors.FAIL,
        }
        return grade_colors.get(grade, Colors.ENDC)

    @classmethod
    def get_recommendations(cls, health: HealthScore) -> List[str]:
        """Suggested next steps for a score."""
        recommendations = []

        if health.hardcoded_count > 0:
            recommendations.append(
                f"🔧 Extract {health.hardcoded_count} hardcoded text(s) into locale keys "
                f"(i18n-sweep extract)"
            )

        if health.missing_keys_count > 0:
            recommendations.append(
                f"🔍 Define {health.missing_keys_count} missing key(s) (i18n-sweep set)"
            )

        if health.unused_keys_count > 0:
            recommendations.append(
                f"🧹 Remove {health.unused_keys_count} unused key(s) (i18n-sweep delete --unused)"
            )

        if health.repeated_texts_count > 0:
            recommendations.append(
                f"♻️  {health.repeated_texts_count} hardcoded text(s) repeat across files; "
                f"extract them into shared keys"
            )

        if health.coverage < 80:
            recommendations.append("⚠️  Translation coverage is below 80%")
        elif health.coverage < 95:
            recommendations.append("💡 Good progress! A few hardcoded texts remain before A+")
        else:
            recommendations.append("✨ Excellent coverage! Keep new code localized")

        return recommendations
