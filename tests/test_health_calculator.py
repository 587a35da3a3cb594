"""Tests for HealthCalculator and HealthScore."""

import pytest
from i18n_sweep.core.health_calculator import HealthCalculator, HealthScore
from i18n_sweep.utils.colors import Colors


def make_health(**overrides):
    values = dict(
        score=100, grade='A+', translation_calls=100, hardcoded_count=0,
        total_texts=100, coverage=100.0, missing_keys_count=0,
        unused_keys_count=0, repeated_texts_count=0,
    )
    values.update(overrides)
    return HealthScore(**values)


class TestHealthScore:
    """Test cases for HealthScore dataclass."""

    def test_to_dict(self):
        """to_dict should expose every count."""
        data = make_health(hardcoded_count=3, unused_keys_count=2).to_dict()

        assert data['score'] == 100
        assert data['grade'] == 'A+'
        assert data['hardcoded_count'] == 3
        assert data['unused_keys'] == 2
        assert data['missing_keys'] == 0
        assert data['repeated_texts'] == 0


class TestHealthCalculatorCalculate:
    """Test cases for HealthCalculator.calculate method."""

    def test_perfect_score(self):
        """All text translated with no issues should score 100."""
        result = HealthCalculator.calculate(
            translation_calls=100,
            hardcoded_count=0,
            missing_keys=[],
            unused_keys=[],
            repeated_texts={}
        )

        assert result.score == 100.0
        assert result.grade == 'A+'
        assert result.coverage == 100.0

    def test_no_texts(self):
        """Empty project should return perfect score."""
        result = HealthCalculator.calculate(0, 0, [], [], {})

        assert result.score == 100.0
        assert result.total_texts == 0

    def test_all_hardcoded(self):
        result = HealthCalculator.calculate(0, 10, [], [], {})

        assert result.score == 0.0
        assert result.grade == 'F'
        assert result.coverage == 0.0

    def test_mixed(self):
        result = HealthCalculator.calculate(80, 20, [], [], {})

        assert result.coverage == 80.0
        assert result.score == 80.0
        assert result.grade == 'B'
        assert result.total_texts == 100

    def test_missing_keys_penalty(self):
        """Each missing key costs half a point."""
        result = HealthCalculator.calculate(100, 0, ['a', 'b', 'c', 'd'], [], {})
        assert result.score == 98.0
        assert result.missing_keys_count == 4

    def test_unused_keys_penalty(self):
        result = HealthCalculator.calculate(100, 0, [], [f'k{i}' for i in range(10)], {})
        assert result.score == 99.0

    def test_repeated_texts_penalty(self):
        repeated = {'Save': ['a.vue', 'b.vue'], 'Cancel': ['a.vue', 'c.vue']}
        result = HealthCalculator.calculate(100, 0, [], [], repeated)
        assert result.score == 99.6
        assert result.repeated_texts_count == 2

    def test_penalty_caps(self):
        result = HealthCalculator.calculate(
            100, 0,
            [f'm{i}' for i in range(100)],
            [f'u{i}' for i in range(100)],
            {f't{i}': ['a', 'b'] for i in range(100)},
        )
        assert result.score == 80.0

    def test_score_clamped_to_zero(self):
        result = HealthCalculator.calculate(0, 5, ['a'] * 50, [], {})
        assert result.score == 0.0


class TestGrades:
    """Test cases for grade_for and get_grade_color."""

    @pytest.mark.parametrize('score,grade', [
        (100, 'A+'), (95, 'A+'), (94.9, 'A'), (90, 'A'), (85, 'B'),
        (70, 'C'), (65, 'D'), (59.9, 'F'), (0, 'F'),
    ])
    def test_grade_for(self, score, grade):
        assert HealthCalculator.grade_for(score) == grade

    def test_grade_colors(self):
        assert HealthCalculator.get_grade_color('A+') == Colors.OKGREEN
        assert HealthCalculator.get_grade_color('B') == Colors.OKCYAN
        assert HealthCalculator.get_grade_color('D') == Colors.WARNING
        assert HealthCalculator.get_grade_color('F') == Colors.FAIL
        assert HealthCalculator.get_grade_color('?') == Colors.ENDC


class TestGetRecommendations:
    """Test cases for recommendations generation."""

    def test_no_issues(self):
        """Perfect project should have only positive message."""
        recs = HealthCalculator.get_recommendations(make_health())

        assert len(recs) == 1
        assert 'Excellent' in recs[0]

    def test_hardcoded_recommendation(self):
        recs = HealthCalculator.get_recommendations(
            make_health(hardcoded_count=20, coverage=80.0)
        )
        assert any('i18n-sweep extract' in r and '20' in r for r in recs)

    def test_missing_keys_recommendation(self):
        recs = HealthCalculator.get_recommendations(make_health(missing_keys_count=5))
        assert any('missing' in r.lower() for r in recs)

    def test_unused_keys_recommendation(self):
        recs = HealthCalculator.get_recommendations(make_health(unused_keys_count=3))
        assert any('delete --unused' in r for r in recs)

    def test_low_coverage_warning(self):
        recs = HealthCalculator.get_recommendations(make_health(coverage=50.0))
        assert any('below 80%' in r for r in recs)
