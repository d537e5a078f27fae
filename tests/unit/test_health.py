"""Unit tests for the health score and earned value indicators."""

import pytest

from chronos.analysis import analyze_schedule_health, calculate_health_score, earned_value_metrics


class TestHealthScore:
    """Test score penalties."""

    @pytest.mark.parametrize("status_counts,critical,total,expected", [
        ({}, 0, 0, 100),
        ({'TK_Active': 10}, 1, 10, 100),
        ({'TK_Active': 10}, 3, 10, 90),
        ({'TK_Active': 10}, 4, 10, 80),
        ({'TK_NotStart': 7, 'TK_Active': 3}, 0, 10, 90),
        ({'TK_NotStart': 9, 'TK_Active': 1}, 0, 10, 85),
        ({'TK_NotStart': 10}, 10, 10, 65),
    ])
    def test_penalties(self, status_counts, critical, total, expected):
        """Critical and not-started shares each cost points."""
        assert calculate_health_score(status_counts, critical, total) == expected

    def test_sample_health(self, sample_model):
        """Three of four critical costs 20 points."""
        health = analyze_schedule_health(sample_model, '100')
        assert health.total_activities == 4
        assert health.critical_count == 3
        assert health.health_score == 80
        assert health.status_breakdown['TK_NotStart'] == 2


class TestEarnedValue:
    """Test duration-weighted earned value."""

    def test_sample_metrics(self, sample_model):
        """Half of the 80h excavation is earned."""
        ev = earned_value_metrics(sample_model)
        assert ev.planned_value == 120
        assert ev.earned_value == pytest.approx(40)
        assert ev.schedule_variance == pytest.approx(-80)
        assert ev.schedule_performance_index == pytest.approx(1 / 3)
        assert ev.cost_performance_index == pytest.approx(1.0)
        assert ev.cost_variance == 0

    def test_no_activities(self, sample_model):
        """Indices are zero when nothing is planned."""
        ev = earned_value_metrics(sample_model, 'none')
        assert ev.schedule_performance_index == 0.0
        assert ev.cost_performance_index == 0.0
