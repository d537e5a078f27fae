"""Unit tests for critical path identification."""

import pytest

from chronos.analysis import analyze_critical_path, get_critical_activities, is_critical
from chronos.schemas import Activity
from chronos.xer.reader import load_xer_text


class TestIsCritical:
    """Test the critical predicate."""

    @pytest.mark.parametrize("float_hours,driving,expected", [
        (0, False, True),
        (0, True, True),
        (16, True, True),
        (16, False, False),
        (-5, False, False),
        (-5, True, True),
    ])
    def test_float_and_driving_flag(self, float_hours, driving, expected):
        """Zero float or the driving flag makes an activity critical."""
        activity = Activity(task_id='T1', total_float_hr_cnt=float_hours, driving_path_flag=driving)
        assert is_critical(activity) is expected


class TestCriticalPathAnalysis:
    """Test the critical path summary on the sample schedule."""

    def test_sample_counts(self, sample_model):
        """Three of four sample activities have zero float."""
        result = analyze_critical_path(sample_model)
        assert result.total_activities == 4
        assert result.critical_count == 3
        assert result.critical_percentage == pytest.approx(75.0)
        assert result.get_summary() == '3 of 4 activities critical (75.0%)'

    def test_critical_activities_sorted_by_start(self, sample_model):
        """Critical activities are listed by start date."""
        result = analyze_critical_path(sample_model, '100')
        assert [a.id for a in result.critical_activities] == ['T1', 'T2', 'T4']

    def test_float_distribution(self, sample_model):
        """Every activity lands in exactly one float bucket."""
        result = analyze_critical_path(sample_model)
        assert result.float_distribution == {'0 (critical)': 3, '9-40 hrs (1-5 days)': 1}
        assert sum(result.float_distribution.values()) == result.total_activities

    def test_get_critical_activities_keeps_file_order(self, sample_model):
        """The plain list keeps file order."""
        assert [a.id for a in get_critical_activities(sample_model)] == ['T1', 'T2', 'T4']

    def test_negative_float_activity_excluded(self, xer_builder, xer_fields, make_task_row):
        """A behind-schedule activity without the driving flag is not critical."""
        text = xer_builder({
            'TASK': (xer_fields['TASK'], [
                make_task_row('A', 'A', 'Alpha', duration='8', float_hours='-5'),
                make_task_row('B', 'B', 'Beta', duration='8', float_hours='0'),
            ]),
        })
        result = analyze_critical_path(load_xer_text(text))
        assert [a.id for a in result.critical_activities] == ['B']
        assert result.float_distribution['<0 hrs (negative)'] == 1

    def test_unknown_project_is_empty(self, sample_model):
        """No activities gives zero counts and 0%."""
        result = analyze_critical_path(sample_model, 'nope')
        assert result.total_activities == 0
        assert result.critical_percentage == 0.0
        assert result.critical_activities == []
