"""
Schedule health score and earned value indicators.

Both are heuristics over activity status and duration; earned value uses
duration as the value proxy because the activity table carries no cost.
"""

from collections import Counter
from typing import Optional

from chronos.schemas import ActivityStatus
from chronos.utils.helpers import percentage
from .critical_path import is_critical
from .models import EarnedValueMetrics, ScheduleHealth

# (threshold %, penalty) pairs, checked in order; first match applies
CRITICAL_SHARE_PENALTIES = ((30, 20), (20, 10))
NOT_STARTED_SHARE_PENALTIES = ((80, 15), (60, 10))


def _penalty(share: float, bands) -> int:
    for threshold, penalty in bands:
        if share > threshold:
            return penalty
    return 0


def calculate_health_score(status_counts: dict[str, int], critical_count: int, total_activities: int) -> int:
    """
    Score from 100 down, penalizing a large critical share and a schedule
    that has mostly not started. Never below 0.
    """
    if not total_activities:
        return 100

    score = 100
    score -= _penalty(percentage(critical_count, total_activities), CRITICAL_SHARE_PENALTIES)
    not_started = status_counts.get(ActivityStatus.NOT_STARTED.value, 0)
    score -= _penalty(percentage(not_started, total_activities), NOT_STARTED_SHARE_PENALTIES)
    return max(0, score)


def analyze_schedule_health(model, project_id: Optional[str] = None) -> ScheduleHealth:
    activities = model.get_activities_by_project(project_id)
    status_counts = dict(Counter(a.status_code or 'Unknown' for a in activities))
    critical_count = sum(1 for a in activities if is_critical(a))

    return ScheduleHealth(
        total_activities=len(activities),
        status_breakdown=status_counts,
        critical_count=critical_count,
        health_score=calculate_health_score(status_counts, critical_count, len(activities)),
    )


def earned_value_metrics(model, project_id: Optional[str] = None) -> EarnedValueMetrics:
    """
    Duration-weighted earned value.

    Planned value is total duration, earned value is duration times percent
    complete. Actual cost is taken equal to earned value, so CPI is 1
    whenever any work is earned.
    """
    planned_value = 0.0
    earned_value = 0.0
    for activity in model.get_activities_by_project(project_id):
        planned_value += activity.duration_hours
        earned_value += activity.duration_hours * activity.percent_complete / 100
    actual_cost = earned_value

    return EarnedValueMetrics(
        planned_value=planned_value,
        earned_value=earned_value,
        actual_cost=actual_cost,
        schedule_variance=earned_value - planned_value,
        cost_variance=earned_value - actual_cost,
        schedule_performance_index=earned_value / planned_value if planned_value > 0 else 0.0,
        cost_performance_index=earned_value / actual_cost if actual_cost > 0 else 0.0,
    )
