"""
Schedule summary statistics.
"""

from collections import Counter
from typing import Optional

from .models import DurationStats, SummaryStats


def get_duration_stats(activities) -> DurationStats:
    """Sum, mean, min and max over activities with positive duration."""
    durations = [a.duration_hours for a in activities if a.duration_hours > 0]
    if not durations:
        return DurationStats()
    total = sum(durations)
    return DurationStats(
        total=total,
        average=total / len(durations),
        min=min(durations),
        max=max(durations),
        count=len(durations),
    )


def get_summary_stats(model, project_id: Optional[str] = None) -> SummaryStats:
    """
    Compute collection counts, status and resource-type histograms and
    duration statistics.

    Args:
        model: ScheduleModel to summarize
        project_id: Restrict activity and assignment figures to one project
            (None summarizes the whole file)

    Returns:
        SummaryStats
    """
    activities = model.get_activities_by_project(project_id)
    assignments = model.get_assignments_by_project(project_id)

    status_counts = Counter(a.status_code or 'Unknown' for a in activities)
    resource_counts = Counter(r.type_code or 'Unknown' for r in model.resources)

    return SummaryStats(
        total_projects=len(model.projects),
        total_activities=len(activities),
        total_resources=len(model.resources),
        total_relationships=len(model.relationships),
        total_assignments=len(assignments),
        status_breakdown=dict(status_counts),
        resource_breakdown=dict(resource_counts),
        duration_stats=get_duration_stats(activities),
    )
