"""
Critical Path Analysis.

Identifies critical activities from the float and driving-path values
already present in the schedule. No network pass is run; the exported
P6 float is trusted as-is.
"""

from datetime import datetime
from collections import defaultdict
from typing import Optional

from chronos.schemas import Activity
from chronos.utils.helpers import percentage
from .models import CriticalPathSummary


def is_critical(activity: Activity) -> bool:
    """
    Critical iff total float is exactly zero or the driving-path flag is set.

    Negative float alone does not make an activity critical.
    """
    return activity.total_float_hours == 0 or activity.driving_path_flag


def get_critical_activities(model, project_id: Optional[str] = None) -> list[Activity]:
    """
    Get critical activities for a project.

    Args:
        model: ScheduleModel to read
        project_id: Project to filter on (None for all activities)

    Returns:
        Critical activities in file order
    """
    return [a for a in model.get_activities_by_project(project_id) if is_critical(a)]


def _float_bucket(float_hours: float) -> str:
    if float_hours < 0:
        return '<0 hrs (negative)'
    if float_hours == 0:
        return '0 (critical)'
    if float_hours <= 8:
        return '1-8 hrs (< 1 day)'
    if float_hours <= 40:
        return '9-40 hrs (1-5 days)'
    if float_hours <= 80:
        return '41-80 hrs (5-10 days)'
    if float_hours <= 160:
        return '81-160 hrs (10-20 days)'
    return '>160 hrs (> 20 days)'


def analyze_critical_path(model, project_id: Optional[str] = None) -> CriticalPathSummary:
    """
    Summarize critical activities and the float distribution.

    Args:
        model: ScheduleModel to analyze
        project_id: Project to filter on (None for all activities)

    Returns:
        CriticalPathSummary with counts, percentage and critical activities
        sorted by start date
    """
    activities = model.get_activities_by_project(project_id)

    critical = []
    float_buckets = defaultdict(int)
    for activity in activities:
        float_buckets[_float_bucket(activity.total_float_hours)] += 1
        if is_critical(activity):
            critical.append(activity)

    # Sort critical path by start date, undated last
    critical.sort(key=lambda a: a.start_date or datetime.max)

    return CriticalPathSummary(
        total_activities=len(activities),
        critical_count=len(critical),
        critical_percentage=percentage(len(critical), len(activities)),
        critical_activities=critical,
        float_distribution=dict(float_buckets),
    )


def print_critical_path_report(result: CriticalPathSummary, limit: int = 20) -> None:
    """Print a formatted critical path report."""
    print("=" * 80)
    print("CRITICAL PATH ANALYSIS REPORT")
    print("=" * 80)

    print(f"\nTotal Activities: {result.total_activities}")
    print(f"Critical Activities: {result.critical_count} ({result.critical_percentage:.1f}%)")

    if result.total_activities:
        print("\n--- Float Distribution ---")
        for bucket, count in sorted(result.float_distribution.items()):
            pct = count / result.total_activities * 100
            bar = '#' * int(pct / 2)
            print(f"  {bucket:25s}: {count:5d} ({pct:5.1f}%) {bar}")

    print(f"\n--- Critical Activities (first {limit}) ---")
    for i, activity in enumerate(result.critical_activities[:limit]):
        print(f"  {i+1:3d}. {activity.code[:20]:20s} | {activity.name[:40]:40s} | "
              f"{activity.duration_hours/8:.1f}d | Float: {activity.total_float_hours/8:.1f}d")

    if len(result.critical_activities) > limit:
        print(f"  ... and {len(result.critical_activities) - limit} more critical activities")

    print("\n" + "=" * 80)
