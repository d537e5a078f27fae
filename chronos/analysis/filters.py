"""
Activity and assignment filters.
"""

from typing import Iterable, Optional

from chronos.schemas import Activity, Assignment


def _matches_text(activity: Optional[Activity], text: str) -> bool:
    if activity is None:
        return False
    needle = text.lower()
    return needle in activity.name.lower() or needle in activity.code.lower()


def filter_activities(
    activities: Iterable[Activity],
    status: Optional[str] = None,
    min_duration: float = 0,
    max_duration: Optional[float] = None,
    name: Optional[str] = None,
) -> list[Activity]:
    """
    Filter activities by status, duration range and name/code text.

    Args:
        activities: Activities to filter
        status: Status code to match exactly (None or '' for any)
        min_duration: Minimum duration in hours, inclusive
        max_duration: Maximum duration in hours, inclusive (None for no limit)
        name: Case-insensitive substring of name or code (None or '' for any)

    Returns:
        Matching activities in input order
    """
    result = []
    for activity in activities:
        if status and activity.status_code != status:
            continue
        if activity.duration_hours < min_duration:
            continue
        if max_duration is not None and activity.duration_hours > max_duration:
            continue
        if name and not _matches_text(activity, name):
            continue
        result.append(activity)
    return result


def filter_assignments(
    model,
    assignments: Iterable[Assignment],
    resource_id: Optional[str] = None,
    activity_text: Optional[str] = None,
    min_cost: float = 0,
) -> list[Assignment]:
    """
    Filter assignments by resource, activity text and minimum target cost.

    An assignment whose activity is unknown never matches a text filter.
    """
    result = []
    for assignment in assignments:
        if resource_id and assignment.resource_id != resource_id:
            continue
        if assignment.target_cost < min_cost:
            continue
        if activity_text and not _matches_text(model.get_activity(assignment.activity_id), activity_text):
            continue
        result.append(assignment)
    return result
