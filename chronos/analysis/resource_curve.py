"""
Time-phased resource curves.

Spreads each assignment's target and actual quantity and cost across
fixed-width buckets (weekly by default) in proportion to how much of the
activity's span falls inside each bucket.

Algorithm:
1. Pair each of the resource's assignments with its activity. The activity
   span is actual start/finish, falling back to early start/finish. Pairs
   without both dates (or with finish before start) are skipped.
2. The window runs from the earliest start to the latest finish.
3. Buckets begin at the window start and step by ``bucket_days`` until the
   window end is reached. The last bucket may extend past the window end.
4. ratio = overlap(activity span, bucket) / activity span. Ratios over the
   buckets an activity touches sum to 1.
5. Zero-length spans (milestones) get ratio 1 in the single bucket holding
   their date, so their values are not lost.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from chronos.config.settings import settings
from chronos.schemas import Activity, Assignment
from .models import ActiveActivity, CurveBucket, ResourceCurve

logger = logging.getLogger(__name__)


@dataclass
class _SpanItem:
    """An assignment paired with its activity span."""

    activity: Activity
    assignment: Assignment
    start: datetime
    end: datetime

    @property
    def span(self) -> timedelta:
        return self.end - self.start


def _collect_spans(model, assignments: list[Assignment]) -> list[_SpanItem]:
    items = []
    skipped = 0
    for assignment in assignments:
        activity = model.get_activity(assignment.activity_id)
        if activity is None:
            skipped += 1
            continue
        start, end = activity.start_date, activity.end_date
        if start is None or end is None or end < start:
            skipped += 1
            continue
        items.append(_SpanItem(activity, assignment, start, end))

    if skipped:
        logger.debug(f"Skipped {skipped} assignments without a usable activity span")
    items.sort(key=lambda item: item.start)
    return items


def build_buckets(window_start: datetime, window_end: datetime, bucket_days: int) -> list[CurveBucket]:
    """
    Partition [window_start, window_end] into fixed-width buckets.

    At least one bucket is always returned; a bucket is added only while its
    start is before the window end. A window ending exactly on a boundary
    therefore gets no trailing empty bucket, deliberately unlike a
    start-on-or-before-end loop.

    Raises:
        ValueError: If bucket_days is not positive
    """
    if bucket_days <= 0:
        raise ValueError(f"bucket_days must be positive, got {bucket_days}")
    step = timedelta(days=bucket_days)
    buckets = []
    current = window_start
    while True:
        buckets.append(CurveBucket(bucket_start=current, bucket_end=current + step))
        current = current + step
        if current >= window_end:
            break
    return buckets


def overlap_ratio(start: datetime, end: datetime, bucket_start: datetime, bucket_end: datetime) -> float:
    """
    Share of [start, end] that falls inside [bucket_start, bucket_end].

    Returns 0.0 for zero-length spans; milestones are placed separately.
    """
    span = (end - start).total_seconds()
    if span <= 0:
        return 0.0
    overlap_start = max(start, bucket_start)
    overlap_end = min(end, bucket_end)
    overlap = max(0.0, (overlap_end - overlap_start).total_seconds())
    return overlap / span


def _milestone_bucket_index(moment: datetime, window_start: datetime, bucket_days: int, bucket_count: int) -> int:
    step = timedelta(days=bucket_days).total_seconds()
    index = int((moment - window_start).total_seconds() // step)
    return min(max(index, 0), bucket_count - 1)


def _allocate(bucket: CurveBucket, item: _SpanItem, ratio: float) -> None:
    assignment = item.assignment
    share = ActiveActivity(
        activity=item.activity,
        assignment=assignment,
        ratio=ratio,
        target_qty=assignment.target_quantity * ratio,
        actual_qty=assignment.actual_quantity * ratio,
        target_cost=assignment.target_cost * ratio,
        actual_cost=assignment.actual_cost * ratio,
    )
    bucket.weekly_target_qty += share.target_qty
    bucket.weekly_actual_qty += share.actual_qty
    bucket.weekly_target_cost += share.target_cost
    bucket.weekly_actual_cost += share.actual_cost
    bucket.active_activities.append(share)


def get_resource_curve(
    model,
    resource_id: str,
    project_id: Optional[str] = None,
    bucket_days: Optional[int] = None,
) -> ResourceCurve:
    """
    Build the time-phased curve for one resource.

    Args:
        model: ScheduleModel to read
        resource_id: Resource to chart
        project_id: Restrict to one project's assignments (None for all)
        bucket_days: Bucket width in days (default: settings.CURVE_BUCKET_DAYS)

    Returns:
        ResourceCurve; time_based_data is empty when no assignment has a
        usable activity span

    Raises:
        ValueError: If bucket_days is not positive
    """
    if bucket_days is None:
        bucket_days = settings.CURVE_BUCKET_DAYS
    if bucket_days <= 0:
        raise ValueError(f"bucket_days must be positive, got {bucket_days}")
    curve = ResourceCurve(resource_id=resource_id, resource=model.get_resource(resource_id))

    assignments = model.get_assignments_by_resource(resource_id)
    if project_id is not None:
        in_project = {id(a) for a in model.get_assignments_by_project(project_id)}
        assignments = [a for a in assignments if id(a) in in_project]

    items = _collect_spans(model, assignments)
    if not items:
        return curve

    window_start = min(item.start for item in items)
    window_end = max(item.end for item in items)
    buckets = build_buckets(window_start, window_end, bucket_days)

    for item in items:
        if item.span.total_seconds() == 0:
            index = _milestone_bucket_index(item.start, window_start, bucket_days, len(buckets))
            _allocate(buckets[index], item, 1.0)
            continue
        for bucket in buckets:
            # Buckets are ordered; nothing later can overlap
            if bucket.bucket_start > item.end:
                break
            ratio = overlap_ratio(item.start, item.end, bucket.bucket_start, bucket.bucket_end)
            if ratio > 0:
                _allocate(bucket, item, ratio)

    curve.time_based_data = buckets
    logger.debug(f"Resource {resource_id}: {len(items)} assignments over {len(buckets)} buckets")
    return curve


def get_all_resource_curves(model, project_id: Optional[str] = None) -> dict[str, ResourceCurve]:
    """Curves for every resource that has at least one assignment."""
    resource_ids = []
    for assignment in model.get_assignments_by_project(project_id):
        if assignment.resource_id not in resource_ids:
            resource_ids.append(assignment.resource_id)
    return {rid: get_resource_curve(model, rid, project_id=project_id) for rid in resource_ids}
