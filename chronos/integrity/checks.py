"""
The fourteen DCMA schedule checks.

Each check is a pure function of the collections it inspects and returns a
CheckResult. No check reads another's result, so they can run in any order.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from chronos.analysis.critical_path import is_critical
from chronos.schemas import Activity, Assignment, Relationship
from chronos.utils.helpers import percentage
from .config import (
    ACTIVE_STATUS,
    FAILED_ITEMS_LIMIT,
    HIGH_DURATION_HOURS,
    HIGH_FLOAT_HOURS,
    HOURS_PER_DAY,
    HOURS_PER_WEEK,
    LOGIC_SECONDARY_LIMIT,
    SOFT_CONSTRAINTS,
    STATUS_FAIL,
    STATUS_PASS,
    STATUS_WARNING,
    THRESHOLDS,
)
from .models import CheckResult

ActivityIndex = Mapping[str, Activity]


# =============================================================================
# Drill-down item builders
# =============================================================================

def _activity_item(activity: Activity, **extra) -> Dict:
    item = {
        'id': activity.id,
        'code': activity.code,
        'name': activity.name,
        'duration': activity.duration_hours,
    }
    item.update(extra)
    return item


def _relationship_item(rel: Relationship, activities: ActivityIndex) -> Dict:
    pred = activities.get(rel.predecessor_activity_id)
    succ = activities.get(rel.successor_activity_id)
    return {
        'id': rel.id,
        'pred_code': pred.code if pred else rel.predecessor_activity_id,
        'pred_name': pred.name if pred else 'Unknown',
        'succ_code': succ.code if succ else rel.successor_activity_id,
        'succ_name': succ.name if succ else 'Unknown',
        'lag_hours': rel.lag_hours,
        'type': rel.type_code or 'FS',
    }


def _pct(value: float) -> float:
    return round(value, 1)


def _lower_is_better(share: float, pass_max: float, warn_max: float) -> str:
    if share <= pass_max:
        return STATUS_PASS
    if share <= warn_max:
        return STATUS_WARNING
    return STATUS_FAIL


def _higher_is_better(share: float, pass_min: float, warn_min: float) -> str:
    if share >= pass_min:
        return STATUS_PASS
    if share >= warn_min:
        return STATUS_WARNING
    return STATUS_FAIL


# =============================================================================
# Checks 1-14
# =============================================================================

def check_logic(activities: Sequence[Activity], relationships: Sequence[Relationship]) -> CheckResult:
    """
    Point 1: every activity should have a predecessor and a successor.

    Passes only with no dangling activities (neither predecessor nor
    successor) and at least one start and one finish milestone.
    """
    with_pred = {rel.successor_activity_id for rel in relationships}
    with_succ = {rel.predecessor_activity_id for rel in relationships}

    start_milestones = [a for a in activities if a.id not in with_pred and a.is_milestone()]
    finish_milestones = [a for a in activities if a.id not in with_succ and a.is_milestone()]
    dangling = [a for a in activities if a.id not in with_pred and a.id not in with_succ]
    without_pred = [a for a in activities if a.id not in with_pred and a.duration_hours > 0]
    without_succ = [a for a in activities if a.id not in with_succ and a.duration_hours > 0]

    passed = not dangling and bool(start_milestones) and bool(finish_milestones)
    status = STATUS_PASS if passed else STATUS_FAIL

    return CheckResult(
        number=1,
        title='Logic',
        description='All activities (excluding start/end milestones) should have at least one '
                    'predecessor and one successor.',
        status=status,
        details={
            'dangling_activities': len(dangling),
            'start_milestones': len(start_milestones),
            'finish_milestones': len(finish_milestones),
            'total_activities': len(activities),
            'activities_without_pred': len(without_pred),
            'activities_without_succ': len(without_succ),
        },
        failed_items={
            'dangling_activities': [_activity_item(a) for a in dangling[:FAILED_ITEMS_LIMIT]],
            'activities_without_pred': [_activity_item(a) for a in without_pred[:LOGIC_SECONDARY_LIMIT]],
            'activities_without_succ': [_activity_item(a) for a in without_succ[:LOGIC_SECONDARY_LIMIT]],
        },
        message='All activities are properly linked with predecessors and successors.' if passed else
                f'Found {len(dangling)} dangling activities that lack proper logic ties.',
    )


def check_leads(relationships: Sequence[Relationship], activities: ActivityIndex) -> CheckResult:
    """Point 2: leads (negative lag). None passes; up to 5% warns."""
    leads = [rel for rel in relationships if rel.is_lead()]
    share = percentage(len(leads), len(relationships))

    if not leads:
        status = STATUS_PASS
    elif share <= THRESHOLDS['leads']['warning']:
        status = STATUS_WARNING
    else:
        status = STATUS_FAIL

    return CheckResult(
        number=2,
        title='Leads',
        description='Minimize use of lead time in relationships (should be < 5% of total relationships).',
        status=status,
        details={
            'leads_count': len(leads),
            'total_relationships': len(relationships),
            'percentage': _pct(share),
        },
        failed_items={
            'lead_relationships': [_relationship_item(r, activities) for r in leads[:FAILED_ITEMS_LIMIT]],
        },
        message='No lead relationships found.' if status == STATUS_PASS else
                f'{len(leads)} lead relationships found ({share:.1f}% of total).',
    )


def check_lags(relationships: Sequence[Relationship], activities: ActivityIndex) -> CheckResult:
    """Point 3: lags (positive lag). Up to 10% passes, otherwise warns."""
    lags = [rel for rel in relationships if rel.is_lag()]
    share = percentage(len(lags), len(relationships))
    status = STATUS_PASS if share <= THRESHOLDS['lags']['pass'] else STATUS_WARNING

    return CheckResult(
        number=3,
        title='Lags',
        description='Minimize use of lag time in relationships (should be < 10% of total relationships).',
        status=status,
        details={
            'lags_count': len(lags),
            'total_relationships': len(relationships),
            'percentage': _pct(share),
        },
        failed_items={
            'lag_relationships': [_relationship_item(r, activities) for r in lags[:FAILED_ITEMS_LIMIT]],
        },
        message='Lag usage is within acceptable limits.' if status == STATUS_PASS else
                f'{len(lags)} lag relationships found ({share:.1f}% of total).',
    )


def check_relationship_types(relationships: Sequence[Relationship], activities: ActivityIndex) -> CheckResult:
    """Point 4: finish-to-start share. A blank type counts as finish-to-start."""
    fs = [rel for rel in relationships if rel.is_finish_to_start()]
    non_fs = [rel for rel in relationships if not rel.is_finish_to_start()]
    share = percentage(len(fs), len(relationships), empty=100.0)
    bands = THRESHOLDS['relationship_types']
    status = _higher_is_better(share, bands['pass'], bands['warning'])

    return CheckResult(
        number=4,
        title='Relationship Types',
        description='Finish-to-Start relationships should comprise >=90% of all relationships.',
        status=status,
        details={
            'fs_relationships': len(fs),
            'total_relationships': len(relationships),
            'percentage': _pct(share),
        },
        failed_items={
            'non_fs_relationships': [_relationship_item(r, activities) for r in non_fs[:FAILED_ITEMS_LIMIT]],
        },
        message='Relationship types are properly distributed.' if status == STATUS_PASS else
                f'Only {share:.1f}% of relationships are Finish-to-Start.',
    )


def check_hard_constraints(activities: Sequence[Activity]) -> CheckResult:
    """Point 5: constraints other than as-soon/as-late-as-possible."""
    constrained = [
        a for a in activities
        if a.constraint_type and a.constraint_type not in SOFT_CONSTRAINTS
    ]
    share = percentage(len(constrained), len(activities))

    if not constrained:
        status = STATUS_PASS
    elif share <= THRESHOLDS['hard_constraints']['warning']:
        status = STATUS_WARNING
    else:
        status = STATUS_FAIL

    return CheckResult(
        number=5,
        title='Hard Constraints',
        description='Minimize hard constraints (Must Start On, Must Finish On, etc.).',
        status=status,
        details={
            'constrained_activities': len(constrained),
            'total_activities': len(activities),
            'percentage': _pct(share),
        },
        failed_items={
            'constrained_activities': [
                _activity_item(
                    a,
                    constraint_type=a.constraint_type,
                    constraint_date=a.constraint_date or a.secondary_constraint_date,
                )
                for a in constrained[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='No hard constraints detected.' if status == STATUS_PASS else
                f'{len(constrained)} activities have hard constraints.',
    )


def check_high_float(activities: Sequence[Activity]) -> CheckResult:
    """Point 6: activities with more than a week (168h) of total float."""
    high = [a for a in activities if a.total_float_hours > HIGH_FLOAT_HOURS]
    share = percentage(len(high), len(activities))
    bands = THRESHOLDS['high_float']
    status = _lower_is_better(share, bands['pass'], bands['warning'])

    return CheckResult(
        number=6,
        title='High Float',
        description='Activities with >1 week of float should be <=5% of total activities.',
        status=status,
        details={
            'high_float_activities': len(high),
            'total_activities': len(activities),
            'percentage': _pct(share),
        },
        failed_items={
            'high_float_activities': [
                _activity_item(
                    a,
                    float_hours=a.total_float_hours,
                    float_days=round(a.total_float_hours / HOURS_PER_DAY, 1),
                )
                for a in high[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='High float activities are within acceptable limits.' if status == STATUS_PASS else
                f'{len(high)} activities have >1 week of float ({share:.1f}%).',
    )


def check_negative_float(activities: Sequence[Activity]) -> CheckResult:
    """Point 7: any negative float fails."""
    negative = [a for a in activities if a.total_float_hours < 0]
    status = STATUS_PASS if not negative else STATUS_FAIL

    return CheckResult(
        number=7,
        title='Negative Float',
        description='No activities should have negative float.',
        status=status,
        details={
            'negative_float_activities': len(negative),
            'total_activities': len(activities),
        },
        failed_items={
            'negative_float_activities': [
                _activity_item(
                    a,
                    float_hours=a.total_float_hours,
                    float_days=round(a.total_float_hours / HOURS_PER_DAY, 1),
                )
                for a in negative[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='No activities with negative float.' if status == STATUS_PASS else
                f'{len(negative)} activities have negative float.',
    )


def check_high_duration(activities: Sequence[Activity]) -> CheckResult:
    """Point 8: activities longer than six weeks (960h)."""
    high = [a for a in activities if a.duration_hours > HIGH_DURATION_HOURS]
    share = percentage(len(high), len(activities))
    bands = THRESHOLDS['high_duration']
    status = _lower_is_better(share, bands['pass'], bands['warning'])

    return CheckResult(
        number=8,
        title='High Duration',
        description='Activities >6 weeks duration should be <=5% of total activities.',
        status=status,
        details={
            'high_duration_activities': len(high),
            'total_activities': len(activities),
            'percentage': _pct(share),
        },
        failed_items={
            'high_duration_activities': [
                {
                    'id': a.id,
                    'code': a.code,
                    'name': a.name,
                    'duration_hours': a.duration_hours,
                    'duration_days': round(a.duration_hours / HOURS_PER_DAY, 1),
                    'duration_weeks': round(a.duration_hours / HOURS_PER_WEEK, 1),
                }
                for a in high[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='Activity durations are within acceptable limits.' if status == STATUS_PASS else
                f'{len(high)} activities are >6 weeks duration ({share:.1f}%).',
    )


def has_invalid_dates(activity: Activity) -> bool:
    """Missing start or finish, or start after finish (actual first, then early)."""
    start, end = activity.start_date, activity.end_date
    return start is None or end is None or start > end


def check_invalid_dates(activities: Sequence[Activity]) -> CheckResult:
    """Point 9: every activity needs a start and finish in order."""
    invalid = [a for a in activities if has_invalid_dates(a)]
    status = STATUS_PASS if not invalid else STATUS_FAIL

    return CheckResult(
        number=9,
        title='Invalid Dates',
        description='All activities must have valid start and finish dates.',
        status=status,
        details={
            'invalid_date_activities': len(invalid),
            'total_activities': len(activities),
        },
        failed_items={
            'invalid_date_activities': [
                _activity_item(a, start_date=a.start_date, end_date=a.end_date)
                for a in invalid[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='All activities have valid dates.' if status == STATUS_PASS else
                f'{len(invalid)} activities have invalid or missing dates.',
    )


def check_resources(activities: Sequence[Activity], assignments: Sequence[Assignment]) -> CheckResult:
    """Point 10: share of work activities (duration > 0) with a resource."""
    resourced_ids = {assignment.activity_id for assignment in assignments}
    work = [a for a in activities if a.duration_hours > 0]
    resourced = [a for a in work if a.id in resourced_ids]
    unresourced = [a for a in work if a.id not in resourced_ids]

    share = percentage(len(resourced), len(work), empty=100.0)
    bands = THRESHOLDS['resources']
    status = _higher_is_better(share, bands['pass'], bands['warning'])

    return CheckResult(
        number=10,
        title='Resources',
        description='All work activities should have resources assigned (>=95%).',
        status=status,
        details={
            'resourced_activities': len(resourced),
            'work_activities': len(work),
            'percentage': _pct(share),
        },
        failed_items={
            'unresourced_activities': [
                _activity_item(a, status=a.status_code) for a in unresourced[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='Resource assignment coverage is adequate.' if status == STATUS_PASS else
                f'Only {share:.1f}% of work activities have resources assigned.',
    )


def check_incomplete_activities(activities: Sequence[Activity]) -> CheckResult:
    """Point 11: active activities still at 0% complete."""
    active = [a for a in activities if a.status_code == ACTIVE_STATUS]
    incomplete = [a for a in active if a.percent_complete == 0]
    share = percentage(len(incomplete), len(active))
    bands = THRESHOLDS['incomplete_activities']
    status = _lower_is_better(share, bands['pass'], bands['warning'])

    return CheckResult(
        number=11,
        title='Incomplete Activities',
        description='Active activities with 0% progress should be <=5% of active activities.',
        status=status,
        details={
            'incomplete_activities': len(incomplete),
            'active_activities': len(active),
            'percentage': _pct(share),
        },
        failed_items={
            'incomplete_activities': [
                _activity_item(a, progress=a.percent_complete, start_date=a.start_date)
                for a in incomplete[:FAILED_ITEMS_LIMIT]
            ],
        },
        message='Active activity progress reporting is good.' if status == STATUS_PASS else
                f'{len(incomplete)} active activities have 0% progress ({share:.1f}%).',
    )


def _critical_path_analysis(share: float) -> str:
    bands = THRESHOLDS['critical_path']
    if share < bands['min']:
        return 'Critical path may be too short, indicating insufficient detail or missing dependencies'
    if share > bands['max']:
        return 'Critical path may be too long, indicating over-constrained schedule or poor float distribution'
    return 'Critical path length is optimal'


def check_critical_path(activities: Sequence[Activity]) -> CheckResult:
    """
    Point 12: critical share should sit between 5% and 15%.

    Outside the band warns; this check never fails. With no activities
    there is nothing to judge and it passes.
    """
    critical = [a for a in activities if is_critical(a)]
    bands = THRESHOLDS['critical_path']

    if not activities:
        share = 0.0
        status = STATUS_PASS
        analysis: Optional[str] = 'No activities to evaluate'
    else:
        share = percentage(len(critical), len(activities))
        status = STATUS_PASS if bands['min'] <= share <= bands['max'] else STATUS_WARNING
        analysis = _critical_path_analysis(share)

    listed: List[Activity] = critical[:FAILED_ITEMS_LIMIT] if share > bands['max'] else []

    return CheckResult(
        number=12,
        title='Critical Path Test',
        description='Critical path should be 5-15% of total activities.',
        status=status,
        details={
            'critical_activities': len(critical),
            'total_activities': len(activities),
            'percentage': _pct(share),
        },
        failed_items={
            'critical_activities': [
                _activity_item(a, float_hours=a.total_float_hours, driving_path=a.driving_path_flag)
                for a in listed
            ],
        },
        message='Critical path length is within optimal range.' if status == STATUS_PASS else
                f'Critical path is {share:.1f}% of total activities.',
        analysis=analysis,
    )


def check_cd1_baseline() -> CheckResult:
    """Point 13: project-specific, not evaluated."""
    return CheckResult(
        number=13,
        title='CD-1 Baseline',
        description='CD-1 baseline requirements (project-specific).',
        status=STATUS_PASS,
        message='CD-1 requirements not applicable for this project type.',
        applicable=False,
    )


def check_cd234_requirements() -> CheckResult:
    """Point 14: project-specific, not evaluated."""
    return CheckResult(
        number=14,
        title='CD-2/3/4 Requirements',
        description='CD-2/3/4 baseline requirements (project-specific).',
        status=STATUS_PASS,
        message='CD-2/3/4 requirements not applicable for this project type.',
        applicable=False,
    )
