"""
DCMA 14-point assessment runner and score aggregation.
"""

import logging
from typing import Optional, Sequence

from . import checks
from .config import FALLBACK_GRADE, GRADE_BANDS, STATUS_FAIL, STATUS_PASS, STATUS_WARNING, TOTAL_POINTS
from .models import AssessmentResult, AssessmentSummary, CheckResult

logger = logging.getLogger(__name__)


def calculate_score(passed_points: int, total_points: int = TOTAL_POINTS) -> int:
    """Percentage of passed points, rounded half up to an integer."""
    if not total_points:
        return 0
    return int(100 * passed_points / total_points + 0.5)


def grade_for_score(score: int) -> str:
    for minimum, grade in GRADE_BANDS:
        if score >= minimum:
            return grade
    return FALLBACK_GRADE


def summarize_points(points: Sequence[CheckResult]) -> AssessmentSummary:
    """Count statuses and derive the score and grade."""
    passed = sum(1 for p in points if p.status == STATUS_PASS)
    failed = sum(1 for p in points if p.status == STATUS_FAIL)
    warned = sum(1 for p in points if p.status == STATUS_WARNING)
    score = calculate_score(passed, TOTAL_POINTS)
    return AssessmentSummary(
        passed_points=passed,
        failed_points=failed,
        warning_points=warned,
        score=score,
        grade=grade_for_score(score),
    )


def run_dcma14_assessment(model, project_id: Optional[str] = None) -> AssessmentResult:
    """
    Run all fourteen checks against a schedule.

    Args:
        model: ScheduleModel to assess
        project_id: Restrict activity checks to one project (None for all).
            Relationships and assignments are always taken from the whole file.

    Returns:
        AssessmentResult with points in order 1-14 and the summary
    """
    activities = model.get_activities_by_project(project_id)
    relationships = model.relationships
    assignments = model.assignments
    # First occurrence wins, matching the model's own index
    activity_index = {a.id: a for a in reversed(model.activities)}

    points = [
        checks.check_logic(activities, relationships),
        checks.check_leads(relationships, activity_index),
        checks.check_lags(relationships, activity_index),
        checks.check_relationship_types(relationships, activity_index),
        checks.check_hard_constraints(activities),
        checks.check_high_float(activities),
        checks.check_negative_float(activities),
        checks.check_high_duration(activities),
        checks.check_invalid_dates(activities),
        checks.check_resources(activities, assignments),
        checks.check_incomplete_activities(activities),
        checks.check_critical_path(activities),
        checks.check_cd1_baseline(),
        checks.check_cd234_requirements(),
    ]

    summary = summarize_points(points)
    logger.info(
        f"DCMA-14 assessment: score {summary.score} grade {summary.grade} "
        f"({summary.passed_points} pass, {summary.warning_points} warning, {summary.failed_points} fail)"
    )
    return AssessmentResult(points=points, summary=summary)
