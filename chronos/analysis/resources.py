"""
Resource utilization and assignment cost aggregation.
"""

from typing import Iterable, Optional

from chronos.schemas import Assignment
from .models import AssignmentCostSummary, ResourceUtilization


def get_resource_utilization(model, project_id: Optional[str] = None) -> dict[str, ResourceUtilization]:
    """
    Aggregate assignments per resource.

    Every assignment lands in exactly one resource's entry. Resources
    without assignments do not appear.

    Args:
        model: ScheduleModel to read
        project_id: Restrict to one project's assignments (None for all)

    Returns:
        Dict mapping resource id to its utilization, in first-seen order
    """
    utilization: dict[str, ResourceUtilization] = {}

    for assignment in model.get_assignments_by_project(project_id):
        util = utilization.get(assignment.resource_id)
        if util is None:
            util = ResourceUtilization(
                resource_id=assignment.resource_id,
                resource=model.get_resource(assignment.resource_id),
            )
            utilization[assignment.resource_id] = util

        util.total_target_qty += assignment.target_quantity
        util.total_actual_qty += assignment.actual_quantity
        util.total_target_cost += assignment.target_cost
        util.total_actual_cost += assignment.actual_cost
        util.assignment_count += 1
        util.assignments.append(assignment)

    return utilization


def summarize_assignments(assignments: Iterable[Assignment]) -> AssignmentCostSummary:
    """Count and cost totals for a (possibly filtered) set of assignments."""
    assignments = list(assignments)
    return AssignmentCostSummary(
        count=len(assignments),
        total_target_cost=sum(a.target_cost for a in assignments),
        total_actual_cost=sum(a.actual_cost for a in assignments),
    )
