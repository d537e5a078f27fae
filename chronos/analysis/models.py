"""
Data models for schedule analytics results.

Results are plain dataclasses layered on top of the frozen schedule
entities; nothing here writes back into the model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from chronos.schemas import Activity, Assignment, Resource


@dataclass
class CriticalPathSummary:
    """Critical activity counts for reporting."""

    total_activities: int
    critical_count: int
    critical_percentage: float
    critical_activities: list[Activity] = field(default_factory=list)
    float_distribution: dict[str, int] = field(default_factory=dict)

    def get_summary(self) -> str:
        """Get human-readable summary."""
        return (f"{self.critical_count} of {self.total_activities} activities critical "
                f"({self.critical_percentage:.1f}%)")


@dataclass
class DurationStats:
    """Duration statistics over activities with positive duration (hours)."""

    total: float = 0.0
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    count: int = 0


@dataclass
class SummaryStats:
    """Collection counts and histograms for a loaded schedule."""

    total_projects: int
    total_activities: int
    total_resources: int
    total_relationships: int
    total_assignments: int
    status_breakdown: dict[str, int]
    resource_breakdown: dict[str, int]
    duration_stats: DurationStats


@dataclass
class ResourceUtilization:
    """Assignment totals for one resource."""

    resource_id: str
    resource: Optional[Resource] = None
    total_target_qty: float = 0.0
    total_actual_qty: float = 0.0
    total_target_cost: float = 0.0
    total_actual_cost: float = 0.0
    assignment_count: int = 0
    assignments: list[Assignment] = field(default_factory=list)

    @property
    def resource_name(self) -> str:
        return self.resource.name if self.resource else 'Unknown'

    @property
    def quantity_variance(self) -> float:
        return self.total_actual_qty - self.total_target_qty

    @property
    def cost_variance(self) -> float:
        return self.total_actual_cost - self.total_target_cost

    @property
    def quantity_efficiency(self) -> float:
        """Actual quantity as a percentage of target (0 when no target)."""
        if self.total_target_qty > 0:
            return self.total_actual_qty / self.total_target_qty * 100
        return 0.0

    @property
    def cost_efficiency(self) -> float:
        """Actual cost as a percentage of target (0 when no target)."""
        if self.total_target_cost > 0:
            return self.total_actual_cost / self.total_target_cost * 100
        return 0.0


@dataclass
class ActiveActivity:
    """One activity's share of a curve bucket."""

    activity: Activity
    assignment: Assignment
    ratio: float
    target_qty: float
    actual_qty: float
    target_cost: float
    actual_cost: float


@dataclass
class CurveBucket:
    """One fixed-width period of a resource curve."""

    bucket_start: datetime
    bucket_end: datetime
    weekly_target_qty: float = 0.0
    weekly_actual_qty: float = 0.0
    weekly_target_cost: float = 0.0
    weekly_actual_cost: float = 0.0
    active_activities: list[ActiveActivity] = field(default_factory=list)

    @property
    def quantity_variance(self) -> float:
        return self.weekly_actual_qty - self.weekly_target_qty

    @property
    def cost_variance(self) -> float:
        return self.weekly_actual_cost - self.weekly_target_cost


@dataclass
class ResourceCurve:
    """Time-phased allocation of a resource's assignments."""

    resource_id: str
    resource: Optional[Resource] = None
    time_based_data: list[CurveBucket] = field(default_factory=list)

    @property
    def window_start(self) -> Optional[datetime]:
        return self.time_based_data[0].bucket_start if self.time_based_data else None

    @property
    def window_end(self) -> Optional[datetime]:
        return self.time_based_data[-1].bucket_end if self.time_based_data else None

    def total_target_qty(self) -> float:
        return sum(b.weekly_target_qty for b in self.time_based_data)

    def total_target_cost(self) -> float:
        return sum(b.weekly_target_cost for b in self.time_based_data)


@dataclass
class AssignmentCostSummary:
    """Cost totals over a set of assignments."""

    count: int
    total_target_cost: float
    total_actual_cost: float

    @property
    def cost_variance(self) -> float:
        return self.total_actual_cost - self.total_target_cost


@dataclass
class ScheduleHealth:
    """Status histogram and a 0-100 heuristic health score."""

    total_activities: int
    status_breakdown: dict[str, int]
    critical_count: int
    health_score: int


@dataclass
class EarnedValueMetrics:
    """Duration-weighted earned value indicators."""

    planned_value: float
    earned_value: float
    actual_cost: float
    schedule_variance: float
    cost_variance: float
    schedule_performance_index: float
    cost_performance_index: float
