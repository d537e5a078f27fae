"""
Schedule analytics over an assembled ScheduleModel.

Every function takes the model (plus explicit parameters) and returns a new
result object; the model is never modified.
"""

from .critical_path import (
    analyze_critical_path,
    get_critical_activities,
    is_critical,
    print_critical_path_report,
)
from .filters import filter_activities, filter_assignments
from .health import analyze_schedule_health, calculate_health_score, earned_value_metrics
from .models import (
    ActiveActivity,
    AssignmentCostSummary,
    CriticalPathSummary,
    CurveBucket,
    DurationStats,
    EarnedValueMetrics,
    ResourceCurve,
    ResourceUtilization,
    ScheduleHealth,
    SummaryStats,
)
from .resource_curve import build_buckets, get_all_resource_curves, get_resource_curve, overlap_ratio
from .resources import get_resource_utilization, summarize_assignments
from .summary import get_duration_stats, get_summary_stats
from .wbs import WBSHierarchy, WBSNodeView, build_wbs_hierarchy, print_wbs_tree

__all__ = [
    'analyze_critical_path',
    'get_critical_activities',
    'is_critical',
    'print_critical_path_report',
    'filter_activities',
    'filter_assignments',
    'analyze_schedule_health',
    'calculate_health_score',
    'earned_value_metrics',
    'ActiveActivity',
    'AssignmentCostSummary',
    'CriticalPathSummary',
    'CurveBucket',
    'DurationStats',
    'EarnedValueMetrics',
    'ResourceCurve',
    'ResourceUtilization',
    'ScheduleHealth',
    'SummaryStats',
    'build_buckets',
    'get_all_resource_curves',
    'get_resource_curve',
    'overlap_ratio',
    'get_resource_utilization',
    'summarize_assignments',
    'get_duration_stats',
    'get_summary_stats',
    'WBSHierarchy',
    'WBSNodeView',
    'build_wbs_hierarchy',
    'print_wbs_tree',
]
