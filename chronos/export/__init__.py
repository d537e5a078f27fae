from .exporters import (
    activities_frame,
    all_resource_curves_frame,
    assignments_frame,
    critical_path_frame,
    integrity_frame,
    integrity_report_json,
    project_summary_json,
    resource_curve_frame,
    resource_utilization_json,
    resources_frame,
    write_csv,
    write_json,
)

__all__ = [
    'activities_frame',
    'all_resource_curves_frame',
    'assignments_frame',
    'critical_path_frame',
    'integrity_frame',
    'integrity_report_json',
    'project_summary_json',
    'resource_curve_frame',
    'resource_utilization_json',
    'resources_frame',
    'write_csv',
    'write_json',
]
