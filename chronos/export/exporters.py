"""
Tabular and JSON views of the schedule model and analysis results.

Frame builders return pandas DataFrames (one row per entity, bucket or
check); JSON builders return plain dicts. Writing to disk is left to
write_csv / write_json.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from chronos.analysis.critical_path import get_critical_activities
from chronos.analysis.models import ResourceCurve, ResourceUtilization
from chronos.analysis.resource_curve import get_all_resource_curves, get_resource_curve
from chronos.analysis.resources import get_resource_utilization
from chronos.integrity.config import ASSESSMENT_TYPE
from chronos.integrity.models import AssessmentResult
from chronos.utils.helpers import format_details

logger = logging.getLogger(__name__)

ACTIVITY_COLUMNS = [
    'task_code', 'task_name', 'status_code', 'duration_hours', 'percent_complete', 'total_float_hours',
]
CRITICAL_PATH_COLUMNS = ['task_code', 'task_name', 'duration_hours', 'total_float_hours']
RESOURCE_COLUMNS = ['resource_id', 'resource_name', 'resource_type']
ASSIGNMENT_COLUMNS = [
    'assignment_id', 'task_code', 'task_name', 'resource_id', 'resource_name',
    'target_qty', 'actual_qty', 'target_cost', 'actual_cost', 'remaining_qty', 'remaining_cost',
]
CURVE_COLUMNS = [
    'week_start', 'week_end', 'target_quantity', 'actual_quantity', 'target_cost', 'actual_cost',
    'active_activities', 'quantity_variance', 'cost_variance',
]
INTEGRITY_COLUMNS = ['point', 'title', 'status', 'description', 'result', 'details']


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# =============================================================================
# DataFrame builders
# =============================================================================

def activities_frame(model, project_id: Optional[str] = None) -> pd.DataFrame:
    rows = [
        {
            'task_code': a.code,
            'task_name': a.name,
            'status_code': a.status_code,
            'duration_hours': a.duration_hours,
            'percent_complete': a.percent_complete,
            'total_float_hours': a.total_float_hours,
        }
        for a in model.get_activities_by_project(project_id)
    ]
    return pd.DataFrame(rows, columns=ACTIVITY_COLUMNS)


def critical_path_frame(model, project_id: Optional[str] = None) -> pd.DataFrame:
    rows = [
        {
            'task_code': a.code,
            'task_name': a.name,
            'duration_hours': a.duration_hours,
            'total_float_hours': a.total_float_hours,
        }
        for a in get_critical_activities(model, project_id)
    ]
    return pd.DataFrame(rows, columns=CRITICAL_PATH_COLUMNS)


def resources_frame(model) -> pd.DataFrame:
    rows = [
        {'resource_id': r.id, 'resource_name': r.name, 'resource_type': r.type_code}
        for r in model.resources
    ]
    return pd.DataFrame(rows, columns=RESOURCE_COLUMNS)


def assignments_frame(model, assignments=None) -> pd.DataFrame:
    """
    One row per assignment, with activity and resource names resolved.

    Args:
        model: ScheduleModel for name lookups
        assignments: Assignments to include (default: all in the model)
    """
    if assignments is None:
        assignments = model.assignments

    rows = []
    for assignment in assignments:
        activity = model.get_activity(assignment.activity_id)
        resource = model.get_resource(assignment.resource_id)
        rows.append({
            'assignment_id': assignment.id,
            'task_code': activity.code if activity else assignment.activity_id,
            'task_name': activity.name if activity else 'Unknown',
            'resource_id': assignment.resource_id,
            'resource_name': resource.name if resource else 'Unknown',
            'target_qty': assignment.target_quantity,
            'actual_qty': assignment.actual_quantity,
            'target_cost': assignment.target_cost,
            'actual_cost': assignment.actual_cost,
            'remaining_qty': assignment.remaining_quantity,
            'remaining_cost': assignment.remaining_cost,
        })
    return pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)


def _curve_rows(curve: ResourceCurve) -> list[Dict[str, Any]]:
    return [
        {
            'week_start': bucket.bucket_start.date().isoformat(),
            'week_end': bucket.bucket_end.date().isoformat(),
            'target_quantity': round(bucket.weekly_target_qty, 2),
            'actual_quantity': round(bucket.weekly_actual_qty, 2),
            'target_cost': round(bucket.weekly_target_cost, 2),
            'actual_cost': round(bucket.weekly_actual_cost, 2),
            'active_activities': len(bucket.active_activities),
            'quantity_variance': round(bucket.quantity_variance, 2),
            'cost_variance': round(bucket.cost_variance, 2),
        }
        for bucket in curve.time_based_data
    ]


def resource_curve_frame(curve: ResourceCurve) -> pd.DataFrame:
    """Weekly rows of a single resource curve."""
    return pd.DataFrame(_curve_rows(curve), columns=CURVE_COLUMNS)


def all_resource_curves_frame(model, project_id: Optional[str] = None) -> pd.DataFrame:
    """Weekly rows for every assigned resource, prefixed with the resource."""
    rows = []
    for resource_id, curve in get_all_resource_curves(model, project_id).items():
        name = curve.resource.name if curve.resource else 'Unknown'
        for row in _curve_rows(curve):
            rows.append({'resource_id': resource_id, 'resource_name': name, **row})
    return pd.DataFrame(rows, columns=['resource_id', 'resource_name'] + CURVE_COLUMNS)


def integrity_frame(result: AssessmentResult) -> pd.DataFrame:
    """One row per DCMA point, details flattened to 'key: value; ...'."""
    rows = [
        {
            'point': point.number,
            'title': point.title,
            'status': point.status.upper(),
            'description': point.description,
            'result': point.message,
            'details': format_details(point.details),
        }
        for point in result.points
    ]
    return pd.DataFrame(rows, columns=INTEGRITY_COLUMNS)


# =============================================================================
# JSON builders
# =============================================================================

def _project_block(project) -> Dict[str, Any]:
    if project is None:
        return {'id': None, 'name': None, 'short_name': None, 'manager': None}
    return {
        'id': project.id,
        'name': project.name,
        'short_name': project.short_name,
        'manager': project.manager,
    }


def _resolve_project(model, project_id: Optional[str]):
    if project_id is not None:
        return model.get_project(project_id)
    return model.primary_project


def project_summary_json(model, project_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        'project': _project_block(_resolve_project(model, project_id)),
        'statistics': {
            'total_activities': len(model.get_activities_by_project(project_id)),
            'total_resources': len(model.resources),
            'total_relationships': len(model.relationships),
            'critical_activities': len(get_critical_activities(model, project_id)),
        },
        'export_date': datetime.now().isoformat(),
    }


def _curve_json(curve: ResourceCurve) -> list[Dict[str, Any]]:
    return [
        {
            'bucket_start': _iso(bucket.bucket_start),
            'bucket_end': _iso(bucket.bucket_end),
            'weekly_target_qty': bucket.weekly_target_qty,
            'weekly_actual_qty': bucket.weekly_actual_qty,
            'weekly_target_cost': bucket.weekly_target_cost,
            'weekly_actual_cost': bucket.weekly_actual_cost,
            'active_activities': [
                {
                    'activity_id': share.activity.id,
                    'task_code': share.activity.code,
                    'task_name': share.activity.name,
                    'ratio': share.ratio,
                    'target_qty': share.target_qty,
                    'actual_qty': share.actual_qty,
                    'target_cost': share.target_cost,
                    'actual_cost': share.actual_cost,
                }
                for share in bucket.active_activities
            ],
        }
        for bucket in curve.time_based_data
    ]


def _utilization_json(model, util: ResourceUtilization, project_id: Optional[str]) -> Dict[str, Any]:
    resource = util.resource
    curve = get_resource_curve(model, util.resource_id, project_id=project_id)
    return {
        'resource': {
            'id': util.resource_id,
            'name': resource.name if resource else 'Unknown',
            'type': resource.type_code if resource else 'Unknown',
            'type_label': resource.type_label if resource else 'Unknown',
        },
        'summary': {
            'total_target_quantity': util.total_target_qty,
            'total_actual_quantity': util.total_actual_qty,
            'total_target_cost': util.total_target_cost,
            'total_actual_cost': util.total_actual_cost,
            'assignment_count': util.assignment_count,
            'quantity_variance': util.quantity_variance,
            'cost_variance': util.cost_variance,
            'quantity_efficiency': util.quantity_efficiency,
            'cost_efficiency': util.cost_efficiency,
        },
        'time_based_data': _curve_json(curve),
        'assignments': [
            {
                'task_id': a.activity_id,
                'target_quantity': a.target_quantity,
                'actual_quantity': a.actual_quantity,
                'target_cost': a.target_cost,
                'actual_cost': a.actual_cost,
                'remaining_quantity': a.remaining_quantity,
                'remaining_cost': a.remaining_cost,
            }
            for a in util.assignments
        ],
    }


def resource_utilization_json(model, project_id: Optional[str] = None) -> Dict[str, Any]:
    utilization = get_resource_utilization(model, project_id)
    per_resource = {
        rid: _utilization_json(model, util, project_id) for rid, util in utilization.items()
    }
    return {
        'project': _project_block(_resolve_project(model, project_id)),
        'resource_utilization': per_resource,
        'statistics': {
            'total_resources': len(utilization),
            'total_assignments': sum(u.assignment_count for u in utilization.values()),
            'total_target_cost': sum(u.total_target_cost for u in utilization.values()),
            'total_actual_cost': sum(u.total_actual_cost for u in utilization.values()),
            'overall_cost_variance': sum(u.cost_variance for u in utilization.values()),
        },
        'export_date': datetime.now().isoformat(),
    }


def integrity_report_json(
    model,
    result: AssessmentResult,
    project_id: Optional[str] = None,
    assessment_date: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Full-fidelity assessment export, drill-down lists included."""
    project = _project_block(_resolve_project(model, project_id))
    project.pop('manager', None)
    return {
        'project': project,
        'assessment': {
            'type': ASSESSMENT_TYPE,
            'assessment_date': (assessment_date or datetime.now()).isoformat(),
            'summary': result.summary.to_dict(),
            'points': [p.to_dict() for p in result.points],
        },
        'metadata': {
            'total_activities': len(model.get_activities_by_project(project_id)),
            'total_relationships': len(model.relationships),
            'total_resources': len(model.resources),
        },
    }


# =============================================================================
# Writers
# =============================================================================

def _json_default(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def write_csv(frame: pd.DataFrame, output_path) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    logger.info(f"Wrote {len(frame)} rows to {output}")
    return output


def write_json(data: Dict[str, Any], output_path) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, default=_json_default)
    logger.info(f"Wrote {output}")
    return output
