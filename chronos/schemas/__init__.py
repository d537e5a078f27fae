"""
Typed entity schemas for Primavera P6 XER tables.

Usage:
    from chronos.schemas import Activity, get_schema_for_table

    schema = get_schema_for_table('TASK')
"""

from .primavera import (
    Activity,
    ActivityStatus,
    Assignment,
    Project,
    Relationship,
    RelationshipType,
    Resource,
    ResourceType,
    RESOURCE_TYPE_LABELS,
    STATUS_LABELS,
    WbsNode,
    XERRecord,
)
from .registry import (
    TABLE_MODELS,
    TABLE_SCHEMAS,
    annotation_to_kind,
    get_model_for_table,
    get_schema_for_table,
    list_registered_tables,
    schema_for_model,
)

__all__ = [
    'Activity',
    'ActivityStatus',
    'Assignment',
    'Project',
    'Relationship',
    'RelationshipType',
    'Resource',
    'ResourceType',
    'RESOURCE_TYPE_LABELS',
    'STATUS_LABELS',
    'WbsNode',
    'XERRecord',
    'TABLE_MODELS',
    'TABLE_SCHEMAS',
    'annotation_to_kind',
    'get_model_for_table',
    'get_schema_for_table',
    'list_registered_tables',
    'schema_for_model',
]
