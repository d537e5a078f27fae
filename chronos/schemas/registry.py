"""
Schema registry mapping XER table names to entity models.

The field-kind schema of each table is derived from the pydantic model
annotations: only aliased fields are XER columns.
"""

from datetime import datetime
from typing import Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel

from chronos.xer.projector import (
    FIELD_KIND_BOOLEAN,
    FIELD_KIND_DATE,
    FIELD_KIND_NUMBER,
    FIELD_KIND_STRING,
)
from .primavera import Activity, Assignment, Project, Relationship, Resource, WbsNode


TABLE_MODELS: Dict[str, Type[BaseModel]] = {
    'PROJECT': Project,
    'TASK': Activity,
    'PROJWBS': WbsNode,
    'RSRC': Resource,
    'TASKPRED': Relationship,
    'TASKRSRC': Assignment,
}


def annotation_to_kind(annotation) -> str:
    """
    Map a Python type annotation to an XER field kind.

    Optional[X] resolves to the kind of X; anything unrecognized is a string.
    """
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        annotation = args[0] if args else str

    if annotation is bool:
        return FIELD_KIND_BOOLEAN
    if annotation in (int, float):
        return FIELD_KIND_NUMBER
    if annotation is datetime:
        return FIELD_KIND_DATE
    return FIELD_KIND_STRING


def schema_for_model(model: Type[BaseModel]) -> Dict[str, str]:
    """Build the column -> field kind mapping for an entity model."""
    return {
        info.alias: annotation_to_kind(info.annotation)
        for info in model.model_fields.values()
        if info.alias
    }


TABLE_SCHEMAS: Dict[str, Dict[str, str]] = {
    table: schema_for_model(model) for table, model in TABLE_MODELS.items()
}


def get_model_for_table(table_name: str) -> Optional[Type[BaseModel]]:
    """Get the entity model for an XER table, or None for unmodelled tables."""
    return TABLE_MODELS.get(table_name)


def get_schema_for_table(table_name: str) -> Dict[str, str]:
    """Get the field-kind schema for an XER table (empty for unmodelled tables)."""
    return TABLE_SCHEMAS.get(table_name, {})


def list_registered_tables() -> List[str]:
    return list(TABLE_MODELS)
