"""
Schedule model assembly.

Turns raw XER tables into an immutable ScheduleModel: six typed collections
(projects, activities, WBS nodes, resources, relationships, assignments)
with id indices for constant-time lookups.

Missing tables give empty collections. Relationships and assignments that
reference unknown activities or resources are kept; lookups for those ids
simply return None.
"""

import logging
import threading
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from chronos.schemas import (
    Activity,
    Assignment,
    Project,
    Relationship,
    Resource,
    WbsNode,
    get_model_for_table,
    get_schema_for_table,
)
from .parser import RawTables, XERParser
from .projector import project_record

logger = logging.getLogger(__name__)


class ScheduleModel:
    """
    In-memory schedule assembled from one XER file.

    Collections are tuples and entities are frozen, so a model can be shared
    between concurrent readers without copying.
    """

    def __init__(
        self,
        projects: Tuple[Project, ...] = (),
        activities: Tuple[Activity, ...] = (),
        wbs_nodes: Tuple[WbsNode, ...] = (),
        resources: Tuple[Resource, ...] = (),
        relationships: Tuple[Relationship, ...] = (),
        assignments: Tuple[Assignment, ...] = (),
        tables: Optional[RawTables] = None,
        header: Optional[Dict] = None,
    ):
        self.projects = tuple(projects)
        self.activities = tuple(activities)
        self.wbs_nodes = tuple(wbs_nodes)
        self.resources = tuple(resources)
        self.relationships = tuple(relationships)
        self.assignments = tuple(assignments)
        self.tables: RawTables = tables or {}
        self.header: Dict = header or {}

        self._projects = _index_by_id(self.projects)
        self._activities = _index_by_id(self.activities)
        self._wbs = _index_by_id(self.wbs_nodes)
        self._resources = _index_by_id(self.resources)

        self._predecessors: Dict[str, List[Relationship]] = defaultdict(list)
        self._successors: Dict[str, List[Relationship]] = defaultdict(list)
        for rel in self.relationships:
            self._predecessors[rel.successor_activity_id].append(rel)
            self._successors[rel.predecessor_activity_id].append(rel)

        self._assignments_by_activity: Dict[str, List[Assignment]] = defaultdict(list)
        self._assignments_by_resource: Dict[str, List[Assignment]] = defaultdict(list)
        for assignment in self.assignments:
            self._assignments_by_activity[assignment.activity_id].append(assignment)
            self._assignments_by_resource[assignment.resource_id].append(assignment)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @property
    def primary_project(self) -> Optional[Project]:
        """First project in the file, or None when the file has none."""
        return self.projects[0] if self.projects else None

    def has_projects(self) -> bool:
        return bool(self.projects)

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._projects.get(project_id)

    # ------------------------------------------------------------------
    # Entity lookups
    # ------------------------------------------------------------------

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        return self._activities.get(activity_id)

    def get_wbs(self, wbs_id: Optional[str]) -> Optional[WbsNode]:
        if wbs_id is None:
            return None
        return self._wbs.get(wbs_id)

    def get_resource(self, resource_id: str) -> Optional[Resource]:
        return self._resources.get(resource_id)

    def get_activities_by_project(self, project_id: Optional[str] = None) -> List[Activity]:
        """
        Activities belonging to a project.

        Args:
            project_id: Project to filter on; None returns every activity

        Returns:
            Activities in file order
        """
        if project_id is None:
            return list(self.activities)
        return [a for a in self.activities if a.project_id == project_id]

    def get_activities_by_status(self, status_code: str) -> List[Activity]:
        return [a for a in self.activities if a.status_code == status_code]

    def get_resources_by_type(self, type_code: str) -> List[Resource]:
        return [r for r in self.resources if r.type_code == type_code]

    # ------------------------------------------------------------------
    # Relationships and assignments
    # ------------------------------------------------------------------

    def get_predecessors(self, activity_id: str) -> List[Relationship]:
        """Relationships where activity_id is the successor."""
        return list(self._predecessors.get(activity_id, []))

    def get_successors(self, activity_id: str) -> List[Relationship]:
        """Relationships where activity_id is the predecessor."""
        return list(self._successors.get(activity_id, []))

    def get_relationships_by_activity(self, activity_id: str) -> List[Relationship]:
        """All relationships touching an activity, predecessors first."""
        return self.get_predecessors(activity_id) + self.get_successors(activity_id)

    def get_assignments_by_activity(self, activity_id: str) -> List[Assignment]:
        return list(self._assignments_by_activity.get(activity_id, []))

    def get_assignments_by_resource(self, resource_id: str) -> List[Assignment]:
        return list(self._assignments_by_resource.get(resource_id, []))

    def get_assignments_by_project(self, project_id: Optional[str] = None) -> List[Assignment]:
        """
        Assignments for a project.

        An assignment belongs to the project named on it, or, when that
        column is blank, to the project of its activity.
        """
        if project_id is None:
            return list(self.assignments)
        result = []
        for assignment in self.assignments:
            owner = assignment.project_id
            if not owner:
                activity = self.get_activity(assignment.activity_id)
                owner = activity.project_id if activity else ''
            if owner == project_id:
                result.append(assignment)
        return result

    def counts(self) -> Dict[str, int]:
        return {
            'projects': len(self.projects),
            'activities': len(self.activities),
            'wbs_nodes': len(self.wbs_nodes),
            'resources': len(self.resources),
            'relationships': len(self.relationships),
            'assignments': len(self.assignments),
        }

    def __repr__(self) -> str:
        parts = ', '.join(f'{k}={v}' for k, v in self.counts().items())
        return f'ScheduleModel({parts})'


def _index_by_id(entities) -> Dict[str, BaseModel]:
    """Id index keeping the first entity seen for each id."""
    index = {}
    for entity in entities:
        index.setdefault(entity.id, entity)
    return index


def build_entities(table_name: str, raw_tables: RawTables) -> List[BaseModel]:
    """
    Project one raw table through its schema and validate into entities.

    Args:
        table_name: XER table name (e.g. 'TASK')
        raw_tables: Output of the tokenizer

    Returns:
        Typed entities; empty when the table is missing or unmodelled
    """
    model: Optional[Type[BaseModel]] = get_model_for_table(table_name)
    records = raw_tables.get(table_name, [])
    if model is None or not records:
        return []

    schema = get_schema_for_table(table_name)
    entities = []
    skipped = 0

    for raw in records:
        typed = project_record(raw, schema)
        known = {k: v for k, v in typed.items() if k in schema}
        extra = {k: v for k, v in typed.items() if k not in schema}
        try:
            entities.append(model.model_validate({**known, 'extra_fields': extra}))
        except ValidationError as e:
            skipped += 1
            logger.debug(f"Skipping {table_name} row: {e.error_count()} validation errors")

    if skipped:
        logger.warning(f"Skipped {skipped} {table_name} rows missing required columns")
    logger.debug(f"Built {len(entities)} {table_name} entities")
    return entities


def assemble_model(raw_tables: RawTables, header: Optional[Dict] = None) -> ScheduleModel:
    """
    Build a ScheduleModel from tokenized XER tables.

    Args:
        raw_tables: Table name to raw records, as produced by XERParser
        header: Parsed ERMHDR header, if any

    Returns:
        Assembled model (never raises for missing tables)
    """
    model = ScheduleModel(
        projects=build_entities('PROJECT', raw_tables),
        activities=build_entities('TASK', raw_tables),
        wbs_nodes=build_entities('PROJWBS', raw_tables),
        resources=build_entities('RSRC', raw_tables),
        relationships=build_entities('TASKPRED', raw_tables),
        assignments=build_entities('TASKRSRC', raw_tables),
        tables=raw_tables,
        header=header,
    )

    dangling = sum(
        1 for rel in model.relationships
        if model.get_activity(rel.predecessor_activity_id) is None
        or model.get_activity(rel.successor_activity_id) is None
    )
    if dangling:
        logger.warning(f"{dangling} relationships reference unknown activities")
    if not model.has_projects():
        logger.warning("No PROJECT rows found in XER content")

    logger.info(f"Assembled {model!r}")
    return model


def load_xer_text(text: str) -> ScheduleModel:
    """Tokenize and assemble XER text in one step."""
    parser = XERParser()
    tables = parser.parse_content(text)
    return assemble_model(tables, parser.header)


def load_xer(file_path, encoding: Optional[str] = None) -> ScheduleModel:
    """
    Load an XER file into a ScheduleModel.

    Args:
        file_path: Path to the XER file
        encoding: Text encoding (default: settings.XER_ENCODING)

    Returns:
        Assembled model

    Raises:
        FileNotFoundError: If the file does not exist
    """
    parser = XERParser(str(file_path), encoding=encoding)
    tables = parser.parse()
    logger.info(f"Parsed {Path(file_path).name}: {len(tables)} tables")
    return assemble_model(tables, parser.header)


class ScheduleSession:
    """
    Holder for the currently loaded model.

    A new file is fully assembled before the reference is swapped under a
    lock, so readers always get either the old model or the new one.
    """

    def __init__(self, model: Optional[ScheduleModel] = None):
        self._lock = threading.Lock()
        self._model = model

    @property
    def model(self) -> Optional[ScheduleModel]:
        with self._lock:
            return self._model

    def replace(self, model: ScheduleModel) -> ScheduleModel:
        with self._lock:
            self._model = model
        return model

    def load_text(self, text: str) -> ScheduleModel:
        return self.replace(load_xer_text(text))

    def load_file(self, file_path, encoding: Optional[str] = None) -> ScheduleModel:
        return self.replace(load_xer(file_path, encoding=encoding))

    def clear(self) -> None:
        with self._lock:
            self._model = None
