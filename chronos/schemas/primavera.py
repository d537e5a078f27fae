"""
Primavera P6 schedule table schemas.

One frozen pydantic model per entity kind. Field aliases are the XER column
names, so a typed record from the projector validates straight into a model.
Columns a model does not declare are kept verbatim in ``extra_fields``.

Tables: PROJECT, TASK, PROJWBS, RSRC, TASKPRED, TASKRSRC
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ActivityStatus(str, Enum):
    """Activity status codes (TASK.status_code)."""
    NOT_STARTED = 'TK_NotStart'
    ACTIVE = 'TK_Active'
    COMPLETE = 'TK_Complete'


class ResourceType(str, Enum):
    """Resource type codes (RSRC.rsrc_type)."""
    LABOR = 'RT_Labor'
    MATERIAL = 'RT_Mat'
    EQUIPMENT = 'RT_Equip'
    EXPENSE = 'RT_Expense'
    UNKNOWN = 'Unknown'


class RelationshipType(str, Enum):
    """Precedence relationship types (TASKPRED.pred_type)."""
    FINISH_START = 'PR_FS'
    START_START = 'PR_SS'
    FINISH_FINISH = 'PR_FF'
    START_FINISH = 'PR_SF'


STATUS_LABELS = {
    ActivityStatus.NOT_STARTED.value: 'Not Started',
    ActivityStatus.ACTIVE.value: 'Active',
    ActivityStatus.COMPLETE.value: 'Complete',
}

RESOURCE_TYPE_LABELS = {
    ResourceType.LABOR.value: 'Labor',
    ResourceType.MATERIAL.value: 'Material',
    ResourceType.EQUIPMENT.value: 'Equipment',
    ResourceType.EXPENSE.value: 'Expense',
}


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class XERRecord(BaseModel):
    """Base for all typed XER records."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    extra_fields: Dict[str, str] = Field(
        default_factory=dict,
        description="Columns present in the file but not modelled, as raw strings",
    )


class Project(XERRecord):
    """
    Project header record.

    Table: PROJECT
    """
    kind: Literal['project'] = 'project'
    id: str = Field(alias='proj_id', description="Project identifier")
    short_name: str = Field(default='', alias='proj_short_name', description="Project short name")
    name: str = Field(default='', alias='proj_name', description="Project name")
    manager: str = Field(default='', alias='proj_mgr', description="Project manager")
    status_code: str = Field(default='', alias='status_code', description="Project status")
    data_date: Optional[datetime] = Field(default=None, alias='last_recalc_date', description="Schedule data date")
    plan_start: Optional[datetime] = Field(default=None, alias='plan_start_date', description="Planned start")
    plan_end: Optional[datetime] = Field(default=None, alias='plan_end_date', description="Planned finish")

    @property
    def display_name(self) -> str:
        return self.name or self.short_name or 'Unnamed Project'


class Activity(XERRecord):
    """
    Schedule activity (task).

    Table: TASK
    """
    kind: Literal['activity'] = 'activity'
    id: str = Field(alias='task_id', description="Activity identifier")
    project_id: str = Field(default='', alias='proj_id', description="Owning project")
    wbs_id: Optional[str] = Field(default=None, alias='wbs_id', description="Owning WBS node")
    code: str = Field(default='', alias='task_code', description="Activity code")
    name: str = Field(default='', alias='task_name', description="Activity name")
    status_code: str = Field(default='', alias='status_code', description="TK_NotStart, TK_Active, TK_Complete")
    task_type: str = Field(default='', alias='task_type', description="TT_Task, TT_Mile, TT_FinMile, ...")
    duration_hours: float = Field(default=0.0, alias='target_drtn_hr_cnt', description="Planned duration (0 = milestone)")
    remaining_duration_hours: float = Field(default=0.0, alias='remain_drtn_hr_cnt', description="Remaining duration")
    percent_complete: float = Field(default=0.0, alias='phys_complete_pct', description="Physical % complete (0-100)")
    total_float_hours: float = Field(default=0.0, alias='total_float_hr_cnt', description="Total float (may be negative)")
    driving_path_flag: bool = Field(default=False, alias='driving_path_flag', description="On the driving path")
    actual_start: Optional[datetime] = Field(default=None, alias='act_start_date')
    actual_end: Optional[datetime] = Field(default=None, alias='act_end_date')
    early_start: Optional[datetime] = Field(default=None, alias='early_start_date')
    early_end: Optional[datetime] = Field(default=None, alias='early_end_date')
    late_start: Optional[datetime] = Field(default=None, alias='late_start_date')
    late_end: Optional[datetime] = Field(default=None, alias='late_end_date')
    target_start: Optional[datetime] = Field(default=None, alias='target_start_date')
    target_end: Optional[datetime] = Field(default=None, alias='target_end_date')
    constraint_type: str = Field(default='', alias='cstr_type', description="CS_MSO, CS_ALAP, ...")
    constraint_date: Optional[datetime] = Field(default=None, alias='cstr_date')
    secondary_constraint_type: str = Field(default='', alias='cstr_type2')
    secondary_constraint_date: Optional[datetime] = Field(default=None, alias='cstr_date2')

    _normalize_wbs = field_validator('wbs_id', mode='before')(_blank_to_none)

    @model_validator(mode='before')
    @classmethod
    def _fill_display_labels(cls, data):
        """Code falls back to the id and name to the code, so both display."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        task_id = data.get('task_id', data.get('id', ''))
        code_key = 'task_code' if 'task_code' in data or 'code' not in data else 'code'
        name_key = 'task_name' if 'task_name' in data or 'name' not in data else 'name'
        if not data.get(code_key):
            data[code_key] = str(task_id)
        if not data.get(name_key):
            data[name_key] = data[code_key]
        return data

    @property
    def status(self) -> Optional[ActivityStatus]:
        try:
            return ActivityStatus(self.status_code)
        except ValueError:
            return None

    @property
    def start_date(self) -> Optional[datetime]:
        """Actual start, else early start."""
        return self.actual_start or self.early_start

    @property
    def end_date(self) -> Optional[datetime]:
        """Actual finish, else early finish."""
        return self.actual_end or self.early_end

    def is_milestone(self) -> bool:
        """Zero (or absent) duration."""
        return self.duration_hours == 0

    def is_completed(self) -> bool:
        return self.status_code == ActivityStatus.COMPLETE.value

    def is_in_progress(self) -> bool:
        return self.status_code == ActivityStatus.ACTIVE.value

    def is_not_started(self) -> bool:
        return self.status_code == ActivityStatus.NOT_STARTED.value


class WbsNode(XERRecord):
    """
    Work breakdown structure node.

    Table: PROJWBS
    """
    kind: Literal['wbs'] = 'wbs'
    id: str = Field(alias='wbs_id', description="WBS node identifier")
    project_id: str = Field(default='', alias='proj_id')
    name: str = Field(default='', alias='wbs_name')
    short_name: str = Field(default='', alias='wbs_short_name')
    parent_id: Optional[str] = Field(default=None, alias='parent_wbs_id', description="Parent node (None for roots)")
    sequence_number: float = Field(default=0.0, alias='seq_num')
    project_node: bool = Field(default=False, alias='proj_node_flag', description="Project root node")

    _normalize_parent = field_validator('parent_id', mode='before')(_blank_to_none)


class Resource(XERRecord):
    """
    Resource dictionary entry.

    Table: RSRC
    """
    kind: Literal['resource'] = 'resource'
    id: str = Field(alias='rsrc_id', description="Resource identifier")
    name: str = Field(default='', alias='rsrc_name')
    short_name: str = Field(default='', alias='rsrc_short_name')
    type_code: str = Field(default='', alias='rsrc_type', description="RT_Labor, RT_Mat, RT_Equip, RT_Expense")

    @property
    def type(self) -> ResourceType:
        try:
            return ResourceType(self.type_code)
        except ValueError:
            return ResourceType.UNKNOWN

    @property
    def type_label(self) -> str:
        return RESOURCE_TYPE_LABELS.get(self.type_code, 'Unknown')


class Relationship(XERRecord):
    """
    Precedence relationship between two activities.

    Table: TASKPRED (task_id is the successor)
    """
    kind: Literal['relationship'] = 'relationship'
    id: str = Field(default='', alias='task_pred_id')
    successor_activity_id: str = Field(alias='task_id')
    predecessor_activity_id: str = Field(alias='pred_task_id')
    project_id: str = Field(default='', alias='proj_id')
    type_code: str = Field(default='', alias='pred_type', description="Blank means finish-to-start")
    lag_hours: float = Field(default=0.0, alias='lag_hr_cnt', description="Negative values are leads")

    @property
    def type(self) -> Optional[RelationshipType]:
        if not self.type_code:
            return RelationshipType.FINISH_START
        try:
            return RelationshipType(self.type_code)
        except ValueError:
            return None

    def is_finish_to_start(self) -> bool:
        return self.type == RelationshipType.FINISH_START

    def is_lead(self) -> bool:
        return self.lag_hours < 0

    def is_lag(self) -> bool:
        return self.lag_hours > 0


class Assignment(XERRecord):
    """
    Resource assignment on an activity.

    Table: TASKRSRC
    """
    kind: Literal['assignment'] = 'assignment'
    id: str = Field(default='', alias='taskrsrc_id')
    activity_id: str = Field(alias='task_id')
    resource_id: str = Field(alias='rsrc_id')
    project_id: str = Field(default='', alias='proj_id')
    target_quantity: float = Field(default=0.0, alias='target_qty')
    target_cost: float = Field(default=0.0, alias='target_cost')
    actual_regular_quantity: float = Field(default=0.0, alias='act_reg_qty')
    actual_overtime_quantity: float = Field(default=0.0, alias='act_ot_qty')
    actual_regular_cost: float = Field(default=0.0, alias='act_reg_cost')
    actual_overtime_cost: float = Field(default=0.0, alias='act_ot_cost')
    remaining_quantity: float = Field(default=0.0, alias='remain_qty')
    remaining_cost: float = Field(default=0.0, alias='remain_cost')

    @property
    def actual_quantity(self) -> float:
        return self.actual_regular_quantity + self.actual_overtime_quantity

    @property
    def actual_cost(self) -> float:
        return self.actual_regular_cost + self.actual_overtime_cost
