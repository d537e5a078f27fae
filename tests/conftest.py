"""Pytest configuration and fixtures."""
import pytest
from typing import Dict, List, Sequence, Tuple

from chronos.xer.reader import load_xer_text

TableSpec = Tuple[Sequence[str], Sequence[Sequence[str]]]

HEADER_LINE = 'ERMHDR\t19.12\t2024-02-01\tProject\tadmin\tdbxDatabaseNoName\tProject Management\tUSD'

PROJECT_FIELDS = ['proj_id', 'proj_short_name', 'proj_name', 'proj_mgr', 'status_code', 'last_recalc_date']
WBS_FIELDS = ['wbs_id', 'proj_id', 'seq_num', 'wbs_short_name', 'wbs_name', 'parent_wbs_id']
TASK_FIELDS = [
    'task_id', 'proj_id', 'wbs_id', 'task_code', 'task_name', 'status_code', 'task_type',
    'target_drtn_hr_cnt', 'phys_complete_pct', 'total_float_hr_cnt', 'driving_path_flag',
    'act_start_date', 'act_end_date', 'early_start_date', 'early_end_date', 'cstr_type',
]
PRED_FIELDS = ['task_pred_id', 'task_id', 'pred_task_id', 'proj_id', 'pred_type', 'lag_hr_cnt']
RSRC_FIELDS = ['rsrc_id', 'rsrc_name', 'rsrc_short_name', 'rsrc_type']
TASKRSRC_FIELDS = [
    'taskrsrc_id', 'task_id', 'rsrc_id', 'proj_id', 'target_qty', 'target_cost',
    'act_reg_qty', 'act_ot_qty', 'act_reg_cost', 'act_ot_cost', 'remain_qty', 'remain_cost',
]


def build_xer(tables: Dict[str, TableSpec], header: bool = True) -> str:
    """Render tables as XER text: %T, %F and %R lines per table, then %E."""
    lines: List[str] = [HEADER_LINE] if header else []
    for name, (fields, rows) in tables.items():
        lines.append(f'%T\t{name}')
        lines.append('%F\t' + '\t'.join(fields))
        for row in rows:
            lines.append('%R\t' + '\t'.join(row))
    lines.append('%E')
    return '\n'.join(lines) + '\n'


def task_row(task_id, code, name, duration='0', float_hours='0', status='TK_NotStart', pct='0',
             wbs_id='', driving='N', act_start='', act_end='', early_start='', early_end='',
             cstr_type='', proj_id='100', task_type='TT_Task'):
    return [
        task_id, proj_id, wbs_id, code, name, status, task_type, duration, pct, float_hours,
        driving, act_start, act_end, early_start, early_end, cstr_type,
    ]


@pytest.fixture
def xer_builder():
    """The build_xer helper, for tests that assemble their own tables."""
    return build_xer


@pytest.fixture
def sample_tables() -> Dict[str, TableSpec]:
    """A four-activity civil schedule with two resources."""
    return {
        'PROJECT': (PROJECT_FIELDS, [
            ['100', 'DEMO', 'Demo Project', 'Pat Lee', 'Active', '2024-01-10 00:00'],
        ]),
        'PROJWBS': (WBS_FIELDS, [
            ['W1', '100', '1', 'CIV', 'Civil Works', ''],
            ['W2', '100', '1', 'EXC', 'Excavation', 'W1'],
            ['W3', '100', '2', 'MISC', 'Miscellaneous', 'W1'],
        ]),
        'TASK': (TASK_FIELDS, [
            task_row('T1', 'A1000', 'Start', duration='0', float_hours='0', status='TK_Complete',
                     pct='100', wbs_id='W2', act_start='2024-01-01 00:00', act_end='2024-01-01 00:00',
                     early_start='2024-01-01 00:00', early_end='2024-01-01 00:00', task_type='TT_Mile'),
            task_row('T2', 'A1010', 'Excavation', duration='80', float_hours='0', status='TK_Active',
                     pct='50', wbs_id='W2', act_start='2024-01-01 00:00',
                     early_start='2024-01-01 00:00', early_end='2024-01-15 00:00'),
            task_row('T3', 'A1020', 'Foundations', duration='40', float_hours='16', wbs_id='W1',
                     early_start='2024-01-15 00:00', early_end='2024-01-22 00:00', cstr_type='CS_MSO'),
            task_row('T4', 'A1030', 'Finish', duration='0', float_hours='0',
                     early_start='2024-01-22 00:00', early_end='2024-01-22 00:00', task_type='TT_FinMile'),
        ]),
        'TASKPRED': (PRED_FIELDS, [
            ['R1', 'T2', 'T1', '100', 'PR_FS', '0'],
            ['R2', 'T3', 'T2', '100', 'PR_FS', '8'],
            ['R3', 'T4', 'T3', '100', '', '0'],
        ]),
        'RSRC': (RSRC_FIELDS, [
            ['RS1', 'Labor Crew', 'CREW', 'RT_Labor'],
            ['RS2', 'Concrete', 'CONC', 'RT_Mat'],
        ]),
        'TASKRSRC': (TASKRSRC_FIELDS, [
            ['X1', 'T2', 'RS1', '100', '70', '700', '20', '5', '200', '50', '45', '450'],
            ['X2', 'T3', 'RS1', '100', '40', '400', '0', '0', '0', '0', '40', '400'],
            ['X3', 'T3', 'RS2', '100', '10', '1000', '0', '0', '0', '0', '10', '1000'],
        ]),
        'CALENDAR': (['clndr_id', 'clndr_name'], [['C1', 'Standard 5 Day']]),
    }


@pytest.fixture
def sample_xer_text(sample_tables) -> str:
    """XER text for the sample schedule."""
    return build_xer(sample_tables)


@pytest.fixture
def sample_model(sample_xer_text):
    """Assembled ScheduleModel for the sample schedule."""
    return load_xer_text(sample_xer_text)


@pytest.fixture
def sample_xer_file(tmp_path, sample_xer_text):
    """The sample schedule written to disk."""
    path = tmp_path / 'demo.xer'
    path.write_text(sample_xer_text, encoding='utf-8')
    return path


@pytest.fixture
def make_task_row():
    """The task_row helper: a TASK row in TASK_FIELDS order."""
    return task_row


@pytest.fixture
def xer_fields() -> Dict[str, List[str]]:
    """Field lists used by the sample tables, keyed by table name."""
    return {
        'PROJECT': PROJECT_FIELDS,
        'PROJWBS': WBS_FIELDS,
        'TASK': TASK_FIELDS,
        'TASKPRED': PRED_FIELDS,
        'RSRC': RSRC_FIELDS,
        'TASKRSRC': TASKRSRC_FIELDS,
    }
