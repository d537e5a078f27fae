"""Unit tests for schedule model assembly and lookups."""

import logging
from datetime import datetime

import pytest

from chronos.xer.reader import (
    ScheduleModel,
    ScheduleSession,
    assemble_model,
    build_entities,
    load_xer,
    load_xer_text,
)


class TestAssembly:
    """Test building typed collections from raw tables."""

    def test_collection_sizes(self, sample_model):
        """Each modelled table becomes one collection."""
        assert sample_model.counts() == {
            'projects': 1,
            'activities': 4,
            'wbs_nodes': 3,
            'resources': 2,
            'relationships': 3,
            'assignments': 3,
        }

    def test_values_are_typed(self, sample_model):
        """Numbers, dates and flags are converted."""
        activity = sample_model.get_activity('T2')
        assert activity.duration_hours == 80.0
        assert activity.percent_complete == 50.0
        assert activity.early_end == datetime(2024, 1, 15)
        assert activity.driving_path_flag is False

    def test_raw_tables_are_kept(self, sample_model):
        """Unmodelled tables stay reachable as raw records."""
        assert sample_model.tables['CALENDAR'] == [{'clndr_id': 'C1', 'clndr_name': 'Standard 5 Day'}]

    def test_header_is_kept(self, sample_model):
        """The ERMHDR line is carried on the model."""
        assert sample_model.header['data'][0] == '19.12'

    def test_missing_tables_give_empty_collections(self, xer_builder, xer_fields):
        """A file with only PROJECT still assembles."""
        text = xer_builder({'PROJECT': (xer_fields['PROJECT'], [['1', 'P', 'Proj', '', '', '']])})
        model = load_xer_text(text)
        assert model.counts()['activities'] == 0
        assert model.get_activity('anything') is None
        assert model.get_assignments_by_resource('R1') == []

    def test_undeclared_columns_go_to_extra_fields(self, xer_builder):
        """Columns outside the model keep their raw text."""
        text = xer_builder({'RSRC': (['rsrc_id', 'rsrc_name', 'clndr_id'], [['R1', 'Crane', '42']])})
        resource = load_xer_text(text).get_resource('R1')
        assert resource.extra_fields == {'clndr_id': '42'}

    def test_rows_missing_required_columns_are_skipped(self, xer_builder, caplog):
        """Relationships without endpoints cannot be modelled."""
        text = xer_builder({'TASKPRED': (['task_pred_id', 'lag_hr_cnt'], [['R1', '0']])})
        with caplog.at_level(logging.WARNING):
            model = load_xer_text(text)
        assert model.relationships == ()
        assert 'Skipped 1 TASKPRED rows' in caplog.text

    def test_unmodelled_table_builds_nothing(self):
        """build_entities ignores tables without a model."""
        assert build_entities('CALENDAR', {'CALENDAR': [{'clndr_id': '1'}]}) == []

    def test_duplicate_ids_keep_first(self, xer_builder):
        """The index holds the first entity for a repeated id."""
        text = xer_builder({'RSRC': (['rsrc_id', 'rsrc_name'], [['R1', 'First'], ['R1', 'Second']])})
        model = load_xer_text(text)
        assert len(model.resources) == 2
        assert model.get_resource('R1').name == 'First'

    def test_no_projects_warns(self, xer_builder, caplog):
        """Content without PROJECT rows assembles with a warning."""
        text = xer_builder({'RSRC': (['rsrc_id'], [['R1']])})
        with caplog.at_level(logging.WARNING):
            model = load_xer_text(text)
        assert not model.has_projects()
        assert model.primary_project is None
        assert 'No PROJECT rows' in caplog.text

    def test_empty_content(self):
        """Empty text gives an empty model."""
        model = assemble_model({})
        assert isinstance(model, ScheduleModel)
        assert all(count == 0 for count in model.counts().values())


class TestLookups:
    """Test id and relationship lookups."""

    def test_primary_project(self, sample_model):
        """The first project is the primary one."""
        project = sample_model.primary_project
        assert project.id == '100'
        assert project.name == 'Demo Project'
        assert project.data_date == datetime(2024, 1, 10)

    def test_get_wbs(self, sample_model):
        """WBS nodes are looked up by id; None is no WBS."""
        assert sample_model.get_wbs('W2').parent_id == 'W1'
        assert sample_model.get_wbs(None) is None

    def test_predecessors_and_successors(self, sample_model):
        """task_id is the successor side of a relationship."""
        preds = sample_model.get_predecessors('T3')
        succs = sample_model.get_successors('T3')
        assert [r.predecessor_activity_id for r in preds] == ['T2']
        assert [r.successor_activity_id for r in succs] == ['T4']
        assert [r.id for r in sample_model.get_relationships_by_activity('T3')] == ['R2', 'R3']

    def test_lookup_results_are_copies(self, sample_model):
        """Mutating a returned list does not touch the model."""
        sample_model.get_predecessors('T3').clear()
        assert len(sample_model.get_predecessors('T3')) == 1

    def test_assignment_lookups(self, sample_model):
        """Assignments are indexed by activity and by resource."""
        assert [a.id for a in sample_model.get_assignments_by_activity('T3')] == ['X2', 'X3']
        assert [a.id for a in sample_model.get_assignments_by_resource('RS1')] == ['X1', 'X2']

    def test_filtered_lists(self, sample_model):
        """Status and type filters keep file order."""
        assert [a.id for a in sample_model.get_activities_by_status('TK_NotStart')] == ['T3', 'T4']
        assert [r.id for r in sample_model.get_resources_by_type('RT_Mat')] == ['RS2']
        assert len(sample_model.get_activities_by_project('100')) == 4
        assert sample_model.get_activities_by_project('999') == []

    def test_dangling_relationship_is_kept(self, xer_builder, xer_fields, make_task_row, caplog):
        """A relationship to a missing activity is retained with a warning."""
        text = xer_builder({
            'TASK': (xer_fields['TASK'], [make_task_row('A', 'A', 'Alpha')]),
            'TASKPRED': (xer_fields['TASKPRED'], [['R1', 'A', 'GHOST', '100', 'PR_FS', '0']]),
        })
        with caplog.at_level(logging.WARNING):
            model = load_xer_text(text)
        assert len(model.relationships) == 1
        assert model.get_activity('GHOST') is None
        assert '1 relationships reference unknown activities' in caplog.text

    def test_assignment_project_falls_back_to_activity(self, xer_builder, xer_fields, make_task_row):
        """A blank assignment project is taken from its activity."""
        text = xer_builder({
            'TASK': (xer_fields['TASK'], [make_task_row('A', 'A', 'Alpha', proj_id='7')]),
            'TASKRSRC': (xer_fields['TASKRSRC'], [['X1', 'A', 'R1', '', '1', '1', '0', '0', '0', '0', '0', '0']]),
        })
        model = load_xer_text(text)
        assert [a.id for a in model.get_assignments_by_project('7')] == ['X1']
        assert model.get_assignments_by_project('8') == []


class TestLoading:
    """Test file loading and the session holder."""

    def test_load_xer(self, sample_xer_file):
        """load_xer reads a file from disk."""
        assert load_xer(sample_xer_file).counts()['activities'] == 4

    def test_load_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_xer(tmp_path / 'missing.xer')

    def test_session_swaps_models(self, sample_xer_text, sample_xer_file):
        """Each load replaces the held model."""
        session = ScheduleSession()
        assert session.model is None
        first = session.load_text(sample_xer_text)
        assert session.model is first
        second = session.load_file(sample_xer_file)
        assert session.model is second
        assert first.counts() == second.counts()
        session.clear()
        assert session.model is None
