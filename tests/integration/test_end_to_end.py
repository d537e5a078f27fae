"""
Integration tests for the full load -> analyze -> export pipeline.

The synthetic schedule runs everywhere. Real XER exports placed under
CHRONOS_DATA_DIR/raw are picked up as well; those tests are skipped when
no files are present (allows CI to run without data).

Run with: pytest tests/integration/test_end_to_end.py -v
"""

from datetime import datetime, timedelta

import pandas as pd
import pytest

from chronos import load_xer, run_dcma14_assessment
from chronos.analysis import (
    analyze_critical_path,
    build_wbs_hierarchy,
    get_all_resource_curves,
    get_resource_utilization,
    get_summary_stats,
)
from chronos.config.settings import settings
from chronos.export import activities_frame, all_resource_curves_frame, integrity_frame, write_csv

ACTIVITY_COUNT = 60


def _fmt(value: datetime) -> str:
    return value.strftime('%Y-%m-%d %H:%M')


@pytest.fixture
def chain_xer_file(tmp_path, xer_builder, xer_fields, make_task_row):
    """A linked chain of weekly activities under two WBS branches."""
    start = datetime(2024, 3, 4)
    tasks = [make_task_row('S', 'M0000', 'Start', task_type='TT_Mile',
                           early_start=_fmt(start), early_end=_fmt(start), wbs_id='W1')]
    rels = []
    assignments = []
    previous = 'S'
    for i in range(1, ACTIVITY_COUNT + 1):
        task_id = f'T{i}'
        begin = start + timedelta(days=7 * (i - 1))
        tasks.append(make_task_row(
            task_id, f'A{i * 10}', f'Activity {i}', duration='40',
            float_hours='0' if i % 10 == 0 else '80',
            status='TK_Complete' if i <= 20 else 'TK_NotStart',
            pct='100' if i <= 20 else '0',
            wbs_id='W2' if i % 2 else 'W3',
            early_start=_fmt(begin), early_end=_fmt(begin + timedelta(days=7)),
        ))
        rels.append([f'R{i}', task_id, previous, '100', 'PR_FS', '0'])
        assignments.append([f'X{i}', task_id, 'RS1' if i % 3 else 'RS2', '100',
                            '40', '4000', '0', '0', '0', '0', '40', '4000'])
        previous = task_id
    finish = start + timedelta(days=7 * ACTIVITY_COUNT)
    tasks.append(make_task_row('F', 'M9999', 'Finish', task_type='TT_FinMile',
                               early_start=_fmt(finish), early_end=_fmt(finish), wbs_id='W1'))
    rels.append(['RF', 'F', previous, '100', 'PR_FS', '0'])

    text = xer_builder({
        'PROJECT': (xer_fields['PROJECT'], [['100', 'CHAIN', 'Chain Project', 'Sam Roe', 'Active', '']]),
        'PROJWBS': (xer_fields['PROJWBS'], [
            ['W1', '100', '1', 'ROOT', 'Root', ''],
            ['W2', '100', '1', 'ODD', 'Odd Work', 'W1'],
            ['W3', '100', '2', 'EVEN', 'Even Work', 'W1'],
        ]),
        'TASK': (xer_fields['TASK'], tasks),
        'TASKPRED': (xer_fields['TASKPRED'], rels),
        'RSRC': (xer_fields['RSRC'], [
            ['RS1', 'Crew', 'CREW', 'RT_Labor'],
            ['RS2', 'Crane', 'CRANE', 'RT_Equip'],
        ]),
        'TASKRSRC': (xer_fields['TASKRSRC'], assignments),
    })
    path = tmp_path / 'chain.xer'
    path.write_text(text, encoding='utf-8')
    return path


class TestSyntheticPipeline:
    """Run every analysis over a larger generated schedule."""

    def test_model_and_summary(self, chain_xer_file):
        """All rows load and summary counts agree."""
        model = load_xer(chain_xer_file)
        stats = get_summary_stats(model, '100')
        assert stats.total_activities == ACTIVITY_COUNT + 2
        assert stats.total_relationships == ACTIVITY_COUNT + 1
        assert stats.status_breakdown == {'TK_NotStart': 42, 'TK_Complete': 20}
        assert stats.duration_stats.count == ACTIVITY_COUNT

    def test_critical_share(self, chain_xer_file):
        """Every tenth activity plus both milestones is critical."""
        result = analyze_critical_path(load_xer(chain_xer_file))
        assert result.critical_count == 8
        assert [a.id for a in result.critical_activities][0] == 'S'

    def test_assessment_scores_well(self, chain_xer_file):
        """A fully linked, resourced chain passes the structural checks."""
        result = run_dcma14_assessment(load_xer(chain_xer_file), '100')
        assert result.get_point(1).status == 'pass'
        assert result.get_point(10).status == 'pass'
        assert result.get_point(12).status == 'pass'
        assert result.summary.score == 100
        assert result.summary.grade == 'A'

    def test_curves_conserve_totals(self, chain_xer_file):
        """Each resource curve spreads exactly its assigned quantity."""
        model = load_xer(chain_xer_file)
        utilization = get_resource_utilization(model)
        for resource_id, curve in get_all_resource_curves(model).items():
            assert curve.total_target_qty() == pytest.approx(utilization[resource_id].total_target_qty)
            assert all(b.bucket_end - b.bucket_start == timedelta(days=7) for b in curve.time_based_data)

    def test_wbs_rollup(self, chain_xer_file):
        """The root WBS spans the whole chain."""
        hierarchy = build_wbs_hierarchy(load_xer(chain_xer_file))
        root = hierarchy.get('W1')
        assert root.start_date == datetime(2024, 3, 4)
        assert root.end_date == datetime(2024, 3, 4) + timedelta(days=7 * ACTIVITY_COUNT)
        assert root.duration == 40 * ACTIVITY_COUNT
        assert root.progress == pytest.approx(20 / ACTIVITY_COUNT)
        assert hierarchy.count_activities() == ACTIVITY_COUNT + 2

    def test_exports_round_trip(self, chain_xer_file, tmp_path):
        """Written CSVs read back with the same shape."""
        model = load_xer(chain_xer_file)
        activities = write_csv(activities_frame(model), tmp_path / 'activities.csv')
        curves = write_csv(all_resource_curves_frame(model), tmp_path / 'curves.csv')
        report = write_csv(integrity_frame(run_dcma14_assessment(model)), tmp_path / 'dcma.csv')
        assert len(pd.read_csv(activities)) == ACTIVITY_COUNT + 2
        assert set(pd.read_csv(curves)['resource_id']) == {'RS1', 'RS2'}
        assert len(pd.read_csv(report)) == 14


def _raw_xer_files():
    raw_dir = settings.DATA_DIR / 'raw'
    if not raw_dir.exists():
        return []
    return sorted(raw_dir.glob('*.xer'))


class TestRealExports:
    """Smoke-test any real XER exports available locally."""

    @pytest.mark.parametrize("xer_path", _raw_xer_files() or [None])
    def test_real_file_assesses(self, xer_path):
        """Real files load and produce a complete assessment."""
        if xer_path is None:
            pytest.skip(f"No XER files found in {settings.DATA_DIR / 'raw'}")

        model = load_xer(xer_path)
        if not model.has_projects():
            pytest.skip(f"No projects in {xer_path.name}")

        result = run_dcma14_assessment(model, model.primary_project.id)
        assert len(result.points) == 14
        assert 0 <= result.summary.score <= 100
