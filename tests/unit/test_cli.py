"""Unit tests for the command-line front end."""

import json
import logging

import pytest

from chronos.cli import EXIT_ERROR, EXIT_NO_PROJECTS, EXIT_OK, NO_PROJECTS_MESSAGE, build_parser, main
from chronos.config.settings import Settings


@pytest.fixture(autouse=True)
def reset_chronos_logger():
    """main() attaches handlers to the captured streams; drop them after each test."""
    yield
    logger = logging.getLogger('chronos')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestArguments:
    """Test argument parsing."""

    def test_command_is_required(self):
        """Running without a subcommand is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_curve_requires_resource(self):
        """The curve command needs --resource."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(['curve', 'x.xer'])

    def test_defaults(self):
        """Common options default sensibly."""
        args = build_parser().parse_args(['critical', 'x.xer'])
        assert args.limit == 20
        assert args.project is None
        assert args.quiet is False


class TestCommands:
    """Test end-to-end command runs on the sample file."""

    def test_summary(self, sample_xer_file, capsys):
        """Summary prints the project and counts."""
        assert main(['summary', str(sample_xer_file)]) == EXIT_OK
        out = capsys.readouterr().out
        assert 'PROJECT: Demo Project' in out
        assert 'Activities: 4' in out
        assert 'Health Score: 80/100' in out

    def test_critical(self, sample_xer_file, capsys):
        """The critical report lists critical activities."""
        assert main(['critical', str(sample_xer_file), '--limit', '2']) == EXIT_OK
        out = capsys.readouterr().out
        assert 'Critical Activities: 3 (75.0%)' in out
        assert '... and 1 more critical activities' in out

    def test_resources(self, sample_xer_file, capsys):
        """Resources are ranked by target cost."""
        assert main(['resources', str(sample_xer_file)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.index('Labor Crew') < out.index('Concrete')

    def test_curve_with_csv(self, sample_xer_file, tmp_path, capsys):
        """The curve prints weekly rows and writes a CSV."""
        csv_path = tmp_path / 'curve.csv'
        code = main(['curve', str(sample_xer_file), '--resource', 'RS1', '--csv', str(csv_path)])
        assert code == EXIT_OK
        assert csv_path.exists()
        assert '2024-01-08' in capsys.readouterr().out

    def test_curve_unknown_resource(self, sample_xer_file, capsys):
        """An unassigned resource prints a notice."""
        assert main(['curve', str(sample_xer_file), '--resource', 'ZZ']) == EXIT_OK
        assert 'No dated assignments' in capsys.readouterr().out

    def test_integrity_json(self, sample_xer_file, tmp_path, capsys):
        """The integrity report prints and writes JSON."""
        json_path = tmp_path / 'dcma.json'
        assert main(['integrity', str(sample_xer_file), '--json', str(json_path), '-v']) == EXIT_OK
        out = capsys.readouterr().out
        assert 'Grade: C' in out
        assert json.loads(json_path.read_text(encoding='utf-8'))['assessment']['summary']['score'] == 79

    def test_wbs(self, sample_xer_file, capsys):
        """The WBS tree is printed."""
        assert main(['wbs', str(sample_xer_file)]) == EXIT_OK
        assert 'CIV Civil Works' in capsys.readouterr().out

    def test_export(self, sample_xer_file, tmp_path, capsys):
        """Export writes every CSV and JSON file."""
        out_dir = tmp_path / 'export'
        assert main(['export', str(sample_xer_file), '--output-dir', str(out_dir), '-q']) == EXIT_OK
        names = {p.name for p in out_dir.iterdir()}
        assert names == {
            'activities.csv', 'critical_path.csv', 'resources.csv', 'assignments.csv',
            'resource_curves.csv', 'dcma14_integrity_report.csv', 'project_summary.json',
            'resource_utilization.json', 'dcma14_integrity_report.json',
        }
        assert len(capsys.readouterr().out.splitlines()) == 9


class TestFailures:
    """Test exit codes for unusable input."""

    def test_missing_file(self, tmp_path, capsys):
        """A missing file reports an error."""
        assert main(['summary', str(tmp_path / 'missing.xer')]) == EXIT_ERROR
        assert 'ERROR:' in capsys.readouterr().err

    def test_no_projects(self, tmp_path, xer_builder, capsys):
        """A file without PROJECT rows is a distinct failure."""
        path = tmp_path / 'empty.xer'
        path.write_text(xer_builder({'RSRC': (['rsrc_id'], [['R1']])}), encoding='utf-8')
        assert main(['summary', str(path)]) == EXIT_NO_PROJECTS
        assert NO_PROJECTS_MESSAGE in capsys.readouterr().err

    def test_unknown_project(self, sample_xer_file, capsys):
        """Selecting a project that is not in the file is an error."""
        assert main(['summary', str(sample_xer_file), '--project', '999']) == EXIT_ERROR
        assert "Project '999' not found" in capsys.readouterr().err

    def test_invalid_settings(self, sample_xer_file, monkeypatch, capsys):
        """Unusable settings are listed and nothing runs."""
        monkeypatch.setattr(Settings, 'CURVE_BUCKET_DAYS', -7)
        monkeypatch.setattr(Settings, 'DRILLDOWN_LIMIT', 0)
        assert main(['curve', str(sample_xer_file), '--resource', 'RS1']) == EXIT_ERROR
        captured = capsys.readouterr()
        assert 'CHRONOS_CURVE_BUCKET_DAYS must be positive' in captured.err
        assert 'CHRONOS_DRILLDOWN_LIMIT must be positive' in captured.err
        assert captured.out == ''
