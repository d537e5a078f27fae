"""
Command-line front end.

Usage:
    python -m chronos summary schedule.xer
    python -m chronos critical schedule.xer --limit 30
    python -m chronos resources schedule.xer
    python -m chronos curve schedule.xer --resource 4021 --chart cost
    python -m chronos integrity schedule.xer --json dcma.json --csv dcma.csv
    python -m chronos wbs schedule.xer --max-depth 2
    python -m chronos export schedule.xer --output-dir out/
"""

import argparse
import logging
import sys
from pathlib import Path

from chronos.analysis import (
    analyze_critical_path,
    analyze_schedule_health,
    build_wbs_hierarchy,
    earned_value_metrics,
    get_resource_curve,
    get_resource_utilization,
    get_summary_stats,
    print_critical_path_report,
    print_wbs_tree,
)
from chronos.config.settings import settings
from chronos.export import (
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
from chronos.integrity import print_integrity_report, run_dcma14_assessment
from chronos.schemas import STATUS_LABELS
from chronos.utils.logger import configure_logging
from chronos.xer.reader import load_xer

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_PROJECTS = 2

NO_PROJECTS_MESSAGE = 'No projects found in the XER file.'


# =============================================================================
# Commands
# =============================================================================

def cmd_summary(model, project, args) -> int:
    stats = get_summary_stats(model, project.id)
    health = analyze_schedule_health(model, project.id)
    ev = earned_value_metrics(model, project.id)

    print("=" * 80)
    print(f"PROJECT: {project.display_name}")
    print("=" * 80)
    print(f"  ID:        {project.id}")
    print(f"  Short:     {project.short_name}")
    print(f"  Manager:   {project.manager or '-'}")
    if project.data_date:
        print(f"  Data Date: {project.data_date:%Y-%m-%d}")

    print(f"\nProjects: {stats.total_projects}   Activities: {stats.total_activities}   "
          f"Resources: {stats.total_resources}   Relationships: {stats.total_relationships}   "
          f"Assignments: {stats.total_assignments}")

    print("\n--- Activity Status ---")
    for status, count in sorted(stats.status_breakdown.items()):
        print(f"  {STATUS_LABELS.get(status, status):15s}: {count:6d}")

    print("\n--- Resource Types ---")
    for rtype, count in sorted(stats.resource_breakdown.items()):
        print(f"  {rtype:15s}: {count:6d}")

    d = stats.duration_stats
    print("\n--- Duration (hours, activities with duration > 0) ---")
    print(f"  Total: {d.total:,.1f}   Average: {d.average:,.1f}   Min: {d.min:,.1f}   Max: {d.max:,.1f}")

    print("\n--- Schedule Health ---")
    print(f"  Health Score: {health.health_score}/100   Critical: {health.critical_count}")
    print(f"  SPI: {ev.schedule_performance_index:.2f}   Earned: {ev.earned_value:,.1f}h "
          f"of {ev.planned_value:,.1f}h planned")
    return EXIT_OK


def cmd_critical(model, project, args) -> int:
    print_critical_path_report(analyze_critical_path(model, project.id), limit=args.limit)
    return EXIT_OK


def cmd_resources(model, project, args) -> int:
    utilization = get_resource_utilization(model, project.id)
    if not utilization:
        print("No resource assignments found.")
        return EXIT_OK

    ranked = sorted(utilization.values(), key=lambda u: u.total_target_cost, reverse=True)
    print(f"{'Resource':35s} {'Assign':>6s} {'Target Qty':>12s} {'Actual Qty':>12s} "
          f"{'Target Cost':>14s} {'Actual Cost':>14s}")
    print("-" * 98)
    for util in ranked[:args.limit]:
        print(f"{util.resource_name[:35]:35s} {util.assignment_count:6d} {util.total_target_qty:12,.1f} "
              f"{util.total_actual_qty:12,.1f} {util.total_target_cost:14,.2f} {util.total_actual_cost:14,.2f}")
    if len(ranked) > args.limit:
        print(f"... and {len(ranked) - args.limit} more resources")
    return EXIT_OK


def cmd_curve(model, project, args) -> int:
    curve = get_resource_curve(model, args.resource, project_id=project.id)
    if not curve.time_based_data:
        print(f"No dated assignments for resource {args.resource}.")
        return EXIT_OK

    frame = resource_curve_frame(curve)
    if args.csv:
        path = write_csv(frame, args.csv)
        if args.quiet:
            print(path)
            return EXIT_OK

    prefix = 'cost' if args.chart == 'cost' else 'quantity'
    name = curve.resource.name if curve.resource else 'Unknown'
    print(f"Resource curve: {name} ({args.resource}), {args.chart}")
    print(f"{'Week Start':12s} {'Target':>14s} {'Actual':>14s} {'Variance':>14s} {'Active':>7s}")
    for _, row in frame.iterrows():
        print(f"{row['week_start']:12s} {row[f'target_{prefix}']:14,.2f} {row[f'actual_{prefix}']:14,.2f} "
              f"{row[f'{prefix}_variance']:14,.2f} {int(row['active_activities']):7d}")
    return EXIT_OK


def cmd_integrity(model, project, args) -> int:
    result = run_dcma14_assessment(model, project.id)
    if not args.quiet:
        print_integrity_report(result, project_name=project.display_name, verbose=args.verbose)
    if args.json:
        path = write_json(integrity_report_json(model, result, project.id), args.json)
        if args.quiet:
            print(path)
    if args.csv:
        path = write_csv(integrity_frame(result), args.csv)
        if args.quiet:
            print(path)
    return EXIT_OK


def cmd_wbs(model, project, args) -> int:
    print_wbs_tree(build_wbs_hierarchy(model, project.id), max_depth=args.max_depth)
    return EXIT_OK


def cmd_export(model, project, args) -> int:
    output_dir = Path(args.output_dir) if args.output_dir else settings.OUTPUT_DATA_DIR
    result = run_dcma14_assessment(model, project.id)

    written = [
        write_csv(activities_frame(model, project.id), output_dir / 'activities.csv'),
        write_csv(critical_path_frame(model, project.id), output_dir / 'critical_path.csv'),
        write_csv(resources_frame(model), output_dir / 'resources.csv'),
        write_csv(assignments_frame(model, model.get_assignments_by_project(project.id)),
                  output_dir / 'assignments.csv'),
        write_csv(all_resource_curves_frame(model, project.id), output_dir / 'resource_curves.csv'),
        write_csv(integrity_frame(result), output_dir / 'dcma14_integrity_report.csv'),
        write_json(project_summary_json(model, project.id), output_dir / 'project_summary.json'),
        write_json(resource_utilization_json(model, project.id), output_dir / 'resource_utilization.json'),
        write_json(integrity_report_json(model, result, project.id), output_dir / 'dcma14_integrity_report.json'),
    ]

    if args.quiet:
        for path in written:
            print(path)
    else:
        print(f"Exported {len(written)} files to {output_dir}")
    return EXIT_OK


COMMANDS = {
    'summary': cmd_summary,
    'critical': cmd_critical,
    'resources': cmd_resources,
    'curve': cmd_curve,
    'integrity': cmd_integrity,
    'wbs': cmd_wbs,
    'export': cmd_export,
}


# =============================================================================
# Argument parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('input_file', help='Path to the input XER file')
    common.add_argument('--project', help='Project id to analyze (default: first project in the file)')
    common.add_argument('-q', '--quiet', action='store_true', help='Suppress progress messages')

    parser = argparse.ArgumentParser(
        prog='chronos',
        description='Analyze Primavera P6 XER schedules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s summary data/raw/project.xer
  %(prog)s curve data/raw/project.xer --resource 4021 --chart cost
  %(prog)s integrity data/raw/project.xer --json dcma.json
  %(prog)s export data/raw/project.xer --output-dir data/output
        """
    )
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('summary', parents=[common], help='Project counts, histograms and health')

    p = sub.add_parser('critical', parents=[common], help='Critical path summary')
    p.add_argument('--limit', type=int, default=20, help='Critical activities to list (default: 20)')

    p = sub.add_parser('resources', parents=[common], help='Resource utilization table')
    p.add_argument('--limit', type=int, default=25, help='Resources to list (default: 25)')

    p = sub.add_parser('curve', parents=[common], help='Weekly resource curve')
    p.add_argument('--resource', required=True, help='Resource id (rsrc_id)')
    p.add_argument('--chart', choices=['quantity', 'cost'], default='quantity', help='Values to show')
    p.add_argument('--csv', help='Also write the curve to this CSV file')

    p = sub.add_parser('integrity', parents=[common], help='DCMA 14-point assessment')
    p.add_argument('--json', help='Write the full report to this JSON file')
    p.add_argument('--csv', help='Write one row per point to this CSV file')
    p.add_argument('-v', '--verbose', action='store_true', help='Show metrics and offending items')

    p = sub.add_parser('wbs', parents=[common], help='WBS tree with rollups')
    p.add_argument('--max-depth', type=int, default=None, help='Deepest level to print')

    p = sub.add_parser('export', parents=[common], help='Write all CSV and JSON exports')
    p.add_argument('--output-dir', default=None,
                   help='Directory for exported files (default: CHRONOS_OUTPUT_DIR)')

    return parser


def main(argv=None) -> int:
    """Main entry point for command-line usage"""
    parser = build_parser()
    args = parser.parse_args(argv)

    problems = settings.validate_required_settings()
    if problems:
        print("ERROR: Invalid configuration:", file=sys.stderr)
        for problem in problems:
            print(f"  - {problem}", file=sys.stderr)
        return EXIT_ERROR

    logger = configure_logging('chronos')
    if args.quiet:
        logger.setLevel(logging.WARNING)

    try:
        model = load_xer(args.input_file)
        if not model.has_projects():
            print(NO_PROJECTS_MESSAGE, file=sys.stderr)
            return EXIT_NO_PROJECTS

        project = model.get_project(args.project) if args.project else model.primary_project
        if project is None:
            raise ValueError(f"Project '{args.project}' not found in {args.input_file}")

        return COMMANDS[args.command](model, project, args)

    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
