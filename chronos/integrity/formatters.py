"""
Console formatting for the DCMA 14-point assessment.
"""

from typing import Optional

from chronos.utils.helpers import format_details
from .config import ASSESSMENT_TYPE, STATUS_FAIL, STATUS_PASS
from .models import AssessmentResult, CheckResult


def format_status(status: str) -> str:
    """
    Format a check status with an indicator.

    Returns:
        String like "✅ PASS" or "❌ FAIL"
    """
    if status == STATUS_PASS:
        return "✅ PASS"
    if status == STATUS_FAIL:
        return "❌ FAIL"
    return "⚠️ WARNING"


def print_point(point: CheckResult, verbose: bool = False, limit: int = 10) -> None:
    """Print one check with its message, and drill-down items when verbose."""
    print(f"\n  Point {point.number:2d}: {point.title:28s} {format_status(point.status)}")
    print(f"    {point.message}")
    if not point.applicable:
        return
    if verbose:
        print(f"    Details: {format_details(point.details)}")
        if point.analysis:
            print(f"    Analysis: {point.analysis}")
        for list_name, items in point.failed_items.items():
            if not items:
                continue
            print(f"    {list_name} ({len(items)} listed):")
            for item in items[:limit]:
                label = item.get('code') or f"{item.get('pred_code')} -> {item.get('succ_code')}"
                name = item.get('name') or ''
                print(f"      - {label} {name[:50]}")


def print_integrity_report(
    result: AssessmentResult,
    project_name: Optional[str] = None,
    verbose: bool = False,
) -> None:
    """Print the full assessment: summary block followed by all fourteen points."""
    summary = result.summary

    print("\n" + "=" * 100)
    print(ASSESSMENT_TYPE.upper())
    print("=" * 100)
    if project_name:
        print(f"\nProject: {project_name}")

    print(f"\nScore: {summary.score}%   Grade: {summary.grade}")
    print(f"  • Passed:   {summary.passed_points:>2} / {summary.total_points}")
    print(f"  • Warnings: {summary.warning_points:>2}")
    print(f"  • Failed:   {summary.failed_points:>2}")

    print("\n" + "-" * 100)
    for point in result.points:
        print_point(point, verbose=verbose)

    print("\n" + "=" * 100)
