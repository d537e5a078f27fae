"""
Schedule Integrity Assessment (DCMA 14-point).

Usage:
    python -m chronos integrity schedule.xer
    python -m chronos integrity schedule.xer --json report.json --csv report.csv

Programmatic usage:
    from chronos.integrity import run_dcma14_assessment

    result = run_dcma14_assessment(model)
    print(result.summary.score, result.summary.grade)

Module Structure:
    __init__.py      - Public API
    config.py        - Thresholds, caps and grade bands
    models.py        - Data classes (CheckResult, AssessmentSummary, AssessmentResult)
    checks.py        - The fourteen independent checks
    assessor.py      - Runner and score/grade aggregation
    formatters.py    - Console report
"""

from .assessor import calculate_score, grade_for_score, run_dcma14_assessment, summarize_points
from .checks import (
    check_cd1_baseline,
    check_cd234_requirements,
    check_critical_path,
    check_hard_constraints,
    check_high_duration,
    check_high_float,
    check_incomplete_activities,
    check_invalid_dates,
    check_lags,
    check_leads,
    check_logic,
    check_negative_float,
    check_relationship_types,
    check_resources,
    has_invalid_dates,
)
from .config import STATUS_FAIL, STATUS_PASS, STATUS_WARNING, THRESHOLDS, TOTAL_POINTS
from .formatters import print_integrity_report
from .models import AssessmentResult, AssessmentSummary, CheckResult

__all__ = [
    # Runner
    'run_dcma14_assessment',
    'calculate_score',
    'grade_for_score',
    'summarize_points',
    # Checks
    'check_logic',
    'check_leads',
    'check_lags',
    'check_relationship_types',
    'check_hard_constraints',
    'check_high_float',
    'check_negative_float',
    'check_high_duration',
    'check_invalid_dates',
    'check_resources',
    'check_incomplete_activities',
    'check_critical_path',
    'check_cd1_baseline',
    'check_cd234_requirements',
    'has_invalid_dates',
    # Config
    'STATUS_PASS',
    'STATUS_WARNING',
    'STATUS_FAIL',
    'THRESHOLDS',
    'TOTAL_POINTS',
    # Models
    'AssessmentResult',
    'AssessmentSummary',
    'CheckResult',
    # Formatters
    'print_integrity_report',
]
