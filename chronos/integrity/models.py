"""
Data models for the schedule integrity assessment.

This module defines the data classes used to represent:
- One check result (a DCMA point)
- The score/grade summary
- The complete assessment
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import STATUS_FAIL, STATUS_PASS, STATUS_WARNING, TOTAL_POINTS


@dataclass
class CheckResult:
    """
    Outcome of a single DCMA check.

    Attributes:
        number: Point number, 1-14
        title: Short check name (e.g. 'Leads')
        description: What the check measures
        status: 'pass', 'warning' or 'fail'
        details: Numeric metrics behind the status
        failed_items: Named drill-down lists of offending entities (capped)
        message: One-line human summary
        applicable: False for points that are project-specific and not evaluated
        analysis: Optional interpretation text

    Example:
        >>> CheckResult(
        ...     number=7,
        ...     title='Negative Float',
        ...     description='No activities should have negative float.',
        ...     status='pass',
        ...     details={'negative_float_activities': 0, 'total_activities': 120},
        ...     message='No activities with negative float.',
        ... )
    """
    number: int
    title: str
    description: str
    status: str
    details: Dict[str, float] = field(default_factory=dict)
    failed_items: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    message: str = ''
    applicable: bool = True
    analysis: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == STATUS_PASS

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'number': self.number,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'details': dict(self.details),
            'failed_items': {k: list(v) for k, v in self.failed_items.items()},
            'message': self.message,
            'applicable': self.applicable,
        }
        if self.analysis is not None:
            data['analysis'] = self.analysis
        return data


@dataclass
class AssessmentSummary:
    """Pass/warning/fail counts with the overall score and grade."""
    passed_points: int
    failed_points: int
    warning_points: int
    score: int
    grade: str
    total_points: int = TOTAL_POINTS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_points': self.total_points,
            'passed_points': self.passed_points,
            'failed_points': self.failed_points,
            'warning_points': self.warning_points,
            'score': self.score,
            'grade': self.grade,
        }


@dataclass
class AssessmentResult:
    """All fourteen check results plus the summary."""
    points: List[CheckResult]
    summary: AssessmentSummary

    def get_point(self, number: int) -> Optional[CheckResult]:
        for point in self.points:
            if point.number == number:
                return point
        return None

    def by_status(self, status: str) -> List[CheckResult]:
        return [p for p in self.points if p.status == status]

    @property
    def failures(self) -> List[CheckResult]:
        return self.by_status(STATUS_FAIL)

    @property
    def warnings(self) -> List[CheckResult]:
        return self.by_status(STATUS_WARNING)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points': [p.to_dict() for p in self.points],
            'summary': self.summary.to_dict(),
        }
