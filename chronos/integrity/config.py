"""
Thresholds for the DCMA 14-point schedule assessment.

Percentages are 0-100. Each threshold pair reads as "pass at or below
(or above) the first value, warn up to the second, otherwise fail".
"""

from typing import Dict, List, Tuple

from chronos.config.settings import settings

TOTAL_POINTS = 14

STATUS_PASS = 'pass'
STATUS_WARNING = 'warning'
STATUS_FAIL = 'fail'

# Hour-based limits
HIGH_FLOAT_HOURS = 168        # more than 1 week of float
HIGH_DURATION_HOURS = 960     # more than 6 weeks of duration
HOURS_PER_DAY = 8
HOURS_PER_WEEK = 40

# Constraint types that do not pin an activity to a date
SOFT_CONSTRAINTS = frozenset({'CS_ALAP', 'CS_ASAP'})

ACTIVE_STATUS = 'TK_Active'

# Drill-down list caps
MIN_FAILED_ITEMS_LIMIT = 25
MAX_FAILED_ITEMS_LIMIT = 50


def clamp_drilldown_limit(limit: int) -> int:
    """Keep a configured drill-down cap within the supported band."""
    return min(max(limit, MIN_FAILED_ITEMS_LIMIT), MAX_FAILED_ITEMS_LIMIT)


FAILED_ITEMS_LIMIT = clamp_drilldown_limit(settings.DRILLDOWN_LIMIT)
LOGIC_SECONDARY_LIMIT = 25

THRESHOLDS: Dict[str, Dict[str, float]] = {
    'leads': {'warning': 5.0},                                # 0 -> pass, <=5% -> warn
    'lags': {'pass': 10.0},                                   # <=10% -> pass, else warn
    'relationship_types': {'pass': 90.0, 'warning': 80.0},    # FS share, higher is better
    'hard_constraints': {'warning': 5.0},                     # 0 -> pass, <=5% -> warn
    'high_float': {'pass': 5.0, 'warning': 10.0},
    'high_duration': {'pass': 5.0, 'warning': 10.0},
    'resources': {'pass': 95.0, 'warning': 80.0},             # coverage, higher is better
    'incomplete_activities': {'pass': 5.0, 'warning': 10.0},
    'critical_path': {'min': 5.0, 'max': 15.0},
}

# (minimum score, grade), checked in order
GRADE_BANDS: List[Tuple[int, str]] = [
    (90, 'A'),
    (80, 'B'),
    (70, 'C'),
    (60, 'D'),
]
FALLBACK_GRADE = 'F'

ASSESSMENT_TYPE = 'DCMA 14-Point Schedule Integrity Assessment'
