"""
Schema-typed projection of raw XER records.

Every value in a raw record is a string. A table schema maps field names to
one of four kinds, and each declared field is coerced by kind:

- number:  decimal value; empty or unparsable gives 0.0
- date:    naive datetime (offsets converted to UTC); empty or unparsable
           gives None
- boolean: True only for 'Y', 'true' or '1'
- string:  unchanged

Fields the schema does not declare pass through as raw strings.
"""

import math
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import pandas as pd

FIELD_KIND_STRING = 'string'
FIELD_KIND_NUMBER = 'number'
FIELD_KIND_DATE = 'date'
FIELD_KIND_BOOLEAN = 'boolean'

FIELD_KINDS = (FIELD_KIND_STRING, FIELD_KIND_NUMBER, FIELD_KIND_DATE, FIELD_KIND_BOOLEAN)

TRUE_VALUES = frozenset({'Y', 'true', '1'})

TableSchema = Mapping[str, str]


def to_number(value: Any) -> float:
    """Coerce a raw value to float, defaulting to 0.0."""
    if value is None:
        return 0.0
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_date(value: Any) -> Optional[datetime]:
    """Coerce a raw value to a datetime, or None when empty or unparsable."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    parsed = pd.to_datetime(text, errors='coerce')
    if pd.isna(parsed):
        return None
    # Offsets are folded into UTC so every date compares as naive
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed.to_pydatetime()


def to_boolean(value: Any) -> bool:
    """True only for the XER truthy flags."""
    return value in TRUE_VALUES


_CONVERTERS = {
    FIELD_KIND_NUMBER: to_number,
    FIELD_KIND_DATE: to_date,
    FIELD_KIND_BOOLEAN: to_boolean,
}


def project_record(raw_record: Mapping[str, str], schema: TableSchema) -> Dict[str, Any]:
    """
    Convert one raw record to typed values according to a table schema.

    Args:
        raw_record: Field name to raw string value
        schema: Field name to field kind

    Returns:
        New dictionary with the same keys; declared fields converted
    """
    typed = {}
    for field_name, value in raw_record.items():
        converter = _CONVERTERS.get(schema.get(field_name, FIELD_KIND_STRING))
        typed[field_name] = converter(value) if converter else value
    return typed
