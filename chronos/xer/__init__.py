"""
XER tokenizing and typed projection.

The model assembler lives in ``chronos.xer.reader``; it is not re-exported
here because it depends on ``chronos.schemas``, which depends on the
projector in this package.
"""

from .parser import XERParser, RawRecord, RawTables, parse_xer_text
from .projector import (
    FIELD_KINDS,
    FIELD_KIND_BOOLEAN,
    FIELD_KIND_DATE,
    FIELD_KIND_NUMBER,
    FIELD_KIND_STRING,
    project_record,
    to_boolean,
    to_date,
    to_number,
)

__all__ = [
    'XERParser',
    'RawRecord',
    'RawTables',
    'parse_xer_text',
    'FIELD_KINDS',
    'FIELD_KIND_BOOLEAN',
    'FIELD_KIND_DATE',
    'FIELD_KIND_NUMBER',
    'FIELD_KIND_STRING',
    'project_record',
    'to_boolean',
    'to_date',
    'to_number',
]
