"""
Chronos: Primavera P6 XER parsing and schedule analysis.

Usage:
    from chronos import load_xer, run_dcma14_assessment

    model = load_xer('schedule.xer')
    result = run_dcma14_assessment(model)
"""

from chronos.xer.reader import ScheduleModel, ScheduleSession, assemble_model, load_xer, load_xer_text
from chronos.integrity import run_dcma14_assessment

__version__ = '0.1.0'

__all__ = [
    'ScheduleModel',
    'ScheduleSession',
    'assemble_model',
    'load_xer',
    'load_xer_text',
    'run_dcma14_assessment',
]
