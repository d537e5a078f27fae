from .helpers import percentage, flatten_nested_dict, format_details, natural_sort_key
from .logger import configure_logging

__all__ = [
    'percentage',
    'flatten_nested_dict',
    'format_details',
    'natural_sort_key',
    'configure_logging',
]
