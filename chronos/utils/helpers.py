"""General utility helper functions."""
import re
from typing import Any, Dict, List, Union


def percentage(part: float, whole: float, empty: float = 0.0) -> float:
    """
    Share of ``part`` in ``whole`` as a percentage.

    Args:
        part: Numerator
        whole: Denominator
        empty: Value returned when the denominator is zero

    Returns:
        Percentage in the 0-100 range (``empty`` for a zero denominator)
    """
    if not whole:
        return empty
    return part / whole * 100


def flatten_nested_dict(
    d: Dict[str, Any],
    parent_key: str = '',
    sep: str = '_',
) -> Dict[str, Any]:
    """
    Flatten a nested dictionary.

    Args:
        d: Dictionary to flatten
        parent_key: Prefix for keys
        sep: Separator between key parts

    Returns:
        Flattened dictionary
    """
    items = []
    for k, v in d.items():
        new_key = f'{parent_key}{sep}{k}' if parent_key else k
        if isinstance(v, dict):
            items.extend(
                flatten_nested_dict(v, new_key, sep=sep).items()
            )
        else:
            items.append((new_key, v))
    return dict(items)


def format_details(details: Dict[str, Any]) -> str:
    """Render a metrics mapping as 'key: value; key: value'."""
    flat = flatten_nested_dict(details)
    return '; '.join(f'{k}: {v}' for k, v in flat.items())


def natural_sort_key(value: str) -> List[Union[int, str]]:
    """
    Sort key that orders embedded numbers numerically.

    'A10' sorts after 'A9', matching how schedulers list activity codes.
    """
    parts = re.split(r'(\d+)', value or '')
    return [int(p) if p.isdigit() else p.lower() for p in parts]
