"""
Input parsing and validation utilities.

Functions for parsing and normalizing request payloads,
handling various input formats (strings, numbers, dicts).
"""
import re
from typing import Any

from lib.common import to_number_or_none

_GROUPED = re.compile(r"^-?\d{1,3}(,\d{3})+(\.\d+)?$")


def strip_quotes(s: str) -> str:
    """
    Strip outer quotes from a string.

    Args:
        s: Input string

    Returns:
        String with leading/trailing quotes removed
    """
    s = s.strip()
    if len(s) >= 2 and ((s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'"))):
        return s[1:-1]
    return s


def coerce_str(x: Any, keys: tuple[str, ...] = ()) -> str | None:
    """
    Extract a string from various input formats.

    Handles:
    - Direct string input
    - Integers (IDs typed as numbers in the sheet)
    - Dict with specified keys

    Args:
        x: Input value (string, dict, or other)
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted string or None if not found
    """
    if isinstance(x, str):
        return strip_quotes(x)
    if isinstance(x, int) and not isinstance(x, bool):
        return str(x)
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            if isinstance(v, (str, int)) and not isinstance(v, bool):
                return coerce_str(v)
    return None


def coerce_number(x: Any, keys: tuple[str, ...] = ()) -> int | float | None:
    """
    Extract a number from various input formats.

    The front-end sends quantities as strings ("4", "2.5"),
    so numeric strings are accepted. Grouped thousands ("1,000")
    drop their commas; a single other comma is a decimal point ("2,5").

    Args:
        x: Input value
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted number or None if not found/invalid
    """
    if isinstance(x, dict):
        for k in keys:
            result = coerce_number(x.get(k))
            if result is not None:
                return result
        return None
    if isinstance(x, str):
        x = strip_quotes(x)
        if _GROUPED.match(x):
            x = x.replace(",", "")
        elif x.count(",") == 1 and "." not in x:
            x = x.replace(",", ".")
    return to_number_or_none(x)
