"""
Common utility functions: string normalization, number coercion,
and the JSON response envelope shared by every handler.
"""
import unicodedata
from typing import Any


def normalize(s: Any) -> str:
    """
    Normalize a string for comparison.
    - NFKC normalization
    - Lowercase
    - Strip whitespace
    """
    if s is None:
        return ""
    text = str(s).strip().lower()
    return unicodedata.normalize("NFKC", text)


def to_number_or_none(val: Any) -> int | float | None:
    """
    Convert a value to a number, or return None if not possible.
    Handles empty strings and None gracefully.
    Whole numbers come back as int. Commas are not accepted:
    "1,000" is None rather than a guess at the locale.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    try:
        if isinstance(val, float):
            f = val
        else:
            s = str(val).strip()
            if s == "":
                return None
            f = float(s)
    except (ValueError, TypeError):
        return None
    if f != f or f in (float("inf"), float("-inf")):
        return None
    if f == int(f):
        return int(f)
    return f


def ok(op: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create a successful response."""
    return {"status": "success", "op": op, "data": data or {}}


def ng(op: str, code: str, message: str, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create an error response."""
    response: dict[str, Any] = {
        "status": "error",
        "op": op,
        "code": str(code.value if hasattr(code, "value") else code),
        "message": message,
    }
    if extra:
        response.update(extra)
    return response
