"""
ID and timestamp generation for new request rows.
"""
import uuid
from datetime import datetime
from zoneinfo import ZoneInfo

from config import SHORT_ID_LENGTH, TIMESTAMP_FORMAT


def short_id() -> str:
    """
    Generate a short request ID: the first segment of a random UUID.
    Example: 3f9a1c2e
    """
    return uuid.uuid4().hex[:SHORT_ID_LENGTH]


def looks_numeric(s: str) -> bool:
    """True when Sheets would read `s` as a number (e.g. "01234567", "1e234567")."""
    try:
        float(s)
    except ValueError:
        return False
    return True


def unique_short_id(existing_ids: set[str], attempts: int = 10) -> str:
    """
    Generate a short ID not present in existing_ids.
    IDs that would be stored as numbers are skipped.

    Raises:
        RuntimeError: If no free ID was found after `attempts` tries
    """
    for _ in range(attempts):
        candidate = short_id()
        if candidate not in existing_ids and not looks_numeric(candidate):
            return candidate
    raise RuntimeError("could not generate a unique request id")


def format_timestamp(now: datetime | None = None, tz: str = "UTC") -> str:
    """Format a timestamp as dd/MM/yyyy HH:mm:ss in the given time zone."""
    zone = ZoneInfo(tz)
    if now is None:
        now = datetime.now(zone)
    elif now.tzinfo is not None:
        now = now.astimezone(zone)
    return now.strftime(TIMESTAMP_FORMAT)


def extract_ids_from_values(values: list[list], id_col: int) -> set[str]:
    """
    Extract all non-empty IDs from a 0-based column in a 2D values array.
    Header row included; callers pass data rows only if needed.
    """
    ids = set()
    for row in values:
        if id_col < len(row):
            val = row[id_col]
            if val and str(val).strip():
                ids.add(str(val).strip())
    return ids
