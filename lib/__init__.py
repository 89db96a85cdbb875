"""
Utility libraries for the dispatch service.
Pure functions and records with no Sheets API dependency.
"""
from .common import normalize, to_number_or_none, ok, ng
from .id_rules import short_id, unique_short_id, format_timestamp
from .records import RequestRecord, PurchaseRecord, ProductEntry

__all__ = [
    # Records
    "RequestRecord",
    "PurchaseRecord",
    "ProductEntry",
    # Functions
    "normalize",
    "to_number_or_none",
    "ok",
    "ng",
    "short_id",
    "unique_short_id",
    "format_timestamp",
]
