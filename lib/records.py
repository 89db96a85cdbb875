"""
Named records decoded from positional sheet rows.

All knowledge of which column holds what lives in config.py;
handlers only see these records.
"""
from dataclasses import dataclass
from typing import Any

from config import REQUEST_COLUMNS, PURCHASE_COLUMNS, STATUS_COMPLETED
from lib.common import normalize, to_number_or_none


def cell(row: list[Any], position: int, default: Any = "") -> Any:
    """Read a 1-indexed cell from a row, tolerating short rows."""
    idx = position - 1
    if 0 <= idx < len(row) and row[idx] is not None:
        return row[idx]
    return default


def is_blank(row: list[Any]) -> bool:
    return not any(str(c).strip() for c in row)


@dataclass
class RequestRecord:
    """One row of the Solicitudes sheet."""
    code: str
    quantity: int | float
    timestamp: str
    user: str
    status: str
    id: str
    row: int = 0  # 1-based sheet row, 0 when not yet written

    @classmethod
    def from_row(cls, row: list[Any], row_number: int = 0) -> "RequestRecord":
        return cls(
            code=str(cell(row, REQUEST_COLUMNS["code"])),
            quantity=to_number_or_none(cell(row, REQUEST_COLUMNS["quantity"])) or 0,
            timestamp=str(cell(row, REQUEST_COLUMNS["timestamp"])),
            user=str(cell(row, REQUEST_COLUMNS["user"])),
            status=str(cell(row, REQUEST_COLUMNS["status"])).strip(),
            id=str(cell(row, REQUEST_COLUMNS["id"])).strip(),
            row=row_number,
        )

    def to_row(self) -> list[Any]:
        """Encode back to sheet order (columns 1-6)."""
        out: list[Any] = [""] * len(REQUEST_COLUMNS)
        for key, position in REQUEST_COLUMNS.items():
            out[position - 1] = getattr(self, key)
        return out

    @property
    def is_pending(self) -> bool:
        return normalize(self.status) != STATUS_COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Shape consumed by the dispatch front-end."""
        return {
            "id": self.id,
            "codigo": self.code,
            "cantidad": self.quantity,
            "fecha": self.timestamp,
            "usuario": self.user,
            "categoria": self.status,
        }


@dataclass
class PurchaseRecord:
    """One row of the external purchase history."""
    code: str
    name: str
    cost: Any
    provider: str
    date: Any

    @classmethod
    def from_row(cls, row: list[Any]) -> "PurchaseRecord":
        raw_cost = cell(row, PURCHASE_COLUMNS["cost"])
        cost = to_number_or_none(raw_cost)
        return cls(
            code=str(cell(row, PURCHASE_COLUMNS["code"])).strip(),
            name=str(cell(row, PURCHASE_COLUMNS["name"])).strip(),
            cost=raw_cost if cost is None else cost,
            provider=str(cell(row, PURCHASE_COLUMNS["provider"])),
            date=cell(row, PURCHASE_COLUMNS["date"]),
        )


@dataclass
class ProductEntry:
    """Product bought from a provider, as returned by the catalog lookup."""
    code: str
    name: str
    cost: Any
    date: Any

    @classmethod
    def from_purchase(cls, purchase: PurchaseRecord) -> "ProductEntry":
        return cls(code=purchase.code, name=purchase.name, cost=purchase.cost, date=purchase.date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "codigo": self.code,
            "nombre": self.name,
            "costo": self.cost,
            "fecha": self.date,
        }
