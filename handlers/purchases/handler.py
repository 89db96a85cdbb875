"""
Purchases handler class.

Read-only lookups over the external purchase history spreadsheet.
"""
from __future__ import annotations

from typing import Any, ClassVar

from core.base_handler import BaseHandler
from config import PURCHASES_SHEET, MSG_PROVIDER_REQUIRED
from env_loader import get_purchases_spreadsheet_id
from lib.common import normalize
from lib.errors import ErrorCode
from lib.records import PurchaseRecord, ProductEntry


class PurchasesHandler(BaseHandler):
    """
    Handler for the purchase history.

    The sheet is owned by an external process; when the expected tab
    is missing the first tab is read instead.
    """

    DEFAULT_SHEET_NAME: ClassVar[str] = PURCHASES_SHEET
    FALLBACK_FIRST_SHEET: ClassVar[bool] = True

    @classmethod
    def default_file_id(cls) -> str:
        return get_purchases_spreadsheet_id()

    def products_by_provider(self, provider: str | None) -> dict[str, Any]:
        """
        Products bought from `provider`, one entry per product code.

        Provider names are compared trimmed and case-insensitive.
        The first matching row per code wins; order is first-seen.

        Args:
            provider: Provider name

        Returns:
            Response with product list
        """
        op = "purchases.by_provider"
        if not provider or not str(provider).strip():
            return self._error(op, ErrorCode.MISSING_PARAMETER, MSG_PROVIDER_REQUIRED)

        error = self.load_sheet(op)
        if error:
            return error

        try:
            products = self._collect(normalize(provider))
        except Exception as e:
            return self._error(op, ErrorCode.UNEXPECTED_FAILURE, str(e))

        return self._ok(op, {
            "provider": provider,
            "products": [p.to_dict() for p in products],
            "count": len(products),
        })

    def _collect(self, provider_norm: str) -> list[ProductEntry]:
        seen: dict[str, ProductEntry] = {}
        for _, row in self.data_rows:
            purchase = PurchaseRecord.from_row(row)
            if not purchase.code or normalize(purchase.provider) != provider_norm:
                continue
            if purchase.code not in seen:
                seen[purchase.code] = ProductEntry.from_purchase(purchase)
        return list(seen.values())
