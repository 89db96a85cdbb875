"""
Dispatch requests handler class.
OOP-based implementation using BaseHandler.

Implements splitting a pending request into a separated row
and listing the pending view of the Solicitudes sheet.
"""
from __future__ import annotations

from typing import Any, ClassVar

from core.base_handler import BaseHandler
from sheets_client import SheetsClient
from config import (
    REQUESTS_SHEET,
    REQUEST_COLUMNS,
    STATUS_SEPARATED,
    STATUS_COMPLETED,
    MSG_REQUEST_NOT_FOUND,
    MSG_QUANTITY_EXCEEDS,
    MSG_QUANTITY_INVALID,
    MSG_REQUEST_ID_REQUIRED,
)
from env_loader import get_requests_spreadsheet_id, get_timezone
from lib.common import to_number_or_none
from lib.errors import ErrorCode
from lib.records import RequestRecord, is_blank
from lib.id_rules import unique_short_id, format_timestamp, extract_ids_from_values


class RequestsHandler(BaseHandler):
    """
    Handler for the Solicitudes sheet.

    Extends BaseHandler with request-specific functionality:
    - separate: split a quantity off a request into a new "separado" row
    - list_pending: rows not yet "completado"
    """

    DEFAULT_SHEET_NAME: ClassVar[str] = REQUESTS_SHEET

    def __init__(
        self,
        sheets: SheetsClient,
        file_id: str | None = None,
        sheet_name: str | None = None,
        timezone: str | None = None,
    ) -> None:
        super().__init__(sheets, file_id, sheet_name)
        self.timezone = timezone or get_timezone()

    @classmethod
    def default_file_id(cls) -> str:
        return get_requests_spreadsheet_id()

    # === Separate ===

    def separate(
        self,
        request_id: str | None,
        quantity: int | float | None,
        user: str | None = None,
    ) -> dict[str, Any]:
        """
        Split `quantity` off request `request_id`.

        Appends [code, quantity, now, user, "separado", new_id] and then
        reduces the original row's quantity. When nothing remains the
        original is zeroed and marked "completado" (kept for history).

        Args:
            request_id: ID in column F of the original row
            quantity: Amount to separate (> 0, <= pending quantity)
            user: Operator performing the split (informational only;
                  the new row keeps the original requester)

        Returns:
            Response with the new row ID and the remaining quantity
        """
        op = "requests.separate"
        if not request_id or not str(request_id).strip():
            return self._error(op, ErrorCode.MISSING_PARAMETER, MSG_REQUEST_ID_REQUIRED)
        if quantity is None or quantity <= 0:
            return self._error(op, ErrorCode.INVALID_QUANTITY, MSG_QUANTITY_INVALID)

        error = self.load_sheet(op)
        if error:
            return error

        row_number = self.find_row_by_value(REQUEST_COLUMNS["id"], request_id)
        if row_number is None:
            return self._error(op, ErrorCode.NOT_FOUND, MSG_REQUEST_NOT_FOUND)

        original = RequestRecord.from_row(self.values[row_number - 1], row_number)
        if quantity > original.quantity:
            return self._error(
                op,
                ErrorCode.INVALID_QUANTITY,
                MSG_QUANTITY_EXCEEDS,
                {"pending": original.quantity},
            )

        try:
            existing = extract_ids_from_values(self.values[1:], REQUEST_COLUMNS["id"] - 1)
            separated = RequestRecord(
                code=original.code,
                quantity=quantity,
                timestamp=format_timestamp(tz=self.timezone),
                user=original.user,
                status=STATUS_SEPARATED,
                id=unique_short_id(existing),
            )
            self.sheets.append_rows(self.file_id, self.sheet_name, [separated.to_row()])

            remaining = to_number_or_none(round(original.quantity - quantity, 9))
            if remaining > 0:
                self._write(row_number, "quantity", remaining)
                status = original.status
            else:
                remaining = 0
                self._write(row_number, "quantity", 0)
                self._write(row_number, "status", STATUS_COMPLETED)
                status = STATUS_COMPLETED
        except Exception as e:
            return self._error(op, ErrorCode.UNEXPECTED_FAILURE, f"sheet write failed: {e}")

        return self._ok(op, {
            "id": separated.id,
            "original_id": original.id,
            "separated": quantity,
            "remaining": remaining,
            "status": status,
            "operator": user or "",
        })

    def _write(self, row_number: int, column: str, value: Any) -> None:
        self.sheets.update_cell(
            self.file_id,
            self.sheet_name,
            row_number,
            REQUEST_COLUMNS[column],
            value,
        )

    # === Pending view ===

    def list_pending(self, limit: int | None = None) -> dict[str, Any]:
        """
        List requests that are not completed.

        Args:
            limit: Maximum number of results

        Returns:
            Response with request list in sheet order
        """
        op = "requests.pending"
        error = self.load_sheet(op)
        if error:
            return error

        requests: list[dict] = []
        for row_number, row in self.data_rows:
            if is_blank(row):
                continue
            record = RequestRecord.from_row(row, row_number)
            if record.is_pending:
                requests.append(record.to_dict())

        if limit and limit > 0:
            requests = requests[:limit]

        return self._ok(op, {"requests": requests, "count": len(requests)})
