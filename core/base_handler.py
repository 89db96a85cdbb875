"""
Base handler class for sheet-based operations.

Provides common functionality for all handlers:
- Sheet loading with error handling
- Positional row lookup
- Response helpers (ok/ng)
"""
from abc import ABC
from typing import Any, ClassVar

from sheets_client import SheetsClient
from lib.common import ok, ng
from lib.errors import ErrorCode


class BaseHandler(ABC):
    """
    Abstract base class for all sheet-based handlers.

    Subclasses must define:
    - DEFAULT_SHEET_NAME: Default sheet name
    - default_file_id(): Default spreadsheet ID (usually from the environment)

    Subclasses may set FALLBACK_FIRST_SHEET to read the first tab
    when DEFAULT_SHEET_NAME does not exist.

    Example:
        class RequestsHandler(BaseHandler):
            DEFAULT_SHEET_NAME = "Solicitudes"

            @classmethod
            def default_file_id(cls) -> str:
                return get_requests_spreadsheet_id()
    """

    DEFAULT_SHEET_NAME: ClassVar[str | None] = None
    FALLBACK_FIRST_SHEET: ClassVar[bool] = False

    def __init__(
        self,
        sheets: SheetsClient,
        file_id: str | None = None,
        sheet_name: str | None = None,
    ) -> None:
        """
        Initialize handler with sheets client and optional overrides.

        Args:
            sheets: SheetsClient instance
            file_id: Override default file ID
            sheet_name: Override default sheet name
        """
        self.sheets = sheets
        self._file_id = file_id
        self.sheet_name = sheet_name or self.DEFAULT_SHEET_NAME

        # Lazily loaded
        self._values: list[list[Any]] | None = None

    @classmethod
    def default_file_id(cls) -> str:
        raise NotImplementedError

    # === Properties ===

    @property
    def file_id(self) -> str:
        """Spreadsheet ID, resolved from the environment on first use."""
        if not self._file_id:
            self._file_id = self.default_file_id()
        return self._file_id

    @property
    def values(self) -> list[list[Any]]:
        """Sheet values (all rows including header)."""
        return self._values or []

    @property
    def data_rows(self) -> list[tuple[int, list[Any]]]:
        """(1-based row number, row) pairs below the header."""
        return list(enumerate(self.values[1:], 2))

    # === Sheet Loading ===

    def load_sheet(self, op_name: str) -> dict | None:
        """
        Load sheet values with error handling.

        Args:
            op_name: Operation name for error messages

        Returns:
            Error dict if failed, None on success.
            On success, populates self._values (possibly header only).
        """
        try:
            self._values = self.sheets.get_all_values(
                self.file_id,
                self.sheet_name,
                fallback_first=self.FALLBACK_FIRST_SHEET,
            )
        except Exception as e:
            return self._error(op_name, ErrorCode.UNEXPECTED_FAILURE, f"sheet not available: {e}")
        return None

    # === Row Finding ===

    def find_row_by_value(self, position: int, target: Any) -> int | None:
        """
        Find first data row whose cell at `position` matches target.

        Args:
            position: 1-based column position
            target: Target value (compared as trimmed strings)

        Returns:
            1-based row index or None if not found
        """
        idx = position - 1
        want = str(target).strip()
        for i, row in self.data_rows:
            if idx < len(row) and str(row[idx]).strip() == want:
                return i
        return None

    # === Response Helpers ===

    def _ok(self, op: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        """Return success response."""
        return ok(op, data or {})

    def _error(
        self,
        op: str,
        code: str,
        message: str,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Return error response.

        Args:
            op: Operation name
            code: Error code
            message: Error message
            extra: Additional error data

        Returns:
            Error response dict
        """
        return ng(op, code, message, extra)
