"""
Google Sheets API client using gspread.
Provides Service Account authentication and the sheet operations
the dispatch handlers need (read all, append, write cell).
"""
import json
import gspread
from gspread.utils import DateTimeOption, ValueRenderOption
from google.oauth2.service_account import Credentials
from typing import Any

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.readonly",
]


class SheetsClient:
    """Wrapper around gspread for Google Sheets API access."""

    def __init__(self, credentials_json: str | dict):
        """
        Initialize the client with Service Account credentials.

        Args:
            credentials_json: Either a JSON string or dict containing
                             the Service Account credentials.
        """
        if isinstance(credentials_json, str):
            credentials_json = json.loads(credentials_json)
        creds = Credentials.from_service_account_info(credentials_json, scopes=SCOPES)
        self.gc = gspread.authorize(creds)
        self._spreadsheet_cache: dict[str, gspread.Spreadsheet] = {}

    def open_by_id(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        """Open a spreadsheet by ID with caching."""
        if spreadsheet_id not in self._spreadsheet_cache:
            self._spreadsheet_cache[spreadsheet_id] = self.gc.open_by_key(spreadsheet_id)
        return self._spreadsheet_cache[spreadsheet_id]

    def get_worksheet(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        fallback_first: bool = False,
    ) -> gspread.Worksheet:
        """
        Get a worksheet by name from a spreadsheet.

        With fallback_first, a missing tab resolves to the first tab
        instead of raising WorksheetNotFound.
        """
        ss = self.open_by_id(spreadsheet_id)
        try:
            return ss.worksheet(sheet_name)
        except gspread.exceptions.WorksheetNotFound:
            if not fallback_first:
                raise
            return ss.get_worksheet(0)

    def get_all_values(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        fallback_first: bool = False,
    ) -> list[list[Any]]:
        """
        Get all values from a worksheet as a 2D list.

        Numbers come back unformatted (1000, not "1,000");
        dates keep their display string.
        """
        ws = self.get_worksheet(spreadsheet_id, sheet_name, fallback_first)
        return ws.get_all_values(
            value_render_option=ValueRenderOption.unformatted,
            date_time_render_option=DateTimeOption.formatted_string,
        )

    def update_cell(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        row: int,
        col: int,
        value: Any,
    ) -> None:
        """Update a single cell by 1-based row and column."""
        ws = self.get_worksheet(spreadsheet_id, sheet_name)
        ws.update_cell(row, col, value)

    def append_rows(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        rows: list[list[Any]],
    ) -> None:
        """Append rows to the end of a worksheet."""
        ws = self.get_worksheet(spreadsheet_id, sheet_name)
        ws.append_rows(rows, value_input_option="USER_ENTERED")


# Singleton instance for the application
_sheets_client: SheetsClient | None = None


def get_sheets_client() -> SheetsClient:
    """
    Get the global SheetsClient instance.
    Initializes from environment variables on first call.
    """
    global _sheets_client
    if _sheets_client is None:
        from env_loader import get_google_credentials
        credentials = get_google_credentials()
        _sheets_client = SheetsClient(credentials)
    return _sheets_client
