"""
Pytest configuration and fixtures for dispatch service tests.
"""
import os
import pytest
from unittest.mock import MagicMock

# Set test environment variables before importing anything
os.environ.setdefault("GOOGLE_CREDENTIALS_JSON", '{"type": "service_account", "project_id": "test"}')
os.environ.setdefault("REQUESTS_SPREADSHEET_ID", "test-requests-id")
os.environ.setdefault("PURCHASES_SPREADSHEET_ID", "test-purchases-id")
os.environ.setdefault("SCRIPT_TIMEZONE", "UTC")


# ========== Response Assertion Helpers ==========

class ResponseAssertions:
    """Helper class for asserting response envelopes."""

    @staticmethod
    def assert_success(response: dict, op: str | None = None) -> dict:
        """Assert response is successful and return data.

        Args:
            response: The response dict to check
            op: Optional operation name to verify

        Returns:
            The data dict from the response
        """
        assert response.get("status") == "success", f"Expected success, got: {response}"
        if op:
            assert response.get("op") == op, f"Expected op={op}, got {response.get('op')}"
        return response.get("data", {})

    @staticmethod
    def assert_error(response: dict, code: str, op: str | None = None) -> str:
        """Assert response is an error with given code and return its message."""
        assert response.get("status") == "error", f"Expected error, got success: {response}"
        assert response.get("code") == code, \
            f"Expected error code {code}, got {response.get('code')}"
        if op:
            assert response.get("op") == op, f"Expected op={op}, got {response.get('op')}"
        return response.get("message", "")


@pytest.fixture
def assertions():
    """Fixture providing response assertion helpers."""
    return ResponseAssertions()


@pytest.fixture
def mock_sheets_client():
    """
    Mock SheetsClient for unit tests.
    Returns a MagicMock that can be configured per test.
    """
    mock = MagicMock()
    mock.get_all_values.return_value = []
    return mock


@pytest.fixture
def sample_requests_data():
    """Sample Solicitudes sheet: code, qty, date, user, status, id"""
    return [
        ["Código", "Cantidad", "Fecha", "Usuario", "Estado", "ID"],
        ["SKU1", "10", "01/10/2026 09:00:00", "alice", "solicitado", "id123"],
        ["SKU2", "5", "02/10/2026 10:30:00", "bob", "solicitado", "id456"],
        ["SKU3", "0", "03/10/2026 11:00:00", "alice", "completado", "id789"],
        ["SKU1", "3", "04/10/2026 12:00:00", "alice", "separado", "ab12cd34"],
    ]


@pytest.fixture
def sample_purchases_data():
    """Sample purchases sheet: date(A), code(D), name(E), cost(K), provider(L)"""
    def row(date, code, name, cost, provider):
        return [date, "", "", code, name, "", "", "", "", "", cost, provider, ""]

    return [
        row("Fecha", "Código", "Descripción", "Costo", "Proveedor"),
        row("15/09/2026", "P-001", "Tornillo 1/4", "0.35", "Ferretería Sur"),
        row("16/09/2026", "P-002", "Tuerca 1/4", "0.10", "ferreteria norte"),
        row("20/09/2026", "P-001", "Tornillo 1/4 (nuevo)", "0.40", "  ferretería sur "),
        row("21/09/2026", "P-003", "Arandela", "0.05", "FERRETERÍA SUR"),
        row("22/09/2026", "", "Flete", "12", "Ferretería Sur"),
    ]
