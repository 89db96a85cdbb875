"""
Configuration constants for the dispatch service.
Centralizes sheet names, column positions and status values.
Spreadsheet IDs come from the environment (see env_loader.py).
"""
from typing import Final

# Sheet names
REQUESTS_SHEET: Final[str] = "Solicitudes"
PURCHASES_SHEET: Final[str] = "Compras"

# Requests sheet layout (1-indexed column positions)
REQUEST_COLUMNS: Final[dict[str, int]] = {
    "code": 1,
    "quantity": 2,
    "timestamp": 3,
    "user": 4,
    "status": 5,
    "id": 6,
}

# Purchases sheet layout (1-indexed column positions)
# The export carries unused columns between these.
PURCHASE_COLUMNS: Final[dict[str, int]] = {
    "date": 1,
    "code": 4,
    "name": 5,
    "cost": 11,
    "provider": 12,
}

# Request status values as stored in the sheet
STATUS_SEPARATED: Final[str] = "separado"
STATUS_COMPLETED: Final[str] = "completado"

# Timestamp format written into new rows (dd/MM/yyyy HH:mm:ss)
TIMESTAMP_FORMAT: Final[str] = "%d/%m/%Y %H:%M:%S"

# Length of generated request IDs (first UUID segment)
SHORT_ID_LENGTH: Final[int] = 8

# User-facing messages
MSG_REQUEST_NOT_FOUND: Final[str] = "Solicitud no encontrada"
MSG_QUANTITY_EXCEEDS: Final[str] = "Cantidad excede pendiente"
MSG_QUANTITY_INVALID: Final[str] = "Cantidad inválida"
MSG_REQUEST_ID_REQUIRED: Final[str] = "idSolicitud es requerido"
MSG_PROVIDER_REQUIRED: Final[str] = "provider es requerido"
