"""
Requests handler package.

Exports RequestsHandler for the Solicitudes sheet.
"""
from handlers.requests.handler import RequestsHandler

__all__ = ["RequestsHandler"]
