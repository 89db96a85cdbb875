"""
Domain handlers for the dispatch service.
Each handler operates on Google Sheets through an injected SheetsClient.
"""
from handlers.requests import RequestsHandler
from handlers.purchases import PurchasesHandler

__all__ = ["RequestsHandler", "PurchasesHandler"]
