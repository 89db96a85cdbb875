"""
Purchases handler package.

Exports PurchasesHandler for provider catalog lookups.
"""
from handlers.purchases.handler import PurchasesHandler

__all__ = ["PurchasesHandler"]
