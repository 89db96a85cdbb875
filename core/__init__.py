"""
Core handler infrastructure shared by the domain handlers.
"""
from core.base_handler import BaseHandler

__all__ = ["BaseHandler"]
