"""
Standardized error handling for the dispatch service.
Provides consistent error codes and response helpers.
"""
from enum import Enum
from typing import Any

from lib.common import ng


class ErrorCode(str, Enum):
    """Standardized error codes used across the service."""
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    UNEXPECTED_FAILURE = "UNEXPECTED_FAILURE"


def bad_request(op: str, message: str) -> dict[str, Any]:
    """Create a BAD_REQUEST error response."""
    return ng(op, ErrorCode.BAD_REQUEST, message)


def unexpected_failure(op: str, message: str) -> dict[str, Any]:
    """Create an UNEXPECTED_FAILURE error response."""
    return ng(op, ErrorCode.UNEXPECTED_FAILURE, message)
