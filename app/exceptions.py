# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ItemstackException(Exception):
    """
    Base exception for the Itemstack API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ITEMSTACK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Item Exceptions
# =============================================================================

class ItemNotFoundError(ItemstackException):
    """Raised when an item ID doesn't exist."""

    def __init__(self, item_id: int):
        super().__init__(
            message=f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            status_code=404,
            suggestion="List items with GET /items to find a valid id",
            details={"item_id": item_id}
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StoreUnavailableError(ItemstackException):
    """Raised when the item store cannot serve a request."""

    def __init__(self, error: str, suggestion: str | None = None):
        super().__init__(
            message=f"Item store unavailable: {error}",
            code="STORE_UNAVAILABLE",
            status_code=503,
            suggestion=suggestion or "Try again later or check the store configuration",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def itemstack_exception_handler(
    request: Request,
    exc: ItemstackException
) -> JSONResponse:
    """
    Convert ItemstackException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Keeps FastAPI's per-field error list but wraps it in the same
    detail/code shape as every other error.
    """
    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
