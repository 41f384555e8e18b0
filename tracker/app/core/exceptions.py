"""
Custom exceptions for consistent error reporting.

Provides standardized error codes so callers can branch on the kind of
failure without inspecting driver-specific exception types.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("tracker.store")


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""
    
    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            details={"resource": resource, "id": resource_id}
        )


class ParcelNotFoundError(ResourceNotFoundError):
    """Raised when no parcel row matches the requested number."""
    
    def __init__(self, number: int):
        self.number = number
        super().__init__("Parcel", number)


class StorageError(AppException):
    """Raised for any failure reported by the database engine."""
    
    def __init__(self, operation: str, original: Exception):
        self.operation = operation
        self.original = original
        super().__init__(
            message=f"Storage failure during {operation}: {original}",
            error_code="ERR_STORAGE_001",
            details={"operation": operation, "error_type": type(original).__name__}
        )


class ParcelStateError(AppException):
    """Raised when a parcel's status does not allow the requested change."""
    
    def __init__(self, number: int, status: str, action: str):
        super().__init__(
            message=f"Cannot {action} parcel {number} with status '{status}'",
            error_code="ERR_STATE_001",
            details={"number": number, "status": status, "action": action}
        )


@asynccontextmanager
async def storage_errors(db: AsyncSession, operation: str):
    """
    Re-raise engine errors as StorageError.
    
    The session is rolled back first so the caller can keep using it.
    A failed rollback is logged and the original error still wins.
    Nothing is retried.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        try:
            await db.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.warning(
                "Rollback Failed",
                extra={"operation": operation, "error": type(rollback_exc).__name__},
            )
        raise StorageError(operation, exc) from exc
