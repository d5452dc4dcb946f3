"""Domain exceptions for the catalog service.

Services raise these; the handlers registered in `main.py` turn them into
JSON error responses:

    CatalogError (base)
    ├── ValidationError  → 400 Bad Request
    ├── NotFoundError    → 404 Not Found
    └── DatabaseError    → 500 Internal Server Error
"""
from typing import Any, Dict, Optional


class CatalogError(Exception):
    """Base exception for catalog errors.

    `message` is safe to return to clients; `context` is extra detail that
    is logged and, for validation failures, echoed back as `details`.
    """

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """A create/edit payload or list filter is missing a field or malformed."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str = "Validation failed", errors: Optional[list] = None):
        super().__init__(message=message, context={"errors": errors or []})
        self.errors = errors or []


class NotFoundError(CatalogError):
    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str = "Resource", resource_id: Optional[str] = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} '{resource_id}' not found"
        super().__init__(message=message, context={"resource": resource, "resource_id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """A query or commit failed; the session has already been rolled back."""

    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)
