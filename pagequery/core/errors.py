"""Error Hierarchy — typed exceptions the API shell raises and renders.

Invariants:
    - Each subclass fixes its code, category, severity and http_status at class level
    - to_response() is the only shape clients see; handlers for non-domain
      failures build the same envelope through error_envelope()
    - The paging engine never raises these: invalid paging input is normalized,
      and source failures propagate unchanged until the session boundary
"""

from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra: object,
) -> dict:
    """REST error body shared by domain errors and the global handlers."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        }
    }


class PageQueryError(Exception):
    """Base exception for all service errors."""
    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.now(timezone.utc)

    def context(self) -> dict:
        return {}

    def to_response(self) -> dict:
        return error_envelope(
            self.code, self.message, self.category, self.severity,
            timestamp=self.timestamp.isoformat(),
            context=self.context(),
        )


class ResourceNotFoundError(PageQueryError):
    """Requested resource does not exist."""
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id

    def context(self) -> dict:
        return {"resource_type": self.resource_type, "resource_id": self.resource_id}


class ConflictError(PageQueryError):
    """Write rejected because it collides with existing data."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    severity = ErrorSeverity.WARNING
    http_status = 409


class DatabaseError(PageQueryError):
    """A SQLAlchemy failure surfaced at the session boundary."""
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation

    def context(self) -> dict:
        return {"operation": self.operation}
