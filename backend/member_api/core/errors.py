"""Error Hierarchy: typed, categorized exceptions for every Member API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) carry a human-readable message returned verbatim
    - Store errors (500-level) never surface driver details to the client
    - to_response() produces the {"success": false, "error": ...} envelope

Design Decisions:
    - Single hierarchy with MemberApiError base: one global handler renders all (ADR: uniform error shape)
    - StoreConstraintError carries a ConstraintKind: the service maps kind → 409
      instead of scanning driver messages at the HTTP layer
"""

from enum import Enum

from member_api.core.domain_types import ConstraintKind


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"


class MemberApiError(Exception):
    """Base exception for all Member API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        return {"success": False, "error": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidMemberInputError(MemberApiError):
    """Missing required field, malformed email, or nothing to update."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class MemberNotFoundError(MemberApiError):
    """No member row matched the requested id."""
    def __init__(self, member_id: int | None = None):
        super().__init__(
            "Member not found", "MEMBER_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404,
        )
        self.member_id = member_id


class EmailConflictError(MemberApiError):
    """Email already belongs to another member."""
    def __init__(self):
        super().__init__(
            "Email already exists", "EMAIL_CONFLICT",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, 409,
        )


class StoreFailureError(MemberApiError):
    """Store call failed; message is the endpoint's generic failure text."""
    def __init__(self, message: str):
        super().__init__(
            message, "STORE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(MemberApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


class StoreConstraintError(StoreError):
    """Statement rejected by a table constraint."""
    def __init__(
        self,
        constraint: ConstraintKind,
        operation: str,
        column: str | None = None,
    ):
        super().__init__(f"{constraint.value} constraint violated", operation)
        self.constraint = constraint
        self.column = column
