"""Error Hierarchy — typed, categorized exceptions for every module failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each business rule is its own class: callers match on type, never on message text
    - Errors carry no HTTP status — only the API layer decides the response shape
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ModuleError base: one API handler catches all (ADR: uniform error shape)
    - Validation errors carry the offending field so the envelope can report it per field
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


class ModuleError(Exception):
    """Base exception for all module service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity


class ModuleValidationError(ModuleError):
    """A business rule on a single input field was violated."""
    def __init__(self, message: str, code: str, field: str):
        super().__init__(
            message, code, ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
        self.field = field


# ─── Business Rule Errors ───────────────────────────────────────

class NameRequiredError(ModuleValidationError):
    """Name is empty after trimming whitespace."""
    def __init__(self):
        super().__init__("module name is required", "NAME_REQUIRED", "name")


class NameLengthError(ModuleValidationError):
    """Trimmed name is outside the allowed length range."""
    def __init__(self):
        super().__init__("name must be 3-50 characters", "NAME_LENGTH", "name")


class DescriptionLengthError(ModuleValidationError):
    """Description exceeds the maximum length."""
    def __init__(self):
        super().__init__(
            "description exceeds 200 characters", "DESCRIPTION_LENGTH",
            "description",
        )


class InvalidModuleIdError(ModuleValidationError):
    """Identifier text is not a valid integer — distinct from not-found."""
    def __init__(self, raw_id: str):
        super().__init__(
            "module id must be an integer", "INVALID_MODULE_ID", "id",
        )
        self.raw_id = raw_id


class NameExistsError(ModuleError):
    """Another module already uses this name (case-insensitive)."""
    def __init__(self, name: str):
        super().__init__(
            "module name already exists", "NAME_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
        )
        self.name = name


class NotFoundError(ModuleError):
    """No module is stored under the requested id."""
    def __init__(self, module_id: str | int):
        super().__init__(
            "module not found", "MODULE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO,
        )
        self.module_id = module_id


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(ModuleError):
    """Storage operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
        self.detail = message
        self.operation = operation
