"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are precondition violations raised BEFORE any state mutation
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RecycleChainError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Failed operations have zero effect, so callers may retry any of these safely
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    actor: str | None = None
    debug_info: dict[str, Any] | None = None


class RecycleChainError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "actor": self.context.actor,
                },
            }
        }


# ─── Registration ───────────────────────────────────────────────

class AlreadyRegisteredError(RecycleChainError):
    """Identity already has a manufacturer record."""
    def __init__(self, identity: str, context: ErrorContext | None = None):
        super().__init__(
            f"Manufacturer already registered: '{identity}'",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.identity = identity


class NotRegisteredError(RecycleChainError):
    """Identity has no manufacturer record."""
    def __init__(self, identity: str, context: ErrorContext | None = None):
        super().__init__(
            f"Manufacturer not registered: '{identity}'",
            "NOT_REGISTERED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.identity = identity


# ─── Catalog ────────────────────────────────────────────────────

class LengthMismatchError(RecycleChainError):
    """Toxic-material names and weights are not parallel arrays."""
    def __init__(
        self, names_count: int, weights_count: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Toxic items array length mismatch: "
            f"{names_count} name(s), {weights_count} weight(s)",
            "LENGTH_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.names_count = names_count
        self.weights_count = weights_count


class ResourceNotFoundError(RecycleChainError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        code: str = "RESOURCE_NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ManufacturerNotFoundError(ResourceNotFoundError):
    def __init__(self, identity: str, context: ErrorContext | None = None):
        super().__init__("Manufacturer", identity, "MANUFACTURER_NOT_FOUND", context)


class ProductNotFoundError(ResourceNotFoundError):
    def __init__(self, product_id: int, context: ErrorContext | None = None):
        super().__init__("Product", str(product_id), "PRODUCT_NOT_FOUND", context)


class ProductItemNotFoundError(ResourceNotFoundError):
    """One or more item ids of a batch are unknown."""
    def __init__(self, item_ids: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Product item", ", ".join(item_ids), "PRODUCT_ITEM_NOT_FOUND", context,
        )
        self.item_ids = item_ids


# ─── Item ledger ────────────────────────────────────────────────

class NotOwnerError(RecycleChainError):
    """Actor is not the product's manufacturer."""
    def __init__(
        self, product_id: int, identity: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Only the product manufacturer can add product items "
            f"(product {product_id}, caller '{identity}')",
            "NOT_OWNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.product_id = product_id
        self.identity = identity


class CountOutOfRangeError(RecycleChainError):
    """Batch size outside the accepted window."""
    def __init__(
        self, count: int, minimum: int, maximum: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Product item count must be between {minimum} and {maximum}, got {count}",
            "COUNT_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.count = count


class InvalidTransitionError(RecycleChainError):
    """An item is not in an allowed source status for the requested move."""
    def __init__(
        self,
        action: str,
        offending: dict[str, str],
        context: ErrorContext | None = None,
    ):
        detail = ", ".join(f"{i} ({s})" for i, s in offending.items())
        super().__init__(
            f"Product item cannot be {_PAST_TENSE.get(action, action)}: {detail}",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.action = action
        self.offending = offending


_PAST_TENSE = {
    "sell": "sold", "return": "returned", "recycle": "recycled", "advance": "advanced",
}


class EmptyBatchError(RecycleChainError):
    """Transition requested with no item ids."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "At least one product item id is required",
            "EMPTY_BATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class IdentityRequiredError(RecycleChainError):
    """Mutating call arrived without an actor identity."""
    def __init__(self, header: str, context: ErrorContext | None = None):
        super().__init__(
            f"Actor identity required (missing {header} header)",
            "IDENTITY_REQUIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RecycleChainError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class LedgerNotReadyError(RecycleChainError):
    """Ledger service used before startup replay finished."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Ledger is not initialized",
            "LEDGER_NOT_READY", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )
