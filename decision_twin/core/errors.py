"""Error Hierarchy — typed, categorized exceptions for all Decision Twin failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Malformed stored JSON and missing referenced entities are NOT errors:
      services return None / skip the record instead

Design Decisions:
    - Single hierarchy with DecisionTwinError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    decision_id: str | None = None
    share_id: str | None = None
    store_key: str | None = None
    prompt_type: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class DecisionTwinError(Exception):
    """Base exception for all Decision Twin errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "decision_id": self.context.decision_id,
                    "share_id": self.context.share_id,
                    "prompt_type": self.context.prompt_type,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class EntityValidationError(DecisionTwinError):
    """Input failed a domain-level check not expressible in the schema."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(DecisionTwinError):
    """Requested resource does not exist (or is no longer readable)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnknownPromptTypeError(DecisionTwinError):
    """Advisor request named a prompt type that has no template."""
    def __init__(self, prompt_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.prompt_type = prompt_type
        super().__init__(
            "Invalid request type", "UNKNOWN_PROMPT_TYPE",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, ctx, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(DecisionTwinError):
    """Key-value store unavailable or rejected the operation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class AdvisorAPIError(DecisionTwinError):
    """Remote LLM call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
        http_status: int = 503,
        code: str = "ADVISOR_API_ERROR",
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Advisor API error ({api_error_type}): {message}",
            code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.api_error_type = api_error_type


class AdvisorRateLimitError(AdvisorAPIError):
    """Remote LLM rate limit persisted through every retry."""
    def __init__(
        self, retry_after_ms: int | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_message = "Rate limit exceeded. Please try again in a moment."
        super().__init__(
            "Rate limit exceeded after retries", "rate_limit",
            retry_after_ms=retry_after_ms, context=ctx,
            http_status=429, code="ADVISOR_RATE_LIMITED",
        )


class AdvisorCreditsExhaustedError(AdvisorAPIError):
    """Remote LLM account has no credit left."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = (
            "AI credits exhausted. Please add funds to continue using AI features."
        )
        super().__init__(
            "Credits exhausted", "credits_exhausted", context=ctx,
            http_status=402, code="ADVISOR_CREDITS_EXHAUSTED",
        )
