"""
Exception hierarchy for progress-engine
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

import pydantic

logger = logging.getLogger(__name__)


class ProgressEngineError(Exception):
    """
    Base exception for all progress-engine errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise ProgressEngineError(
            message="Failed to build progress report",
            user_id="user-1",
            operation="build_progress_report",
            context={"category_id": "cat-1"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (caller input)
# ==========================================

class ValidationError(ProgressEngineError):
    """
    Raised when caller-supplied data fails validation

    Examples:
    - Progress row missing week_start_date
    - Negative target_count

    Example:
        raise ValidationError(
            message="target_count must be >= 0",
            field="target_count",
            value=-1
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


class InvalidDateError(ValidationError):
    """Date string is not an ISO-8601 date"""

    def __init__(self, value: Any, **kwargs):
        super().__init__(
            message=f"Expected an ISO-8601 date (YYYY-MM-DD), got {value!r}",
            field="date",
            value=value,
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(ProgressEngineError):
    """Engine configuration is invalid"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The progress engine is not properly configured.",
            context={"config_key": config_key},
            **kwargs
        )


def wrap_validation_exception(
    error: pydantic.ValidationError,
    operation: str,
    user_id: Optional[str] = None,
) -> ValidationError:
    """
    Wrap a pydantic validation failure into our exception hierarchy

    Example:
        try:
            record = ProgressTracking.model_validate(row)
        except pydantic.ValidationError as e:
            raise wrap_validation_exception(e, operation="parse_progress_records")
    """
    first = error.errors()[0] if error.error_count() else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None

    return ValidationError(
        message=first.get("msg", str(error)),
        field=field,
        value=first.get("input"),
        user_id=user_id,
        operation=operation,
        cause=error,
    )
