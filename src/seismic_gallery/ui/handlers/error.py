"""
Centralized error handling and classification for the gallery application.

Every failure a workflow can report is identified by an ErrorKind. Backend
failures are raised by the services as StorageError or DatabaseError and
converted into workflow outcomes at the call site.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ...logging_config import get_logger, log_error

logger = get_logger(__name__)


class ErrorKind(Enum):
    """Failures surfaced by the upload and deletion workflows."""

    MISSING_HANDLE = "MissingHandle"
    MISSING_FILE = "MissingFile"
    OBJECT_WRITE_FAILED = "ObjectWriteFailed"
    RECORD_WRITE_FAILED = "RecordWriteFailed"
    RECORD_DELETE_FAILED = "RecordDeleteFailed"
    OBJECT_DELETE_FAILED = "ObjectDeleteFailed"
    HANDLE_MISMATCH = "HandleMismatch"

    @property
    def is_validation(self) -> bool:
        """True for kinds resolved locally without a backend call."""
        return self in (ErrorKind.MISSING_HANDLE, ErrorKind.MISSING_FILE, ErrorKind.HANDLE_MISMATCH)


USER_MESSAGES = {
    ErrorKind.MISSING_HANDLE: "⚠️ Please enter your X username.",
    ErrorKind.MISSING_FILE: "⚠️ Please select an image file to upload.",
    ErrorKind.OBJECT_WRITE_FAILED: "❌ Upload failed: {detail}",
    ErrorKind.RECORD_WRITE_FAILED: "❌ Could not save artwork. Please try again.",
    ErrorKind.RECORD_DELETE_FAILED: "❌ Could not delete artwork. Please try again.",
    ErrorKind.OBJECT_DELETE_FAILED: "⚠️ Artwork removed, but its image could not be deleted from storage.",
    ErrorKind.HANDLE_MISMATCH: "❌ Username did not match. Deletion cancelled.",
}


def user_message_for(kind: ErrorKind, detail: str = "") -> str:
    """Render the short user-facing message for an error kind."""
    return USER_MESSAGES[kind].format(detail=detail)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    VALIDATION = "validation"
    STORAGE = "storage"
    DATABASE = "database"
    NETWORK = "network"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True
    retry_suggested: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
        }


class GalleryError(Exception):
    """Base exception class for the gallery application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        retry_suggested: bool = False,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or self._generate_user_message()
        self.details = details or {}
        self.recoverable = recoverable
        self.retry_suggested = retry_suggested
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message."""
        user_messages = {
            ErrorCategory.VALIDATION: "Please check your input.",
            ErrorCategory.STORAGE: "Image storage is unavailable. Please try again.",
            ErrorCategory.DATABASE: "The gallery database is unavailable. Please try again.",
            ErrorCategory.NETWORK: "Network error. Please check your connection.",
            ErrorCategory.SYSTEM: "A system error occurred.",
            ErrorCategory.UNKNOWN: "An unexpected error occurred.",
        }
        return user_messages.get(self.category, "An error occurred.")

    def _log_error(self) -> None:
        """Log the error with its classification."""
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
            retry_suggested=self.retry_suggested,
        )


class ValidationError(GalleryError):
    """Input rejected before any backend call."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        details: dict[str, Any] | None = None,
    ):
        self.kind = kind
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            code=kind.value,
            user_message=user_message_for(kind),
            details=details,
            recoverable=True,
            retry_suggested=False,
        )


class StorageError(GalleryError):
    """Object store (GCS) errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.HIGH,
            code=code or "storage_error",
            user_message=user_message,
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class DatabaseError(GalleryError):
    """Record store (DuckDB) errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.HIGH,
            code=code or "database_error",
            user_message=user_message,
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class NetworkError(GalleryError):
    """Network-related errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.MEDIUM,
            code="network_error",
            details=details,
            recoverable=True,
            retry_suggested=True,
            original_exception=original_exception,
        )


class GallerySystemError(GalleryError):
    """System-related errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.SYSTEM,
            severity=ErrorSeverity.CRITICAL,
            code="system_error",
            details=details,
            recoverable=False,
            retry_suggested=False,
            original_exception=original_exception,
        )


class ErrorHandler:
    """Classifies unexpected exceptions and keeps occurrence counts."""

    def __init__(self) -> None:
        self.error_counts: dict[str, int] = {}
        self.logger = get_logger(__name__)

    def handle_error(
        self,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> ErrorInfo:
        """
        Handle and classify errors.

        Args:
            error: Exception to handle
            context: Additional context information

        Returns:
            ErrorInfo: Structured error information
        """
        context = context or {}

        if isinstance(error, GalleryError):
            error_info = error.get_error_info()
        else:
            error_info = self._classify_error(error, context).get_error_info()

        self._track_error(error_info.code)
        return error_info

    def _classify_error(self, error: Exception, context: dict[str, Any]) -> GalleryError:
        """Wrap a foreign exception into the matching GalleryError."""
        error_type = type(error).__name__
        error_message = str(error)
        lowered = error_message.lower()
        details = {"original_type": error_type, **context}

        if any(keyword in lowered for keyword in ["storage", "gcs", "bucket", "blob", "object"]):
            return StorageError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["database", "duckdb", "sql", "query", "table"]):
            return DatabaseError(message=error_message, details=details, original_exception=error)

        if any(keyword in lowered for keyword in ["network", "connection", "timeout", "unreachable"]):
            return NetworkError(message=error_message, details=details, original_exception=error)

        if error_type in ["SystemError", "MemoryError", "OSError"]:
            return GallerySystemError(message=error_message, details=details, original_exception=error)

        return GalleryError(
            message=error_message,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM,
            details=details,
            original_exception=error,
        )

    def _track_error(self, error_code: str) -> None:
        """Track error occurrence for monitoring."""
        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1

        if self.error_counts[error_code] % 10 == 0:
            self.logger.warning("frequent_error_detected", error_code=error_code, count=self.error_counts[error_code])

    def get_error_statistics(self) -> dict[str, int]:
        """Get error occurrence statistics."""
        return self.error_counts.copy()

    def reset_statistics(self) -> None:
        """Reset error statistics."""
        self.error_counts.clear()


error_handler = ErrorHandler()


def handle_error(error: Exception, context: dict[str, Any] | None = None) -> ErrorInfo:
    """Classify an exception through the global error handler."""
    return error_handler.handle_error(error, context)


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    return error_handler
