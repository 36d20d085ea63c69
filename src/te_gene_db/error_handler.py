"""Error types and user-facing error handling."""

import logging
import time
import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class GeneDatabaseError(Exception):
    """Base class for all errors raised by the gene database."""


class LoadFailure(GeneDatabaseError):
    """The record file could not be fetched or parsed."""

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.source = source
        self.cause = cause


class StoreNotLoaded(GeneDatabaseError):
    """Records were requested from a store that holds none."""


class StoreAlreadyLoaded(GeneDatabaseError):
    """A second load was attempted on a load-once store."""


class InvalidInput(GeneDatabaseError, ValueError):
    """User input cannot be processed (empty or too short sequence, bad page)."""


class EmptyExport(GeneDatabaseError):
    """Export was requested with no results."""


class ErrorType(Enum):
    """Types of errors that can occur."""
    LOAD_FAILURE = "load_failure"
    INVALID_INPUT = "invalid_input"
    EMPTY_EXPORT = "empty_export"
    FILE_IO_ERROR = "file_io_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    timestamp: float
    operation: str
    item_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exception: Optional[Exception] = None
    traceback: Optional[str] = None
    suggestion: Optional[str] = None

    @property
    def is_blocking(self) -> bool:
        """Only a failed load stops the application."""
        return self.error_type == ErrorType.LOAD_FAILURE


class ErrorHandler:
    """Classifies errors, logs them and keeps a history for reporting."""

    SUGGESTIONS = {
        ErrorType.LOAD_FAILURE: "Failed to load database. Check the data source and start again.",
        ErrorType.INVALID_INPUT: "Please correct the input and try again.",
        ErrorType.EMPTY_EXPORT: "No results to export. Please perform a search first.",
        ErrorType.FILE_IO_ERROR: "Check that the output location exists and is writable.",
        ErrorType.UNKNOWN: None,
    }

    SEVERITIES = {
        ErrorType.LOAD_FAILURE: ErrorSeverity.CRITICAL,
        ErrorType.INVALID_INPUT: ErrorSeverity.WARNING,
        ErrorType.EMPTY_EXPORT: ErrorSeverity.WARNING,
        ErrorType.FILE_IO_ERROR: ErrorSeverity.ERROR,
        ErrorType.UNKNOWN: ErrorSeverity.ERROR,
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.error_history: List[ErrorContext] = []

    def handle_error(self,
                     error: Exception,
                     operation: str,
                     item_id: Optional[str] = None,
                     **kwargs) -> ErrorContext:
        """
        Handle an error with appropriate logging.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            item_id: Optional item identifier (query, sequence, path)
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestion
        """
        error_type = self._classify_error(error)
        severity = self.SEVERITIES[error_type]

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=kwargs or None,
            exception=error,
            traceback=traceback.format_exc() if severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL) else None,
            suggestion=self.SUGGESTIONS[error_type],
        )

        self._log_error(context)
        self.error_history.append(context)
        return context

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception class."""
        if isinstance(error, LoadFailure):
            return ErrorType.LOAD_FAILURE
        if isinstance(error, EmptyExport):
            return ErrorType.EMPTY_EXPORT
        if isinstance(error, InvalidInput):
            return ErrorType.INVALID_INPUT
        if isinstance(error, OSError):
            return ErrorType.FILE_IO_ERROR
        return ErrorType.UNKNOWN

    def _log_error(self, context: ErrorContext):
        """Log error with appropriate level and details."""
        log_message = f"{context.operation} - {context.error_type.value}: {context.message}"

        if context.item_id:
            log_message += f" (item: {context.item_id})"

        if context.severity == ErrorSeverity.INFO:
            self.logger.info(log_message)
        elif context.severity == ErrorSeverity.WARNING:
            self.logger.warning(log_message)
        elif context.severity == ErrorSeverity.ERROR:
            self.logger.error(log_message)
            if context.traceback:
                self.logger.debug(f"Traceback:\n{context.traceback}")
        else:
            self.logger.critical(log_message)
            if context.traceback:
                self.logger.debug(f"Traceback:\n{context.traceback}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors for reporting."""
        by_type: Dict[str, int] = {}
        by_severity: Dict[str, int] = {}
        for error in self.error_history:
            by_type[error.error_type.value] = by_type.get(error.error_type.value, 0) + 1
            by_severity[error.severity.value] = by_severity.get(error.severity.value, 0) + 1

        recent_errors = [
            {
                'type': error.error_type.value,
                'severity': error.severity.value,
                'message': error.message,
                'operation': error.operation,
                'timestamp': datetime.fromtimestamp(error.timestamp).isoformat(),
                'suggestion': error.suggestion,
            }
            for error in self.error_history[-5:]
        ]

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type,
            'by_severity': by_severity,
            'recent_errors': recent_errors,
        }


# Global error handler instance
_error_handler = None


def get_error_handler() -> ErrorHandler:
    """Get global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def setup_error_handler() -> ErrorHandler:
    """Replace the global error handler with a fresh one."""
    global _error_handler
    _error_handler = ErrorHandler()
    return _error_handler
