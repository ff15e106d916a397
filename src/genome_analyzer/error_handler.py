"""Classification, logging and reporting of per-file processing errors."""

import json
import time
import traceback
from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import DecodeError, ValidationError
from .logging_config import get_logger


class ErrorType(Enum):
    """Types of errors that can occur while processing a file."""
    VALIDATION_ERROR = "validation_error"
    DECODE_ERROR = "decode_error"
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


SUGGESTIONS = {
    ErrorType.VALIDATION_ERROR: (
        "Sequence has fewer than 10 nucleotides after normalization. "
        "Check the file extension matches its format."
    ),
    ErrorType.DECODE_ERROR: "File is not text in a supported encoding. It was skipped.",
    ErrorType.FILE_IO_ERROR: "File could not be read. Check that it exists and is readable.",
    ErrorType.UNKNOWN: "Unexpected error. The file was skipped.",
}


class ErrorHandler:
    """Classifies, logs and keeps a history of processing errors.

    A failed file is reported and skipped; nothing is retried.
    """

    def __init__(self):
        self.logger = get_logger('error_handler')
        self.error_logger = get_logger('error')
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
            item_id: Optional item identifier, usually the file name
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestion
        """
        error_type = self._classify_error(error)
        severity = self._determine_severity(error_type)

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=kwargs,
            exception=error,
            traceback=self._format_traceback(error) if severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL] else None,
            suggestion=SUGGESTIONS.get(error_type)
        )

        self._log_error(context)
        self.error_history.append(context)

        return context

    def _format_traceback(self, error: Exception) -> str:
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception."""
        if isinstance(error, ValidationError):
            return ErrorType.VALIDATION_ERROR

        if isinstance(error, (DecodeError, UnicodeDecodeError)):
            return ErrorType.DECODE_ERROR

        if isinstance(error, OSError):
            return ErrorType.FILE_IO_ERROR

        return ErrorType.UNKNOWN

    def _determine_severity(self, error_type: ErrorType) -> ErrorSeverity:
        """Determine error severity based on type."""
        if error_type in [ErrorType.VALIDATION_ERROR, ErrorType.DECODE_ERROR]:
            return ErrorSeverity.WARNING

        if error_type == ErrorType.FILE_IO_ERROR:
            return ErrorSeverity.ERROR

        return ErrorSeverity.CRITICAL

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
            self.error_logger.error(log_message)
            if context.traceback:
                self.error_logger.error(f"Traceback:\n{context.traceback}")
        elif context.severity == ErrorSeverity.CRITICAL:
            self.error_logger.critical(log_message)
            if context.traceback:
                self.error_logger.critical(f"Traceback:\n{context.traceback}")

        if context.suggestion:
            self.logger.debug(f"Suggestion: {context.suggestion}")

    def clear(self):
        """Forget all recorded errors."""
        self.error_history.clear()

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors for reporting."""
        if not self.error_history:
            return {
                'total_errors': 0,
                'by_type': {},
                'by_severity': {},
                'recent_errors': []
            }

        by_type = {}
        for error in self.error_history:
            error_type = error.error_type.value
            by_type[error_type] = by_type.get(error_type, 0) + 1

        by_severity = {}
        for error in self.error_history:
            severity = error.severity.value
            by_severity[severity] = by_severity.get(severity, 0) + 1

        recent_errors = []
        for error in self.error_history[-5:]:
            recent_errors.append({
                'type': error.error_type.value,
                'severity': error.severity.value,
                'message': error.message,
                'operation': error.operation,
                'item_id': error.item_id,
                'timestamp': datetime.fromtimestamp(error.timestamp).isoformat(),
                'suggestion': error.suggestion
            })

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type,
            'by_severity': by_severity,
            'recent_errors': recent_errors
        }

    def export_error_report(self, output_file: str):
        """Export detailed error report as JSON."""
        report = {
            'generated_at': datetime.now().isoformat(),
            'summary': self.get_error_summary(),
            'detailed_errors': []
        }

        for error in self.error_history:
            # Exception objects are not serializable
            error_dict = {f.name: getattr(error, f.name) for f in fields(error) if f.name != 'exception'}
            error_dict['error_type'] = error.error_type.value
            error_dict['severity'] = error.severity.value
            error_dict['timestamp'] = datetime.fromtimestamp(error.timestamp).isoformat()

            report['detailed_errors'].append(error_dict)

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, default=str)

        self.logger.info(f"Error report exported to {output_file}")


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
