"""Error handling and exception definitions for Deckchart."""

from .enums import ErrorCode
from .models import ErrorDetail, ErrorResponse


class DeckchartError(Exception):
    """Base exception for all Deckchart errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
    ):
        """Initialize Deckchart error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Optional detailed error information
            hint: Optional correction hint for the user
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or []
        self.hint = hint

    def to_error_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse model.

        Returns:
            ErrorResponse model instance
        """
        return ErrorResponse(
            code=self.code.value,
            message=self.message,
            details=self.details if self.details else None,
            hint=self.hint,
        )


class ValidationError(DeckchartError):
    """Raised when a required selection is missing before advancing."""

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
    ):
        """Initialize validation error."""
        super().__init__(
            message=message,
            code=ErrorCode.E400_VALIDATION,
            details=details,
            hint=hint,
        )


class DataTooLargeError(ValidationError):
    """Raised when an uploaded file exceeds the size limit."""

    def __init__(
        self,
        message: str,
        max_size_mb: int = 10,
        actual_size_mb: float | None = None,
    ):
        """Initialize data too large error."""
        hint = f"Please upload a file under {max_size_mb}MB"
        if actual_size_mb:
            hint += f" (current: {actual_size_mb:.1f}MB)"

        super().__init__(message=message, hint=hint)
        self.code = ErrorCode.E413_TOO_LARGE


class UnsupportedFormatError(ValidationError):
    """Raised when an uploaded file is not a supported table format."""

    def __init__(
        self,
        message: str,
        supported_formats: list[str] | None = None,
        details: list[ErrorDetail] | None = None,
    ):
        """Initialize unsupported format error."""
        hint = None
        if supported_formats:
            hint = f"Supported formats: {', '.join(supported_formats)}"

        super().__init__(message=message, details=details, hint=hint)
        self.code = ErrorCode.E415_UNSUPPORTED_FORMAT


class PreconditionError(DeckchartError):
    """Raised when an export is requested without a data file or chart."""

    def __init__(self, message: str, missing: list[str] | None = None):
        """Initialize precondition error."""
        details = [ErrorDetail(field=name, reason=f"'{name}' is required to export") for name in missing or []]
        super().__init__(
            message=message,
            code=ErrorCode.E428_PRECONDITION,
            details=details,
            hint="Upload a data file and create a chart before exporting",
        )


class ConcurrentExportError(DeckchartError):
    """Raised when an export is requested while another is still in flight."""

    def __init__(self, message: str = "An export is already in progress"):
        """Initialize concurrent export error."""
        super().__init__(
            message=message,
            code=ErrorCode.E409_EXPORT_IN_PROGRESS,
            hint="Wait for the current export to finish",
        )


class RemoteError(DeckchartError):
    """Raised when the export service answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize remote error."""
        details = []
        if status_code is not None:
            details.append(ErrorDetail(field="status_code", reason=str(status_code)))

        super().__init__(
            message=message,
            code=ErrorCode.E424_UPSTREAM_SERVICE,
            details=details,
            hint="The export service rejected the request",
        )
        self.status_code = status_code


class TransportError(DeckchartError):
    """Raised when the export service cannot be reached or answers garbage."""

    def __init__(self, message: str, hint: str | None = None):
        """Initialize transport error."""
        super().__init__(
            message=message,
            code=ErrorCode.E503_TRANSPORT,
            hint=hint or "The export service is unavailable. Please try again later.",
        )


class ExportTimeoutError(TransportError):
    """Raised when the export request exceeds its network timeout."""

    def __init__(self, timeout_seconds: float | None = None):
        """Initialize export timeout error."""
        message = "Export request timed out"
        if timeout_seconds:
            message += f" after {timeout_seconds:g} seconds"

        super().__init__(
            message=message,
            hint="The export service took too long to respond. Please try again.",
        )
        self.code = ErrorCode.E408_TIMEOUT
