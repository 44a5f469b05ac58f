"""
Custom exception classes for the Pixverse client.

These exceptions provide structured error handling for local validation,
control-plane transport and envelope failures, and object-storage uploads.
"""

from typing import Any


class PixverseException(Exception):
    """
    Base exception for all Pixverse client errors.

    Provides a consistent interface for error handling with support for
    error codes, messages, and additional details.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code for client handling
        details: Additional error details (optional)
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error context
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging or serialization.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(PixverseException):
    """
    Raised when a request fails local validation.

    Raised synchronously before any network call is attempted and
    never retried.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Description of the validation error
            field: Name of the field that failed validation (optional)
            details: Additional validation context
        """
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=error_details,
        )


class ExternalServiceError(PixverseException):
    """
    Raised when a call to the remote service fails.

    Covers network errors, timeouts, non-2xx responses and
    undecodable response bodies.
    """

    def __init__(
        self,
        service: str,
        message: str,
        original_error: str | None = None,
        status_code: int | None = None,
        code: str = "EXTERNAL_SERVICE_ERROR",
    ) -> None:
        """
        Initialize ExternalServiceError.

        Args:
            service: Name of the external service
            message: Description of the error
            original_error: Original error message from the service
            status_code: HTTP status returned by the service (optional)
            code: Machine-readable error code
        """
        details: dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = original_error
        if status_code is not None:
            details["status_code"] = status_code

        self.service = service
        self.status_code = status_code

        super().__init__(
            message=message,
            code=code,
            details=details,
        )


class APIError(ExternalServiceError):
    """
    Raised when the control-plane envelope carries a nonzero error code.

    Attributes:
        err_code: The envelope's ``ErrCode``
        err_msg: The envelope's ``ErrMsg``
    """

    def __init__(
        self,
        service: str,
        err_code: int,
        err_msg: str,
    ) -> None:
        self.err_code = err_code
        self.err_msg = err_msg

        super().__init__(
            service=service,
            message=f"API error: {err_msg} (Code: {err_code})",
            original_error=err_msg,
            code="API_ERROR",
        )
        self.details["err_code"] = err_code


class UploadError(ExternalServiceError):
    """Raised when the object-storage PUT returns a non-2xx status."""

    def __init__(
        self,
        service: str,
        status_code: int,
        body: str,
    ) -> None:
        super().__init__(
            service=service,
            message=f"Failed to upload file ({status_code}): {body}",
            original_error=body[:500],
            status_code=status_code,
            code="UPLOAD_ERROR",
        )
