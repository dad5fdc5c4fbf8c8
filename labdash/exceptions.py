"""Exception hierarchy for LabDash.

Every error that should reach an API client as a structured response
derives from ``LabException``. Data-access failures inside the store
layer are not raised; they are logged and turned into empty results
(see ``labdash.repositories.base``).
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Machine-readable error codes used in API responses."""

    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    DATABASE_ERROR = "DATABASE_ERROR"

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class LabException(Exception):
    """
    Base exception for all LabDash errors.

    Carries a human-readable message, an ``ErrorCode``, the HTTP status
    to answer with and optional details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for a JSON error body."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class ProjectNotFoundError(LabException):
    """Project not found."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project not found: {project_id}",
            ErrorCode.PROJECT_NOT_FOUND,
            status_code=404,
            details={"project_id": project_id}
        )


class EventNotFoundError(LabException):
    """Calendar event not found."""

    def __init__(self, event_id: str):
        super().__init__(
            f"Event not found: {event_id}",
            ErrorCode.EVENT_NOT_FOUND,
            status_code=404,
            details={"event_id": event_id}
        )


class StoredFileNotFoundError(LabException):
    """Stored file (public or personal) not found."""

    def __init__(self, file_id: str):
        super().__init__(
            f"File not found: {file_id}",
            ErrorCode.FILE_NOT_FOUND,
            status_code=404,
            details={"file_id": file_id}
        )


class FolderNotFoundError(LabException):
    """Folder (public or personal) not found."""

    def __init__(self, folder_id: str):
        super().__init__(
            f"Folder not found: {folder_id}",
            ErrorCode.FOLDER_NOT_FOUND,
            status_code=404,
            details={"folder_id": folder_id}
        )


class ValidationError(LabException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class ConfirmationRequiredError(LabException):
    """Destructive operation called without explicit confirmation."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"Deleting this {resource_type} cannot be undone; repeat the request with confirm=true",
            ErrorCode.CONFIRMATION_REQUIRED,
            status_code=400,
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class PayloadTooLargeError(LabException):
    """Upload exceeds the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(
            f"Upload exceeds the {limit} byte limit",
            ErrorCode.PAYLOAD_TOO_LARGE,
            status_code=413,
            details={"limit": limit}
        )


class AuthenticationError(LabException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(LabException):
    """Authenticated user lacks permission for the requested action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class DatabaseError(LabException):
    """A write could not be completed by the store."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=details
        )
