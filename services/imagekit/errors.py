"""
ImageKit Errors
===============
Exception types raised by the client facade and the upload transport.

URL generation never raises: it degrades to an empty string or drops the
offending transformation key instead.
"""

from typing import Optional

from .models import ResponseMetadata


class ErrorMessages:
    """User-facing error messages."""
    MANDATORY_INITIALIZATION_MISSING = "Missing urlEndpoint during SDK initialization"
    INVALID_TRANSFORMATION_POSITION = "Invalid transformationPosition parameter"
    MISSING_UPLOAD_FILE_PARAMETER = "Missing file parameter for upload"
    MISSING_UPLOAD_FILENAME_PARAMETER = "Missing fileName parameter for upload"
    MISSING_PUBLIC_KEY = "Missing public key for upload"
    UPLOAD_ENDPOINT_NETWORK_ERROR = "Request to ImageKit upload endpoint failed due to network error"
    INVALID_UPLOAD_OPTIONS = "Invalid uploadOptions parameter"
    MISSING_SIGNATURE = (
        "Missing signature for upload. The SDK expects token, signature and expire for authentication."
    )
    MISSING_TOKEN = (
        "Missing token for upload. The SDK expects token, signature and expire for authentication."
    )
    MISSING_EXPIRE = (
        "Missing expire for upload. The SDK expects token, signature and expire for authentication."
    )
    INVALID_TRANSFORMATION = (
        "Invalid transformation parameter. Please include at least pre, post, or both."
    )
    INVALID_PRE_TRANSFORMATION = "Invalid pre transformation parameter."
    INVALID_POST_TRANSFORMATION = "Invalid post transformation parameter."
    UPLOAD_ABORTED = "Upload aborted"
    INVALID_REQUEST_DEFAULT = "Invalid request. Please check the parameters."
    SERVER_ERROR_DEFAULT = (
        "Server error occurred while uploading the file. This is rare and usually temporary."
    )


class ImageKitError(Exception):
    """Base class for all ImageKit client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(ImageKitError):
    """Raised when the client is constructed with unusable options."""


class InvalidRequestError(ImageKitError):
    """Raised when an upload request is invalid, locally or per the API (4xx)."""

    def __init__(self, message: str, response_metadata: Optional[ResponseMetadata] = None):
        self.response_metadata = response_metadata
        super().__init__(message)


class UploadAbortError(ImageKitError):
    """Raised when the caller aborts an upload."""

    def __init__(self, message: str = ErrorMessages.UPLOAD_ABORTED):
        super().__init__(message)


class UploadNetworkError(ImageKitError):
    """Raised when the upload endpoint cannot be reached."""


class ServerError(ImageKitError):
    """Raised when the upload API answers with a server-side failure."""

    def __init__(self, message: str, response_metadata: Optional[ResponseMetadata] = None):
        self.response_metadata = response_metadata
        super().__init__(message)
