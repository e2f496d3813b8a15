"""
Custom exceptions for the application.
"""


class ReviException(Exception):
    """Base exception for all Revi application exceptions."""
    pass


class ValidationError(ReviException):
    """Raised when validation fails."""
    pass


class UnsupportedFileTypeError(ValidationError):
    """Raised when an uploaded file has a media type we cannot extract text from."""
    pass


class NotFoundError(ReviException):
    """Raised when a requested resource is not found."""
    pass


class AuthenticationError(ReviException):
    """Raised when authentication fails."""
    pass


class UpstreamError(ReviException):
    """Raised when an external dependency (auth provider, LLM endpoint, store) fails."""
    pass
