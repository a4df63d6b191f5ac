class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DateFormatError(ValidationError):
    """Raised when a date string does not look like YYYY-MM-DD."""


class DateValueError(ValidationError):
    """Raised when a YYYY-MM-DD string is not a real calendar date."""


class UploadTooLargeError(ValidationError):
    """Raised when an uploaded file exceeds the size ceiling."""


class ConflictError(DomainError):
    """Raised when a unique key is already taken."""


class NotFoundError(DomainError):
    """Raised when no record exists for the requested key."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class TokenMissingError(DomainError):
    """Raised when a protected route is called without a bearer token."""


class TokenInvalidError(DomainError):
    """Raised when a bearer token is malformed, tampered with or expired."""
