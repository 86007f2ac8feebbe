class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid (malformed email, weak password, bad name)."""


class DuplicateEmailError(ValidationError):
    """Raised on signup when the email is already registered."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class EmailNotVerifiedError(AuthenticationError):
    """Raised when the credentials match but the email is not verified yet."""


class InvalidTokenError(DomainError):
    """Raised when a verification token is unknown or already used."""


class InvalidOrExpiredTokenError(InvalidTokenError):
    """Raised when a reset token is unknown, already used or past its expiry."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StorageError(Exception):
    """Raised when a state snapshot cannot be read from or written to storage.

    Kept outside DomainError: a failed save says nothing about the business rule.
    """
