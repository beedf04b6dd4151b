class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.kind


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization_error"


class AlreadyCheckedIn(DomainError):
    kind = "already_checked_in"


class NotCheckedIn(DomainError):
    kind = "not_checked_in"


class AlreadyCheckedOut(DomainError):
    kind = "already_checked_out"


class InvalidCheckOut(DomainError):
    """Raised when a checkout time precedes the check-in time."""

    kind = "invalid_check_out"


class RecordNotFound(DomainError):
    kind = "record_not_found"


class InvalidRange(DomainError):
    """Raised for malformed or inverted date/month ranges."""

    kind = "invalid_range"


class DuplicateUser(DomainError):
    kind = "duplicate_user"


class StorageUnavailable(Exception):
    """Storage backend failure. Fatal to the request, never to the process."""

    kind = "storage_unavailable"
