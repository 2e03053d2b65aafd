class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    code = "VALIDATION_ERROR"


class PersistenceError(DomainError):
    """Raised when a query or transaction fails. The whole operation may be retried."""

    code = "PERSISTENCE_ERROR"


class AuthenticationError(DomainError):
    """Raised when login credentials or a bearer token are invalid."""

    code = "AUTHENTICATION_ERROR"


class NotFoundError(PersistenceError):
    """Raised when a write references a student or session that does not exist."""

    code = "NOT_FOUND"
