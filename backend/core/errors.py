"""Service-level error taxonomy.

Services raise these; ``backend.main`` renders any ``ServiceError`` as
``{"detail": message}`` with the class's ``status_code``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed input shape."""
    status_code = 400


class ConflictError(ServiceError):
    """Uniqueness violation or duplicate transition."""
    status_code = 400


class NotFoundError(ServiceError):
    """Requested entity does not exist."""
    status_code = 400


class AuthError(ServiceError):
    """Bad credentials or token."""
    status_code = 401


class AuthorizationError(ServiceError):
    """Role, ownership or membership mismatch."""
    status_code = 403


class StoreError(ServiceError):
    """Datastore failure."""
    status_code = 500
