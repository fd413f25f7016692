"""Domain error taxonomy.

Each error carries the HTTP status it maps to so the API layer can translate
it without a lookup table.
"""


class DomainError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(DomainError):
    status_code = 400


class InvalidCodeError(ValidationError):
    """One-time code missing, expired or wrong"""


class InsufficientStockError(ValidationError):
    pass


class UnauthorizedError(DomainError):
    status_code = 401


class ForbiddenError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class ServerError(DomainError):
    status_code = 500


class EmailDeliveryError(ServerError):
    pass
