"""Domain errors raised by services and rendered by the API exception handlers."""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(DomainError):
    status_code = 400


class UnauthorizedError(DomainError):
    status_code = 401


class ForbiddenError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class InsufficientTicketsError(DomainError):
    status_code = 400

    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"Not enough tickets available. Only {remaining} tickets left.")
