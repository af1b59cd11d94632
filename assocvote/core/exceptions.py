"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to, so the API layer can render
it without knowing which service raised it.
"""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """A referenced vote, ballot, survey, question, option or user is absent."""

    status_code = 404


class UnprocessableEntityError(ServiceError):
    status_code = 422


class UnauthorizedError(ServiceError):
    """Duplicate answer, or answering a vote that is not open."""

    status_code = 401


class ConflictError(ServiceError):
    status_code = 409


class InternalError(ServiceError):
    """The database did not hand back a generated identifier."""

    status_code = 500
