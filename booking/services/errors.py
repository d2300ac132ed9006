"""
Domain exceptions raised by the service layer.

Each carries the HTTP status the API layer answers with; routers translate
them into ``HTTPException`` via ``booking.api.deps.to_http_exception``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class ForbiddenError(ServiceError):
    status_code = 403


class InvalidStateError(ServiceError):
    status_code = 400


class ValidationFailedError(ServiceError):
    status_code = 400


class AuthenticationError(ServiceError):
    status_code = 401
