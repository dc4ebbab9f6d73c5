# app/core/exceptions.py
"""
Domain errors raised by the service layer.

Services never build HTTP responses; the handlers registered in
``app.main`` translate these into status codes.
"""


class ForumError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ForumError):
    status_code = 404


class ForbiddenError(ForumError):
    status_code = 403


class InvalidStateError(ForumError):
    """Rejected transition, e.g. a duplicate helpful mark."""

    status_code = 400


class ValidationError(ForumError):
    status_code = 400
