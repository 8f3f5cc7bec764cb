"""Error taxonomy shared by services and route handlers.

Every error carries the HTTP status the API answers with; the message is
returned to the client verbatim as ``{"error": message}``.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": self.message}


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class InvalidCredentials(AuthError):
    def __init__(self, message="Invalid email or password"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 400


class UpstreamError(AppError):
    status_code = 502


class InternalError(AppError):
    status_code = 500
