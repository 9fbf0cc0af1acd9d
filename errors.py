# errors.py


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthError(AppError):
    status_code = 401
    message = "Invalid credentials"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class StoreError(AppError):
    status_code = 500
    message = "Internal server error"
