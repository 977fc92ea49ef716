# apps/api/backoffice/core/errors.py
# Service-level errors. Routes let them bubble; main.py turns them into
# {"detail": "..."} responses, same shape as HTTPException.
from __future__ import annotations


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409
