"""Exceptions métier, converties en enveloppe JSON par les handlers de main.py"""

from typing import List, Optional


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        self.message = message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409
