"""
Services Package - Domain operations behind the HTTP routes

Every operation takes the acting user's id as an explicit argument and
raises a services.errors.ServiceError subclass for expected failures.
"""

from .errors import (
    ServiceError,
    Unauthenticated,
    Forbidden,
    NotFound,
    ValidationFailed,
    DuplicateRequest,
    InvalidState,
    Unexpected
)

__all__ = [
    'ServiceError',
    'Unauthenticated',
    'Forbidden',
    'NotFound',
    'ValidationFailed',
    'DuplicateRequest',
    'InvalidState',
    'Unexpected'
]
