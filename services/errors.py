"""
Errors Module - Expected outcomes of service operations

Routes let these propagate; the app-level error handler renders each one
as ``{"error": message}`` with its status code.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = 'An unexpected error occurred'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = 'User not authenticated'


class Forbidden(ServiceError):
    status_code = 403
    default_message = 'You do not have permission to perform this action'


class NotFound(ServiceError):
    status_code = 404
    default_message = 'Resource not found'


class ValidationFailed(ServiceError):
    status_code = 400
    default_message = 'Invalid request data'


class DuplicateRequest(ServiceError):
    status_code = 400
    default_message = 'Access request already exists'


class InvalidState(ServiceError):
    status_code = 409
    default_message = 'Access request has already been decided'


class Unexpected(ServiceError):
    pass


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
