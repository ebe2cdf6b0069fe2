"""
Error taxonomy shared by repositories, services and routes.

Every error carries an HTTP status and a stable machine-readable code so the
boundary can render it without parsing message strings.
"""


class PortalError(Exception):
    status_code = 500
    code = 'INTERNAL_ERROR'
    default_message = 'Internal server error'

    def __init__(self, message=None, errors=None, code=None):
        self.message = message or self.default_message
        self.errors = list(errors) if errors else []
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self):
        body = {
            'success': False,
            'message': self.message,
            'code': self.code,
        }
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationError(PortalError):
    status_code = 400
    code = 'VALIDATION_ERROR'
    default_message = 'Validation failed'


class InvalidUpdate(ValidationError):
    code = 'INVALID_UPDATE'
    default_message = 'No valid fields provided for update'


class AuthenticationError(PortalError):
    status_code = 401
    code = 'AUTHENTICATION_REQUIRED'
    default_message = 'Authentication required'


class AuthorizationError(PortalError):
    status_code = 403
    code = 'FORBIDDEN'
    default_message = 'Access denied'


class NotFoundError(PortalError):
    status_code = 404
    code = 'NOT_FOUND'
    default_message = 'Resource not found'


class ConflictError(PortalError):
    status_code = 409
    code = 'CONFLICT'
    default_message = 'Resource already exists'


class StoreError(PortalError):
    """A statement failed inside the store."""
    status_code = 500
    code = 'STORE_ERROR'
    default_message = 'Internal server error'
    retryable = False

    def __init__(self, message=None, resource=None, operation=None, detail=None):
        super().__init__(message)
        self.resource = resource
        self.operation = operation
        self.detail = detail


class StoreUnavailableError(StoreError):
    """No connection could be obtained in time, or it dropped mid-statement."""
    status_code = 503
    code = 'STORE_UNAVAILABLE'
    default_message = 'Service temporarily unavailable, please retry'
    retryable = True
