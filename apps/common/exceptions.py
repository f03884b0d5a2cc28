"""
Error taxonomy shared by every app.

Each kind is a DRF APIException so views can let service errors propagate;
the handler below renders them uniformly as
``{"code": <kind>, "detail": <message>, "fields": {...}}``.

App-level ``services/exceptions.py`` modules subclass these with domain names.
"""
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler


class DomainError(APIException):
    """Base class for business-rule violations."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request failed.'
    default_code = 'error'


class NotFound(DomainError):
    """Missing friend, cycle, order, product or transaction."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ValidationFailed(DomainError):
    """Missing required field, malformed amount, bad quantity."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed.'
    default_code = 'validation_failed'


class Locked(DomainError):
    """Cycle is not open; mutation rejected."""
    status_code = status.HTTP_423_LOCKED
    default_detail = 'Orders for this cycle are locked.'
    default_code = 'locked'


class PermissionDenied(DomainError):
    """Wrong or missing credential, or an attempt to touch an immutable entry."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'permission_denied'


class PreconditionFailed(DomainError):
    """Operation not valid in the current state."""
    status_code = status.HTTP_412_PRECONDITION_FAILED
    default_detail = 'Precondition failed.'
    default_code = 'precondition_failed'


class Conflict(DomainError):
    """Concurrent modification. Reserved: carts are last-write-wins."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflicting update.'
    default_code = 'conflict'


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return response

    if isinstance(response.data, dict):
        detail = response.data.get('detail', 'Request failed')
        fields = {k: v for k, v in response.data.items() if k != 'detail'}
    else:
        detail = 'Request failed'
        fields = {'non_field_errors': response.data}

    response.data = {
        'code': getattr(exc, 'default_code', 'error'),
        'detail': detail,
        'fields': fields,
    }
    return response
