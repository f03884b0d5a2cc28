"""
Permission classes backed by the AuthGate.

Usage:
    class FriendViewSet(viewsets.ViewSet):
        permission_classes = [IsAdmin]

    @permission_classes([HasCycleAccess])
    def cart(request, cycle_id, friend_id):
        ...
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from rest_framework.permissions import BasePermission

from apps.cycles.models import Cycle

from .auth_gate import is_authorized_admin, is_authorized_friend_access


def get_friend_secret(request):
    """Read the cycle password a friend sends with each request."""
    header = getattr(settings, 'FRIEND_ACCESS_HEADER', 'X-Cycle-Password')
    return request.headers.get(header)


class IsAdmin(BasePermission):
    """Permission: request comes from the administrator."""

    message = 'Administrator login required.'

    def has_permission(self, request, view):
        return is_authorized_admin(request.user)


class HasCycleAccess(BasePermission):
    """
    Permission: administrator, or a friend holding the cycle password.

    The view must expose the cycle id as the ``cycle_id`` (or ``pk``) URL kwarg.
    An unknown cycle is let through so the service can report NotFound.
    """

    message = 'Wrong or missing cycle password.'

    def has_permission(self, request, view):
        if is_authorized_admin(request.user):
            return True

        cycle_id = view.kwargs.get('cycle_id') or view.kwargs.get('pk')
        if cycle_id is None:
            cycle_id = request.query_params.get('cycle')
        if cycle_id is None:
            return False

        try:
            cycle = Cycle.objects.get(id=cycle_id)
        except (Cycle.DoesNotExist, ValidationError, ValueError):
            return True

        return is_authorized_friend_access(cycle, get_friend_secret(request))
