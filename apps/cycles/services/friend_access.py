"""What a friend sees before and while logging in to a cycle."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError

from apps.accounts.auth_gate import is_authorized_friend_access
from apps.friends.models import Friend
from apps.friends.services.exceptions import FriendNotFoundError

from .exceptions import WrongCyclePasswordError
from .lifecycle import get_cycle

logger = logging.getLogger(__name__)


def get_public_cycle(cycle_id: UUID) -> dict:
    """
    Cycle name and status plus the active roster to pick from.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id)
    friends = Friend.objects.filter(active=True).order_by('name')
    return {'cycle': cycle, 'friends': list(friends)}


def authenticate_friend(*, cycle_id: UUID, password: str, friend_id: UUID) -> Friend:
    """
    Check the cycle password and the chosen friend.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        WrongCyclePasswordError: If the password is wrong or not set
        FriendNotFoundError: If friend doesn't exist or is inactive
    """
    cycle = get_cycle(cycle_id)

    if not cycle.shared_password:
        raise WrongCyclePasswordError("No password is set for this cycle")
    if not is_authorized_friend_access(cycle, password):
        logger.warning("Wrong password for cycle %s", cycle_id)
        raise WrongCyclePasswordError()

    try:
        return Friend.objects.get(id=friend_id, active=True)
    except (Friend.DoesNotExist, ValidationError):
        raise FriendNotFoundError("Friend not found or inactive")
