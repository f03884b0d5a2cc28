"""Friends app services layer."""

from .exceptions import (
    FriendNotFoundError,
    FriendInactiveError,
    OutstandingBalanceError,
    InvalidFriendDataError,
)
from .friend_management import (
    FriendPatch,
    get_friend,
    list_friends,
    create_friend,
    update_friend,
    delete_friend,
)

__all__ = [
    # Exceptions
    'FriendNotFoundError',
    'FriendInactiveError',
    'OutstandingBalanceError',
    'InvalidFriendDataError',
    # Services
    'FriendPatch',
    'get_friend',
    'list_friends',
    'create_friend',
    'update_friend',
    'delete_friend',
]
