"""Cycles app services layer."""

from .exceptions import (
    CycleNotFoundError,
    CycleLockedError,
    InvalidCycleDataError,
    WrongCyclePasswordError,
)
from .lifecycle import (
    CyclePatch,
    get_cycle,
    ensure_open,
    list_cycles,
    create_cycle,
    update_cycle,
    delete_cycle,
)
from .reports import (
    get_cycle_summary,
    get_distribution,
)
from .friend_access import (
    get_public_cycle,
    authenticate_friend,
)

__all__ = [
    # Exceptions
    'CycleNotFoundError',
    'CycleLockedError',
    'InvalidCycleDataError',
    'WrongCyclePasswordError',
    # Lifecycle
    'CyclePatch',
    'get_cycle',
    'ensure_open',
    'list_cycles',
    'create_cycle',
    'update_cycle',
    'delete_cycle',
    # Reports
    'get_cycle_summary',
    'get_distribution',
    # Friend access
    'get_public_cycle',
    'authenticate_friend',
]
