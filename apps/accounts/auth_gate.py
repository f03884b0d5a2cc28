"""
Authorization decisions consulted before engine and fulfillment operations.

Credential storage and hashing stay with Django's auth framework and
simplejwt; this module only answers yes/no questions.
"""

import hmac


def is_authorized_admin(user) -> bool:
    """True for an authenticated, active staff account."""
    return bool(
        user is not None
        and user.is_authenticated
        and user.is_active
        and user.is_staff
    )


def is_authorized_friend_access(cycle, secret) -> bool:
    """
    Check a friend-supplied secret against the cycle's shared password.

    A cycle without a password admits nobody through this path.
    """
    expected = getattr(cycle, 'shared_password', None)
    if not expected or not secret:
        return False
    return hmac.compare_digest(str(secret).encode('utf-8'), expected.encode('utf-8'))
