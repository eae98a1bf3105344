# permissions.py
"""
RBAC for the API.
- role_required([...]) is the main route decorator (admin always passes).
- admin_required / manager_or_admin_required are the two gates used by the
  blueprints.
- can_moderate / can_remove helpers back the ownership checks inside
  domain operations.

Roles:
- user     registers, posts comments and reviews, deletes its own
- manager  user + writes articles and blog posts, moderates comments/reviews
- admin    full access, manages the book catalog and sees all users/comments
"""

import logging
from functools import wraps
from typing import Iterable, Set

from flask_login import current_user, login_required

from errors import ForbiddenError

logger = logging.getLogger(__name__)


def role_required(allowed_roles: Iterable[str], message: str | None = None):
    """
    Restrict a view to the given roles.
    Example:
        @role_required(["manager", "admin"])
        def view(): ...

    Rules:
    - No valid bearer token -> 401 (via login_required).
    - admin always passes.
    - Otherwise the role must be listed, else 403.
    """
    if isinstance(allowed_roles, str):
        allowed: Set[str] = {allowed_roles}
    else:
        allowed = set(allowed_roles or [])

    denied = message or "Forbidden: insufficient role"

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapped(*args, **kwargs):
            role = getattr(current_user, "role", None)
            if role == "admin" or role in allowed:
                return view_func(*args, **kwargs)

            logger.warning("User %s (%s) denied access to %s", current_user.id, role, view_func.__name__)
            raise ForbiddenError(denied)

        return wrapped
    return decorator


admin_required = role_required(
    ["admin"], "Forbidden: Admin access required to perform this action."
)

manager_or_admin_required = role_required(
    ["manager", "admin"], "Forbidden: Manager or Admin access required to perform this action."
)


def can_moderate(user) -> bool:
    """True for managers and admins."""
    return bool(user is not None and getattr(user, "role", None) in ("manager", "admin"))


def can_remove(user, owner_id: int | None) -> bool:
    """Authors may delete their own items; moderators may delete anything."""
    if user is None:
        return False
    return owner_id == getattr(user, "id", None) or can_moderate(user)
