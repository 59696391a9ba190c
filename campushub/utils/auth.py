from flask_jwt_extended import get_jwt_identity
from campushub.exceptions import BannedUserError, ForbiddenError, UnauthorizedError
from campushub.repositories import UserRepository


def get_current_user_id():
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def get_current_user():
    """Reload the user behind the verified token so admin and ban flags are never stale."""
    user_id = get_current_user_id()
    if user_id is None:
        return None
    return UserRepository.find_by_id(user_id)


def require_user(allow_banned=False):
    user = get_current_user()
    if not user:
        raise UnauthorizedError("User not found")
    if user.is_banned and not allow_banned:
        raise BannedUserError(user.banned_reason)
    return user


def require_admin():
    user = require_user()
    if not user.is_admin:
        raise ForbiddenError("Admin privileges required")
    return user
