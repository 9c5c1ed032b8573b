from app.core.exceptions import UnauthorizedAccessError
from app.models.user import User, UserRole

def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN

def is_owner_or_admin(resource_owner_id: int, user: User) -> bool:
    return user.id == resource_owner_id or is_admin(user)

def require_owner(resource_owner_id: int, user: User, message: str = "You are not the owner of this resource.") -> None:
    if user.id != resource_owner_id:
        raise UnauthorizedAccessError(message)

def require_owner_or_admin(resource_owner_id: int, user: User, message: str = "You do not have permission to modify this resource.") -> None:
    """Raise unless ``user`` owns the resource or is an admin"""
    if not is_owner_or_admin(resource_owner_id, user):
        raise UnauthorizedAccessError(message)

def require_admin(user: User) -> None:
    if not is_admin(user):
        raise UnauthorizedAccessError("Admin only operation.")
